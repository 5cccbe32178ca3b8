"""Application factory for the Question Bank FastAPI backend."""

from fastapi import FastAPI

from question_bank.configuration import configure_logging

from .routes import api_router


def create_app() -> FastAPI:
    """Create and configure the FastAPI application instance."""
    configure_logging()
    app = FastAPI(
        title="Question Bank API",
        description="Generate multiple-choice questions from uploaded PDFs.",
        version="0.1.0",
    )

    app.include_router(api_router, prefix="/api")

    return app
