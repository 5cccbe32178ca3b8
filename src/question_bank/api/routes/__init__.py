"""Core application routers."""

from fastapi import APIRouter

from . import health, pdf, questions, sessions

api_router = APIRouter()
api_router.include_router(health.router)
api_router.include_router(pdf.router)
api_router.include_router(questions.router)
api_router.include_router(sessions.router)
