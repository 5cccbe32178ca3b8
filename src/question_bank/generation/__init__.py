"""Prompt building, LLM access and response parsing."""
from .parser import parse_questions
from .qgen import generate_questions

__all__ = ["parse_questions", "generate_questions"]
