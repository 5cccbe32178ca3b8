"""
Chat model access
- OpenAI via langchain-openai (default) or Gemini via langchain-google-genai
- fixed temperature from settings, max_tokens chosen per request
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from langchain_core.prompts import ChatPromptTemplate
from langchain_openai import ChatOpenAI
from langchain_google_genai import ChatGoogleGenerativeAI

from question_bank.configuration import settings

logger = logging.getLogger(__name__)

_PROMPT = ChatPromptTemplate.from_messages([
    ("system", "{system}"),
    ("human", "{user}"),
])


@dataclass
class LLMCompletion:
    text: str
    finish_reason: Optional[str] = None

    @property
    def truncated(self) -> bool:
        # OpenAI reports "length", Gemini "MAX_TOKENS"
        return (self.finish_reason or "").lower() in ("length", "max_tokens")


def get_chat_model(max_tokens: int):
    provider = (settings.llm_provider or "openai").lower()
    if provider == "google":
        if not settings.google_api_key:
            raise RuntimeError("Missing GOOGLE_API_KEY (or GEMINI_API_KEY).")
        return ChatGoogleGenerativeAI(
            model=settings.llm_model,
            api_key=settings.google_api_key,
            temperature=settings.llm_temperature,
            max_output_tokens=max_tokens,
        )
    if not settings.openai_api_key:
        raise RuntimeError("Missing OPENAI_API_KEY.")
    return ChatOpenAI(
        model=settings.llm_model,
        api_key=settings.openai_api_key,
        temperature=settings.llm_temperature,
        max_tokens=max_tokens,
    )


def complete(system_prompt: str, user_prompt: str, max_tokens: int) -> LLMCompletion:
    """Send one system+user exchange and return the raw completion text."""
    chain = _PROMPT | get_chat_model(max_tokens)
    logger.info(
        "llm request provider=%s model=%s prompt_chars=%d max_tokens=%d",
        settings.llm_provider, settings.llm_model, len(user_prompt), max_tokens,
    )
    msg = chain.invoke({"system": system_prompt, "user": user_prompt})
    content = msg.content
    if isinstance(content, list):
        content = "".join(
            part.get("text", "") if isinstance(part, dict) else str(part) for part in content
        )
    meta = getattr(msg, "response_metadata", None) or {}
    finish = meta.get("finish_reason")
    logger.info("llm response chars=%d finish_reason=%s", len(content or ""), finish)
    return LLMCompletion(text=(content or "").strip(), finish_reason=finish)
