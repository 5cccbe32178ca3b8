"""Service wrapper for running the generation graph."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from question_bank.graph import build_graph
from question_bank.models import Parameters

logger = logging.getLogger(__name__)

_GRAPH_APP = build_graph()


def run_generation(
    pdf: bytes,
    parameters: Parameters,
    source_pdf: str = "",
    session_id: Optional[str] = None,
    persist: bool = True,
    user_ip: Optional[str] = None,
    user_agent: Optional[str] = None,
) -> Dict[str, Any]:
    """Run extract -> generate -> persist and return the final graph state."""
    state: Dict[str, Any] = {
        "pdf": pdf,
        "source_pdf": source_pdf,
        "parameters": parameters.model_dump(),
        "persist": persist,
    }
    if session_id:
        state["session_id"] = session_id
    if user_ip:
        state["user_ip"] = user_ip
    if user_agent:
        state["user_agent"] = user_agent

    logger.info(
        "generation start source=%s chapter=%r count=%d",
        source_pdf, parameters.chapter, parameters.question_count,
    )
    return _GRAPH_APP.invoke(state)
