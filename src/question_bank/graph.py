import argparse
import logging
from pathlib import Path
from typing import TypedDict, Optional, Dict, Any, List
from langgraph.graph import StateGraph, END

from .configuration import configure_logging
from .extraction import extract_full_text, extract_page_content
from .generation import generate_questions as _generate
from .models import ChapterType, Parameters
from .storage import save_generation, touch_user_session
from .weighting import weighting_warnings

logger = logging.getLogger(__name__)


class GraphState(TypedDict, total=False):
    pdf: Any                       # raw bytes or a path
    source_pdf: str                # file name shown in question metadata
    parameters: Dict[str, Any]
    session_id: Optional[str]
    user_ip: Optional[str]
    user_agent: Optional[str]
    persist: bool
    pdf_content: str
    pages: List[int]
    skipped_pages: List[int]
    questions: List[Dict[str, Any]]
    warnings: List[str]
    result: str


def _params(state: GraphState) -> Parameters:
    return Parameters(**(state.get("parameters") or {}))


def extract_content(state: GraphState) -> GraphState:
    """Carve out the text the prompt is built from.

    A page-range chapter reads only those pages; a topic chapter reads the
    whole document up to the full-text page cap.
    """
    params = _params(state)
    state["warnings"] = weighting_warnings(params.weighting)
    if params.chapter_type == ChapterType.PAGES.value:
        content = extract_page_content(state["pdf"], params.chapter)
        state["pdf_content"] = content.text
        state["pages"] = content.pages
        state["skipped_pages"] = content.skipped
    else:
        state["pdf_content"] = extract_full_text(state["pdf"])
        state["pages"] = []
        state["skipped_pages"] = []
    return state


def generate_questions(state: GraphState) -> GraphState:
    params = _params(state)
    questions = _generate(params, state["pdf_content"], source_pdf=state.get("source_pdf") or "")
    state["questions"] = [q.model_dump() for q in questions]
    state["result"] = f"generated {len(questions)} of {params.question_count} questions"
    return state


def route_after_generation(state: GraphState) -> str:
    return "persist_questions" if state.get("persist", True) else "end"


def persist_questions(state: GraphState) -> GraphState:
    questions = state.get("questions") or []
    session_id = save_generation(
        parameters=state.get("parameters") or {},
        questions=questions,
        session_id=state.get("session_id"),
        user_ip=state.get("user_ip"),
        user_agent=state.get("user_agent"),
    )
    state["session_id"] = session_id
    if state.get("user_ip"):
        touch_user_session(state["user_ip"], state.get("user_agent"), total_questions=len(questions))
    state["result"] = f"{state.get('result', '')}; saved to session {session_id}".lstrip("; ")
    return state


def build_graph():
    g = StateGraph(GraphState)
    g.add_node("extract_content", extract_content)
    g.add_node("generate_questions", generate_questions)
    g.add_node("persist_questions", persist_questions)

    g.set_entry_point("extract_content")
    g.add_edge("extract_content", "generate_questions")
    g.add_conditional_edges(
        "generate_questions",
        route_after_generation,
        {"persist_questions": "persist_questions", "end": END},
    )
    g.add_edge("persist_questions", END)

    return g.compile()


def _pretty_print(out: Dict[str, Any]):
    print("Result:", out.get("result"))
    if out.get("session_id"):
        print("Session:", out.get("session_id"))
    for w in out.get("warnings") or []:
        print("Warning:", w)
    for i, q in enumerate(out.get("questions") or [], 1):
        print(f"\n{i}. {q.get('content')}")
        for label, text in (q.get("options") or {}).items():
            print(f"   {label}. {text}")
        print(f"   Answer: {q.get('correct_answer')} ({q.get('difficulty_label')})")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Generate multiple-choice questions from a PDF.")
    parser.add_argument("pdf", type=Path)
    parser.add_argument("--pages", default="", help="Page range, e.g. '1-5, 8'. Omit to use the whole document.")
    parser.add_argument("--count", type=int, default=5)
    parser.add_argument("--keywords", default=None)
    parser.add_argument("--no-save", action="store_true")
    args = parser.parse_args()

    configure_logging()
    app = build_graph()
    params = Parameters(
        chapter=args.pages or args.pdf.stem,
        chapter_type=ChapterType.PAGES if args.pages else ChapterType.TOPIC,
        question_count=args.count,
        keywords=args.keywords,
    )
    out = app.invoke({
        "pdf": args.pdf.read_bytes(),
        "source_pdf": args.pdf.name,
        "parameters": params.model_dump(),
        "persist": not args.no_save,
    })
    _pretty_print(out)
