"""
SQLite storage
- creates tables if missing
- generation sessions, their questions (delete+reinsert per session), user activity
"""
from __future__ import annotations
import json, logging, sqlite3, uuid
from datetime import datetime, timezone
from typing import Iterable, Dict, Any, List, Optional
from pathlib import Path

from question_bank.configuration import settings

logger = logging.getLogger(__name__)

DB_PATH = settings.db_path

_SCHEMA = """
PRAGMA journal_mode=WAL;
CREATE TABLE IF NOT EXISTS generation_sessions (
  id TEXT PRIMARY KEY,
  session_name TEXT,
  parameters TEXT NOT NULL,
  question_count INTEGER NOT NULL DEFAULT 0,
  user_ip TEXT,
  user_agent TEXT,
  created_at TEXT NOT NULL,
  updated_at TEXT NOT NULL
);
CREATE TABLE IF NOT EXISTS question_bank (
  id TEXT PRIMARY KEY,
  session_id TEXT NOT NULL,
  position INTEGER NOT NULL,
  content TEXT NOT NULL,
  options TEXT NOT NULL,
  correct_answer TEXT NOT NULL,
  explanation TEXT NOT NULL,
  question_type TEXT NOT NULL DEFAULT 'choice',
  difficulty REAL,
  difficulty_label TEXT CHECK (difficulty_label IN ('easy', 'medium', 'hard')),
  bloom_level INTEGER,
  chapter TEXT,
  source_pdf TEXT,
  page_range TEXT,
  tags TEXT,
  created_at TEXT NOT NULL,
  FOREIGN KEY(session_id) REFERENCES generation_sessions(id) ON DELETE CASCADE
);
CREATE INDEX IF NOT EXISTS idx_questions_session ON question_bank(session_id);
CREATE TABLE IF NOT EXISTS user_sessions (
  id TEXT PRIMARY KEY,
  user_ip TEXT NOT NULL,
  user_agent TEXT,
  total_questions INTEGER NOT NULL DEFAULT 0,
  created_at TEXT NOT NULL,
  last_activity TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_user_sessions_ip ON user_sessions(user_ip);
"""

_initialized: set = set()


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _connect() -> sqlite3.Connection:
    Path(DB_PATH).parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(DB_PATH, check_same_thread=False)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys=ON")
    if DB_PATH not in _initialized:
        conn.executescript(_SCHEMA)
        _initialized.add(DB_PATH)
    return conn


def init():
    with _connect() as cx:
        cx.executescript(_SCHEMA)


# ---------------- generation sessions ----------------

def _insert_session(
    cx: sqlite3.Connection,
    parameters: Dict[str, Any],
    question_count: int,
    session_name: Optional[str],
    user_ip: Optional[str],
    user_agent: Optional[str],
) -> str:
    session_id = str(uuid.uuid4())
    now = _now()
    name = session_name or f"generation_{now[:10]}_{session_id[:8]}"
    cx.execute(
        "INSERT INTO generation_sessions(id, session_name, parameters, question_count, user_ip, user_agent, created_at, updated_at) "
        "VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
        (session_id, name, json.dumps(parameters or {}, ensure_ascii=False), question_count,
         user_ip, user_agent, now, now),
    )
    return session_id


def _replace_questions(cx: sqlite3.Connection, session_id: str, questions: List[Dict[str, Any]]) -> int:
    cur = cx.execute("SELECT 1 FROM generation_sessions WHERE id = ?", (session_id,))
    if cur.fetchone() is None:
        raise KeyError(f"Unknown generation session: {session_id}")

    now = _now()
    rows = [
        (
            str(uuid.uuid4()),
            session_id,
            pos,
            q["content"],
            json.dumps(q.get("options") or {}, ensure_ascii=False),
            q["correct_answer"],
            q.get("explanation") or "",
            q.get("question_type") or "choice",
            q.get("difficulty"),
            q.get("difficulty_label") or "medium",
            q.get("bloom_level"),
            q.get("chapter") or "",
            q.get("source_pdf") or "",
            q.get("page_range") or "",
            json.dumps(q.get("tags") or [], ensure_ascii=False),
            now,
        )
        for pos, q in enumerate(questions)
    ]
    cx.execute("DELETE FROM question_bank WHERE session_id = ?", (session_id,))
    cx.executemany(
        "INSERT INTO question_bank(id, session_id, position, content, options, correct_answer, explanation, "
        "question_type, difficulty, difficulty_label, bloom_level, chapter, source_pdf, page_range, tags, created_at) "
        "VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
        rows,
    )
    cx.execute(
        "UPDATE generation_sessions SET question_count = ?, updated_at = ? WHERE id = ?",
        (len(rows), now, session_id),
    )
    return len(rows)


def new_generation_session(
    parameters: Dict[str, Any],
    question_count: int = 0,
    session_name: Optional[str] = None,
    user_ip: Optional[str] = None,
    user_agent: Optional[str] = None,
) -> str:
    with _connect() as cx:
        return _insert_session(cx, parameters, question_count, session_name, user_ip, user_agent)


def replace_session_questions(session_id: str, questions: Iterable[Dict[str, Any]]) -> int:
    """Delete the session's questions and insert the given ones, atomically."""
    items = list(questions)
    with _connect() as cx:
        return _replace_questions(cx, session_id, items)


def save_generation(
    parameters: Dict[str, Any],
    questions: Iterable[Dict[str, Any]],
    session_id: Optional[str] = None,
    user_ip: Optional[str] = None,
    user_agent: Optional[str] = None,
) -> str:
    """Create the session when needed and store its questions in one transaction."""
    items = list(questions)
    with _connect() as cx:
        if session_id is None:
            session_id = _insert_session(cx, parameters, len(items), None, user_ip, user_agent)
        else:
            cx.execute(
                "UPDATE generation_sessions SET parameters = ? WHERE id = ?",
                (json.dumps(parameters or {}, ensure_ascii=False), session_id),
            )
        _replace_questions(cx, session_id, items)
    logger.info("saved %d questions to session %s", len(items), session_id)
    return session_id


def _session_row(row: sqlite3.Row) -> Dict[str, Any]:
    out = dict(row)
    try:
        out["parameters"] = json.loads(out.get("parameters") or "{}")
    except json.JSONDecodeError:
        out["parameters"] = {}
    return out


def get_session(session_id: str) -> Optional[Dict[str, Any]]:
    with _connect() as cx:
        cur = cx.execute(
            "SELECT id, session_name, parameters, question_count, created_at, updated_at "
            "FROM generation_sessions WHERE id = ?",
            (session_id,),
        )
        row = cur.fetchone()
        return _session_row(row) if row else None


def list_generation_sessions(limit: int = 20) -> List[Dict[str, Any]]:
    """Most-recent-first list of generation sessions."""
    with _connect() as cx:
        cur = cx.execute(
            "SELECT id, session_name, parameters, question_count, created_at, updated_at "
            "FROM generation_sessions ORDER BY created_at DESC LIMIT ?",
            (limit,),
        )
        return [_session_row(r) for r in cur.fetchall()]


def get_session_questions(session_id: str) -> List[Dict[str, Any]]:
    with _connect() as cx:
        cur = cx.execute(
            "SELECT id, content, options, correct_answer, explanation, question_type, difficulty, "
            "difficulty_label, bloom_level, chapter, source_pdf, page_range, tags "
            "FROM question_bank WHERE session_id = ? ORDER BY position ASC",
            (session_id,),
        )
        out = []
        for r in cur.fetchall():
            item = dict(r)
            item["options"] = json.loads(item["options"] or "{}")
            item["tags"] = json.loads(item["tags"] or "[]")
            out.append(item)
        return out


# ---------------- user activity ----------------

def touch_user_session(
    user_ip: str,
    user_agent: Optional[str] = None,
    total_questions: Optional[int] = None,
) -> str:
    """Update the latest session for this IP, or create one."""
    user_ip = user_ip or "unknown"
    now = _now()
    with _connect() as cx:
        cur = cx.execute(
            "SELECT id FROM user_sessions WHERE user_ip = ? ORDER BY created_at DESC LIMIT 1",
            (user_ip,),
        )
        row = cur.fetchone()
        if row:
            if total_questions is None:
                cx.execute("UPDATE user_sessions SET last_activity = ? WHERE id = ?", (now, row["id"]))
            else:
                cx.execute(
                    "UPDATE user_sessions SET last_activity = ?, total_questions = ? WHERE id = ?",
                    (now, total_questions, row["id"]),
                )
            return row["id"]
        session_id = str(uuid.uuid4())
        cx.execute(
            "INSERT INTO user_sessions(id, user_ip, user_agent, total_questions, created_at, last_activity) "
            "VALUES (?, ?, ?, ?, ?, ?)",
            (session_id, user_ip, user_agent, total_questions or 0, now, now),
        )
        return session_id


def get_user_session(user_ip: str) -> Optional[Dict[str, Any]]:
    with _connect() as cx:
        cur = cx.execute(
            "SELECT id, user_ip, user_agent, total_questions, created_at, last_activity "
            "FROM user_sessions WHERE user_ip = ? ORDER BY created_at DESC LIMIT 1",
            (user_ip,),
        )
        row = cur.fetchone()
        return dict(row) if row else None
