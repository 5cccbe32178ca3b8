"""Storage package: SQLite-backed sessions and question bank, re-exported helpers."""
from . import db as _db

# Re-export commonly used functions
init = _db.init
new_generation_session = _db.new_generation_session
replace_session_questions = _db.replace_session_questions
save_generation = _db.save_generation
get_session = _db.get_session
list_generation_sessions = _db.list_generation_sessions
get_session_questions = _db.get_session_questions
touch_user_session = _db.touch_user_session
get_user_session = _db.get_user_session
