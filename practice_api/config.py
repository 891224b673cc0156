"""Application configuration and constants."""
import os
from pathlib import Path


def _parse_int_env(name: str, default: int) -> int:
    """Parse integer from environment variable."""
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


# Directories
DATA_DIR = Path(os.environ.get("QUIZ_DATA_DIR", Path.cwd() / "data"))
DATA_DIR.mkdir(parents=True, exist_ok=True)

# Question bank
QUESTIONS_CACHE_PATH = Path(
    os.environ.get("QUESTIONS_CACHE_PATH", DATA_DIR / "questions.json")
)
QUESTIONS_SOURCE_PATH = Path(
    os.environ.get("QUESTIONS_SOURCE_PATH", DATA_DIR / "question_bank.json")
)
QUESTIONS_CACHE_MAX_AGE = 3600

# Database
DATABASE_URL = os.environ.get(
    "DATABASE_URL", f"sqlite:///{DATA_DIR / 'practice.db'}"
)

# Exam
EXAM_QUESTION_COUNT = _parse_int_env("EXAM_QUESTION_COUNT", 80)
EXAM_DURATION_MINUTES = _parse_int_env("EXAM_DURATION_MINUTES", 60)
PASS_MARK = _parse_int_env("PASS_MARK", 85)
