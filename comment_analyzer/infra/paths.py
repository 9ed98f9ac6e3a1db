# comment_analyzer/infra/paths.py
from pathlib import Path

DATA_DIR = Path(__file__).resolve().parents[1] / "data"

LEXICON_PATH         = DATA_DIR / "sentiment_lexicon.yaml"
STOPWORDS_PATH       = DATA_DIR / "stopwords.yaml"
SUMMARY_KEYWORDS_PATH = DATA_DIR / "summary_keywords.yaml"
SAMPLE_COMMENTS_PATH = DATA_DIR / "sample_comments.yaml"
ROLES_PATH           = DATA_DIR / "roles.yaml"
USERS_PATH           = DATA_DIR / "users.yaml"


def ensure_output_dir(output_dir: str | Path) -> Path:
    path = Path(output_dir)
    path.mkdir(parents=True, exist_ok=True)
    return path
