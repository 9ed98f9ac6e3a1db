# comment_analyzer/infra/lexicon_repo.py
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Tuple

from comment_analyzer.exceptions import LexiconLoadError
from comment_analyzer.infra.paths import (
    LEXICON_PATH,
    SAMPLE_COMMENTS_PATH,
    STOPWORDS_PATH,
    SUMMARY_KEYWORDS_PATH,
)
from comment_analyzer.infra.yaml_io import load_yaml


def _section(path: Path, key: str) -> Any:
    data = load_yaml(path) or {}
    if not isinstance(data, dict) or key not in data:
        raise LexiconLoadError(f"'{key}' section missing in {path.name}")
    return data[key]


def _words(values: Any, where: str) -> Tuple[str, ...]:
    if not isinstance(values, list):
        raise LexiconLoadError(f"{where} must be a list")
    return tuple(str(v).strip().lower() for v in values if str(v).strip())


@lru_cache
def load_word_lists(variant: str = "dashboard") -> Tuple[Tuple[str, ...], Tuple[str, ...]]:
    """(positive, negative) word lists of a lexicon variant ('dashboard' or 'stream')."""
    lexicon: Dict[str, Any] = _section(LEXICON_PATH, "sentiment_lexicon")
    entry = lexicon.get(variant)
    if not isinstance(entry, dict):
        raise LexiconLoadError(f"unknown lexicon variant: {variant}")
    return (
        _words(entry.get("positive"), f"{variant}.positive"),
        _words(entry.get("negative"), f"{variant}.negative"),
    )


@lru_cache
def load_stopwords(variant: str = "full") -> frozenset:
    stopwords: Dict[str, Any] = _section(STOPWORDS_PATH, "stopwords")
    if variant not in stopwords:
        raise LexiconLoadError(f"unknown stopword set: {variant}")
    return frozenset(_words(stopwords[variant], f"stopwords.{variant}"))


@lru_cache
def load_summary_keywords() -> Tuple[str, ...]:
    return _words(_section(SUMMARY_KEYWORDS_PATH, "summary_keywords"), "summary_keywords")


@lru_cache
def load_sample_comments(kind: str = "dashboard") -> Tuple[str, ...]:
    """Sample comment sets: 'dashboard', 'stream_pool' or 'stream_users'."""
    samples: Dict[str, Any] = _section(SAMPLE_COMMENTS_PATH, "sample_comments")
    values = samples.get(kind)
    if not isinstance(values, list) or not values:
        raise LexiconLoadError(f"sample comment set '{kind}' is missing or empty")
    return tuple(str(v) for v in values)
