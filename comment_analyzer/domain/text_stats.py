# comment_analyzer/domain/text_stats.py
from __future__ import annotations

import re
from collections import Counter
from typing import Iterable, List, Optional

from comment_analyzer.domain.models import WordFrequency

_NON_WORD = re.compile(r"[^\w\s]")


def tokenize(text: str) -> List[str]:
    """Lowercase, turn punctuation into spaces and split on whitespace."""
    if not text:
        return []
    return _NON_WORD.sub(" ", text.lower()).split()


def count_words(text: str) -> int:
    """Whitespace token count of the raw text (input statistics)."""
    if not text or not text.strip():
        return 0
    return len(text.split())


def word_frequency(
    text: str,
    remove_stopwords: bool = True,
    min_length: int = 3,
    max_words: int = 100,
    stopwords: Optional[Iterable[str]] = None,
) -> List[WordFrequency]:
    """Rank the words of `text` by how often they occur.

    Tokens shorter than `min_length` are dropped, and so are stopwords when
    `remove_stopwords` is set. Equal counts keep the order in which the words
    first appeared. At most `max_words` entries are returned.
    """
    if max_words <= 0:
        return []

    stop = frozenset(stopwords or ()) if remove_stopwords else frozenset()

    counts = Counter(t for t in tokenize(text) if len(t) >= min_length and t not in stop)

    # most_common keeps first-occurrence order among equal counts
    return [WordFrequency(word=w, count=c) for w, c in counts.most_common(max_words)]


def top_words(frequencies: List[WordFrequency], n: int = 10) -> List[str]:
    """Words of the first `n` entries, e.g. for key phrase chips."""
    return [f.word for f in frequencies[:n]]


def split_comments(text: str) -> List[str]:
    """One comment per non-empty line, stripped."""
    if not text:
        return []
    return [line.strip() for line in text.splitlines() if line.strip()]
