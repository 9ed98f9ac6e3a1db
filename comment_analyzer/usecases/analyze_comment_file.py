"""Batch analysis of a CSV / Excel file holding one comment per row."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd
from pandas.api.types import is_object_dtype, is_string_dtype

from comment_analyzer.exceptions import CommentDataError
from comment_analyzer.services.analysis_service import AnalysisService
from comment_analyzer.usecases.combined_insights import run_combined_insights_usecase

logger = logging.getLogger(__name__)

_PREFERRED_COLUMNS = ("comment", "comments", "text", "feedback", "content", "response")


def read_comment_table(path: Path, sheet: Optional[str] = None) -> pd.DataFrame:
    suffix = path.suffix.lower()
    if suffix == ".csv":
        return pd.read_csv(path)
    if suffix in (".xlsx", ".xlsm", ".xls"):
        return pd.read_excel(path, sheet_name=sheet or 0, engine="openpyxl")
    if suffix == ".txt":
        lines = path.read_text(encoding="utf-8").splitlines()
        return pd.DataFrame({"comment": lines})
    raise CommentDataError(f"unsupported file type: {path.suffix}")


def pick_text_column(df: pd.DataFrame) -> str:
    """
    Choose the column that holds the comments.

    1) a column named like 'comment' / 'text' / 'feedback'
    2) otherwise the text column with the longest non-empty values
    """
    by_lower = {str(c).strip().lower(): c for c in df.columns}
    for name in _PREFERRED_COLUMNS:
        if name in by_lower:
            return by_lower[name]

    scores = []
    for c in df.columns:
        s = df[c]
        if not (is_object_dtype(s) or is_string_dtype(s)):
            continue
        ss = s.dropna().astype(str)
        if len(ss) == 0:
            continue
        avg_len = ss.map(len).mean()
        nonempty = (ss.str.strip() != "").mean()
        scores.append((avg_len * nonempty, str(c)))
    if not scores:
        raise CommentDataError("no text column found in the input file")
    scores.sort(reverse=True)
    return scores[0][1]


def load_comments(path: Path, column: Optional[str] = None, sheet: Optional[str] = None) -> List[str]:
    df = read_comment_table(path, sheet)
    if column is None:
        column = pick_text_column(df)
    elif column not in df.columns:
        raise CommentDataError(f"column '{column}' not found; available: {list(df.columns)}")

    values = df[column]
    comments = [str(v).strip() for v in values if not pd.isna(v) and str(v).strip()]
    logger.info("loaded %d comments from %s (column=%s)", len(comments), path.name, column)
    return comments


def run_comment_file_usecase(
    service: AnalysisService,
    path: Path,
    column: Optional[str] = None,
    sheet: Optional[str] = None,
    use_remote: Optional[bool] = None,
    length: str = "medium",
) -> Dict[str, Any]:
    if not path.exists():
        raise CommentDataError(f"input file not found: {path}")
    comments = load_comments(path, column=column, sheet=sheet)
    report = run_combined_insights_usecase(
        service,
        "\n".join(c.replace("\n", " ") for c in comments),
        use_remote=use_remote,
        length=length,
        save_report=False,
        max_comments=None,
    )
    report["input_file"] = str(path)
    return report
