# comment_analyzer/infra/output_repo.py
from pathlib import Path
from typing import Dict, Any, Optional
from datetime import datetime
import re

from comment_analyzer.infra.paths import ensure_output_dir
from comment_analyzer.infra.yaml_io import save_yaml


def _slugify(name: str) -> str:
    """Make a label safe for use inside a file name."""
    if not name:
        return "report"
    s = re.sub(r"\s+", "_", name.strip())
    s = re.sub(r"[^\w\-]", "", s)
    return s or "report"


def save_insights_report(
    report: Dict[str, Any],
    output_dir: str | Path,
    label: str = "insights",
    now: Optional[datetime] = None,
) -> Path:
    """
    Write a combined-insights report as YAML.

    e.g. output/insights_20250901_143530.yaml
    """
    out = ensure_output_dir(output_dir)
    ts = (now or datetime.now()).strftime("%Y%m%d_%H%M%S")
    path = out / f"{_slugify(label)}_{ts}.yaml"
    save_yaml(path, report)
    return path
