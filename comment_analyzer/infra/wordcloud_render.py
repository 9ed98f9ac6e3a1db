# comment_analyzer/infra/wordcloud_render.py
from __future__ import annotations

import io
from pathlib import Path
from typing import Sequence

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402

from comment_analyzer.domain.models import WordCloudNode  # noqa: E402

# matplotlib font sizes are in points; layout sizes are CSS pixels at 96 dpi
_PX_TO_PT = 72.0 / 96.0


def render_wordcloud_png(
    nodes: Sequence[WordCloudNode],
    width: float = 600.0,
    height: float = 400.0,
    dpi: int = 96,
) -> bytes:
    """Draw a finished layout onto a width x height PNG and return its bytes."""
    fig = plt.figure(figsize=(width / dpi, height / dpi), dpi=dpi)
    try:
        ax = fig.add_axes([0, 0, 1, 1])
        ax.set_xlim(0, width)
        ax.set_ylim(height, 0)  # canvas origin is top-left
        ax.axis("off")
        for node in nodes:
            ax.text(
                node.x,
                node.y,
                node.text,
                fontsize=node.font_size * _PX_TO_PT,
                color=node.color,
                ha="center",
                va="center",
                fontweight="bold",
            )
        buf = io.BytesIO()
        fig.savefig(buf, format="png", dpi=dpi)
        return buf.getvalue()
    finally:
        plt.close(fig)


def save_wordcloud_png(
    nodes: Sequence[WordCloudNode],
    path: Path,
    width: float = 600.0,
    height: float = 400.0,
) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(render_wordcloud_png(nodes, width, height))
    return path
