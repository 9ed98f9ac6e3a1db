# comment_analyzer/domain/wordcloud.py
"""
Word-cloud layout.

1) font size: linear in count, between min_font and max_font
2) bubble radius: from font size and an approximate text width
3) relaxation: overlapping bubbles push each other apart, every bubble is
   pulled weakly toward the canvas centre, for a fixed number of steps
4) clamp: every centre ends inside the canvas, at least `radius` from the edge
   when the bubble fits on that axis
"""

from __future__ import annotations

import math
import random
from typing import Dict, List, Optional, Sequence

from comment_analyzer.domain.models import WordCloudNode, WordFrequency

COLOR_SCHEMES: Dict[str, List[str]] = {
    "blue": ["#3b82f6", "#1d4ed8", "#2563eb", "#1e40af", "#1e3a8a"],
    "green": ["#10b981", "#059669", "#047857", "#065f46", "#064e3b"],
    "purple": ["#8b5cf6", "#7c3aed", "#6d28d9", "#5b21b6", "#4c1d95"],
    "orange": ["#f97316", "#ea580c", "#dc2626", "#b91c1c", "#991b1b"],
    "mixed": ["#3b82f6", "#10b981", "#f59e0b", "#ef4444", "#8b5cf6"],
}

# average glyph width relative to font size
CHAR_WIDTH_FACTOR = 0.6
CENTER_PULL = 0.01


def palette_for(scheme: str) -> List[str]:
    return COLOR_SCHEMES.get(scheme, COLOR_SCHEMES["mixed"])


def font_size_for(count: int, max_count: int, min_font: float, max_font: float) -> float:
    if max_count <= 0:
        return min_font
    return min_font + (count / max_count) * (max_font - min_font)


def radius_for(text: str, font_size: float, padding: float) -> float:
    text_width = len(text) * font_size * CHAR_WIDTH_FACTOR
    return max(text_width / 2.0, font_size / 2.0) + padding


def build_nodes(
    frequencies: Sequence[WordFrequency],
    min_font: float = 15.0,
    max_font: float = 60.0,
    color_scheme: str = "mixed",
    padding: float = 5.0,
) -> List[WordCloudNode]:
    """Sized and coloured nodes, not yet positioned."""
    if not frequencies:
        return []
    max_count = max(f.count for f in frequencies)
    palette = palette_for(color_scheme)

    nodes: List[WordCloudNode] = []
    for i, f in enumerate(frequencies):
        size = font_size_for(f.count, max_count, min_font, max_font)
        nodes.append(
            WordCloudNode(
                text=f.word,
                count=f.count,
                font_size=size,
                color=palette[i % len(palette)],
                radius=radius_for(f.word, size, padding),
            )
        )
    return nodes


def _separate(a: WordCloudNode, b: WordCloudNode, rng: random.Random) -> bool:
    """Push an overlapping pair apart along their centre line. True if they overlapped."""
    dx = b.x - a.x
    dy = b.y - a.y
    dist = math.hypot(dx, dy)
    min_dist = a.radius + b.radius
    if dist >= min_dist:
        return False

    if dist < 1e-6:
        angle = rng.uniform(0.0, 2.0 * math.pi)
        dx, dy, dist = math.cos(angle), math.sin(angle), 1.0

    push = (min_dist - dist) / 2.0
    ux, uy = dx / dist, dy / dist
    a.x -= ux * push
    a.y -= uy * push
    b.x += ux * push
    b.y += uy * push
    return True


def _clamp_axis(value: float, radius: float, extent: float) -> float:
    if 2.0 * radius >= extent:
        return extent / 2.0
    return min(max(value, radius), extent - radius)


def relax(
    nodes: List[WordCloudNode],
    width: float,
    height: float,
    iterations: int,
    rng: random.Random,
) -> None:
    """Run the collision pass in place."""
    cx, cy = width / 2.0, height / 2.0
    for _ in range(iterations):
        moved = False
        for i in range(len(nodes)):
            for j in range(i + 1, len(nodes)):
                if _separate(nodes[i], nodes[j], rng):
                    moved = True
        for node in nodes:
            node.x += (cx - node.x) * CENTER_PULL
            node.y += (cy - node.y) * CENTER_PULL
        if not moved:
            break


def layout_word_cloud(
    frequencies: Sequence[WordFrequency],
    width: float = 600.0,
    height: float = 400.0,
    min_font: float = 15.0,
    max_font: float = 60.0,
    color_scheme: str = "mixed",
    iterations: int = 120,
    padding: float = 5.0,
    seed: Optional[int] = None,
) -> List[WordCloudNode]:
    """
    Place ranked words on a `width` x `height` canvas.

    With `seed` set the same input always yields the same layout; without it
    every call produces a fresh arrangement.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"canvas must have a positive size: {width}x{height}")

    nodes = build_nodes(frequencies, min_font, max_font, color_scheme, padding)
    if not nodes:
        return []

    rng = random.Random(seed)
    cx, cy = width / 2.0, height / 2.0
    spread_x, spread_y = width / 4.0, height / 4.0
    for node in nodes:
        node.x = cx + rng.uniform(-spread_x, spread_x)
        node.y = cy + rng.uniform(-spread_y, spread_y)

    relax(nodes, width, height, iterations, rng)

    for node in nodes:
        node.x = _clamp_axis(node.x, node.radius, width)
        node.y = _clamp_axis(node.y, node.radius, height)

    return nodes
