import math

import pytest

from comment_analyzer.domain.models import WordFrequency
from comment_analyzer.domain.wordcloud import (
    COLOR_SCHEMES,
    font_size_for,
    layout_word_cloud,
    radius_for,
)
from comment_analyzer.infra.wordcloud_render import save_wordcloud_png


def _freqs(n):
    return [WordFrequency(word=f"word{i}", count=n - i) for i in range(n)]


def test_font_size_is_linear_in_count():
    assert font_size_for(4, 4, 15, 60) == 60
    assert font_size_for(2, 4, 15, 60) == pytest.approx(37.5)
    assert font_size_for(0, 4, 15, 60) == 15


def test_radius_uses_text_width_or_font_size():
    # 5 chars * 20 * 0.6 / 2 = 30
    assert radius_for("hello", 20, 5) == pytest.approx(35)
    # one char: font / 2 wins
    assert radius_for("a", 20, 5) == pytest.approx(15)


@pytest.mark.parametrize("seed", [0, 1, 2, 3, 42])
def test_every_node_stays_on_canvas(seed):
    width, height = 600.0, 400.0
    nodes = layout_word_cloud(_freqs(30), width=width, height=height, seed=seed)
    assert len(nodes) == 30
    for node in nodes:
        assert 0 <= node.x <= width
        assert 0 <= node.y <= height
        if 2 * node.radius < width:
            assert node.radius <= node.x <= width - node.radius
        if 2 * node.radius < height:
            assert node.radius <= node.y <= height - node.radius


def test_same_seed_gives_same_layout():
    a = layout_word_cloud(_freqs(20), seed=123)
    b = layout_word_cloud(_freqs(20), seed=123)
    assert [(n.text, n.x, n.y) for n in a] == [(n.text, n.x, n.y) for n in b]


def test_overlapping_pair_is_pushed_apart():
    freqs = [WordFrequency("alpha", 3), WordFrequency("beta", 2)]
    a, b = layout_word_cloud(freqs, width=2000, height=2000, seed=5)
    dist = math.hypot(a.x - b.x, a.y - b.y)
    assert dist >= 0.95 * (a.radius + b.radius)


def test_colors_cycle_through_the_palette():
    nodes = layout_word_cloud(_freqs(7), color_scheme="blue", seed=1)
    palette = COLOR_SCHEMES["blue"]
    assert [n.color for n in nodes] == [palette[i % len(palette)] for i in range(7)]


def test_unknown_scheme_falls_back_to_mixed():
    nodes = layout_word_cloud(_freqs(2), color_scheme="rainbow", seed=1)
    assert nodes[0].color == COLOR_SCHEMES["mixed"][0]


def test_word_wider_than_canvas_is_centred():
    freqs = [WordFrequency("a" * 40, 1)]
    (node,) = layout_word_cloud(freqs, width=200, height=400, seed=0)
    assert node.x == 100
    # too tall as well
    assert node.y == 200


def test_empty_input_and_bad_canvas():
    assert layout_word_cloud([], seed=0) == []
    with pytest.raises(ValueError):
        layout_word_cloud(_freqs(3), width=0, height=400)


def test_png_export(tmp_path):
    nodes = layout_word_cloud(_freqs(5), seed=2)
    path = save_wordcloud_png(nodes, tmp_path / "out" / "cloud.png", 600, 400)
    assert path.read_bytes().startswith(b"\x89PNG")
