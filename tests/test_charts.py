import plotly.graph_objects as go
import pytest

from pesquisa.aggregations import teaser_counts, topic_distributions
from pesquisa.charts import (
    dist_bar_figure,
    donut_figure,
    render_png,
    teaser_figure,
    topic_figure,
)


@pytest.fixture
def dists(make_row, frame):
    df = frame([make_row(), make_row(q_noshow_relevance="Não"), make_row(q_noshow_relevance="Não")])
    return topic_distributions(df)


def test_dist_bar_keeps_declared_order_and_labels(dists):
    question = dists[0]["questions"][0]
    fig = dist_bar_figure(question)
    bar = fig.data[0]

    assert list(bar.y) == ["Sim", "Não", "Parcialmente"]
    assert list(bar.x) == [1, 2, 0]
    assert list(bar.text) == ["1 (33%)", "2 (67%)", "0 (0%)"]
    assert fig.layout.yaxis.autorange == "reversed"
    assert "N=3" in fig.layout.title.text


def test_topic_figure_has_one_trace_per_question(dists):
    fig = topic_figure(dists[1])
    assert len(fig.data) == 3
    titles = [a.text for a in fig.layout.annotations]
    assert titles == ["Glosas recorrentes", "Interesse em checagem antes do envio", "Quem sofre mais"]


@pytest.mark.parametrize("value,expected", [(40, 40), (-5, 0), (150, 100), (0, 0)])
def test_donut_clamps_value(value, expected):
    fig = donut_figure(value, "% no-show relevante")
    assert list(fig.data[0].values) == [expected, 100 - expected]
    assert fig.layout.annotations[0].text == f"<b>{expected}%</b>"


def test_teaser_figure():
    fig = teaser_figure(teaser_counts([{"q_noshow_relevance": "Sim"}, {"q_noshow_relevance": None}]))
    assert list(fig.data[0].x) == ["Sim", "Não", "Parcialmente", "—"]
    assert list(fig.data[0].y) == [1, 0, 0, 1]


def test_render_png_returns_none_when_export_fails(monkeypatch):
    fig = go.Figure()

    def boom(*args, **kwargs):
        raise RuntimeError("kaleido ausente")

    monkeypatch.setattr(fig, "to_image", boom)
    assert render_png(fig) is None


def test_render_png_passes_size(monkeypatch):
    fig = go.Figure()
    calls = {}

    def fake_to_image(**kwargs):
        calls.update(kwargs)
        return b"\x89PNG"

    monkeypatch.setattr(fig, "to_image", fake_to_image)
    assert render_png(fig, width=800, height=300) == b"\x89PNG"
    assert calls == {"format": "png", "width": 800, "height": 300, "scale": 2}
