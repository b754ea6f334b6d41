from __future__ import annotations

from typing import Any, Dict, List, Optional

import plotly.graph_objects as go
from loguru import logger
from plotly.subplots import make_subplots

# === Paleta da marca ===
BRAND = "#1976d2"
BRAND_SOFT = "#e3eefb"
INK = "#0f172a"
INK_SOFT = "#64748b"


def apply_plot_theme(
    fig: go.Figure,
    *,
    height: Optional[int] = None,
    margin: Optional[Dict[str, int]] = None,
    x_title: Optional[str] = None,
    y_title: Optional[str] = None,
    tickfont_size: int = 12,
    showgrid: bool = True,
) -> go.Figure:
    """
    Tema padrão (clean) dos gráficos Plotly do app.
    Usa update_xaxes/update_yaxes (evita keys antigas tipo titlefont).
    """
    if margin is None:
        margin = dict(l=10, r=30, t=30, b=10)

    fig.update_layout(
        template="simple_white",
        margin=margin,
        font=dict(
            family="Inter, system-ui, -apple-system, Segoe UI, Roboto, Arial",
            size=12,
            color=INK,
        ),
        showlegend=False,
    )

    if height is not None:
        fig.update_layout(height=height)

    fig.update_xaxes(
        title_text=x_title,
        tickfont=dict(size=tickfont_size, color=INK_SOFT),
        showgrid=showgrid,
        gridcolor="rgba(0,0,0,0.06)",
        zeroline=False,
    )
    fig.update_yaxes(
        title_text=y_title,
        tickfont=dict(size=tickfont_size),
        showgrid=False,
        zeroline=False,
    )
    return fig


def _bar_trace(data: List[Dict[str, Any]]) -> go.Bar:
    # ordem declarada de cima pra baixo: o eixo y categórico é invertido no layout
    return go.Bar(
        x=[d["count"] for d in data],
        y=[d["label"] for d in data],
        orientation="h",
        marker=dict(color=BRAND),
        text=[f"{d['count']} ({d['pct']}%)" for d in data],
        textposition="outside",
        cliponaxis=False,
        hovertemplate="%{y}: %{x} respostas<extra></extra>",
    )


def dist_bar_figure(question: Dict[str, Any]) -> go.Figure:
    """Barra horizontal de uma pergunta: contagem e % do total filtrado por opção."""
    data = question["data"]
    fig = go.Figure(_bar_trace(data))
    fig.update_yaxes(autorange="reversed")
    max_count = max([1] + [d["count"] for d in data])
    fig.update_xaxes(range=[0, max_count * 1.25], dtick=max(1, round(max_count / 5)))
    fig.update_layout(title=dict(text=f"{question['title']}  ·  N={question['total']}", font=dict(size=13)))
    return apply_plot_theme(fig, height=200, margin=dict(l=10, r=30, t=40, b=10))


def topic_figure(topic_dist: Dict[str, Any]) -> go.Figure:
    """As três perguntas de um tópico lado a lado (snapshot do PDF)."""
    questions = topic_dist["questions"]
    fig = make_subplots(
        rows=1,
        cols=len(questions),
        subplot_titles=[q["title"] for q in questions],
        horizontal_spacing=0.12,
    )
    for col, q in enumerate(questions, start=1):
        fig.add_trace(_bar_trace(q["data"]), row=1, col=col)
        max_count = max([1] + [d["count"] for d in q["data"]])
        fig.update_xaxes(range=[0, max_count * 1.35], row=1, col=col)
        fig.update_yaxes(autorange="reversed", row=1, col=col)
    return apply_plot_theme(fig, height=320, margin=dict(l=10, r=40, t=50, b=20))


def donut_figure(value: int, title: str) -> go.Figure:
    """Rosca de KPI (0–100%) com o número no centro."""
    value = max(0, min(100, int(value)))
    fig = go.Figure(
        go.Pie(
            values=[value, 100 - value],
            hole=0.72,
            sort=False,
            direction="clockwise",
            marker=dict(colors=[BRAND, BRAND_SOFT]),
            textinfo="none",
            hoverinfo="skip",
        )
    )
    fig.update_layout(
        title=dict(text=title, font=dict(size=13), x=0.5, xanchor="center"),
        annotations=[dict(text=f"<b>{value}%</b>", x=0.5, y=0.5, showarrow=False,
                          font=dict(size=26, color=BRAND))],
    )
    return apply_plot_theme(fig, height=220, margin=dict(l=10, r=10, t=40, b=10), showgrid=False)


def teaser_figure(counts: List[Dict[str, Any]]) -> go.Figure:
    """Gráfico de barras da tela de obrigado (relevância do no-show)."""
    fig = go.Figure(
        go.Bar(
            x=[c["name"] for c in counts],
            y=[c["value"] for c in counts],
            marker=dict(color=BRAND),
            text=[c["value"] for c in counts],
            textposition="outside",
            cliponaxis=False,
        )
    )
    fig.update_layout(title=dict(text="No-show é relevante? (respostas até agora)", font=dict(size=14)))
    return apply_plot_theme(fig, height=280, margin=dict(l=10, r=10, t=50, b=10), y_title="Respostas")


def render_png(fig: go.Figure, width: int = 1400, height: int = 360) -> Optional[bytes]:
    """Snapshot PNG via kaleido. Se falhar, loga e devolve None (o PDF desenha só a moldura)."""
    try:
        return fig.to_image(format="png", width=width, height=height, scale=2)
    except Exception as e:
        logger.warning(f"Falha ao renderizar gráfico (kaleido): {e}")
        return None
