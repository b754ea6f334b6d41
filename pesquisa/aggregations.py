from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List

import pandas as pd

from pesquisa.survey import QUESTIONS, TOPICS

# Pergunta-chave -> opção "afirmativa" que alimenta cada KPI
KPI_QUESTIONS = {
    "noshow_yes_pct": ("q_noshow_relevance", "Sim"),
    "glosa_recurring_pct": ("q_glosa_is_problem", "Sim"),
    "rx_rework_pct": ("q_rx_rework", "Sim"),
}

KPI_LABELS = {
    "total": "Total de respostas",
    "noshow_yes_pct": "% no-show relevante",
    "glosa_recurring_pct": "% glosas recorrentes",
    "rx_rework_pct": "% receitas geram retrabalho",
}

MISSING_LABEL = "—"


@dataclass(frozen=True)
class Kpis:
    total: int
    noshow_yes_pct: int
    glosa_recurring_pct: int
    rx_rework_pct: int


def pct(part: int, total: int) -> int:
    """Percentual inteiro (arredondamento half-up). Total zero -> 0."""
    if not total:
        return 0
    return int(math.floor(part / total * 100 + 0.5))


def compute_kpis(df: pd.DataFrame) -> Kpis:
    total = len(df)
    values = {}
    for key, (field, yes) in KPI_QUESTIONS.items():
        yes_count = int((df[field] == yes).sum()) if total else 0
        values[key] = pct(yes_count, total)
    return Kpis(total=total, **values)


def distribution(df: pd.DataFrame, field: str, options: Iterable[str]) -> List[Dict[str, Any]]:
    """
    Contagem por opção, na ordem declarada (não ordena por contagem).
    Valores ausentes ou fora da enumeração não entram, mas continuam no total.
    """
    counts = df[field].value_counts(dropna=True) if len(df) else pd.Series(dtype=int)
    return [{"label": opt, "count": int(counts.get(opt, 0))} for opt in options]


def topic_distributions(df: pd.DataFrame) -> List[Dict[str, Any]]:
    """
    Estrutura usada pelos gráficos do dashboard e do PDF:
    [{topic, questions: [{field, title, total, data: [{label, count, pct}]}]}]
    """
    total = len(df)
    out = []
    for topic in TOPICS:
        questions = []
        for q in topic.questions:
            data = distribution(df, q.field, q.options)
            for d in data:
                d["pct"] = pct(d["count"], total)
            questions.append({"field": q.field, "title": q.chart_title, "total": total, "data": data})
        out.append({"topic": topic, "questions": questions})
    return out


def summary_rows(df: pd.DataFrame) -> List[Dict[str, str]]:
    """Uma linha por pergunta para a tabela 'Resumo consolidado por pergunta' do PDF."""
    total = len(df)
    rows = []
    for field, q in QUESTIONS.items():
        data = distribution(df, field, q.options)
        cells = [f"{d['label']}: {d['count']} ({pct(d['count'], total)}%)" for d in data]
        rows.append({
            "pergunta": q.chart_title,
            "n": str(sum(d["count"] for d in data)),
            "respostas": " | ".join(cells),
        })
    return rows


def teaser_counts(rows: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    Contagem de q_noshow_relevance para o gráfico da tela de obrigado.
    Ausentes/desconhecidos vão para o balde '—' (só aparece se tiver alguém).
    """
    options = QUESTIONS["q_noshow_relevance"].options
    counts = {opt: 0 for opt in options}
    missing = 0
    for r in rows:
        v = r.get("q_noshow_relevance")
        if v in counts:
            counts[v] += 1
        else:
            missing += 1

    out = [{"name": k, "value": v} for k, v in counts.items()]
    if missing:
        out.append({"name": MISSING_LABEL, "value": missing})
    return out
