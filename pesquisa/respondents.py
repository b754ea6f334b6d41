from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

import pandas as pd

from pesquisa.filters import local_dates
from pesquisa.survey import IDENTITY_FIELDS, QUESTIONS

NO_IDENTITY_NOTICE = "Sem identificação autorizada"
EMPTY_CELL = "—"


def _text(value: Any) -> str:
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return ""
    return str(value).strip()


def _flag(value: Any) -> bool:
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return False
    return bool(value)


def should_show_identity(row: Mapping[str, Any]) -> bool:
    """Nome/CRM/contato só aparecem com algum consentimento E algum campo preenchido."""
    consented = _flag(row.get("consent")) or _flag(row.get("consent_contact"))
    return consented and any(_text(row.get(f)) for f in IDENTITY_FIELDS)


def _local_timestamps(df: pd.DataFrame, tz: str) -> pd.Series:
    ts = pd.to_datetime(df["created_at"], utc=True, errors="coerce", format="ISO8601")
    return ts.dt.tz_convert(tz)


def respondent_cards(df: pd.DataFrame, tz: str = "America/Sao_Paulo") -> List[Dict[str, Any]]:
    """Lista de respondentes para o dashboard (identidade só quando autorizada)."""
    if df.empty:
        return []

    stamps = _local_timestamps(df, tz)
    cards = []
    for idx, row in df.iterrows():
        ts = stamps.loc[idx]
        identity: Optional[Dict[str, str]] = None
        if should_show_identity(row):
            identity = {
                "nome": _text(row.get("doctor_name")),
                "crm": _text(row.get("crm")),
                "contato": _text(row.get("contact")),
            }
        cards.append({
            "code": row["code"],
            "created_at": ts.strftime("%d/%m/%Y %H:%M") if pd.notnull(ts) else "",
            "clinic_size": _text(row.get("clinic_size")) or EMPTY_CELL,
            "doctor_role": _text(row.get("doctor_role")) or EMPTY_CELL,
            "identity": identity,
            "comments": _text(row.get("comments")),
        })
    return cards


def detail_rows(df: pd.DataFrame, tz: str = "America/Sao_Paulo") -> List[Dict[str, str]]:
    """
    Tabela 'Respostas detalhadas' do PDF: sem nome/CRM/contato, nunca.
    """
    if df.empty:
        return []

    days = local_dates(df["created_at"], tz)
    rows = []
    for idx, row in df.iterrows():
        d = days.loc[idx]
        out = {
            "Código": row["code"],
            "Data": d.strftime("%d/%m/%Y") if pd.notnull(d) else "",
            "Tamanho": _text(row.get("clinic_size")) or EMPTY_CELL,
            "Função": _text(row.get("doctor_role")) or EMPTY_CELL,
        }
        for field, q in QUESTIONS.items():
            out[q.chart_title] = _text(row.get(field)) or EMPTY_CELL
        rows.append(out)
    return rows
