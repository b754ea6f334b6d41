from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from datetime import date, timedelta
from typing import Optional, Tuple

import pandas as pd

# ============================================================
# Opções dos filtros
# ============================================================

# chave -> nº de dias (None = sem filtro de data)
QUICK_RANGES = {"7": 7, "30": 30, "90": 90, "all": None}
QUICK_RANGE_LABELS = {
    "7": "Últimos 7d",
    "30": "Últimos 30d",
    "90": "Últimos 90d",
    "all": "Tudo",
}

CONTACT_STATUSES = ("all", "with_contact", "without_contact")
CONTACT_STATUS_LABELS = {
    "all": "Todos",
    "with_contact": "Com contato autorizado",
    "without_contact": "Sem contato autorizado",
}

_BR_DATE = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})$")


def parse_br_date(text: Optional[str]) -> Optional[date]:
    """
    'dd/mm/aaaa' -> date. Qualquer coisa inválida devolve None (nunca levanta),
    pra que o filtro simplesmente ignore a data digitada.
    """
    m = _BR_DATE.match((text or "").strip())
    if not m:
        return None
    day, month, year = (int(g) for g in m.groups())
    try:
        return date(year, month, day)
    except ValueError:
        return None


@dataclass(frozen=True)
class DashboardFilters:
    quick: str = "all"
    custom_start: str = ""
    custom_end: str = ""
    sizes: frozenset = field(default_factory=frozenset)
    roles: frozenset = field(default_factory=frozenset)
    contact: str = "all"
    respondent: str = "all"  # "all" ou um código R-NN

    def with_toggled_size(self, size: str) -> "DashboardFilters":
        return replace(self, sizes=_toggle(self.sizes, size))

    def with_toggled_role(self, role: str) -> "DashboardFilters":
        return replace(self, roles=_toggle(self.roles, role))


def _toggle(selected: frozenset, value: str) -> frozenset:
    return selected - {value} if value in selected else selected | {value}


def resolve_date_range(filters: DashboardFilters, today: date) -> Optional[Tuple[date, date]]:
    """
    Janela [de, até] inclusiva em dias do calendário local.
    - período rápido de N dias: [hoje - (N-1), hoje]
    - intervalo custom só vale quando AS DUAS datas são válidas (e aí substitui o rápido)
    - nada resolvido: None (sem filtro de data)
    """
    start = parse_br_date(filters.custom_start)
    end = parse_br_date(filters.custom_end)
    if start and end:
        return start, end

    days = QUICK_RANGES.get(filters.quick)
    if days:
        return today - timedelta(days=days - 1), today
    return None


def local_dates(created_at: pd.Series, tz: str) -> pd.Series:
    """Timestamps (ISO, geralmente UTC) -> dia do calendário no fuso `tz`. Inválidos viram NaT."""
    ts = pd.to_datetime(created_at, utc=True, errors="coerce", format="ISO8601")
    return ts.dt.tz_convert(tz).dt.date


def _truthy(series: pd.Series) -> pd.Series:
    return series.map(lambda v: bool(v) if v is not None and not pd.isna(v) else False)


def has_contact_mask(df: pd.DataFrame) -> pd.Series:
    """Linha 'tem contato' se qualquer um dos consentimentos estiver marcado."""
    return _truthy(df["consent"]) | _truthy(df["consent_contact"])


def filter_responses(
    df: pd.DataFrame,
    filters: DashboardFilters,
    today: Optional[date] = None,
    tz: str = "America/Sao_Paulo",
) -> pd.DataFrame:
    """Aplica todos os filtros (AND) sobre o DataFrame em memória, preservando a ordem."""
    if df.empty:
        return df

    if today is None:
        today = pd.Timestamp.now(tz=tz).date()

    mask = pd.Series(True, index=df.index)

    window = resolve_date_range(filters, today)
    if window:
        start, end = window
        days = local_dates(df["created_at"], tz)
        mask &= days.map(lambda d: pd.notna(d) and start <= d <= end)

    if filters.sizes:
        mask &= df["clinic_size"].isin(list(filters.sizes))

    if filters.roles:
        mask &= df["doctor_role"].isin(list(filters.roles))

    if filters.contact == "with_contact":
        mask &= has_contact_mask(df)
    elif filters.contact == "without_contact":
        mask &= ~has_contact_mask(df)

    if filters.respondent and filters.respondent != "all":
        mask &= df["code"] == filters.respondent

    return df[mask.astype(bool)]
