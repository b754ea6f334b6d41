from __future__ import annotations

import streamlit as st

from pesquisa.filters import DashboardFilters
from pesquisa.survey import CLINIC_SIZES, DOCTOR_ROLES

# chaves dos widgets de filtro no session_state
FILTER_KEYS = {
    "quick": "f_quick",
    "custom_start": "f_custom_start",
    "custom_end": "f_custom_end",
    "sizes": "f_sizes",
    "roles": "f_roles",
    "contact": "f_contact",
    "respondent": "f_respondent",
}

FILTER_DEFAULTS = {
    "f_quick": "all",
    "f_custom_start": "",
    "f_custom_end": "",
    "f_sizes": [],
    "f_roles": [],
    "f_contact": "all",
    "f_respondent": "all",
}


def ensure_filter_state():
    for key, value in FILTER_DEFAULTS.items():
        st.session_state.setdefault(key, list(value) if isinstance(value, list) else value)
    st.session_state.setdefault("page", 1)
    st.session_state.setdefault("last_filter_key", None)


def reset_filters():
    """Callback do botão 'Resetar filtros' (roda antes dos widgets serem recriados)."""
    for key, value in FILTER_DEFAULTS.items():
        st.session_state[key] = list(value) if isinstance(value, list) else value
    st.session_state["page"] = 1
    drop_pdf()


def filters_from_state() -> DashboardFilters:
    s = st.session_state
    return DashboardFilters(
        quick=s[FILTER_KEYS["quick"]],
        custom_start=s[FILTER_KEYS["custom_start"]],
        custom_end=s[FILTER_KEYS["custom_end"]],
        sizes=frozenset(s[FILTER_KEYS["sizes"]]),
        roles=frozenset(s[FILTER_KEYS["roles"]]),
        contact=s[FILTER_KEYS["contact"]],
        respondent=s[FILTER_KEYS["respondent"]],
    )


def toggle_size(size: str):
    """Callback dos chips de tamanho."""
    selected = filters_from_state().with_toggled_size(size).sizes
    st.session_state[FILTER_KEYS["sizes"]] = [s for s in CLINIC_SIZES if s in selected]


def toggle_role(role: str):
    """Callback dos chips de especialidade."""
    selected = filters_from_state().with_toggled_role(role).roles
    st.session_state[FILTER_KEYS["roles"]] = [r for r in DOCTOR_ROLES if r in selected]


def sync_filter_key(filters: DashboardFilters):
    """Se mudou filtro, volta pra página 1 e descarta o PDF gerado para o recorte anterior."""
    if st.session_state["last_filter_key"] != filters:
        st.session_state["page"] = 1
        st.session_state["last_filter_key"] = filters
        drop_pdf()


def drop_pdf():
    st.session_state.pop("pdf_bytes", None)
    st.session_state.pop("pdf_name", None)
