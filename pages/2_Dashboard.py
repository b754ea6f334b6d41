import html
import math
from datetime import datetime

import pandas as pd
import streamlit as st
from loguru import logger

from pesquisa.aggregations import KPI_LABELS, compute_kpis, summary_rows, topic_distributions
from pesquisa.charts import dist_bar_figure, donut_figure, render_png, topic_figure
from pesquisa.filters import (
    CONTACT_STATUS_LABELS,
    CONTACT_STATUSES,
    QUICK_RANGE_LABELS,
    QUICK_RANGES,
    filter_responses,
    parse_br_date,
    resolve_date_range,
)
from pesquisa.helpers import (
    FILTER_KEYS,
    drop_pdf,
    ensure_filter_state,
    filters_from_state,
    reset_filters,
    sync_filter_key,
    toggle_role,
    toggle_size,
)
from pesquisa.remote import RemoteCallError, fetch_responses, get_session_client, has_session, sign_out
from pesquisa.report import build_report_pdf, report_filename
from pesquisa.respondents import NO_IDENTITY_NOTICE, detail_rows, respondent_cards
from pesquisa.survey import CLINIC_SIZES, DOCTOR_ROLES, TOPIC_SHORT_TITLES, responses_frame
from ui.layout import require_settings, setup_page
from ui.sidebar import render_sidebar_menu

setup_page("Dashboard", icon="📊", layout="wide")

settings = require_settings()
client = get_session_client()

# --- sessão: sem login volta pro /admin ---
if not has_session(client):
    st.session_state["current_page"] = "Admin"
    st.switch_page("pages/1_Admin.py")

render_sidebar_menu("Dashboard", admin=True)

ensure_filter_state()

with st.sidebar:
    st.divider()
    if st.button("Sair", use_container_width=True):
        try:
            sign_out(client)
        except RemoteCallError as e:
            st.error(e.message)
        else:
            st.session_state.pop("responses", None)
            st.session_state["current_page"] = "Admin"
            st.switch_page("pages/1_Admin.py")

# ============================================================
# Carga (uma vez por sessão; filtro é todo em memória)
# ============================================================

if "responses" not in st.session_state:
    with st.spinner("Carregando…"):
        try:
            st.session_state["responses"] = responses_frame(fetch_responses(client))
        except RemoteCallError as e:
            st.error(f"Não foi possível carregar as respostas: {e.message}")
            st.stop()

df_all: pd.DataFrame = st.session_state["responses"]

top_l, top_r = st.columns([3, 1], vertical_alignment="bottom")
with top_l:
    st.title("Dashboard")
with top_r:
    if st.button("🔄 Recarregar dados", use_container_width=True):
        st.session_state.pop("responses", None)
        drop_pdf()
        st.rerun()

# ============================================================
# Filtros
# ============================================================

with st.container(border=True):
    col_period, col_profile = st.columns(2)

    with col_period:
        st.radio(
            "Período rápido",
            list(QUICK_RANGES),
            format_func=QUICK_RANGE_LABELS.get,
            horizontal=True,
            key=FILTER_KEYS["quick"],
        )

        c_start, c_end = st.columns(2)
        with c_start:
            st.text_input("Intervalo custom: de", placeholder="dd/mm/aaaa", key=FILTER_KEYS["custom_start"])
        with c_end:
            st.text_input("até", placeholder="dd/mm/aaaa", key=FILTER_KEYS["custom_end"])

    with col_profile:
        # chips: nenhum marcado = sem filtro
        current = filters_from_state()
        st.caption("Tamanho do consultório/clínica")
        for col, size in zip(st.columns(len(CLINIC_SIZES)), CLINIC_SIZES):
            col.button(
                size,
                key=f"chip_size_{size}",
                on_click=toggle_size,
                args=(size,),
                type="primary" if size in current.sizes else "secondary",
                use_container_width=True,
            )
        st.caption("Especialidade / Função")
        for col, role in zip(st.columns(len(DOCTOR_ROLES)), DOCTOR_ROLES):
            col.button(
                role,
                key=f"chip_role_{role}",
                on_click=toggle_role,
                args=(role,),
                type="primary" if role in current.roles else "secondary",
                use_container_width=True,
            )

    # códigos R-NN vêm da lista completa (estáveis entre recortes)
    respondent_options = ["all"] + list(df_all["code"])
    if st.session_state[FILTER_KEYS["respondent"]] not in respondent_options:
        st.session_state[FILTER_KEYS["respondent"]] = "all"

    b1, b2, b3 = st.columns([1.6, 1.6, 1.0], vertical_alignment="bottom")
    with b1:
        st.selectbox(
            "Respondente",
            respondent_options,
            format_func=lambda code: "Todos" if code == "all" else code,
            key=FILTER_KEYS["respondent"],
        )
    with b2:
        st.selectbox(
            "Contato",
            CONTACT_STATUSES,
            format_func=CONTACT_STATUS_LABELS.get,
            key=FILTER_KEYS["contact"],
        )
    with b3:
        st.button("Resetar filtros", on_click=reset_filters, use_container_width=True)

filters = filters_from_state()
sync_filter_key(filters)

today = pd.Timestamp.now(tz=settings.timezone).date()
window = resolve_date_range(filters, today)

# só aviso visual; a data inválida é ignorada pelo filtro
typed_custom = filters.custom_start.strip() or filters.custom_end.strip()
custom_ok = parse_br_date(filters.custom_start) and parse_br_date(filters.custom_end)
if typed_custom and not custom_ok:
    st.caption("Intervalo custom incompleto ou inválido: usando o período rápido.")
if window:
    st.caption(f"Período aplicado: {window[0]:%d/%m/%Y} a {window[1]:%d/%m/%Y}")

df = filter_responses(df_all, filters, today=today, tz=settings.timezone)
kpi = compute_kpis(df)
dists = topic_distributions(df)

# ============================================================
# KPIs
# ============================================================

k0, k1, k2, k3 = st.columns(4)
with k0:
    with st.container(border=True):
        st.metric(f"{KPI_LABELS['total']} (após filtros)", f"{kpi.total:,}")
        st.caption(f"de {len(df_all):,} no total")
with k1:
    st.plotly_chart(donut_figure(kpi.noshow_yes_pct, KPI_LABELS["noshow_yes_pct"]), use_container_width=True)
with k2:
    st.plotly_chart(donut_figure(kpi.glosa_recurring_pct, KPI_LABELS["glosa_recurring_pct"]),
                    use_container_width=True)
with k3:
    st.plotly_chart(donut_figure(kpi.rx_rework_pct, KPI_LABELS["rx_rework_pct"]), use_container_width=True)

# ============================================================
# Distribuições por tópico
# ============================================================

for td in dists:
    with st.container(border=True):
        st.subheader(TOPIC_SHORT_TITLES[td["topic"].key])
        cols = st.columns(len(td["questions"]))
        for col, q in zip(cols, td["questions"]):
            with col:
                st.plotly_chart(dist_bar_figure(q), use_container_width=True)

# ============================================================
# Exportar PDF
# ============================================================

with st.container(border=True):
    e1, e2 = st.columns([1, 3], vertical_alignment="center")
    with e1:
        if st.button("📄 Gerar PDF", type="primary", use_container_width=True):
            try:
                with st.spinner("Gerando..."):
                    charts = {td["topic"].key: render_png(topic_figure(td)) for td in dists}
                    now = datetime.now()
                    st.session_state["pdf_bytes"] = build_report_pdf(
                        kpi,
                        summary_rows(df),
                        detail_rows(df, settings.timezone),
                        chart_images=charts,
                        generated_at=now,
                    )
                    st.session_state["pdf_name"] = report_filename(now)
            except Exception:
                logger.exception("Erro ao gerar PDF")
                st.error("Não foi possível gerar o PDF. Tente novamente.")
    with e2:
        if st.session_state.get("pdf_bytes"):
            st.download_button(
                "⬇️ Baixar relatório",
                data=st.session_state["pdf_bytes"],
                file_name=st.session_state["pdf_name"],
                mime="application/pdf",
            )
        else:
            st.caption("O PDF usa o recorte filtrado atual (KPIs, gráficos, resumo e respostas sem identificação).")

# ============================================================
# Respondentes (paginado)
# ============================================================

st.subheader("Respondentes")

cards = respondent_cards(df, settings.timezone)
if not cards:
    st.info("Nenhuma resposta encontrada para os filtros.")
    st.stop()

limit = st.selectbox("Resultados por página", [10, 25, 50], index=0, key="limit")
pages = max(1, math.ceil(len(cards) / limit))
if st.session_state["page"] > pages:
    st.session_state["page"] = pages

start = (st.session_state["page"] - 1) * limit
for card in cards[start:start + limit]:
    with st.container(border=True):
        h1, h2, h3, h4 = st.columns([0.8, 1.4, 1.2, 1.4])
        h1.markdown(f"**{card['code']}**")
        h2.caption(card["created_at"])
        h3.write(card["clinic_size"])
        h4.write(card["doctor_role"])

        identity = card["identity"]
        if identity:
            labels = {"nome": "Nome", "crm": "CRM", "contato": "Contato"}
            parts = [f"**{labels[k]}:** {html.escape(v)}" for k, v in identity.items() if v]
            st.markdown(" · ".join(parts))
        else:
            st.markdown(f"<span class='respondent-notice'>{NO_IDENTITY_NOTICE}</span>", unsafe_allow_html=True)

        if card["comments"]:
            st.caption(f"💬 {card['comments']}")

p1, p2, p3 = st.columns([1, 2, 1])

with p1:
    if st.button("⬅️ Anterior", use_container_width=True, disabled=(st.session_state["page"] <= 1)):
        st.session_state["page"] -= 1
        st.rerun()

with p2:
    st.markdown(
        f"<div style='text-align:center;'>Página <b>{st.session_state['page']}</b> de <b>{pages}</b>"
        f" • Total: <b>{len(cards):,}</b></div>",
        unsafe_allow_html=True,
    )

with p3:
    if st.button("Próxima ➡️", use_container_width=True, disabled=(st.session_state["page"] >= pages)):
        st.session_state["page"] += 1
        st.rerun()
