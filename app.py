import streamlit as st

from pesquisa.aggregations import teaser_counts
from pesquisa.charts import teaser_figure
from pesquisa.remote import RemoteCallError, fetch_teaser_rows, get_public_client, insert_response
from pesquisa.survey import (
    CLINIC_SIZES,
    DOCTOR_ROLES,
    TOPICS,
    build_insert_payload,
    can_submit,
    empty_form,
)
from ui.layout import render_footer, render_hero, require_settings, setup_page
from ui.sidebar import render_sidebar_menu

setup_page("Pesquisa para Clínicas e Consultórios")

render_sidebar_menu("Pesquisa")

require_settings()

st.session_state.setdefault("show_form", False)
st.session_state.setdefault("submitted", False)
st.session_state.setdefault("submit_error", None)

FORM_PREFIX = "form_"


def form_value(field):
    return st.session_state.get(FORM_PREFIX + field)


def current_form() -> dict:
    """Lê o estado dos widgets e devolve o dict do formulário (mesmas chaves do banco)."""
    form = empty_form()
    for field in form:
        value = form_value(field)
        if value is not None:
            form[field] = value
    return form


# ============================================================
# Tela de obrigado (+ prévia de resultados)
# ============================================================

if st.session_state["submitted"]:
    st.markdown("<h1 class='gradient-title'>Obrigado pela resposta!</h1>", unsafe_allow_html=True)
    st.write("Sua contribuição ajuda a priorizar um MVP útil para clínicas e consultórios.")
    st.divider()

    try:
        counts = teaser_counts(fetch_teaser_rows(get_public_client()))
    except RemoteCallError as e:
        st.warning(f"Não foi possível carregar a prévia de resultados: {e.message}")
    else:
        st.plotly_chart(teaser_figure(counts), use_container_width=True)

    render_footer(with_privacy_link=True)
    st.stop()


# ============================================================
# Hero + formulário
# ============================================================

render_hero(
    "Pesquisa para Clínicas e Consultórios",
    "Leva 2–3 minutos. Queremos entender o que realmente importa no seu dia a dia "
    "para priorizar um MVP útil.",
)

if not st.session_state["show_form"]:
    if st.button("Começar agora", type="primary"):
        st.session_state["show_form"] = True
        st.rerun()
    render_footer()
    st.stop()

# --- Identificação (opcional) ---
with st.container(border=True):
    st.markdown("#### Identificação <span class='badge-soft'>opcional</span>", unsafe_allow_html=True)
    st.caption("Se desejar, informe seus dados para contato sobre pilotos/entrevistas.")
    c1, c2, c3 = st.columns(3)
    with c1:
        st.text_input("Nome", placeholder="Ex.: Dra. Maria Silva", key=FORM_PREFIX + "doctor_name")
    with c2:
        st.text_input("CRM", placeholder="Ex.: CRM 12345", key=FORM_PREFIX + "crm")
    with c3:
        st.text_input(
            "Contato (e-mail ou WhatsApp)",
            placeholder="Ex.: (51) 9 9999-9999 ou nome@clinica.com",
            key=FORM_PREFIX + "contact",
        )
    st.checkbox(
        "Autorizo contato para falar sobre pilotos/entrevistas (opcional).",
        key=FORM_PREFIX + "consent_contact",
    )

# --- Perfil (opcional) ---
with st.container(border=True):
    st.markdown("#### Perfil <span class='badge-soft'>opcional</span>", unsafe_allow_html=True)
    c1, c2 = st.columns(2)
    with c1:
        st.selectbox(
            "Especialidade / Função",
            DOCTOR_ROLES,
            index=None,
            placeholder="Selecionar…",
            key=FORM_PREFIX + "doctor_role",
        )
    with c2:
        st.selectbox(
            "Tamanho do consultório/clínica",
            CLINIC_SIZES,
            index=None,
            placeholder="Selecionar…",
            key=FORM_PREFIX + "clinic_size",
        )

# --- Tópicos ---
for topic in TOPICS:
    with st.container(border=True):
        st.markdown(f"#### {topic.title}")
        st.caption(topic.description)
        for q in topic.questions:
            st.radio(q.label, q.options, index=None, horizontal=True, key=FORM_PREFIX + q.field)

# --- Comentários + consentimentos ---
with st.container(border=True):
    st.markdown("#### Comentários e consentimentos")
    st.text_area(
        "Comentários",
        placeholder="Se pudesse resolver apenas um problema agora, qual seria?",
        height=120,
        key=FORM_PREFIX + "comments",
        label_visibility="collapsed",
    )
    st.checkbox(
        "Declaro que li e concordo com a Política de Privacidade e autorizo o uso anônimo "
        "destas respostas para fins de validação de produto.",
        key=FORM_PREFIX + "consent",
    )
    st.page_link("pages/3_Privacidade.py", label="Ler a Política de Privacidade", icon="🔒")
    st.caption("Não solicitamos dados sensíveis de pacientes. Identificação é opcional.")

if st.session_state["submit_error"]:
    st.error(st.session_state["submit_error"])

form = current_form()
ready = can_submit(form)

_, mid, _ = st.columns([1, 1, 1])
with mid:
    clicked = st.button("Enviar respostas", type="primary", disabled=not ready, use_container_width=True)

if not ready:
    st.caption("Responda as perguntas-chave de cada tema e marque o consentimento para enviar.")

if clicked and ready:
    with st.spinner("Enviando…"):
        try:
            insert_response(get_public_client(), build_insert_payload(form))
        except RemoteCallError as e:
            st.session_state["submit_error"] = e.message or "Falha ao enviar. Tente novamente."
        else:
            st.session_state["submit_error"] = None
            st.session_state["submitted"] = True
    st.rerun()

render_footer()
