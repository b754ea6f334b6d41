import streamlit as st

from pesquisa.remote import RemoteCallError, get_session_client, has_session, sign_in
from ui.layout import render_footer, require_settings, setup_page
from ui.sidebar import render_sidebar_menu

setup_page("Admin", icon="🔐")

render_sidebar_menu("Admin")

require_settings()

client = get_session_client()

# já logado: direto pro dashboard
if has_session(client):
    st.session_state["current_page"] = "Dashboard"
    st.switch_page("pages/2_Dashboard.py")

st.title("Área administrativa")
st.caption("Acesso restrito. Use o e-mail e a senha cadastrados no Supabase Auth.")

with st.form("login_form"):
    email = st.text_input("E-mail", placeholder="voce@novusys.com.br")
    password = st.text_input("Senha", type="password")
    submitted = st.form_submit_button("Entrar", type="primary", use_container_width=True)

if submitted:
    if not email or not password:
        st.error("Informe e-mail e senha.")
    else:
        try:
            with st.spinner("Entrando…"):
                sign_in(client, email.strip(), password)
        except RemoteCallError as e:
            st.error(e.message)
        else:
            st.session_state["current_page"] = "Dashboard"
            st.switch_page("pages/2_Dashboard.py")

render_footer()
