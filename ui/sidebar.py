import streamlit as st

PUBLIC_PAGES = {
    "Pesquisa": "app.py",
    "Privacidade": "pages/3_Privacidade.py",
}

# "Admin" é a tela de login; logado, o atalho vira "Dashboard"
LOGIN_PAGE = {"Admin": "pages/1_Admin.py"}
ADMIN_PAGES = {"Dashboard": "pages/2_Dashboard.py"}


def menu_pages(admin: bool = False) -> dict:
    return {**PUBLIC_PAGES, **(ADMIN_PAGES if admin else LOGIN_PAGE)}


def render_sidebar_menu(current: str, admin: bool = False):
    """Menu lateral; trocar a opção navega com st.switch_page."""
    pages = menu_pages(admin)
    options = list(pages.keys())
    if current not in options:
        current = options[0]
    st.session_state["current_page"] = current

    with st.sidebar:
        st.sidebar.title("📌 Navegação")
        selected = st.radio(
            "Ir para:",
            options,
            index=options.index(current),
            key=f"nav_{current}",
        )
        if admin:
            st.caption("🔐 Sessão administrativa ativa")

    if selected != current:
        st.session_state["current_page"] = selected
        st.switch_page(pages[selected])
