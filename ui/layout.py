from datetime import date

import streamlit as st
from loguru import logger

from pesquisa.config import ConfigError, get_settings
from pesquisa.log import setup_logging

BRAND_GRADIENT = "linear-gradient(135deg,#1976d2 0%,#6a11cb 50%,#2575fc 100%)"

CSS = f"""
<style>
  .hero {{
    background: {BRAND_GRADIENT};
    color: white;
    border-radius: 16px;
    padding: 32px 28px;
    margin-bottom: 18px;
  }}
  .hero h1 {{ color: white; font-weight: 800; margin: 0; }}
  .hero p {{ color: rgba(255,255,255,0.9); margin-top: 10px; max-width: 640px; }}

  .gradient-title {{
    background: {BRAND_GRADIENT};
    -webkit-background-clip: text;
    background-clip: text;
    color: transparent;
    font-weight: 800;
  }}

  .badge-soft {{
    display:inline-block;
    padding: 2px 10px;
    border-radius: 999px;
    background: #eef4ff;
    color: #1976d2;
    font-size: 12px;
    font-weight: 600;
    margin-left: 6px;
  }}

  .respondent-notice {{ color:#64748b; font-style: italic; }}
  .site-footer {{ text-align:center; color:#64748b; font-size: 12px; margin-top: 40px; }}
</style>
"""


@st.cache_resource
def _init_logging():
    try:
        settings = get_settings()
        setup_logging(settings.log_level, settings.log_file)
    except ConfigError:
        setup_logging()
    logger.info("🚀 App iniciando...")
    return True


def setup_page(title: str, icon: str = "🩺", layout: str = "centered"):
    """set_page_config + CSS + logging. Tem que ser a primeira chamada da página."""
    st.set_page_config(page_title=f"{title} • NovuSys", page_icon=icon, layout=layout)
    _init_logging()
    st.markdown(CSS, unsafe_allow_html=True)


def render_hero(title: str, subtitle: str = ""):
    sub = f"<p>{subtitle}</p>" if subtitle else ""
    st.markdown(f"<div class='hero'><h1>{title}</h1>{sub}</div>", unsafe_allow_html=True)


def render_footer(with_privacy_link: bool = False):
    privacy = " <a href='/Privacidade' target='_self'>Política de privacidade</a>" if with_privacy_link else ""
    st.markdown(
        f"<div class='site-footer'>© {date.today().year} <b>NovuSys</b> — "
        f"Todos os direitos reservados.{privacy}</div>",
        unsafe_allow_html=True,
    )


def require_settings():
    """Para a página com mensagem clara quando falta configuração."""
    try:
        return get_settings()
    except ConfigError as e:
        logger.error(f"Configuração ausente: {e}")
        st.error(f"Configuração ausente: {e}")
        st.stop()
