from __future__ import annotations

from typing import Any, Dict, List, Optional

import streamlit as st
from loguru import logger
from postgrest.types import ReturnMethod
from supabase import Client, create_client

from pesquisa.config import get_settings

SESSION_CLIENT_KEY = "supabase_client"


class RemoteCallError(Exception):
    """Falha ao falar com o Supabase; `message` é o texto do provedor, sem tradução."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


def _message(exc: Exception) -> str:
    # APIError (postgrest) e AuthApiError (gotrue) expõem .message
    return getattr(exc, "message", None) or str(exc) or exc.__class__.__name__


def mask_email(email: str) -> str:
    """'maria@clinica.com' -> 'm***@clinica.com' (e-mail nunca vai inteiro pro log)."""
    user, sep, domain = (email or "").partition("@")
    if not sep:
        return "***"
    return f"{user[:1]}***@{domain}"


def _new_client() -> Client:
    settings = get_settings()
    return create_client(settings.supabase_url, settings.supabase_anon_key)


@st.cache_resource
def get_public_client() -> Client:
    """
    Cliente anônimo compartilhado pelo processo (formulário público).
    cache_resource evita criar um cliente a cada rerun do Streamlit.
    """
    return _new_client()


def get_session_client() -> Client:
    """
    Cliente por sessão do navegador (login do admin).
    Não pode ser cache_resource: a sessão de auth ficaria visível para todo mundo.
    """
    if SESSION_CLIENT_KEY not in st.session_state:
        st.session_state[SESSION_CLIENT_KEY] = _new_client()
    return st.session_state[SESSION_CLIENT_KEY]


def _table() -> str:
    return get_settings().responses_table


# ============================================================
# Dados
# ============================================================

def insert_response(client: Client, payload: Dict[str, Any], table: Optional[str] = None) -> None:
    """Um INSERT, sem retry. Duplo clique = duas linhas (aceito)."""
    try:
        client.table(table or _table()).insert([payload], returning=ReturnMethod.minimal).execute()
    except Exception as e:
        logger.error(f"❌ Erro ao gravar resposta: {_message(e)}")
        raise RemoteCallError(_message(e)) from e
    logger.info("✅ Resposta gravada")


def fetch_responses(client: Client, table: Optional[str] = None) -> List[Dict[str, Any]]:
    """Todas as respostas, mais recentes primeiro. O filtro acontece em memória."""
    try:
        res = (
            client.table(table or _table())
            .select("*")
            .order("created_at", desc=True)
            .execute()
        )
    except Exception as e:
        logger.error(f"❌ Erro ao carregar respostas: {_message(e)}")
        raise RemoteCallError(_message(e)) from e

    rows = res.data or []
    logger.info(f"Respostas carregadas: {len(rows)}")
    return rows


def fetch_teaser_rows(client: Client, table: Optional[str] = None) -> List[Dict[str, Any]]:
    """Só a coluna da pergunta de relevância do no-show (gráfico da tela de obrigado)."""
    try:
        res = client.table(table or _table()).select("q_noshow_relevance").execute()
    except Exception as e:
        logger.warning(f"Falha ao carregar prévia de resultados: {_message(e)}")
        raise RemoteCallError(_message(e)) from e
    return res.data or []


# ============================================================
# Auth
# ============================================================

def sign_in(client: Client, email: str, password: str):
    """Troca e-mail/senha por uma sessão no Supabase Auth."""
    try:
        res = client.auth.sign_in_with_password({"email": email, "password": password})
    except Exception as e:
        logger.warning(f"❌ Tentativa de login inválida ({mask_email(email)})")
        raise RemoteCallError(_message(e)) from e

    if not getattr(res, "session", None):
        logger.warning(f"❌ Login sem sessão ({mask_email(email)})")
        raise RemoteCallError("Não foi possível iniciar a sessão.")

    logger.info(f"✅ Login bem-sucedido ({mask_email(email)})")
    return res.session


def has_session(client: Client) -> bool:
    try:
        return client.auth.get_session() is not None
    except Exception as e:
        logger.warning(f"Falha ao verificar sessão: {_message(e)}")
        return False


def sign_out(client: Client) -> None:
    try:
        client.auth.sign_out()
    except Exception as e:
        raise RemoteCallError(_message(e)) from e
    logger.info("Sessão encerrada")
