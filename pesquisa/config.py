from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


class ConfigError(RuntimeError):
    """Configuração obrigatória ausente."""


@dataclass(frozen=True)
class Settings:
    supabase_url: str
    supabase_anon_key: str
    supabase_service_role_key: Optional[str] = None
    database_url: Optional[str] = None
    responses_table: str = "validation_responses"
    timezone: str = "America/Sao_Paulo"
    log_level: str = "INFO"
    log_file: str = "logs/app.log"


def _secrets_section(name: str) -> dict:
    """
    Lê uma seção do st.secrets (deploy no Streamlit Cloud).
    Fora do Streamlit, ou sem secrets.toml, devolve dict vazio.
    """
    try:
        import streamlit as st
        return dict(st.secrets.get(name, {}))
    except FileNotFoundError:
        return {}


def _first(*values: Optional[str]) -> Optional[str]:
    for v in values:
        if v:
            return v
    return None


def get_settings(env: Optional[dict] = None) -> Settings:
    """
    Monta as configurações: variáveis de ambiente (.env) primeiro, st.secrets depois.
    `env` permite injetar um ambiente nos testes.
    """
    env = os.environ if env is None else env
    supa = _secrets_section("supabase") if env is os.environ else {}
    database = _secrets_section("database") if env is os.environ else {}

    url = _first(env.get("SUPABASE_URL"), supa.get("url"))
    anon_key = _first(env.get("SUPABASE_ANON_KEY"), env.get("SUPABASE_KEY"), supa.get("anon_key"))

    if not url:
        raise ConfigError("SUPABASE_URL não foi configurada")
    if not anon_key:
        raise ConfigError("SUPABASE_ANON_KEY não foi configurada")

    return Settings(
        supabase_url=url,
        supabase_anon_key=anon_key,
        supabase_service_role_key=_first(
            env.get("SUPABASE_SERVICE_ROLE_KEY"), supa.get("service_role_key")
        ),
        database_url=_first(env.get("DATABASE_URL"), database.get("url")),
        responses_table=env.get("RESPONSES_TABLE") or "validation_responses",
        timezone=env.get("APP_TIMEZONE") or "America/Sao_Paulo",
        log_level=(env.get("LOG_LEVEL") or "INFO").upper(),
        log_file=env.get("LOG_FILE") or "logs/app.log",
    )
