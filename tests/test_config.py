import pytest

from pesquisa.config import ConfigError, get_settings

BASE_ENV = {"SUPABASE_URL": "https://abc.supabase.co", "SUPABASE_ANON_KEY": "anon"}


def test_defaults():
    s = get_settings(dict(BASE_ENV))
    assert s.supabase_url == "https://abc.supabase.co"
    assert s.supabase_anon_key == "anon"
    assert s.supabase_service_role_key is None
    assert s.database_url is None
    assert s.responses_table == "validation_responses"
    assert s.timezone == "America/Sao_Paulo"
    assert s.log_level == "INFO"
    assert s.log_file == "logs/app.log"


def test_overrides():
    env = dict(
        BASE_ENV,
        SUPABASE_SERVICE_ROLE_KEY="service",
        DATABASE_URL="postgresql://u:p@h/db",
        RESPONSES_TABLE="respostas_teste",
        APP_TIMEZONE="UTC",
        LOG_LEVEL="debug",
        LOG_FILE="/tmp/pesquisa.log",
    )
    s = get_settings(env)
    assert s.supabase_service_role_key == "service"
    assert s.database_url == "postgresql://u:p@h/db"
    assert s.responses_table == "respostas_teste"
    assert s.timezone == "UTC"
    assert s.log_level == "DEBUG"
    assert s.log_file == "/tmp/pesquisa.log"


def test_legacy_supabase_key_name():
    s = get_settings({"SUPABASE_URL": "https://abc.supabase.co", "SUPABASE_KEY": "legacy"})
    assert s.supabase_anon_key == "legacy"


@pytest.mark.parametrize("missing,message", [
    ("SUPABASE_URL", "SUPABASE_URL"),
    ("SUPABASE_ANON_KEY", "SUPABASE_ANON_KEY"),
])
def test_missing_required_values(missing, message):
    env = dict(BASE_ENV)
    env.pop(missing)
    with pytest.raises(ConfigError, match=message):
        get_settings(env)
