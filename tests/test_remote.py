from types import SimpleNamespace

import pytest
from loguru import logger
from postgrest.types import ReturnMethod

from pesquisa.remote import (
    RemoteCallError,
    fetch_responses,
    fetch_teaser_rows,
    has_session,
    insert_response,
    mask_email,
    sign_in,
    sign_out,
)


class FakeQuery:
    def __init__(self, client, table):
        self.client = client
        self.table = table

    def insert(self, rows, returning=None):
        self.client.calls.append(("insert", self.table, rows, returning))
        return self

    def select(self, columns):
        self.client.calls.append(("select", self.table, columns))
        return self

    def order(self, column, desc=False):
        self.client.calls.append(("order", column, desc))
        return self

    def execute(self):
        if self.client.error:
            raise self.client.error
        return SimpleNamespace(data=self.client.data)


class FakeAuth:
    def __init__(self, session=None, error=None):
        self.session = session
        self.error = error
        self.signed_out = False

    def sign_in_with_password(self, credentials):
        if self.error:
            raise self.error
        return SimpleNamespace(user=None, session=self.session)

    def get_session(self):
        if self.error:
            raise self.error
        return self.session

    def sign_out(self):
        self.signed_out = True


class FakeClient:
    def __init__(self, data=None, error=None, auth=None):
        self.data = data
        self.error = error
        self.calls = []
        self.auth = auth or FakeAuth()

    def table(self, name):
        return FakeQuery(self, name)


class ProviderError(Exception):
    def __init__(self, message):
        super().__init__(message)
        self.message = message


def test_insert_response_sends_one_row_without_returning():
    client = FakeClient()
    insert_response(client, {"q_noshow_relevance": "Sim"}, table="respostas")
    assert client.calls == [("insert", "respostas", [{"q_noshow_relevance": "Sim"}], ReturnMethod.minimal)]


def test_insert_response_wraps_provider_error():
    client = FakeClient(error=ProviderError("new row violates row-level security policy"))
    with pytest.raises(RemoteCallError) as exc:
        insert_response(client, {}, table="respostas")
    assert exc.value.message == "new row violates row-level security policy"


def test_fetch_responses_orders_newest_first():
    client = FakeClient(data=[{"id": "b"}, {"id": "a"}])
    assert fetch_responses(client, table="respostas") == [{"id": "b"}, {"id": "a"}]
    assert ("select", "respostas", "*") in client.calls
    assert ("order", "created_at", True) in client.calls


def test_fetch_responses_none_data_is_empty_list():
    assert fetch_responses(FakeClient(data=None), table="respostas") == []


def test_fetch_responses_error():
    with pytest.raises(RemoteCallError) as exc:
        fetch_responses(FakeClient(error=RuntimeError("timeout")), table="respostas")
    assert exc.value.message == "timeout"


def test_fetch_teaser_rows_reads_single_column():
    client = FakeClient(data=[{"q_noshow_relevance": "Sim"}])
    assert fetch_teaser_rows(client, table="respostas") == [{"q_noshow_relevance": "Sim"}]
    assert client.calls == [("select", "respostas", "q_noshow_relevance")]


def test_sign_in_returns_session():
    session = SimpleNamespace(access_token="tok")
    client = FakeClient(auth=FakeAuth(session=session))
    assert sign_in(client, "admin@x.com", "secret") is session


def test_sign_in_invalid_credentials_keeps_provider_message():
    client = FakeClient(auth=FakeAuth(error=ProviderError("Invalid login credentials")))
    with pytest.raises(RemoteCallError) as exc:
        sign_in(client, "admin@x.com", "errada")
    assert exc.value.message == "Invalid login credentials"


def test_sign_in_without_session_fails():
    client = FakeClient(auth=FakeAuth(session=None))
    with pytest.raises(RemoteCallError):
        sign_in(client, "admin@x.com", "secret")


def test_has_session_and_sign_out():
    auth = FakeAuth(session=SimpleNamespace(access_token="tok"))
    client = FakeClient(auth=auth)
    assert has_session(client) is True

    sign_out(client)
    assert auth.signed_out

    assert has_session(FakeClient()) is False
    assert has_session(FakeClient(auth=FakeAuth(error=RuntimeError("rede")))) is False


@pytest.fixture
def log_lines():
    lines = []
    sink_id = logger.add(lines.append, format="{message}")
    yield lines
    logger.remove(sink_id)


@pytest.mark.parametrize("email,masked", [
    ("maria@clinica.com", "m***@clinica.com"),
    ("sem-arroba", "***"),
    ("", "***"),
])
def test_mask_email(email, masked):
    assert mask_email(email) == masked


def test_login_logs_never_carry_the_full_email(log_lines):
    failing = FakeClient(auth=FakeAuth(error=ProviderError("Invalid login credentials")))
    with pytest.raises(RemoteCallError):
        sign_in(failing, "maria.souza@clinica.com", "errada")

    with pytest.raises(RemoteCallError):
        sign_in(FakeClient(auth=FakeAuth(session=None)), "maria.souza@clinica.com", "secret")

    sign_in(FakeClient(auth=FakeAuth(session=SimpleNamespace())), "maria.souza@clinica.com", "secret")

    assert len(log_lines) == 3
    for line in log_lines:
        assert "maria.souza" not in line
        assert "m***@clinica.com" in line
