import pytest

from pesquisa.filters import DashboardFilters, filter_responses
from pesquisa.respondents import (
    EMPTY_CELL,
    detail_rows,
    respondent_cards,
    should_show_identity,
)
from pesquisa.survey import IDENTITY_FIELDS, QUESTIONS, respondent_code


@pytest.mark.parametrize("row,expected", [
    ({"consent": True, "doctor_name": "Ana"}, True),
    ({"consent_contact": True, "crm": "CRM 123"}, True),
    ({"consent": False, "consent_contact": False, "doctor_name": "Ana"}, False),
    ({"consent": None, "consent_contact": None, "contact": "(51) 9999"}, False),
    ({"consent": True, "doctor_name": "   ", "crm": "", "contact": None}, False),
    ({"consent": True}, False),
    ({"consent": True, "contact": " x@y.com "}, True),
])
def test_should_show_identity(row, expected):
    assert should_show_identity(row) is expected


@pytest.mark.parametrize("position,code", [(1, "R-01"), (9, "R-09"), (10, "R-10"), (123, "R-123")])
def test_respondent_code(position, code):
    assert respondent_code(position) == code


def test_respondent_cards(make_row, frame):
    df = frame([
        make_row(
            created_at="2024-01-15T15:30:00+00:00",
            consent=True,
            doctor_name=" Dra. Ana ",
            crm="CRM 1",
            comments=" ótimo ",
        ),
        make_row(consent=False, consent_contact=False, doctor_name="Oculto", clinic_size=None, doctor_role=None),
    ])
    cards = respondent_cards(df, tz="UTC")

    assert [c["code"] for c in cards] == ["R-01", "R-02"]
    assert cards[0]["created_at"] == "15/01/2024 15:30"
    assert cards[0]["identity"] == {"nome": "Dra. Ana", "crm": "CRM 1", "contato": ""}
    assert cards[0]["comments"] == "ótimo"

    assert cards[1]["identity"] is None
    assert cards[1]["clinic_size"] == EMPTY_CELL
    assert cards[1]["doctor_role"] == EMPTY_CELL


def test_codes_stay_the_same_under_any_filter(make_row, frame):
    df = frame([
        make_row(id="a", clinic_size="Grande"),
        make_row(id="b", clinic_size="Pequeno"),
        make_row(id="c", clinic_size="Pequeno"),
    ])
    assert [c["code"] for c in respondent_cards(df)] == ["R-01", "R-02", "R-03"]

    small = filter_responses(df, DashboardFilters(sizes=frozenset({"Pequeno"})))
    assert [c["code"] for c in respondent_cards(small)] == ["R-02", "R-03"]
    assert [r["Código"] for r in detail_rows(small)] == ["R-02", "R-03"]


def test_detail_rows_never_include_identity(make_row, frame):
    df = frame([
        make_row(
            consent=True,
            consent_contact=True,
            doctor_name="Dr. Visível",
            crm="CRM 999",
            contact="contato@x.com",
            q_rx_tool_value=None,
        ),
    ])
    rows = detail_rows(df, tz="UTC")
    assert len(rows) == 1

    row = rows[0]
    assert list(row)[:4] == ["Código", "Data", "Tamanho", "Função"]
    assert list(row)[4:] == [q.chart_title for q in QUESTIONS.values()]
    assert row["Código"] == "R-01"
    assert row["Data"] == "15/01/2024"
    assert row["Valor em ferramenta de apoio"] == EMPTY_CELL

    values = " ".join(row.values())
    for sensitive in ("Dr. Visível", "CRM 999", "contato@x.com"):
        assert sensitive not in values
    for field in IDENTITY_FIELDS:
        assert field not in row


def test_empty_frames(frame):
    assert respondent_cards(frame([])) == []
    assert detail_rows(frame([])) == []
