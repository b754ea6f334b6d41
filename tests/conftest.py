import pytest

from pesquisa.survey import responses_frame


@pytest.fixture
def make_row():
    """Fábrica de linhas no formato devolvido pelo Supabase."""
    counter = {"n": 0}

    def _make(**overrides):
        counter["n"] += 1
        row = {
            "id": f"id-{counter['n']}",
            "created_at": "2024-01-15T12:00:00+00:00",
            "doctor_name": None,
            "crm": None,
            "contact": None,
            "consent": True,
            "consent_contact": False,
            "clinic_size": "Pequeno",
            "doctor_role": "Geriatra",
            "q_noshow_relevance": "Sim",
            "q_noshow_has_system": "Não",
            "q_noshow_financial_impact": "Médio impacto",
            "q_glosa_is_problem": "Sim",
            "q_glosa_interest": "Talvez",
            "q_glosa_who_suffers": "Ambos",
            "q_rx_rework": "Não",
            "q_rx_elderly_difficulty": "Em parte",
            "q_rx_tool_value": "Sim",
            "comments": None,
        }
        row.update(overrides)
        return row

    return _make


@pytest.fixture
def frame():
    return responses_frame
