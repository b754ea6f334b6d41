import pytest
from loguru import logger

from pesquisa import helpers
from pesquisa.filters import DashboardFilters
from pesquisa.log import setup_logging


@pytest.fixture
def state(monkeypatch):
    fake = {}
    monkeypatch.setattr(helpers.st, "session_state", fake)
    return fake


def test_ensure_filter_state_sets_defaults_once(state):
    state["f_quick"] = "30"
    helpers.ensure_filter_state()

    assert state["f_quick"] == "30"
    assert state["f_sizes"] == []
    assert state["f_contact"] == "all"
    assert state["page"] == 1
    assert helpers.filters_from_state() == DashboardFilters(quick="30")


def test_reset_filters_restores_defaults_and_drops_pdf(state):
    helpers.ensure_filter_state()
    state.update(f_quick="7", f_sizes=["Grande"], f_custom_start="01/01/2024", page=3,
                 pdf_bytes=b"%PDF", pdf_name="x.pdf")

    helpers.reset_filters()

    assert helpers.filters_from_state() == DashboardFilters()
    assert state["page"] == 1
    assert "pdf_bytes" not in state and "pdf_name" not in state

    # listas novas a cada reset (não compartilham o default)
    state["f_sizes"].append("Pequeno")
    assert helpers.FILTER_DEFAULTS["f_sizes"] == []


def test_sync_filter_key_resets_page_only_when_filters_change(state):
    helpers.ensure_filter_state()
    first = helpers.filters_from_state()
    helpers.sync_filter_key(first)

    state.update(page=4, pdf_bytes=b"%PDF")
    helpers.sync_filter_key(first)
    assert state["page"] == 4
    assert state["pdf_bytes"] == b"%PDF"

    helpers.sync_filter_key(first.with_toggled_role("Outra"))
    assert state["page"] == 1
    assert "pdf_bytes" not in state


def test_chips_toggle_through_filters_in_declared_order(state):
    helpers.ensure_filter_state()

    helpers.toggle_size("Grande")
    helpers.toggle_size("Pequeno")
    assert state["f_sizes"] == ["Pequeno", "Grande"]

    helpers.toggle_size("Grande")
    assert state["f_sizes"] == ["Pequeno"]

    helpers.toggle_role("Outra")
    assert helpers.filters_from_state() == DashboardFilters(
        sizes=frozenset({"Pequeno"}), roles=frozenset({"Outra"})
    )


def test_respondent_selection_is_part_of_filter_state(state):
    helpers.ensure_filter_state()
    assert state["f_respondent"] == "all"

    state["f_respondent"] = "R-03"
    assert helpers.filters_from_state().respondent == "R-03"

    helpers.reset_filters()
    assert state["f_respondent"] == "all"


def test_setup_logging_writes_file(tmp_path):
    log_file = tmp_path / "app.log"
    setup_logging(level="DEBUG", log_file=str(log_file))
    logger.debug("linha de teste")
    logger.remove()

    assert "linha de teste" in log_file.read_text(encoding="utf-8")


def test_menu_swaps_login_for_dashboard_when_admin():
    from ui.sidebar import menu_pages

    assert list(menu_pages()) == ["Pesquisa", "Privacidade", "Admin"]
    assert list(menu_pages(admin=True)) == ["Pesquisa", "Privacidade", "Dashboard"]
    assert menu_pages(admin=True)["Dashboard"] == "pages/2_Dashboard.py"
