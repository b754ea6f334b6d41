from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import pandas as pd

# ============================================================
# Enumerações (valores gravados no banco, em português)
# ============================================================

CLINIC_SIZES = ("Pequeno", "Médio", "Grande")
DOCTOR_ROLES = ("Geriatra", "Dermatologista", "Ortopedista", "Outra")


@dataclass(frozen=True)
class Question:
    field: str
    label: str        # texto no formulário
    chart_title: str  # título no dashboard
    options: tuple


@dataclass(frozen=True)
class Topic:
    key: str
    title: str
    description: str
    questions: tuple


TOPICS = (
    Topic(
        key="noshow",
        title="1) Faltas em Consultas (No-show)",
        description=(
            "Faltas sem aviso prejudicam agenda e faturamento — em muitos consultórios "
            "os lembretes são manuais."
        ),
        questions=(
            Question("q_noshow_relevance", "Essa questão é relevante?", "Relevância",
                     ("Sim", "Não", "Parcialmente")),
            Question("q_noshow_has_system", "Já usa um sistema que resolva bem?",
                     "Possui sistema que resolve", ("Sim", "Não")),
            Question("q_noshow_financial_impact", "Impacto financeiro mensal",
                     "Impacto financeiro mensal",
                     ("Baixo impacto", "Médio impacto", "Alto impacto")),
        ),
    ),
    Topic(
        key="glosa",
        title="2) Glosas de Convênios (Faturamento)",
        description=(
            "Erros em guias TISS/TUSS geram glosas e atrasam o recebimento; "
            "conferência manual é trabalhosa."
        ),
        questions=(
            Question("q_glosa_is_problem", "Glosas são recorrentes?", "Glosas recorrentes",
                     ("Sim", "Não", "Às vezes")),
            Question("q_glosa_interest", "Interesse em checagem rápida antes do envio?",
                     "Interesse em checagem antes do envio", ("Sim", "Não", "Talvez")),
            Question("q_glosa_who_suffers", "Quem sofre mais com o problema?", "Quem sofre mais",
                     ("Médico", "Administrativo", "Ambos")),
        ),
    ),
    Topic(
        key="rx",
        title="3) Receitas Digitais e Telemedicina",
        description=(
            "Na prescrição eletrônica, há dúvidas sobre validação e envio correto ao "
            "paciente/farmácia, gerando retrabalho."
        ),
        questions=(
            Question("q_rx_rework", "Gerou retrabalho na clínica?", "Receitas geram retrabalho",
                     ("Sim", "Não", "Raramente")),
            Question("q_rx_elderly_difficulty", "Pacientes têm dificuldade?",
                     "Pacientes têm dificuldade", ("Sim", "Não", "Em parte")),
            Question("q_rx_tool_value", "Vê valor em uma ferramenta de apoio?",
                     "Valor em ferramenta de apoio", ("Sim", "Não", "Talvez")),
        ),
    ),
)

# Títulos curtos das seções no dashboard / PDF
TOPIC_SHORT_TITLES = {"noshow": "No-show", "glosa": "Glosas", "rx": "Receitas Digitais"}

QUESTIONS: Dict[str, Question] = {q.field: q for t in TOPICS for q in t.questions}

# Perguntas obrigatórias para liberar o envio
REQUIRED_FIELDS = ("q_noshow_relevance", "q_glosa_is_problem", "q_rx_rework")

IDENTITY_FIELDS = ("doctor_name", "crm", "contact")
TEXT_FIELDS = IDENTITY_FIELDS + ("doctor_role", "clinic_size") + tuple(QUESTIONS) + ("comments",)
BOOL_FIELDS = ("consent_contact", "consent")

# "code" não existe no banco: é carimbado em responses_frame
RESPONSE_COLUMNS = ["code", "id", "created_at"] + list(TEXT_FIELDS) + list(BOOL_FIELDS)


# ============================================================
# Estado do formulário
# ============================================================

def empty_form() -> Dict[str, Any]:
    form: Dict[str, Any] = {f: "" for f in TEXT_FIELDS}
    form.update({f: False for f in BOOL_FIELDS})
    return form


def _filled(value: Optional[str]) -> bool:
    return bool((value or "").strip())


def can_submit(form: Dict[str, Any]) -> bool:
    """Envio liberado só com as 3 perguntas-chave respondidas + consentimento marcado."""
    return all(_filled(form.get(f)) for f in REQUIRED_FIELDS) and bool(form.get("consent"))


def build_insert_payload(form: Dict[str, Any]) -> Dict[str, Any]:
    """
    Monta a linha do INSERT.
    Texto vazio (ou só espaços) vira None: nunca string vazia no banco.
    """
    payload: Dict[str, Any] = {}
    for f in TEXT_FIELDS:
        value = form.get(f)
        payload[f] = value.strip() if _filled(value) else None
    for f in BOOL_FIELDS:
        payload[f] = bool(form.get(f))
    return payload


# ============================================================
# Linhas do banco -> DataFrame
# ============================================================

def respondent_code(position: int) -> str:
    """Posição 1-based na lista completa carregada -> 'R-01', 'R-02', ..."""
    return f"R-{position:02d}"


def responses_frame(rows: List[Dict[str, Any]]) -> pd.DataFrame:
    """
    Lista de dicts (Supabase) -> DataFrame com todas as colunas, na ordem recebida.
    Cada linha ganha o código R-NN pela posição na lista completa, antes de qualquer
    filtro: o mesmo respondente mantém o código em qualquer recorte e no PDF.
    """
    df = pd.DataFrame(rows)
    df = df.reindex(columns=RESPONSE_COLUMNS)
    # NaN -> None (mesmo truque do ingest: astype(object) antes do where)
    df = df.astype(object).where(pd.notnull(df), None)
    df["code"] = [respondent_code(i) for i in range(1, len(df) + 1)]
    return df
