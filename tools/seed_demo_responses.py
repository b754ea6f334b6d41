"""
tools/seed_demo_responses.py

Insere respostas fictícias na tabela da pesquisa (demonstração do dashboard).

- Usa a SERVICE_ROLE_KEY (ignora RLS)
- Determinístico via SEED (mesma seed -> mesmas respostas)
- Datas espalhadas pelos últimos 120 dias, pra testar os períodos rápidos
- Uso: python -m tools.seed_demo_responses [quantidade]
"""

from dotenv import load_dotenv
load_dotenv()

import os
import random
import sys
from datetime import datetime, timedelta, timezone

from loguru import logger
from supabase import create_client

from pesquisa.survey import (
    CLINIC_SIZES,
    DOCTOR_ROLES,
    QUESTIONS,
    REQUIRED_FIELDS,
    build_insert_payload,
    empty_form,
)

SUPABASE_URL = os.environ["SUPABASE_URL"]
SUPABASE_SERVICE_ROLE_KEY = os.environ["SUPABASE_SERVICE_ROLE_KEY"]
SEED = os.environ.get("SEED", "seed_default_dev")
TABLE = os.environ.get("RESPONSES_TABLE", "validation_responses")

FIRST_NAMES = ["Mariana", "Fernanda", "Camila", "Rafael", "Eduardo", "Gustavo", "Juliana", "Bruno"]
LAST_NAMES = ["Albuquerque", "Menezes", "Barbosa", "Nogueira", "Ferraz", "Monteiro", "Ribeiro"]


def make_response(rng: random.Random, now: datetime) -> dict:
    form = empty_form()

    for field, q in QUESTIONS.items():
        # ~10% das perguntas opcionais ficam em branco
        if rng.random() < 0.1 and field not in REQUIRED_FIELDS:
            continue
        form[field] = rng.choice(q.options)

    if rng.random() < 0.85:
        form["clinic_size"] = rng.choice(CLINIC_SIZES)
    if rng.random() < 0.85:
        form["doctor_role"] = rng.choice(DOCTOR_ROLES)

    form["consent"] = True
    if rng.random() < 0.4:
        form["consent_contact"] = True
        form["doctor_name"] = f"Dr(a). {rng.choice(FIRST_NAMES)} {rng.choice(LAST_NAMES)}"
        form["crm"] = f"CRM {rng.randint(10000, 99999)}"
        form["contact"] = f"(51) 9 {rng.randint(1000, 9999)}-{rng.randint(1000, 9999)}"

    if rng.random() < 0.3:
        form["comments"] = rng.choice([
            "Lembretes automáticos por WhatsApp já ajudariam muito.",
            "Glosa é o que mais dói no fim do mês.",
            "Pacientes idosos não conseguem abrir a receita digital.",
        ])

    row = build_insert_payload(form)
    row["created_at"] = (now - timedelta(days=rng.randint(0, 120), minutes=rng.randint(0, 1440))).isoformat()
    return row


def main(n: int = 40):
    supabase = create_client(SUPABASE_URL, SUPABASE_SERVICE_ROLE_KEY)

    rng = random.Random(f"{SEED}::responses")
    now = datetime.now(timezone.utc)
    rows = [make_response(rng, now) for _ in range(n)]

    supabase.table(TABLE).insert(rows).execute()
    logger.info(f"[OK] Inseridas {len(rows)} respostas de demonstração em {TABLE}.")


if __name__ == "__main__":
    main(int(sys.argv[1]) if len(sys.argv) > 1 else 40)
