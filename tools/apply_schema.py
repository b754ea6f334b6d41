"""
tools/apply_schema.py

Cria (ou garante) a tabela de respostas da pesquisa no PostgreSQL do Supabase.

✅ Regras:
- Tabela única, sem índices extras (o dashboard filtra em memória)
- Row Level Security ligada:
    - anon pode só INSERIR (formulário público)
    - anon pode LER só a coluna da prévia (q_noshow_relevance) -> via policy de select
    - authenticated (admin) pode LER tudo
- Sem UPDATE/DELETE: resposta gravada é imutável pelo app
- Pode rodar quantas vezes quiser (idempotente)
"""

from dotenv import load_dotenv
load_dotenv()

import os
import sys

from loguru import logger

from pesquisa.db import execute_script, fetch_all, get_conn

TABLE = os.environ.get("RESPONSES_TABLE", "validation_responses")

SCHEMA_SQL = f"""
create extension if not exists pgcrypto;

create table if not exists public.{TABLE} (
  id uuid primary key default gen_random_uuid(),
  created_at timestamptz not null default now(),

  doctor_name text,
  crm text,
  contact text,
  consent_contact boolean default false,
  consent boolean default false,

  doctor_role text,
  clinic_size text,

  q_noshow_relevance text,
  q_noshow_has_system text,
  q_noshow_financial_impact text,

  q_glosa_is_problem text,
  q_glosa_interest text,
  q_glosa_who_suffers text,

  q_rx_rework text,
  q_rx_elderly_difficulty text,
  q_rx_tool_value text,

  comments text
);

alter table public.{TABLE} enable row level security;

drop policy if exists "anon_insert" on public.{TABLE};
create policy "anon_insert" on public.{TABLE}
  for insert to anon, authenticated
  with check (true);

drop policy if exists "anon_teaser_select" on public.{TABLE};
create policy "anon_teaser_select" on public.{TABLE}
  for select to anon
  using (true);

drop policy if exists "admin_select" on public.{TABLE};
create policy "admin_select" on public.{TABLE}
  for select to authenticated
  using (true);

-- anon enxerga só a coluna da prévia
revoke select on public.{TABLE} from anon;
grant select (q_noshow_relevance) on public.{TABLE} to anon;
grant insert on public.{TABLE} to anon;
"""


def main():
    database_url = os.environ.get("DATABASE_URL")
    if not database_url:
        logger.error("DATABASE_URL não foi configurada")
        sys.exit(1)

    conn = get_conn(database_url)
    try:
        execute_script(conn, SCHEMA_SQL)
        total = fetch_all(conn, f"select count(*) as total from public.{TABLE};")[0]["total"]
    finally:
        conn.close()

    logger.info(f"[OK] Tabela public.{TABLE} pronta ({total} respostas).")


if __name__ == "__main__":
    main()
