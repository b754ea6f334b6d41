import psycopg2
from psycopg2.extras import RealDictCursor


def get_conn(database_url: str):
    """
    Conexão direta com o PostgreSQL do Supabase (só para as ferramentas de manutenção;
    o app fala com o banco pela API do Supabase).
    """
    conn = psycopg2.connect(database_url, cursor_factory=RealDictCursor)
    conn.autocommit = True
    return conn


def execute_script(conn, sql: str) -> None:
    """Executa DDL; se falhar, faz rollback para não deixar a conexão presa."""
    try:
        with conn.cursor() as cur:
            cur.execute(sql)
    except Exception:
        conn.rollback()
        raise


def fetch_all(conn, sql: str, params=None):
    """Executa SELECT e retorna lista de dicts."""
    with conn.cursor() as cur:
        cur.execute(sql, params or {})
        return cur.fetchall()
