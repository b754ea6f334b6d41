import streamlit as st

from ui.layout import render_footer, setup_page
from ui.sidebar import render_sidebar_menu

setup_page("Política de Privacidade", icon="🔒")

render_sidebar_menu("Privacidade")

st.title("Política de Privacidade")
st.caption("Última atualização: 2025")

st.subheader("1. Quem somos")
st.write(
    "**NovuSys** — “Transformamos códigos em resultados”. Esta política descreve como tratamos dados "
    "na landing de validação de necessidades para clínicas e consultórios médicos (MVP)."
)

st.subheader("2. Quais dados coletamos")
st.markdown(
    "- Respostas do questionário (ex.: relevância do no-show, glosas, receitas digitais) — "
    "*sem dados sensíveis de saúde do paciente*.\n"
    "- Dados opcionais de identificação (se informados pelo médico): nome, CRM e contato "
    "(e-mail/WhatsApp).\n"
    "- Consentimentos: uso anônimo das respostas e, se marcado, consentimento para contato.\n"
)

st.subheader("3. Finalidades e bases legais (LGPD)")
st.markdown(
    "- Validar hipóteses de produto e entender dores reais de clínicas — *base legal: legítimo "
    "interesse* (art. 7º, IX) e/ou *consentimento* (art. 7º, I), conforme o caso.\n"
    "- Contato profissional para entrevistas/pilotos (opcional) — *base legal: consentimento*.\n"
)

st.subheader("4. Compartilhamento")
st.write(
    "Não vendemos seus dados. Podemos usar fornecedores/operadores para viabilizar a operação, "
    "como hospedagem e Supabase (banco de dados). Esses provedores processam dados sob nossas "
    "instruções contratuais."
)

st.subheader("5. Armazenamento e segurança")
st.markdown(
    "- Dados armazenados em banco *PostgreSQL (Supabase)*.\n"
    "- Criptografia em trânsito (TLS) e Row Level Security habilitada.\n"
    "- Retenção: até **12 meses** após a coleta ou até a solicitação de eliminação, "
    "o que ocorrer primeiro.\n"
)

st.subheader("6. Seus direitos (LGPD)")
st.write(
    "Acessar, confirmar tratamento, corrigir dados, anonimizar/bloquear, portar, obter informações "
    "sobre compartilhamentos, revogar consentimento (quando a base for consentimento) e reclamar "
    "à autoridade."
)

st.subheader("7. Contato do controlador")
st.write("NovuSys — Contato/DPO: [contato@novusys.com.br](mailto:contato@novusys.com.br)")

st.subheader("8. Crianças e adolescentes")
st.write("A landing não se destina a menores. Não coletamos dados de crianças/adolescentes.")

st.subheader("9. Alterações desta política")
st.write(
    "Podemos atualizar esta política para refletir melhorias ou requisitos legais. "
    "As mudanças passam a valer após a publicação nesta página."
)

st.divider()
st.page_link("app.py", label="Voltar ao formulário", icon="⬅️")

render_footer()
