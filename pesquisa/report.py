import io
from datetime import datetime
from typing import Dict, List, Optional

from fpdf import FPDF
from fpdf.enums import XPos, YPos
from fpdf.fonts import FontFace
from loguru import logger

from pesquisa.aggregations import KPI_LABELS, Kpis
from pesquisa.survey import TOPIC_SHORT_TITLES, TOPICS

REPORT_TITLE = "Relatório da Pesquisa — Clínicas e Consultórios"
COMPANY = "NovuSys"

BRAND_BLUE = (25, 118, 210)
BRAND_BLUE_2 = (37, 117, 252)
INK = (15, 23, 42)
INK_SOFT = (100, 116, 139)
CARD_EDGE = (233, 237, 247)
ROW_ALT = (251, 253, 255)

MARGIN = 14
CHART_H = 68

# Fontes core do PDF são Latin-1
_LATIN1_REPLACEMENTS = {
    "\u2013": "-", "\u2014": "-",
    "\u2018": "'", "\u2019": "'",
    "\u201c": "\"", "\u201d": "\"",
    "\u2022": "-", "\u2026": "...",
    "\u00a0": " ", "\u200b": "",
}


def latin1(text: str) -> str:
    for src, dst in _LATIN1_REPLACEMENTS.items():
        text = text.replace(src, dst)
    return text.encode('latin-1', 'replace').decode('latin-1')


class SurveyReportPDF(FPDF):
    def __init__(self, generated_at: datetime):
        super().__init__(orientation="L", unit="mm", format="A4")
        self.generated_at = generated_at
        self.set_margins(MARGIN, MARGIN, MARGIN)
        self.set_auto_page_break(auto=True, margin=18)

    @property
    def content_w(self) -> float:
        return self.w - 2 * MARGIN

    def header(self):
        # faixa superior
        self.set_fill_color(*BRAND_BLUE)
        self.rect(0, 0, self.w, 2.2, style="F")

        # cartão do cabeçalho
        top, card_h = 6, 24
        self.set_fill_color(255, 255, 255)
        self.set_draw_color(*CARD_EDGE)
        self.set_line_width(0.3)
        self.rect(MARGIN, top, self.content_w, card_h, style="DF", round_corners=True, corner_radius=3)

        self.set_xy(MARGIN + 6, top + 4)
        self.set_font("Helvetica", "B", 16)
        self.set_text_color(*INK)
        self.cell(0, 8, latin1(REPORT_TITLE), new_x=XPos.LMARGIN, new_y=YPos.NEXT)

        self.set_x(MARGIN + 6)
        self.set_font("Helvetica", "", 10)
        self.set_text_color(*INK_SOFT)
        self.cell(0, 6, f"Gerado em {self.generated_at:%d/%m/%Y %H:%M}", new_x=XPos.LMARGIN, new_y=YPos.NEXT)

        self.set_y(top + card_h + 6)

    def footer(self):
        self.set_y(-12)
        self.set_font("Helvetica", "I", 8)
        self.set_text_color(*INK_SOFT)
        footer_text = (
            f"© {self.generated_at.year} {COMPANY} - Relatório gerado automaticamente | "
            f"Página {self.page_no()} de {{nb}}"
        )
        self.cell(0, 8, latin1(footer_text), align="R")

    # ------------------------------------------------------------
    # blocos
    # ------------------------------------------------------------

    def ensure_space(self, h: float) -> None:
        if self.get_y() + h > self.page_break_trigger:
            self.add_page()

    def section_title(self, text: str) -> None:
        self.ensure_space(12)
        self.set_font("Helvetica", "B", 13)
        self.set_text_color(*INK)
        self.cell(0, 9, latin1(text), new_x=XPos.LMARGIN, new_y=YPos.NEXT)

    def kpi_cards(self, kpis: Kpis) -> None:
        items = [
            (KPI_LABELS["total"], str(kpis.total)),
            (KPI_LABELS["noshow_yes_pct"], f"{kpis.noshow_yes_pct}%"),
            (KPI_LABELS["glosa_recurring_pct"], f"{kpis.glosa_recurring_pct}%"),
            (KPI_LABELS["rx_rework_pct"], f"{kpis.rx_rework_pct}%"),
        ]
        gap, card_h = 6, 26
        card_w = (self.content_w - gap * (len(items) - 1)) / len(items)
        self.ensure_space(card_h)
        y = self.get_y()

        for i, (title, value) in enumerate(items):
            x = MARGIN + i * (card_w + gap)
            self.set_fill_color(255, 255, 255)
            self.set_draw_color(*CARD_EDGE)
            self.rect(x, y, card_w, card_h, style="DF", round_corners=True, corner_radius=3)

            self.set_xy(x + 4, y + 3)
            self.set_font("Helvetica", "B", 10)
            self.set_text_color(*INK)
            self.cell(card_w - 8, 6, latin1(title))

            self.set_xy(x + 4, y + 11)
            self.set_font("Helvetica", "B", 22)
            self.set_text_color(*BRAND_BLUE)
            self.cell(card_w - 8, 11, value)

        self.set_y(y + card_h + 6)

    def chart_block(self, title: str, png: Optional[bytes]) -> None:
        self.section_title(title)
        self.ensure_space(CHART_H + 4)
        y = self.get_y()
        if png:
            self.image(io.BytesIO(png), x=MARGIN, y=y, w=self.content_w, h=CHART_H)
        else:
            # sem snapshot: só a moldura
            self.set_draw_color(*CARD_EDGE)
            self.rect(MARGIN, y, self.content_w, CHART_H, style="D", round_corners=True, corner_radius=3)
        self.set_y(y + CHART_H + 6)

    def data_table(self, rows: List[Dict[str, str]], col_widths, font_size: int, heading_fill) -> None:
        headings = list(rows[0].keys())
        self.set_font("Helvetica", "", font_size)
        self.set_text_color(*INK)
        self.set_draw_color(*CARD_EDGE)
        with self.table(
            col_widths=col_widths,
            width=self.content_w,
            text_align="LEFT",
            line_height=font_size * 0.55,
            headings_style=FontFace(emphasis="BOLD", color=255, fill_color=heading_fill),
            cell_fill_color=ROW_ALT,
            cell_fill_mode="ROWS",
        ) as table:
            head = table.row()
            for h in headings:
                head.cell(latin1(h))
            for r in rows:
                row = table.row()
                for h in headings:
                    row.cell(latin1(str(r.get(h, ""))))


def build_report_pdf(
    kpis: Kpis,
    summary: List[Dict[str, str]],
    details: List[Dict[str, str]],
    chart_images: Optional[Dict[str, Optional[bytes]]] = None,
    generated_at: Optional[datetime] = None,
) -> bytes:
    """
    Gera o PDF do recorte filtrado atual: KPIs, gráficos por tópico, resumo por pergunta
    e respostas detalhadas (sem identificação). `chart_images` é {topic_key: png | None}.
    """
    generated_at = generated_at or datetime.now()
    chart_images = chart_images or {}
    logger.info(f"Gerando PDF: {kpis.total} respostas, {len(details)} linhas de detalhe")

    pdf = SurveyReportPDF(generated_at)
    pdf.alias_nb_pages()
    pdf.add_page()

    pdf.kpi_cards(kpis)

    for topic in TOPICS:
        pdf.chart_block(f"Distribuição — {TOPIC_SHORT_TITLES[topic.key]}", chart_images.get(topic.key))

    pdf.section_title("Resumo consolidado por pergunta")
    if summary:
        pdf.data_table(
            [{"Pergunta": r["pergunta"], "N": r["n"], "Respostas": r["respostas"]} for r in summary],
            col_widths=(70, 14, 185),
            font_size=9,
            heading_fill=BRAND_BLUE,
        )
    else:
        pdf.set_font("Helvetica", "", 10)
        pdf.cell(0, 8, latin1("Resumo indisponível."), new_x=XPos.LMARGIN, new_y=YPos.NEXT)

    pdf.add_page()
    pdf.section_title("Respostas detalhadas (sem identificação sensível)")
    if details:
        n_questions = len(details[0]) - 4
        pdf.data_table(
            details,
            col_widths=(14, 18, 16, 22) + (20,) * n_questions,
            font_size=7,
            heading_fill=BRAND_BLUE_2,
        )
    else:
        pdf.set_font("Helvetica", "", 10)
        pdf.set_text_color(*INK_SOFT)
        pdf.cell(0, 8, latin1("Nenhuma resposta para os filtros atuais."), new_x=XPos.LMARGIN, new_y=YPos.NEXT)

    return bytes(pdf.output())


def report_filename(now: Optional[datetime] = None) -> str:
    now = now or datetime.now()
    return f"Relatorio-Pesquisa-{now:%Y%m%d-%H%M}.pdf"
