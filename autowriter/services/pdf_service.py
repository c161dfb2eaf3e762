import re
from typing import Optional

from fpdf import FPDF

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

_MARGIN = 20
_TEXT_WIDTH = 170  # A4 width (210) minus margins

_UNICODE_REPLACEMENTS = {
    "\u2014": "--",   # em dash
    "\u2013": "-",    # en dash
    "\u2018": "'",
    "\u2019": "'",
    "\u201c": '"',
    "\u201d": '"',
    "\u2026": "...",
    "\u00a0": " ",    # non-breaking space
    "\u2022": "-",
}

_HEADING = re.compile(r"^\s*(#{1,6})\s+(.*?)\s*#*\s*$")
_BULLET = re.compile(r"^\s*[-*+]\s+(.*)$")
_EMPHASIS = re.compile(r"\*{1,2}(.+?)\*{1,2}")
_HEADING_SIZES = {1: 16, 2: 14, 3: 12.5}


def _sanitize(text: str) -> str:
    for char, repl in _UNICODE_REPLACEMENTS.items():
        text = text.replace(char, repl)
    return text.encode("latin-1", errors="replace").decode("latin-1")


def _plain(text: str) -> str:
    return _sanitize(_EMPHASIS.sub(r"\1", text))


# ---------------------------------------------------------------------------
# PDF class
# ---------------------------------------------------------------------------

class _AutoWriterPDF(FPDF):
    footer_label = "AI Article Auto Writer"

    def footer(self) -> None:
        self.set_y(-14)
        self.set_font("Helvetica", "I", 8)
        self.set_text_color(170, 170, 170)
        self.cell(0, 10, f"{self.footer_label}  |  Page {self.page_no()}", align="C")


def _new_pdf(footer_label: Optional[str] = None) -> _AutoWriterPDF:
    pdf = _AutoWriterPDF(format="A4")
    if footer_label:
        pdf.footer_label = footer_label
    pdf.set_auto_page_break(auto=True, margin=20)
    pdf.set_margins(_MARGIN, _MARGIN, _MARGIN)
    pdf.add_page()
    return pdf


def _title(pdf: FPDF, title: str, subtitle: Optional[str]) -> None:
    pdf.set_font("Helvetica", "B", 20)
    pdf.set_text_color(15, 15, 15)
    pdf.multi_cell(_TEXT_WIDTH, 10, text=_sanitize(title), align="C")
    if subtitle:
        pdf.ln(1)
        pdf.set_font("Helvetica", "I", 12)
        pdf.set_text_color(90, 90, 90)
        pdf.multi_cell(_TEXT_WIDTH, 7, text=_sanitize(subtitle), align="C")
    pdf.ln(4)
    pdf.set_draw_color(200, 200, 200)
    pdf.line(_MARGIN, pdf.get_y(), 210 - _MARGIN, pdf.get_y())
    pdf.ln(6)


def _body(pdf: FPDF, content: str) -> None:
    for line in content.replace("\r\n", "\n").split("\n"):
        if not line.strip():
            pdf.ln(2)
            continue

        heading = _HEADING.match(line)
        if heading:
            pdf.ln(2)
            pdf.set_font("Helvetica", "B", _HEADING_SIZES.get(len(heading.group(1)), 11.5))
            pdf.set_text_color(15, 15, 15)
            pdf.multi_cell(_TEXT_WIDTH, 7, text=_plain(heading.group(2)), align="L")
            pdf.ln(1)
            continue

        pdf.set_font("Helvetica", "", 11)
        pdf.set_text_color(30, 30, 30)
        bullet = _BULLET.match(line)
        if bullet:
            pdf.multi_cell(_TEXT_WIDTH, 6, text=f"  -  {_plain(bullet.group(1))}", align="L")
        else:
            pdf.multi_cell(_TEXT_WIDTH, 6, text=_plain(line.strip()), align="L")


# ---------------------------------------------------------------------------
# Public interface
# ---------------------------------------------------------------------------

def build_pdf(title: str, subtitle: Optional[str], content: str) -> bytes:
    pdf = _new_pdf()
    _title(pdf, title, subtitle)
    _body(pdf, content)
    return bytes(pdf.output())


def build_chapter_pdf(
    chapter_number: int,
    chapter_title: str,
    chapter_subtitle: Optional[str],
    content: str,
) -> bytes:
    pdf = _new_pdf(footer_label=f"Chapter {chapter_number}")
    _title(pdf, f"Chapter {chapter_number}: {chapter_title}", chapter_subtitle)
    _body(pdf, content)
    pdf.ln(6)
    pdf.set_font("Helvetica", "I", 10)
    pdf.set_text_color(120, 120, 120)
    pdf.cell(_TEXT_WIDTH, 6, text=f"End of Chapter {chapter_number}", align="C")
    return bytes(pdf.output())
