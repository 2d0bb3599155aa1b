"""
PDF rendering of CV layout instructions on a reportlab canvas.

The canvas has no flow layout, so a vertical cursor is moved down by hand and
a new page is started whenever it would cross the bottom margin.
"""
import io
import logging
from typing import List

from reportlab.lib.pagesizes import LETTER
from reportlab.lib.utils import simpleSplit
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.cidfonts import UnicodeCIDFont
from reportlab.pdfgen import canvas

from .cv_layout import (
    BODY_SIZE,
    PAGE_MARGIN_TWIPS,
    BulletLine,
    CenteredLine,
    Heading,
    Instruction,
    PlainLine,
    Spacer,
    TwoColumnLine,
)

logger = logging.getLogger(__name__)

PDF_MEDIA_TYPE = "application/pdf"

FONT_REGULAR = "Helvetica"
FONT_BOLD = "Helvetica-Bold"
CJK_FONT = "STSong-Light"

MARGIN = PAGE_MARGIN_TWIPS / 20
LINE_FACTOR = 1.25


def _pt(twips: float) -> float:
    return twips / 20


def _fonts(language: str):
    if language == "zh":
        if CJK_FONT not in pdfmetrics.getRegisteredFontNames():
            pdfmetrics.registerFont(UnicodeCIDFont(CJK_FONT))
        return CJK_FONT, CJK_FONT
    return FONT_REGULAR, FONT_BOLD


def _wrap(text: str, font: str, size: float, width: float) -> List[str]:
    lines = []
    for line in simpleSplit(text, font, size, width) or [""]:
        # Text without spaces (CJK, long URLs) is broken per character
        while pdfmetrics.stringWidth(line, font, size) > width and len(line) > 1:
            cut = len(line)
            while cut > 1 and pdfmetrics.stringWidth(line[:cut], font, size) > width:
                cut -= 1
            lines.append(line[:cut])
            line = line[cut:]
        lines.append(line)
    return lines


class _PdfWriter:
    def __init__(self, language: str):
        self.buffer = io.BytesIO()
        self.pdf = canvas.Canvas(self.buffer, pagesize=LETTER)
        self.page_width, self.page_height = LETTER
        self.text_width = self.page_width - 2 * MARGIN
        self.regular, self.bold = _fonts(language)
        self.y = self.page_height - MARGIN

    def ensure_room(self, height: float) -> None:
        if self.y - height < MARGIN:
            self.pdf.showPage()
            self.y = self.page_height - MARGIN

    def move(self, points: float) -> None:
        self.y -= points

    def text_lines(self, text: str, x: float, width: float, size: float, bold: bool = False,
                   first_x: float = None) -> None:
        font = self.bold if bold else self.regular
        for i, line in enumerate(_wrap(text, font, size, width)):
            self.ensure_room(size * LINE_FACTOR)
            self.move(size * LINE_FACTOR)
            self.pdf.setFont(font, size)
            self.pdf.drawString(first_x if (i == 0 and first_x is not None) else x, self.y, line)

    def centered(self, ins: CenteredLine) -> None:
        font = self.bold if ins.bold else self.regular
        for line in _wrap(ins.text, font, ins.size, self.text_width):
            self.ensure_room(ins.size * LINE_FACTOR)
            self.move(ins.size * LINE_FACTOR)
            self.pdf.setFont(font, ins.size)
            self.pdf.drawCentredString(self.page_width / 2, self.y, line)
        self.move(_pt(ins.space_after))

    def heading(self, ins: Heading) -> None:
        self.ensure_room(_pt(ins.space_before) + BODY_SIZE * LINE_FACTOR + 4)
        self.move(_pt(ins.space_before))
        self.text_lines(ins.text, MARGIN, self.text_width, BODY_SIZE, bold=True)
        self.move(2)
        self.pdf.setLineWidth(0.75)
        self.pdf.line(MARGIN, self.y, self.page_width - MARGIN, self.y)
        self.move(2)

    def two_columns(self, ins: TwoColumnLine) -> None:
        right_font = self.bold if ins.right_bold else self.regular
        right_width = pdfmetrics.stringWidth(ins.right, right_font, BODY_SIZE) if ins.right else 0
        left_width = self.text_width - right_width - (12 if right_width else 0)
        left_font = self.bold if ins.left_bold else self.regular
        lines = _wrap(ins.left, left_font, BODY_SIZE, max(left_width, self.text_width / 3))

        self.ensure_room(BODY_SIZE * LINE_FACTOR)
        self.move(BODY_SIZE * LINE_FACTOR)
        if ins.right:
            self.pdf.setFont(right_font, BODY_SIZE)
            self.pdf.drawRightString(self.page_width - MARGIN, self.y, ins.right)
        self.pdf.setFont(left_font, BODY_SIZE)
        self.pdf.drawString(MARGIN, self.y, lines[0])
        for line in lines[1:]:
            self.ensure_room(BODY_SIZE * LINE_FACTOR)
            self.move(BODY_SIZE * LINE_FACTOR)
            self.pdf.setFont(left_font, BODY_SIZE)
            self.pdf.drawString(MARGIN, self.y, line)
        self.move(_pt(ins.space_after))

    def bullet(self, ins: BulletLine) -> None:
        left = MARGIN + _pt(ins.indent)
        self.text_lines(
            ins.text, left, self.text_width - _pt(ins.indent), BODY_SIZE,
            first_x=left - _pt(ins.hanging),
        )
        self.move(_pt(ins.space_after))

    def plain(self, ins: PlainLine) -> None:
        self.text_lines(ins.text, MARGIN, self.text_width, BODY_SIZE)
        self.move(_pt(ins.space_after))

    def finish(self) -> bytes:
        self.pdf.save()
        return self.buffer.getvalue()


def render_pdf(instructions: List[Instruction], language: str = "en") -> bytes:
    writer = _PdfWriter(language)
    for ins in instructions:
        if isinstance(ins, Heading):
            writer.heading(ins)
        elif isinstance(ins, CenteredLine):
            writer.centered(ins)
        elif isinstance(ins, TwoColumnLine):
            writer.two_columns(ins)
        elif isinstance(ins, BulletLine):
            writer.bullet(ins)
        elif isinstance(ins, PlainLine):
            writer.plain(ins)
        elif isinstance(ins, Spacer):
            writer.move(_pt(ins.height))
    logger.info("Rendered PDF document from %d layout instructions", len(instructions))
    return writer.finish()
