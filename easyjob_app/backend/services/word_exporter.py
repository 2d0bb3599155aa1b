"""
Word (.docx) rendering of CV layout instructions with python-docx.
"""
import io
import logging
from typing import List

from docx import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH, WD_TAB_ALIGNMENT
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import Pt, Twips

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

DOCX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


def _add_bottom_border(paragraph) -> None:
    p_pr = paragraph._p.get_or_add_pPr()
    borders = OxmlElement("w:pBdr")
    bottom = OxmlElement("w:bottom")
    bottom.set(qn("w:val"), "single")
    bottom.set(qn("w:sz"), "6")
    bottom.set(qn("w:space"), "1")
    bottom.set(qn("w:color"), "000000")
    borders.append(bottom)
    p_pr.append(borders)


def _add_run(paragraph, text: str, bold: bool = False, size: float = BODY_SIZE):
    run = paragraph.add_run(text)
    run.bold = bold
    run.font.size = Pt(size)
    return run


def render_word(instructions: List[Instruction]) -> bytes:
    doc = Document()
    doc.styles["Normal"].font.size = Pt(BODY_SIZE)

    section = doc.sections[0]
    for side in ("left_margin", "right_margin", "top_margin", "bottom_margin"):
        setattr(section, side, Twips(PAGE_MARGIN_TWIPS))
    text_width = section.page_width - section.left_margin - section.right_margin

    for ins in instructions:
        paragraph = doc.add_paragraph()
        fmt = paragraph.paragraph_format

        if isinstance(ins, Heading):
            # pBdr must precede spacing inside pPr
            _add_bottom_border(paragraph)
            _add_run(paragraph, ins.text, bold=True)
            fmt.space_before = Twips(ins.space_before)
            fmt.space_after = Twips(0)
        elif isinstance(ins, CenteredLine):
            paragraph.alignment = WD_ALIGN_PARAGRAPH.CENTER
            _add_run(paragraph, ins.text, bold=ins.bold, size=ins.size)
            fmt.space_after = Twips(ins.space_after)
        elif isinstance(ins, TwoColumnLine):
            fmt.tab_stops.add_tab_stop(text_width, WD_TAB_ALIGNMENT.RIGHT)
            _add_run(paragraph, ins.left, bold=ins.left_bold)
            if ins.right:
                _add_run(paragraph, "\t" + ins.right, bold=ins.right_bold)
            fmt.space_after = Twips(ins.space_after)
        elif isinstance(ins, BulletLine):
            _add_run(paragraph, ins.text)
            fmt.left_indent = Twips(ins.indent)
            fmt.first_line_indent = Twips(-ins.hanging)
            fmt.space_after = Twips(ins.space_after)
        elif isinstance(ins, PlainLine):
            _add_run(paragraph, ins.text)
            fmt.space_after = Twips(ins.space_after)
        elif isinstance(ins, Spacer):
            fmt.space_after = Twips(ins.height)

    buffer = io.BytesIO()
    doc.save(buffer)
    logger.info("Rendered Word document: %d paragraphs", len(instructions))
    return buffer.getvalue()
