"""
CV export entry points: layout once, then render to Word or PDF.
"""
import logging
from typing import Any, Dict

from ..schemas import CVModule
from .cv_layout import build_layout
from .pdf_exporter import render_pdf
from .word_exporter import render_word

logger = logging.getLogger(__name__)


def export_word(modules: Dict[CVModule, Any], language: str = "en") -> bytes:
    logger.info("Exporting CV to Word: modules=%s", [m.value for m in modules])
    return render_word(build_layout(modules, language))


def export_pdf(modules: Dict[CVModule, Any], language: str = "en") -> bytes:
    logger.info("Exporting CV to PDF: modules=%s", [m.value for m in modules])
    return render_pdf(build_layout(modules, language), language)
