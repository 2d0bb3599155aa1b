import io
import logging
import os
import zipfile

import fitz  # PyMuPDF
import docx
from docx.opc.exceptions import PackageNotFoundError

logger = logging.getLogger(__name__)


class FileExtractionError(ValueError):
    """The uploaded resume could not be turned into text."""


def extract_text_from_pdf(pdf_bytes: bytes) -> str:
    """Extracts text from PDF bytes."""
    text = ""
    try:
        with fitz.open(stream=pdf_bytes, filetype="pdf") as doc:
            for page in doc:
                text += page.get_text()
    except (RuntimeError, ValueError) as e:
        raise FileExtractionError(f"Failed to extract text from PDF file: {e}") from e
    if not text.strip():
        raise FileExtractionError("PDF file appears to be empty or contains no extractable text")
    return text


def extract_text_from_docx(docx_bytes: bytes) -> str:
    """Extracts text from DOCX bytes, table cells included."""
    try:
        doc = docx.Document(io.BytesIO(docx_bytes))
    except (PackageNotFoundError, zipfile.BadZipFile, KeyError, ValueError) as e:
        raise FileExtractionError(f"Failed to extract text from Word document: {e}") from e

    lines = [para.text for para in doc.paragraphs]
    for table in doc.tables:
        for row in table.rows:
            lines.extend(cell.text for cell in row.cells)
    text = "\n".join(lines)
    if not text.strip():
        raise FileExtractionError("Word document appears to be empty or contains no extractable text")
    return text


def extract_resume_text(file_bytes: bytes, filename: str) -> str:
    extension = os.path.splitext(filename or "")[1].lower()
    logger.info("Extracting resume text from %s (%d bytes)", extension or "<no extension>", len(file_bytes))

    if extension == ".pdf":
        return extract_text_from_pdf(file_bytes)
    if extension == ".docx":
        return extract_text_from_docx(file_bytes)
    if extension == ".doc":
        raise FileExtractionError("DOC format is not supported. Please convert to DOCX or PDF.")
    raise FileExtractionError(f"Unsupported file format: {extension}")
