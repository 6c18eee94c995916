import io
import logging

import fitz  # PyMuPDF
from PyPDF2 import PdfReader

from errors import DecodeError

logger = logging.getLogger(__name__)


def _read_with_pymupdf(data: bytes) -> str:
    with fitz.open(stream=data, filetype="pdf") as doc:
        return "\n".join(page.get_text("text") or "" for page in doc)


def _read_with_pypdf2(data: bytes) -> str:
    reader = PdfReader(io.BytesIO(data))
    return "\n".join(page.extract_text() or "" for page in reader.pages)


def pdf_to_text(data: bytes) -> str:
    """
    Extract text from an in-memory PDF.
    PyMuPDF first, PyPDF2 as fallback; raises DecodeError if both give nothing.
    """
    for label, reader in (("PyMuPDF", _read_with_pymupdf), ("PyPDF2", _read_with_pypdf2)):
        try:
            text = reader(data)
        except Exception as e:
            logger.warning(f"{label} extraction failed: {e}")
            continue
        if text.strip():
            logger.info(f"Extracted {len(text)} characters via {label}")
            return text.strip()
        logger.warning(f"{label} returned no text")

    raise DecodeError("Failed to extract text from PDF")
