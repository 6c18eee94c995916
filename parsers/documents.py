import io
import logging
from pathlib import Path

import docx

from errors import DecodeError
from parsers.pdf import pdf_to_text

logger = logging.getLogger(__name__)

TEXT_ENCODINGS = ("utf-8", "latin-1", "cp1252")
SUPPORTED_EXTENSIONS = (".pdf", ".docx", ".txt")


def docx_to_text(data: bytes) -> str:
    """Paragraphs first, then table cells row by row."""
    try:
        document = docx.Document(io.BytesIO(data))
    except Exception as e:
        raise DecodeError(f"Failed to read DOCX: {e}") from e

    parts = [para.text for para in document.paragraphs]
    for table in document.tables:
        for row in table.rows:
            parts.append(" ".join(cell.text for cell in row.cells))
    return "\n".join(parts).strip()


def txt_to_text(data: bytes) -> str:
    for encoding in TEXT_ENCODINGS:
        try:
            return data.decode(encoding)
        except UnicodeDecodeError:
            continue
    raise DecodeError("Unable to decode text file with supported encodings")


def decode_document(data: bytes, filename: str) -> str:
    """Turn an uploaded document into plain text, dispatching on its extension."""
    extension = Path(filename or "").suffix.lower()
    logger.info(f"Decoding {filename!r} ({len(data or b'')} bytes)")

    if not data:
        raise DecodeError("Uploaded file is empty")
    if extension == ".pdf":
        text = pdf_to_text(data)
    elif extension == ".docx":
        text = docx_to_text(data)
    elif extension == ".txt":
        text = txt_to_text(data)
    else:
        raise DecodeError(f"Unsupported file format: {extension or 'none'}")

    if not text.strip():
        raise DecodeError("No text could be extracted from the file")
    return text
