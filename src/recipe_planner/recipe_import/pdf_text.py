"""PDF text extraction."""

import io
import logging

from pypdf import PdfReader

from .errors import PdfParseError

logger = logging.getLogger(__name__)


def extract_pdf_text(pdf_bytes: bytes) -> str:
    """
    Decode a PDF to plain text, one page after another.

    Image-only pages contribute nothing; callers decide whether the
    resulting text is long enough to be useful.

    Raises:
        PdfParseError: the bytes are not a readable PDF
    """
    if not pdf_bytes:
        raise PdfParseError("PDF file is empty")

    try:
        reader = PdfReader(io.BytesIO(pdf_bytes))
        pages = [page.extract_text() or "" for page in reader.pages]
    except Exception as e:
        # pypdf raises a mix of PdfReadError, ValueError, KeyError, etc. on damaged input
        raise PdfParseError(
            "PDF file is corrupted or cannot be parsed. It may be an image-based (scanned) PDF."
        ) from e

    logger.debug(f"Extracted text from {len(pages)} PDF pages")
    return "\n".join(pages)
