# backend/app/extract.py

import io
import logging
from typing import Callable, Dict, Optional

import pdfplumber
from docx import Document
from pydantic import HttpUrl, TypeAdapter, ValidationError
from starlette.concurrency import run_in_threadpool

from app.errors import InvalidInputError, UnsupportedFileTypeError

logger = logging.getLogger("uvicorn.error")

PDF_MIME = "application/pdf"
DOCX_MIME = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
TEXT_MIME = "text/plain"

_URL = TypeAdapter(HttpUrl)


# ---------- Extractors ----------
def extract_pdf_text(data: bytes) -> str:
    with pdfplumber.open(io.BytesIO(data)) as pdf:
        pages = [page.extract_text() or "" for page in pdf.pages]
    return "\n\n".join(p for p in pages if p)


def extract_docx_text(data: bytes) -> str:
    doc = Document(io.BytesIO(data))
    return "\n\n".join(p.text for p in doc.paragraphs if p.text)


def extract_plain_text(data: bytes) -> str:
    return data.decode("utf-8")


EXTRACTORS: Dict[str, Callable[[bytes], str]] = {
    PDF_MIME: extract_pdf_text,
    DOCX_MIME: extract_docx_text,
    TEXT_MIME: extract_plain_text,
}


def _base_mime(content_type: Optional[str]) -> str:
    # "text/plain; charset=utf-8" -> "text/plain"
    return (content_type or "").split(";")[0].strip().lower()


async def extract_file_text(data: bytes, content_type: Optional[str]) -> str:
    mime = _base_mime(content_type)
    extractor = EXTRACTORS.get(mime)
    if extractor is None:
        raise UnsupportedFileTypeError(mime)
    try:
        return await run_in_threadpool(extractor, data)
    except Exception as e:
        logger.warning(f"Extraction failed for {mime}: {e}")
        raise InvalidInputError("Could not extract text from file") from e


def validate_url(url: str) -> str:
    try:
        _URL.validate_python(url)
    except ValidationError as e:
        raise InvalidInputError("Invalid URL") from e
    return url


# ---------- Resolver ----------
async def resolve_input(
    file_data: Optional[bytes],
    file_type: Optional[str],
    url: Optional[str],
    text: Optional[str],
    word_limit: int,
) -> str:
    """Pick file > url > text and return the payload to simplify.

    URLs are passed through as-is (the model is asked to visit them) and are
    exempt from the length limit; everything else is checked against it.
    """
    if file_data is not None:
        payload = await extract_file_text(file_data, file_type)
    elif url:
        return validate_url(url.strip())
    elif text:
        payload = text
    else:
        raise InvalidInputError("No valid input provided")

    if len(payload) > word_limit:
        raise InvalidInputError(f"Text exceeds the word limit of {word_limit} characters.")
    if not payload.strip():
        raise InvalidInputError("No valid input provided")
    return payload
