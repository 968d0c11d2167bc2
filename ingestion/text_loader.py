# ingestion/text_loader.py
"""Read uploaded story files into plain text."""

from __future__ import annotations

import asyncio
from pathlib import Path

import fitz  # PyMuPDF
import structlog

logger = structlog.get_logger(__name__)

TRUNCATION_MARKER = "..."
SUPPORTED_SUFFIXES = (".txt", ".pdf")


class StoryFileError(ValueError):
    """Raised when a story file cannot be turned into text."""


class UnsupportedFileTypeError(StoryFileError):
    """Raised for files that are neither .txt nor .pdf."""


def _read_pdf(path: Path) -> str:
    try:
        with fitz.open(str(path)) as doc:
            return "".join(page.get_text() for page in doc)
    except fitz.FileDataError as exc:
        raise StoryFileError(f"Could not read PDF '{path.name}': {exc}") from exc


def _read_txt(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise StoryFileError(f"'{path.name}' is not valid UTF-8 text") from exc


def _read_story_file_sync(path: Path) -> str:
    suffix = path.suffix.lower()
    if suffix == ".pdf":
        return _read_pdf(path)
    if suffix == ".txt":
        return _read_txt(path)
    raise UnsupportedFileTypeError(
        "Unsupported file type. Please upload a .pdf or .txt file."
    )


def truncate_story_text(text: str, max_chars: int) -> str:
    if len(text) > max_chars:
        text = text[:max_chars] + TRUNCATION_MARKER
    return text.strip()


async def read_story_file(path: str | Path, max_chars: int = 5000) -> str:
    """Load a .txt or .pdf story and cut it to ``max_chars`` characters."""
    file_path = Path(path)
    loop = asyncio.get_running_loop()
    text = await loop.run_in_executor(None, _read_story_file_sync, file_path)
    logger.info(
        "Story file loaded.", story_file=file_path.name, characters=len(text)
    )
    return truncate_story_text(text, max_chars)
