# Resume Loading
"""
Read resume text from a file the user points at.
"""

import logging
from pathlib import Path
from typing import Union

import pymupdf  # PyMuPDF for PDF processing

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = [".txt", ".pdf"]


def extract_text_from_pdf(pdf_path: Union[str, Path]) -> str:
    """
    Extract text content from a PDF file.

    Args:
        pdf_path: Path to the PDF file

    Returns:
        Extracted text content

    Raises:
        ValueError: If the file is empty or not a readable PDF
    """
    text = ""
    try:
        with pymupdf.open(pdf_path) as doc:
            for page in doc:
                text += page.get_text() + "\n"
    except pymupdf.FileDataError as e:
        logger.error(f"❌ Could not read PDF {pdf_path}: {e}")
        raise ValueError("Could not read that PDF. Please upload a different file") from e
    return text


def load_resume(path: Union[str, Path]) -> str:
    """
    Load resume text from a .txt or .pdf file.

    Raises:
        ValueError: If the file type is not supported or the PDF is unreadable
        FileNotFoundError: If the file does not exist
    """
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_EXTENSIONS:
        raise ValueError(f"Please upload a {' or '.join(SUPPORTED_EXTENSIONS)} file")
    if not path.exists():
        raise FileNotFoundError(f"Resume file not found: {path}")

    if suffix == ".pdf":
        text = extract_text_from_pdf(path)
    else:
        text = path.read_text(encoding="utf-8", errors="replace")

    logger.info(f"📄 Loaded resume from {path.name} ({len(text)} characters)")
    return text.strip()
