"""PDF loading helpers."""

from __future__ import annotations

from pathlib import Path

from pdf_overlay.pdf.document import OverlayDocument, PdfDocumentError


class PdfLoadError(RuntimeError):
    """Raised when a PDF cannot be opened."""


def load_pdf(path: str | Path) -> OverlayDocument:
    source_path = Path(path)
    if not source_path.exists():
        raise PdfLoadError(f"File not found: {source_path}")

    try:
        data = source_path.read_bytes()
        return OverlayDocument.load(data)
    except (OSError, PdfDocumentError) as exc:
        raise PdfLoadError(f"Failed to open PDF: {source_path}") from exc
