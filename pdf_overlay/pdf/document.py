"""Overlay document backed by pypdf pages and reportlab drawing canvases."""

from __future__ import annotations

from dataclasses import dataclass
from io import BytesIO
from pathlib import Path

from pypdf import PdfReader, PdfWriter
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFError, TTFont
from reportlab.pdfgen import canvas

Color = tuple[float, float, float]

_BASE14_FONTS = {
    "Courier",
    "Courier-Bold",
    "Courier-Oblique",
    "Courier-BoldOblique",
    "Helvetica",
    "Helvetica-Bold",
    "Helvetica-Oblique",
    "Helvetica-BoldOblique",
    "Times-Roman",
    "Times-Bold",
    "Times-Italic",
    "Times-BoldItalic",
    "Symbol",
    "ZapfDingbats",
}


class PdfDocumentError(RuntimeError):
    """Raised when template bytes cannot be parsed as a PDF."""


class PdfFontError(RuntimeError):
    """Raised when a font cannot be embedded."""


@dataclass(frozen=True, slots=True)
class FontHandle:
    name: str


class OverlayPage:
    """A template page plus the overlay canvas drawn on top of it."""

    def __init__(self, page) -> None:
        self._page = page
        self._buffer: BytesIO | None = None
        self._canvas: canvas.Canvas | None = None

    @property
    def size(self) -> tuple[float, float]:
        return float(self._page.mediabox.width), float(self._page.mediabox.height)

    def draw_text(self, text: str, x: float, y: float, size: float, font: FontHandle, color: Color) -> None:
        report = self._overlay()
        report.setFont(font.name, size)
        report.setFillColorRGB(*color)
        report.drawString(x, y, text)

    def draw_square(self, x: float, y: float, size: float, color: Color) -> None:
        report = self._overlay()
        report.setFillColorRGB(*color)
        report.rect(x, y, size, size, stroke=0, fill=1)

    def flatten(self):
        """Merge the overlay onto the template page and return the page."""
        if self._canvas is None:
            return self._page

        self._canvas.showPage()
        self._canvas.save()
        self._buffer.seek(0)
        overlay_page = PdfReader(self._buffer).pages[0]
        self._page.merge_page(overlay_page)

        self._canvas = None
        self._buffer = None
        return self._page

    def _overlay(self) -> canvas.Canvas:
        if self._canvas is None:
            self._buffer = BytesIO()
            self._canvas = canvas.Canvas(self._buffer, pagesize=self.size)
        return self._canvas


class OverlayDocument:
    def __init__(self, reader: PdfReader) -> None:
        self._reader = reader
        self.pages = [OverlayPage(page) for page in reader.pages]

    @classmethod
    def load(cls, data: bytes) -> OverlayDocument:
        try:
            reader = PdfReader(BytesIO(data))
            # Force the page tree to load so a broken file fails here.
            len(reader.pages)
        except Exception as exc:  # pypdf raises several error types for broken files
            raise PdfDocumentError("Template is not a readable PDF") from exc
        return cls(reader)

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def page_heights(self) -> list[float]:
        return [page.size[1] for page in self.pages]

    def embed_font(self, name: str) -> FontHandle:
        """Resolve a base-14 font name or register a TrueType font file."""
        if name in _BASE14_FONTS:
            return FontHandle(name)

        font_path = Path(name)
        if font_path.suffix.lower() == ".ttf":
            font_name = font_path.stem
            if font_name not in pdfmetrics.getRegisteredFontNames():
                try:
                    pdfmetrics.registerFont(TTFont(font_name, str(font_path)))
                except (OSError, TTFError) as exc:
                    raise PdfFontError(f"Failed to register font: {font_path}") from exc
            return FontHandle(font_name)

        if name in pdfmetrics.getRegisteredFontNames():
            return FontHandle(name)
        raise PdfFontError(f"Unknown font: {name}")

    def serialize(self) -> bytes:
        writer = PdfWriter()
        for page in self.pages:
            writer.add_page(page.flatten())

        buffer = BytesIO()
        writer.write(buffer)
        return buffer.getvalue()
