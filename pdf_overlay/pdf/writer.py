"""Paint draw instructions onto a loaded template and write the result."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable

from pdf_overlay.model.instruction import DrawInstruction, DrawKind
from pdf_overlay.pdf.document import Color, OverlayDocument

logger = logging.getLogger(__name__)

OUTPUT_MODE = 0o644


class PdfRenderError(RuntimeError):
    """Raised when an instruction cannot be painted."""


class PdfWriteError(RuntimeError):
    """Raised when output generation fails."""


def render_overlay(
    document: OverlayDocument,
    instructions: Iterable[DrawInstruction],
    font_name: str,
    color: Color,
) -> bytes:
    font = document.embed_font(font_name)

    painted = 0
    for instruction in instructions:
        if not 0 <= instruction.page_index < document.page_count:
            raise PdfRenderError(
                f"Page index out of range for field '{instruction.field}': {instruction.page_index}"
            )

        page = document.pages[instruction.page_index]
        if instruction.kind is DrawKind.TEXT:
            page.draw_text(instruction.text, instruction.x, instruction.y, instruction.size, font, color)
        else:
            page.draw_square(instruction.x, instruction.y, instruction.size, color)
        painted += 1

    logger.debug("Painted %d instruction(s) across %d page(s)", painted, document.page_count)
    return document.serialize()


def write_output(output_path: str | Path, data: bytes) -> None:
    output = Path(output_path)

    try:
        with output.open("wb") as handle:
            handle.write(data)
        os.chmod(output, OUTPUT_MODE)
    except OSError as exc:
        raise PdfWriteError(f"Failed to write output PDF: {output}") from exc
