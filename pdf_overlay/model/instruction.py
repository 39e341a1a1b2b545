"""Resolved draw operations handed to the overlay renderer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class DrawKind(str, Enum):
    TEXT = "text"
    SQUARE = "square"


@dataclass(frozen=True, slots=True)
class DrawInstruction:
    """One paint operation in PDF user space (bottom-left origin)."""

    page_index: int
    x: float
    y: float
    size: float
    kind: DrawKind
    text: str = ""
    field: str = ""
