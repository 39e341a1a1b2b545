"""Resolve field descriptors and runtime values into draw instructions."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Sequence

from pdf_overlay.model.field import (
    CheckboxField,
    MultiSelectField,
    Position,
    RadioField,
    TextField,
)
from pdf_overlay.model.instruction import DrawInstruction, DrawKind
from pdf_overlay.state.table import FieldTable

NO_FIELD_VALUE = "no field value specified"
CHECKED_VALUE = "1"


class FieldResolutionError(LookupError):
    """Raised when a field points at a page the document does not have."""


@dataclass(frozen=True, slots=True)
class ResolutionIssue:
    field: str
    message: str

    def __str__(self) -> str:
        return f"field '{self.field}': {self.message}"


@dataclass(slots=True)
class Resolution:
    instructions: list[DrawInstruction] = field(default_factory=list)
    issues: list[ResolutionIssue] = field(default_factory=list)


def resolve_fields(
    table: FieldTable,
    values: Mapping[str, str],
    page_heights: Sequence[float],
) -> Resolution:
    """Turn every field in ``table`` into zero or more draw instructions.

    Config coordinates use a top-left origin; instructions are emitted in PDF
    user space, so ``y`` becomes ``page_height - y``. Bad option indices are
    reported per field and skipped.
    """
    resolver = _Resolver(values, page_heights)

    for text_field in table.text.values():
        resolver.resolve_text(text_field)
    for checkbox in table.checkbox.values():
        resolver.resolve_checkbox(checkbox)
    for radio in table.radio.values():
        resolver.resolve_radio(radio)
    for multi in table.multi_select.values():
        resolver.resolve_multi_select(multi)

    return resolver.result


class _Resolver:
    def __init__(self, values: Mapping[str, str], page_heights: Sequence[float]) -> None:
        self._values = values
        self._page_heights = page_heights
        self.result = Resolution()

    def resolve_text(self, text_field: TextField) -> None:
        text = self._values.get(text_field.name) or NO_FIELD_VALUE
        self._emit(text_field.name, text_field.position, DrawKind.TEXT, text)

    def resolve_checkbox(self, checkbox: CheckboxField) -> None:
        if self._values.get(checkbox.name) == CHECKED_VALUE:
            self._emit(checkbox.name, checkbox.position, DrawKind.SQUARE)

    def resolve_radio(self, radio: RadioField) -> None:
        raw = self._values.get(radio.name)
        if raw is None:
            return
        position = self._option(radio.name, radio.options, raw)
        if position is not None:
            self._emit(radio.name, position, DrawKind.SQUARE)

    def resolve_multi_select(self, multi: MultiSelectField) -> None:
        raw = self._values.get(multi.name)
        if raw is None:
            return
        for token in raw.split(";"):
            if not token.strip():
                continue
            position = self._option(multi.name, multi.options, token)
            if position is not None:
                self._emit(multi.name, position, DrawKind.SQUARE)

    def _option(self, name: str, options: tuple[Position, ...], token: str) -> Position | None:
        try:
            index = int(token.strip())
        except ValueError:
            self._report(name, f"option index '{token}' is not an integer")
            return None

        if not 0 <= index < len(options):
            self._report(name, f"option index {index} out of range (0-{len(options) - 1})")
            return None
        return options[index]

    def _emit(self, name: str, position: Position, kind: DrawKind, text: str = "") -> None:
        page_index = position.page_index
        if page_index >= len(self._page_heights):
            raise FieldResolutionError(
                f"Field '{name}' references page {position.page}, "
                f"but the document has {len(self._page_heights)} page(s)"
            )

        self.result.instructions.append(
            DrawInstruction(
                page_index=page_index,
                x=position.x,
                y=self._page_heights[page_index] - position.y,
                size=position.size,
                kind=kind,
                text=text,
                field=name,
            )
        )

    def _report(self, name: str, message: str) -> None:
        self.result.issues.append(ResolutionIssue(name, message))
