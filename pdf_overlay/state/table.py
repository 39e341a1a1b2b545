"""In-memory field table built from one position map."""

from __future__ import annotations

from dataclasses import dataclass, field

from pdf_overlay.model.field import (
    CheckboxField,
    FieldDescriptor,
    FieldKind,
    MultiSelectField,
    Position,
    RadioField,
    TextField,
)


class FieldNameConflict(ValueError):
    """Raised when a name is already declared under a different kind."""


@dataclass(slots=True)
class FieldTable:
    text: dict[str, TextField] = field(default_factory=dict)
    radio: dict[str, RadioField] = field(default_factory=dict)
    checkbox: dict[str, CheckboxField] = field(default_factory=dict)
    multi_select: dict[str, MultiSelectField] = field(default_factory=dict)

    def kind_of(self, name: str) -> FieldKind | None:
        for kind, partition in self._partitions():
            if name in partition:
                return kind
        return None

    def add(self, kind: FieldKind, name: str, position: Position) -> None:
        """Record one position line.

        Text and checkbox entries are replaced by later lines for the same
        name; radio and multi-select lines append an option at the next index.
        """
        existing = self.kind_of(name)
        if existing is not None and existing is not kind:
            raise FieldNameConflict(
                f"field '{name}' is already declared as {existing.name.lower()}"
            )

        if kind is FieldKind.TEXT:
            self.text[name] = TextField(name=name, position=position)
        elif kind is FieldKind.CHECKBOX:
            self.checkbox[name] = CheckboxField(name=name, position=position)
        elif kind is FieldKind.RADIO:
            current = self.radio.get(name) or RadioField(name=name, options=())
            self.radio[name] = current.with_option(position)
        elif kind is FieldKind.MULTI_SELECT:
            current = self.multi_select.get(name) or MultiSelectField(name=name, options=())
            self.multi_select[name] = current.with_option(position)
        else:  # pragma: no cover - FieldKind is closed
            raise ValueError(f"Unsupported field kind: {kind!r}")

    def all_fields(self) -> list[FieldDescriptor]:
        merged: list[FieldDescriptor] = []
        for _, partition in self._partitions():
            merged.extend(partition.values())
        return merged

    def __len__(self) -> int:
        return sum(len(partition) for _, partition in self._partitions())

    def _partitions(self) -> tuple[tuple[FieldKind, dict[str, FieldDescriptor]], ...]:
        return (
            (FieldKind.TEXT, self.text),
            (FieldKind.RADIO, self.radio),
            (FieldKind.CHECKBOX, self.checkbox),
            (FieldKind.MULTI_SELECT, self.multi_select),
        )
