"""Field descriptor definitions for the position map."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


class FieldKind(str, Enum):
    TEXT = "t"
    RADIO = "r"
    CHECKBOX = "c"
    MULTI_SELECT = "m"

    @property
    def default_size(self) -> int:
        return 9 if self is FieldKind.TEXT else 10


@dataclass(frozen=True, slots=True)
class Position:
    page: int
    x: float
    y: float
    size: int

    @property
    def page_index(self) -> int:
        return self.page - 1


@dataclass(frozen=True, slots=True)
class TextField:
    name: str
    position: Position
    kind: FieldKind = FieldKind.TEXT


@dataclass(frozen=True, slots=True)
class CheckboxField:
    name: str
    position: Position
    kind: FieldKind = FieldKind.CHECKBOX


@dataclass(frozen=True, slots=True)
class RadioField:
    name: str
    options: tuple[Position, ...]
    kind: FieldKind = FieldKind.RADIO

    def with_option(self, position: Position) -> RadioField:
        return RadioField(name=self.name, options=self.options + (position,))


@dataclass(frozen=True, slots=True)
class MultiSelectField:
    name: str
    options: tuple[Position, ...]
    kind: FieldKind = FieldKind.MULTI_SELECT

    def with_option(self, position: Position) -> MultiSelectField:
        return MultiSelectField(name=self.name, options=self.options + (position,))


FieldDescriptor = Union[TextField, CheckboxField, RadioField, MultiSelectField]
