"""Parse the line-oriented position map into a field table."""

from __future__ import annotations

from dataclasses import dataclass, field
import math

from pdf_overlay.model.field import FieldKind, Position
from pdf_overlay.state.table import FieldNameConflict, FieldTable


@dataclass(frozen=True, slots=True)
class ConfigIssue:
    line_number: int
    line: str
    message: str

    def __str__(self) -> str:
        return f"line {self.line_number}: {self.message} ({self.line!r})"


@dataclass(slots=True)
class PositionParseResult:
    table: FieldTable = field(default_factory=FieldTable)
    issues: list[ConfigIssue] = field(default_factory=list)


class _LineError(ValueError):
    pass


def parse_positions(text: str) -> PositionParseResult:
    """Build a field table from ``type,name,page,x,y[,size]`` lines.

    Blank lines and ``#`` comments are ignored. Malformed lines are recorded
    as issues with their 1-based line number and skipped.
    """
    result = PositionParseResult()

    for line_number, raw_line in enumerate(text.splitlines(), start=1):
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue

        try:
            kind, name, position = _parse_line(line)
            result.table.add(kind, name, position)
        except (_LineError, FieldNameConflict) as exc:
            result.issues.append(ConfigIssue(line_number, line, str(exc)))

    return result


def _parse_line(line: str) -> tuple[FieldKind, str, Position]:
    parts = [part.strip() for part in line.split(",")]
    if len(parts) not in (5, 6):
        raise _LineError(f"expected 6 comma-separated values, got {len(parts)}")

    type_token, name, page_token, x_token, y_token = parts[:5]
    size_token = parts[5] if len(parts) == 6 else ""

    try:
        kind = FieldKind(type_token)
    except ValueError:
        raise _LineError(f"unknown field type '{type_token}'") from None

    if not name:
        raise _LineError("missing field name")

    page = _parse_int(page_token, "page")
    if page < 1:
        raise _LineError(f"page must be 1 or greater, got {page}")

    x = _parse_float(x_token, "x")
    y = _parse_float(y_token, "y")

    size = _parse_int(size_token, "size") if size_token else 0
    if size < 0:
        raise _LineError(f"size must not be negative, got {size}")

    return kind, name, Position(page=page, x=x, y=y, size=size or kind.default_size)


def _parse_int(token: str, label: str) -> int:
    try:
        return int(token)
    except ValueError:
        raise _LineError(f"invalid {label} '{token}'") from None


def _parse_float(token: str, label: str) -> float:
    try:
        value = float(token)
    except ValueError:
        raise _LineError(f"invalid {label} '{token}'") from None
    if not math.isfinite(value):
        raise _LineError(f"invalid {label} '{token}'")
    return value
