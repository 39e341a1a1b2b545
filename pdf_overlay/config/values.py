"""Parse the value map."""

from __future__ import annotations


def parse_values(text: str) -> dict[str, str]:
    values: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        name, _, value = line.partition(",")
        values[name] = value
    return values
