"""Run settings loaded from a dotenv file."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from dotenv import dotenv_values

DEFAULT_POSITIONS = "./positions"
DEFAULT_VALUES = "./values"
DEFAULT_FONT = "Helvetica"
DEFAULT_COLOR = (0.95, 0.1, 0.1)


class SettingsError(RuntimeError):
    """Raised when the settings source is missing or incomplete."""


@dataclass(frozen=True, slots=True)
class Settings:
    input: Path
    output: Path
    positions: Path
    values: Path
    font: str = DEFAULT_FONT
    color: tuple[float, float, float] = DEFAULT_COLOR


def load_settings(env_path: str | Path = ".env") -> Settings:
    source = Path(env_path)
    if not source.is_file():
        raise SettingsError(f"Settings file not found: {source}")

    data = dotenv_values(source)
    return settings_from_mapping(data)


def settings_from_mapping(data: dict[str, str | None]) -> Settings:
    missing = [key for key in ("input", "output") if not data.get(key)]
    if missing:
        raise SettingsError(f"Missing required setting(s): {', '.join(missing)}")

    return Settings(
        input=Path(data["input"]),
        output=Path(data["output"]),
        positions=Path(data.get("positions") or DEFAULT_POSITIONS),
        values=Path(data.get("values") or DEFAULT_VALUES),
        font=data.get("font") or DEFAULT_FONT,
        color=_parse_color(data.get("color")),
    )


def _parse_color(raw: str | None) -> tuple[float, float, float]:
    if not raw:
        return DEFAULT_COLOR

    try:
        red, green, blue = (float(part) for part in raw.split(","))
    except ValueError as exc:
        raise SettingsError(f"Invalid color '{raw}': expected three comma-separated numbers") from exc

    components = (red, green, blue)
    if any(not 0.0 <= part <= 1.0 for part in components):
        raise SettingsError(f"Invalid color '{raw}': components must be between 0 and 1")
    return components
