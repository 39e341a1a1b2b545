"""One full overlay run: parse, resolve, render, write."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from pathlib import Path

from pdf_overlay.config.positions import ConfigIssue, parse_positions
from pdf_overlay.config.settings import Settings
from pdf_overlay.config.values import parse_values
from pdf_overlay.layout.resolver import ResolutionIssue, resolve_fields
from pdf_overlay.pdf.loader import load_pdf
from pdf_overlay.pdf.writer import render_overlay, write_output

logger = logging.getLogger(__name__)


class ConfigReadError(RuntimeError):
    """Raised when a position or value file cannot be read."""


@dataclass(slots=True)
class RunReport:
    output: Path
    instruction_count: int = 0
    config_issues: list[ConfigIssue] = field(default_factory=list)
    resolution_issues: list[ResolutionIssue] = field(default_factory=list)

    @property
    def issue_count(self) -> int:
        return len(self.config_issues) + len(self.resolution_issues)


def run_pipeline(settings: Settings) -> RunReport:
    positions = parse_positions(_read_text(settings.positions))
    for issue in positions.issues:
        logger.warning("%s: %s", settings.positions, issue)

    values = parse_values(_read_text(settings.values))

    document = load_pdf(settings.input)
    resolution = resolve_fields(positions.table, values, document.page_heights())
    for issue in resolution.issues:
        logger.warning("Skipped %s", issue)

    data = render_overlay(document, resolution.instructions, settings.font, settings.color)
    write_output(settings.output, data)

    report = RunReport(
        output=settings.output,
        instruction_count=len(resolution.instructions),
        config_issues=positions.issues,
        resolution_issues=resolution.issues,
    )
    logger.info(
        "Wrote %s: %d field(s), %d instruction(s), %d issue(s)",
        settings.output,
        len(positions.table),
        report.instruction_count,
        report.issue_count,
    )
    return report


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigReadError(f"Failed to read config file: {path}") from exc
