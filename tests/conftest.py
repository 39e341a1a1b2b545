"""Shared fixtures: blank template PDFs and config files in tmp_path."""

from pathlib import Path

import fitz  # PyMuPDF
import pytest

PAGE_WIDTH = 612
PAGE_HEIGHT = 792


def create_template_pdf(output_path: Path, page_count: int = 1) -> Path:
    pdf = fitz.open()
    for _ in range(page_count):
        pdf.new_page(width=PAGE_WIDTH, height=PAGE_HEIGHT)
    pdf.save(str(output_path))
    pdf.close()
    return output_path


@pytest.fixture
def template_pdf(tmp_path):
    return create_template_pdf(tmp_path / "template.pdf", page_count=2)


@pytest.fixture
def write_config(tmp_path):
    """Write a config file into tmp_path and return its path."""

    def _write(name: str, text: str) -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write
