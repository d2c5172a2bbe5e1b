import io
import stat
from collections.abc import Callable
from pathlib import Path

import pytest
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

RESUME_LINES = ["John Doe", "Software Engineer", "Skills: Python, Go"]


def _draw_lines(c: canvas.Canvas, lines: list[str], top: float = 720, step: float = 20) -> None:
    for index, line in enumerate(lines):
        c.drawString(72, top - index * step, line)


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF with known text content."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Hello PDF World")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def resume_pdf_bytes() -> bytes:
    """Single-page resume whose lines are drawn top to bottom."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    _draw_lines(c, RESUME_LINES)
    c.save()
    return buf.getvalue()


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Generate a two-page PDF with known text on each page."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Page one content")
    c.showPage()
    c.drawString(72, 720, "Page two content")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def empty_pdf_bytes() -> bytes:
    """Generate a valid PDF with no text content (blank page)."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.showPage()
    c.save()
    return buf.getvalue()


HEX_LINES = [
    "Jane Smith Senior Software Engineer",
    "Experience leading a team of developers in the design and deployment of systems",
]


@pytest.fixture()
def hex_only_pdf_bytes() -> bytes:
    """PDF-signed bytes whose only readable text lives in hex strings.

    There is no object structure, so structured parsers cannot open it.
    """
    body = "".join(f"<{line.encode('latin-1').hex().upper()}> Tj\n" for line in HEX_LINES)
    return b"%PDF-1.4\n" + bytes(range(128, 256)) + b"\nBT\n" + body.encode("ascii") + b"ET\n"


@pytest.fixture()
def noise_pdf_bytes() -> bytes:
    """PDF-signed bytes with nothing but binary noise after the header."""
    return b"%PDF-1.4\n" + bytes(range(128, 256)) * 40


@pytest.fixture()
def make_tool(tmp_path: Path) -> Callable[[str, str], str]:
    """Create an executable shell script standing in for an external tool.

    Returns a factory taking (name, script body) and returning the tool path.
    """

    def _make(name: str, body: str) -> str:
        path = tmp_path / "bin" / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("#!/bin/sh\n" + body + "\n")
        path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return str(path)

    return _make


@pytest.fixture()
def missing_tool(tmp_path: Path) -> str:
    return str(tmp_path / "bin" / "does-not-exist")
