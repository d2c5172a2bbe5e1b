"""Last-resort extraction by scanning raw PDF bytes for text-like patterns.

Four pattern families are applied to the buffer decoded under each encoding:

1. parenthesized literal strings, with backslash and octal escapes resolved
2. angle-bracket hex strings, decoded byte pair by byte pair
3. bare readable ASCII runs
4. strings on the line right after a text-showing operator (Tj, TJ, ', ")
"""

import re
import time
from collections.abc import Iterator
from typing import ClassVar

from talentmatch.extraction.base import ExtractionStrategy, budget_deadline
from talentmatch.extraction.models import Failure, Success, VariantResult
from talentmatch.logging.logger import Log
from talentmatch.scoring.scorer import QualityScorer

ENCODINGS: tuple[str, ...] = ("latin-1", "ascii", "utf-8")

_LITERAL_RE = re.compile(r"\(((?:[^()\\]|\\.)*)\)", re.DOTALL)
_HEX_RE = re.compile(r"<([0-9A-Fa-f\s]+)>")
_ASCII_RUN_RE = re.compile(r"[A-Za-z][A-Za-z0-9\s.,!?@#$%^&*()_+=\-:;'\"]{8,}")
_OPERATOR_RE = re.compile(
    r"(?:Tj|TJ|'|\")[ \t]*\r?\n[ \t]*"
    r"(?:\(((?:[^()\\]|\\.)*)\)|<([0-9A-Fa-f\s]+)>)",
    re.DOTALL,
)

_ESCAPE_RE = re.compile(r"\\(\r\n|[0-7]{1,3}|.)", re.DOTALL)
_SIMPLE_ESCAPES = {
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "b": "\b",
    "f": "\f",
    "\\": "\\",
    "(": "(",
    ")": ")",
}
_CONTROL_RE = re.compile(r"[\x00-\x1f\x7f-\x9f]")
_NON_PRINTABLE_RE = re.compile(r"[^\x20-\x7e\n\r\t]")
_WHITESPACE_RE = re.compile(r"\s+")
_ALNUM_RE = re.compile(r"[a-zA-Z0-9]")
_LETTER_RE = re.compile(r"[a-zA-Z]")


def _resolve_escape(match: re.Match[str]) -> str:
    seq = match.group(1)
    if seq[0] in "01234567":
        return chr(int(seq, 8) & 0xFF)
    if seq in ("\n", "\r", "\r\n"):
        return ""
    return _SIMPLE_ESCAPES.get(seq, seq)


def unescape_literal(raw: str) -> str:
    """Resolve PDF literal-string escapes."""
    return _ESCAPE_RE.sub(_resolve_escape, raw)


def decode_hex_string(hex_digits: str) -> str:
    """Decode a PDF hex string, keeping printable and Latin-1 supplement bytes."""
    digits = _WHITESPACE_RE.sub("", hex_digits)
    if not digits or len(digits) % 2:
        return ""
    chars = []
    for i in range(0, len(digits), 2):
        code = int(digits[i : i + 2], 16)
        if 32 <= code <= 126 or 160 <= code <= 255 or code in (9, 10, 13):
            chars.append(chr(code))
    return "".join(chars)


def _keep(fragment: str) -> bool:
    return len(fragment) > 1 and bool(_ALNUM_RE.search(fragment))


def literal_fragments(decoded: str) -> list[str]:
    fragments = []
    for match in _LITERAL_RE.finditer(decoded):
        text = _CONTROL_RE.sub(" ", unescape_literal(match.group(1))).strip()
        if _keep(text):
            fragments.append(text)
    return fragments


def hex_fragments(decoded: str) -> list[str]:
    fragments = []
    for match in _HEX_RE.finditer(decoded):
        text = decode_hex_string(match.group(1)).strip()
        if _keep(text):
            fragments.append(text)
    return fragments


def ascii_run_fragments(decoded: str) -> list[str]:
    return _ASCII_RUN_RE.findall(decoded)


def operator_fragments(decoded: str) -> list[str]:
    fragments = []
    for match in _OPERATOR_RE.finditer(decoded):
        literal, hex_digits = match.group(1), match.group(2)
        text = unescape_literal(literal) if literal is not None else decode_hex_string(hex_digits)
        if len(text) > 1:
            fragments.append(text)
    return fragments


def pool_fragments(fragments: list[str]) -> str:
    """Filter, clean and join fragments into one candidate text."""
    cleaned = []
    for fragment in fragments:
        if len(fragment.strip()) <= 2 or not _LETTER_RE.search(fragment):
            continue
        text = _WHITESPACE_RE.sub(" ", _NON_PRINTABLE_RE.sub(" ", fragment)).strip()
        if text:
            cleaned.append(text)
    return _WHITESPACE_RE.sub(" ", " ".join(cleaned)).strip()


def extract_fragments(decoded: str) -> list[str]:
    return [
        *literal_fragments(decoded),
        *hex_fragments(decoded),
        *ascii_run_fragments(decoded),
        *operator_fragments(decoded),
    ]


class RawBytePatternStrategy(ExtractionStrategy):
    """Regex scan of the raw bytes, tried under several text encodings."""

    name: ClassVar[str] = "raw-byte-patterns"
    early_accept: ClassVar[bool] = False

    def __init__(self, scorer: QualityScorer, encodings: tuple[str, ...] = ENCODINGS) -> None:
        self._scorer = scorer
        self._encodings = encodings

    def attempt(self, pdf_bytes: bytes, time_budget: float | None = None) -> Iterator[VariantResult]:
        deadline = budget_deadline(time_budget)
        for encoding in self._encodings:
            if deadline is not None and time.monotonic() >= deadline:
                yield VariantResult(
                    encoding,
                    Failure("No time budget left for byte scanning", "StrategyTimeoutError"),
                )
                return
            yield VariantResult(encoding, self._scan(pdf_bytes, encoding))

    def _scan(self, pdf_bytes: bytes, encoding: str) -> Success | Failure:
        decoded = pdf_bytes.decode(encoding, errors="replace")
        text = pool_fragments(extract_fragments(decoded))
        if not text:
            return Failure(f"no text fragments found under {encoding}")

        score = self._scorer.score(text)
        Log.debug(f"{encoding} byte scan score: {score:.1f} ({len(text)} chars)")
        if self._scorer.accepts(text, score):
            return Success(text)
        return Failure(
            f"insufficient readable text under {encoding} (score {score:.1f})",
            fallback_text=text,
        )
