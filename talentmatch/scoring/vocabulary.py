import re
from pathlib import Path

from talentmatch.scoring.exceptions import ScoringError

_DEFAULT_VOCABULARY_PATH = Path(__file__).parent / "data" / "resume_vocabulary.txt"
_TERM_RE = re.compile(r"\w+", re.ASCII)


def load_vocabulary(path: Path | None = None) -> frozenset[str]:
    """Load the resume/employment vocabulary used for scoring.

    Args:
        path: Vocabulary file with one term per line. Blank lines and lines
              starting with '#' are ignored. Defaults to the bundled list.

    Returns:
        Lowercased terms.

    Raises:
        ScoringError: if the file cannot be read, holds no terms, or holds a
                      term that is not a single word.
    """
    if path is None:
        path = _DEFAULT_VOCABULARY_PATH
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ScoringError(f"Failed to load vocabulary: {exc}") from exc

    terms = frozenset(
        line.strip().lower()
        for line in raw.splitlines()
        if line.strip() and not line.lstrip().startswith("#")
    )
    if not terms:
        raise ScoringError(f"Vocabulary file {path} contains no terms")
    for term in sorted(terms):
        # the scorer matches one token at a time
        if not _TERM_RE.fullmatch(term):
            raise ScoringError(f"Vocabulary term {term!r} must be a single word")
    return terms
