import re
from collections.abc import Iterable

from talentmatch.scoring.vocabulary import load_vocabulary

_WORD_RE = re.compile(r"\b[a-zA-Z]{2,}\b", re.ASCII)
_TOKEN_RE = re.compile(r"\w+", re.ASCII)
_LETTER_RE = re.compile(r"[a-zA-Z]")

WORD_WEIGHT = 2
VOCABULARY_WEIGHT = 5
LETTER_DIVISOR = 100
LETTER_CAP = 50


class QualityScorer:
    """Scores how much a candidate extraction looks like resume prose.

    score = 2 * words + 5 * vocabulary hits + min(letters / 100, 50)
    """

    def __init__(
        self,
        vocabulary: Iterable[str] | None = None,
        min_score: float = 10.0,
        min_chars: int = 50,
    ) -> None:
        terms = load_vocabulary() if vocabulary is None else vocabulary
        self._vocabulary = frozenset(term.lower() for term in terms)
        self._min_score = min_score
        self._min_chars = min_chars

    @property
    def vocabulary(self) -> frozenset[str]:
        return self._vocabulary

    def score(self, text: str) -> float:
        words = len(_WORD_RE.findall(text))
        hits = sum(
            1 for token in _TOKEN_RE.findall(text) if token.lower() in self._vocabulary
        )
        letters = len(_LETTER_RE.findall(text))
        return (
            WORD_WEIGHT * words
            + VOCABULARY_WEIGHT * hits
            + min(letters / LETTER_DIVISOR, LETTER_CAP)
        )

    def accepts(self, text: str, score: float | None = None) -> bool:
        """Both thresholds are strict: score > min_score and length > min_chars."""
        if score is None:
            score = self.score(text)
        return score > self._min_score and len(text.strip()) > self._min_chars
