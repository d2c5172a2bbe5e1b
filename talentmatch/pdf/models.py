from dataclasses import dataclass


@dataclass(frozen=True)
class TextRun:
    """A text fragment with its position on the page.

    x grows left to right; y grows bottom to top (PDF user space), so larger y
    means higher on the page.
    """

    x: float
    y: float
    text: str


PageRuns = list[TextRun]
