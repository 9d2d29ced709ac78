"""Raw statement line model."""
from dataclasses import dataclass
from typing import Iterable, List, Union


@dataclass(frozen=True)
class RawLine:
    """
    One non-blank line of extracted statement text.

    Attributes:
        index: 0-based position among the non-blank lines
        text: Trimmed line content (never empty)
    """
    index: int
    text: str


def split_lines(content: Union[str, Iterable[str]]) -> List[RawLine]:
    """
    Split extracted text into trimmed, non-blank RawLines.

    Args:
        content: Full statement text, or an already split line sequence

    Returns:
        Ordered list of RawLine with contiguous indices
    """
    if isinstance(content, str):
        content = content.splitlines()

    lines = []
    for raw in content:
        text = raw.strip() if raw else ""
        if text:
            lines.append(RawLine(index=len(lines), text=text))
    return lines
