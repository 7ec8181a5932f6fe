from __future__ import annotations

"""
Splitting saved texts into click targets for the reading view.
"""

from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class WordToken:
    line: int
    index: int
    surface: str


def split_lines(text: str) -> List[str]:
    """Split on newlines; CRLF and CR are normalised first."""
    if not text:
        return []
    return text.replace("\r\n", "\n").replace("\r", "\n").split("\n")


def split_words(line: str) -> List[str]:
    """Split a line on single spaces, keeping punctuation attached to the word.

    Runs of spaces produce empty entries; those are not click targets.
    """
    return [w for w in line.split(" ") if w]


def tokenize_for_display(text: str) -> List[List[WordToken]]:
    """Return one list of tokens per line, each token addressable by (line, index)."""
    out: List[List[WordToken]] = []
    for line_no, line in enumerate(split_lines(text)):
        out.append(
            [WordToken(line=line_no, index=i, surface=w) for i, w in enumerate(split_words(line))]
        )
    return out


def preview(text: str, max_lines: int = 2) -> str:
    """First ``max_lines`` lines of a text, with an ellipsis if truncated."""
    lines = split_lines(text)
    head = "\n".join(lines[:max_lines])
    if len(lines) > max_lines:
        head += " …"
    return head
