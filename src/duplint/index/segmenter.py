"""Splitting documents into blank-line separated blocks and normalizing them for hashing."""

import re
from typing import NamedTuple

BLOCK_SEPARATOR = '\n\n'

_WHITESPACE = re.compile(r'\s')


class Block(NamedTuple):
    """A run of document text between blank-line separators.

    Attributes:
        text: The original text, used when reporting
        normalized: The text with every whitespace character removed, used for fingerprinting
    """
    text: str
    normalized: str

    @property
    def line_count(self) -> int:
        return count_lines(self.text)

    def qualifies(self, min_lines: int, min_chars: int) -> bool:
        return meets_size_criteria(self.text, min_lines, min_chars)


def normalize(text: str) -> str:
    """Strip all whitespace (spaces, tabs, newlines and other Unicode whitespace)."""
    return _WHITESPACE.sub('', text)


def count_lines(text: str | bytes) -> int:
    """Count newline characters. A text without a trailing newline has one line fewer than it shows."""
    return text.count(b'\n' if isinstance(text, bytes) else '\n')


def meets_size_criteria(text: str, min_lines: int, min_chars: int) -> bool:
    """Whether a block is large enough to take part in block-level comparison.

    The line bound is inclusive, the character bound is strict.
    """
    return count_lines(text) >= min_lines and len(text) > min_chars


def split_blocks(content: str) -> list[str]:
    """Split content on blank-line separators, keeping order and dropping empty segments."""
    return [segment for segment in content.split(BLOCK_SEPARATOR) if segment != '']


def segment(content: str) -> list[Block]:
    return [Block(text, normalize(text)) for text in split_blocks(content)]


def qualifying_blocks(content: str, min_lines: int, min_chars: int) -> list[Block]:
    """Blocks of content that pass the size policy, in document order."""
    return [block for block in segment(content) if block.qualifies(min_lines, min_chars)]
