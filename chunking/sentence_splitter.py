"""
Sentence-level text splitting for semantic chunking.

Handles the usual edge cases of technical prose:
- Fenced code blocks and inline code spans are kept verbatim
- Abbreviations (Dr., e.g., Inc., ...) and decimals do not end a sentence
- Fragments below a minimum length are dropped
"""

import logging
import re
from typing import List, Tuple

logger = logging.getLogger(__name__)

ABBREVIATIONS = (
    "Dr.",
    "Mr.",
    "Mrs.",
    "Ms.",
    "Prof.",
    "Sr.",
    "Jr.",
    "vs.",
    "etc.",
    "e.g.",
    "i.e.",
    "Ph.D.",
    "M.D.",
    "U.S.",
    "U.K.",
    "Inc.",
    "Ltd.",
    "Corp.",
    "Co.",
)

# Stands in for abbreviation and decimal periods while splitting
_SENTINEL = "\u2024"

_CODE_PLACEHOLDER = "__CODE_BLOCK_{}__"

# Fenced blocks first so their backticks are not read as inline spans
_CODE_PATTERN = re.compile(r"```[\s\S]*?```|`[^`\n]+`")

_PLACEHOLDER_PATTERN = re.compile(r"__CODE_BLOCK_(\d+)__")

# Longest first so "Ph.D." wins over "D." style overlaps
_ABBREVIATION_PATTERN = re.compile(
    r"(?<![A-Za-z])(?:"
    + "|".join(re.escape(a) for a in sorted(ABBREVIATIONS, key=len, reverse=True))
    + r")"
)

_DECIMAL_PATTERN = re.compile(r"(\d)\.(\d)")

# Terminal punctuation, optionally closed by a quote or bracket, then whitespace.
# A cut is only made when the next sentence starts with an uppercase letter
# (any script) or a code placeholder.
_BOUNDARY_CANDIDATE = re.compile(r"[.!?][\"')\]]?(\s+)")


def extract_code_blocks(text: str) -> Tuple[str, List[str]]:
    """
    Replace code spans with numbered placeholders.

    Returns:
        (text with placeholders, code spans in order of appearance)
    """
    code_blocks: List[str] = []

    def _stash(match: re.Match) -> str:
        code_blocks.append(match.group(0))
        return _CODE_PLACEHOLDER.format(len(code_blocks) - 1)

    return _CODE_PATTERN.sub(_stash, text), code_blocks


def restore_code_blocks(text: str, code_blocks: List[str]) -> str:
    def _restore(match: re.Match) -> str:
        index = int(match.group(1))
        if index < len(code_blocks):
            return code_blocks[index]
        return match.group(0)

    return _PLACEHOLDER_PATTERN.sub(_restore, text)


def protect_abbreviations(text: str) -> str:
    protected = _ABBREVIATION_PATTERN.sub(
        lambda m: m.group(0).replace(".", _SENTINEL), text
    )
    return _DECIMAL_PATTERN.sub(rf"\1{_SENTINEL}\2", protected)


def restore_abbreviations(text: str) -> str:
    return text.replace(_SENTINEL, ".")


def split_at_boundaries(text: str) -> List[str]:
    """Cut text at sentence boundaries, dropping the whitespace between sentences."""
    fragments = []
    position = 0
    for match in _BOUNDARY_CANDIDATE.finditer(text):
        gap_start, gap_end = match.span(1)
        if gap_end >= len(text):
            break
        if text[gap_end].isupper() or _PLACEHOLDER_PATTERN.match(text, gap_end):
            fragments.append(text[position:gap_start])
            position = gap_end
    fragments.append(text[position:])
    return fragments


class SentenceSplitter:
    """
    Splits documents into sentences suitable for embedding.

    Usage:
        splitter = SentenceSplitter(min_sentence_length=10)
        sentences = splitter.split(markdown_text)
    """

    def __init__(self, min_sentence_length: int = 10):
        """
        Args:
            min_sentence_length: Fragments shorter than this (in characters)
                are discarded
        """
        self.min_sentence_length = min_sentence_length

    def split(self, text: str) -> List[str]:
        """
        Split text into sentences.

        Args:
            text: Raw document text, may contain markdown code fences

        Returns:
            Ordered list of trimmed sentences
        """
        if not text or not text.strip():
            return []

        without_code, code_blocks = extract_code_blocks(text)
        protected = protect_abbreviations(without_code)

        sentences = []
        for fragment in split_at_boundaries(protected):
            fragment = fragment.strip()
            if not fragment:
                continue

            sentence = restore_code_blocks(
                restore_abbreviations(fragment), code_blocks
            )
            if len(sentence) < self.min_sentence_length:
                continue

            sentences.append(sentence)

        logger.debug(
            f"Split {len(text)} chars into {len(sentences)} sentences "
            f"({len(code_blocks)} code spans preserved)"
        )
        return sentences


def split_into_sentences(text: str, min_sentence_length: int = 10) -> List[str]:
    """Convenience wrapper around SentenceSplitter."""
    return SentenceSplitter(min_sentence_length).split(text)
