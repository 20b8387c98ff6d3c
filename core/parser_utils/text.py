"""Common text-processing helpers shared across extractor modules."""

from __future__ import annotations

from typing import Iterable, List, Optional, Pattern


def contains_keyword(text: str, keywords: Iterable[str]) -> bool:
    """Return True when any keyword is present in ``text``."""

    return any(keyword in text for keyword in keywords)


def split_words(message: str) -> List[str]:
    """Split on single spaces so word positions line up with the raw input."""

    return (message or "").split(" ")


def find_word_index(words: List[str], fragment: str) -> int:
    """Return the index of the first word containing ``fragment`` (case-insensitive), else -1."""

    needle = fragment.lower()
    for index, word in enumerate(words):
        if needle in word.lower():
            return index
    return -1


def word_window(message: str, fragment: str, radius: int = 2) -> str:
    """Return ``radius`` words either side of the first word containing ``fragment``."""

    words = split_words(message)
    index = find_word_index(words, fragment)
    if index == -1:
        return ""
    start = max(0, index - radius)
    end = min(len(words), index + radius + 1)
    return " ".join(words[start:end])


def first_match(pattern: Pattern[str], text: str, group: int = 0) -> Optional[str]:
    """Return the requested group of the first match, stripped, or ``None``."""

    match = pattern.search(text)
    if not match:
        return None
    value = match.group(group)
    if value is None:
        return None
    value = value.strip()
    return value or None


__all__ = [
    "contains_keyword",
    "find_word_index",
    "first_match",
    "split_words",
    "word_window",
]
