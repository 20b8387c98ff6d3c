"""Shared helper utilities for command extraction."""

from .text import contains_keyword, find_word_index, first_match, split_words, word_window

__all__ = [
    "contains_keyword",
    "find_word_index",
    "first_match",
    "split_words",
    "word_window",
]
