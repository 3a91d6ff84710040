"""
Utilities: line splitting/joining and diagnostic text helpers.
"""

from __future__ import annotations

from typing import List, Sequence


def split_lines(text: str) -> List[str]:
    """Split a document into lines, without line terminators."""
    return text.splitlines()


def join_lines(lines: Sequence[str]) -> str:
    return "\n".join(lines) + ("\n" if lines else "")


def truncate(s: str, limit: int = 4000) -> str:
    if limit and len(s) > limit:
        return s[:limit] + "\n...[truncated]..."
    return s


def indent_block(s: str, prefix: str = "    ") -> str:
    """Indent every line of s (used to nest serialized records in messages)."""
    return "\n".join(prefix + ln if ln else ln for ln in s.splitlines())
