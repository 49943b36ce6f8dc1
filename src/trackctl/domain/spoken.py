"""Render line numbers as an English list for diagnostics."""

from __future__ import annotations

from collections.abc import Sequence


def spoken_list(items: Sequence[int]) -> str:
    """Return *items* as they would be written in English.

    ``[5]`` -> ``"5"``, ``[5, 6]`` -> ``"5 and 6"``,
    ``[5, 6, 7]`` -> ``"5, 6, and 7"``.
    """
    words = [str(item) for item in items]
    if len(words) <= 1:
        return "".join(words)
    if len(words) == 2:
        return f"{words[0]} and {words[1]}"
    return ", ".join(words[:-1]) + f", and {words[-1]}"
