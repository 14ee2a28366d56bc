"""Fuzzy scoring for workspace candidates.

Scores one entry against the live query with a greedy subsequence walk.
The same walk drives match highlighting so the list shows what was scored.
"""

from __future__ import annotations

import math
import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .entries import Entry

DATE_SUFFIX_BONUS = 2.0
MATCH_POINTS = 1.0
BOUNDARY_BONUS = 1.0
PROXIMITY_WEIGHT = 2.0
LENGTH_PENALTY_BASE = 10.0
RECENCY_WEIGHT = 3.0

DATE_SUFFIX_RE = re.compile(r"^(.+)-(\d{4}-\d{2}-\d{2})$")


def fold_chars(text: str) -> list[str]:
    """Lowercase ``text`` one character at a time.

    ``str.lower`` can change string length for a few code points; folding per
    character keeps indices aligned with the displayed name.
    """
    return [ch.lower() for ch in text]


def _walk(name: str, folded: str | list[str], query: str) -> tuple[float, list[int]] | None:
    """Greedy left-to-right subsequence walk over the case-folded ``name``.

    Returns accumulated match points and matched indices, or ``None`` when the
    query is not a subsequence of ``name``.
    """
    needles = fold_chars(query)
    points = 0.0
    positions: list[int] = []
    last_pos = -1
    query_idx = 0
    for idx, ch in enumerate(folded):
        if query_idx >= len(needles):
            break
        if ch != needles[query_idx]:
            continue
        points += MATCH_POINTS
        if idx == 0 or not name[idx - 1].isalnum():
            points += BOUNDARY_BONUS
        if last_pos >= 0:
            gap = idx - last_pos - 1
            points += PROXIMITY_WEIGHT / math.sqrt(gap + 1)
        positions.append(idx)
        last_pos = idx
        query_idx += 1

    if query_idx < len(needles):
        return None
    return points, positions


def match_positions(name: str, query: str) -> list[int]:
    """Indices in ``name`` consumed by the scorer's walk for ``query``.

    Partial matches are still reported so a row can highlight the prefix that
    matched; an empty query matches nothing.
    """
    if not query:
        return []
    folded = fold_chars(name)
    needles = fold_chars(query)
    positions: list[int] = []
    query_idx = 0
    for idx, ch in enumerate(folded):
        if query_idx >= len(needles):
            break
        if ch == needles[query_idx]:
            positions.append(idx)
            query_idx += 1
    return positions


def recency_bonus(modified_at: float, now: float) -> float:
    """Bonus that decays with hours since ``modified_at``; none for future times."""
    age_seconds = now - modified_at
    if age_seconds < 0:
        return 0.0
    hours = age_seconds / 3600.0
    return RECENCY_WEIGHT / math.sqrt(hours + 1.0)


def score_entry(entry: Entry, query: str, now: float) -> float:
    """Score ``entry`` against ``query``.

    A query that is not a subsequence of the display name scores exactly
    ``0.0``. An empty query scores only the date-suffix and recency bonuses.
    """
    name = entry.display_name
    score = 0.0

    if name and name[-1].isnumeric():
        score += DATE_SUFFIX_BONUS

    if query:
        # Entries carry their lowercased name; it is only index-aligned when
        # lowering kept the length.
        folded = entry.sort_key if len(entry.sort_key) == len(name) else fold_chars(name)
        walked = _walk(name, folded, query)
        if walked is None:
            return 0.0
        points, positions = walked
        score += points
        score *= len(query) / (positions[-1] + 1.0)
        score *= LENGTH_PENALTY_BASE / (len(name) + LENGTH_PENALTY_BASE)

    return score + recency_bonus(entry.modified_at, now)


def split_date_suffix(name: str) -> tuple[str, str] | None:
    """Split ``<name>-<YYYY-MM-DD>`` into ``(name, date)``."""
    match = DATE_SUFFIX_RE.match(name)
    if match is None:
        return None
    return match.group(1), match.group(2)
