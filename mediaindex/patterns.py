"""
patterns — Guess an episode URL template from a few sample links.

Given
    https://cdn.site/show/S01E01.m3u8
    https://cdn.site/show/S01E02.m3u8
propose https://cdn.site/show/S01E{e2}.m3u8.

Supported placeholders: {season}, {episode} (unpadded), {s2}, {e2} (2-digit zero-padded).
"""
from __future__ import annotations
import re
from dataclasses import dataclass
from typing import Iterable

import structlog

log = structlog.get_logger()

PLACEHOLDERS = ("{season}", "{episode}", "{s2}", "{e2}")

_DIGITS_RE = re.compile(r"\d+")


@dataclass(frozen=True)
class PatternGuess:
    pattern: str
    notes: str = ""

    def __bool__(self) -> bool:
        return bool(self.pattern)


def _common_prefix_len(a: str, b: str) -> int:
    n = 0
    while n < len(a) and n < len(b) and a[n] == b[n]:
        n += 1
    return n


def _common_suffix_len(a: str, b: str, floor: int) -> int:
    """Common tail length that never reaches back into the first `floor` chars."""
    n = 0
    limit = min(len(a), len(b)) - floor
    while n < limit and a[-1 - n] == b[-1 - n]:
        n += 1
    return n


def _expand_digits(s: str, i: int, j: int) -> tuple[int, int]:
    """Grow the half-open window [i, j) so it never cuts a digit run in half."""
    empty = i == j
    grow_left = empty or s[i].isdigit()
    grow_right = empty or s[j - 1].isdigit()
    while grow_left and i > 0 and s[i - 1].isdigit():
        i -= 1
    while grow_right and j < len(s) and s[j].isdigit():
        j += 1
    return i, j


def infer_pattern(samples: Iterable[str]) -> PatternGuess:
    """Infer a URL template from 2+ samples. Advisory: never raises, returns an empty pattern instead."""
    clean = [s.strip() for s in samples if s and s.strip()]
    if len(clean) < 2:
        return PatternGuess("", "Need 2+ samples")

    a, b = clean[0], clean[1]
    if a == b:
        return PatternGuess("", "Samples do not differ by a number")
    start = _common_prefix_len(a, b)
    tail = _common_suffix_len(a, b, start)
    i, j = _expand_digits(a, start, len(a) - tail)

    window = a[i:j]
    prefix, suffix = a[:i], a[j:]
    runs = list(_DIGITS_RE.finditer(window))

    if len(runs) >= 2:
        r1, r2 = runs[0], runs[1]
        s_tok = "{s2}" if len(r1.group()) == 2 else "{season}"
        e_tok = "{e2}" if len(r2.group()) == 2 else "{episode}"
        pattern = (
            prefix + window[:r1.start()] + s_tok + window[r1.end():r2.start()]
            + e_tok + window[r2.end():] + suffix
        )
        notes = "Detected two-part number; mapped to season/episode."
    elif len(runs) == 1:
        r = runs[0]
        e_tok = "{e2}" if len(r.group()) == 2 else "{episode}"
        pattern = prefix + window[:r.start()] + e_tok + window[r.end():] + suffix
        notes = "Detected single changing number; assumed episodes vary."
    else:
        log.debug("pattern_no_numeric_change", a=a, b=b)
        return PatternGuess("", "Samples do not differ by a number")

    return PatternGuess(pattern, notes)


def fill_pattern(pattern: str, season: int, episode: int) -> str:
    if not pattern:
        return ""
    return (
        pattern
        .replace("{s2}", f"{season:02d}")
        .replace("{e2}", f"{episode:02d}")
        .replace("{season}", str(season))
        .replace("{episode}", str(episode))
    )


def expand_pattern(pattern: str, season: int, episodes: Iterable[int]) -> list[str]:
    """Fill one season's worth of episode numbers."""
    return [fill_pattern(pattern, season, ep) for ep in episodes]


def parse_episode_range(text: str) -> list[int]:
    """'1-3,7' -> [1, 2, 3, 7]"""
    out: list[int] = []
    for chunk in (text or "").split(","):
        chunk = chunk.strip()
        if not chunk:
            continue
        if "-" in chunk:
            lo, hi = chunk.split("-", 1)
            out.extend(range(int(lo), int(hi) + 1))
        else:
            out.append(int(chunk))
    return out
