"""
rules — Pure classification rules for playlist entries: group, live vs VOD, quality score.

Table order is significant everywhere in this module: the first matching row wins.
"""
from __future__ import annotations
import posixpath
import re

from .parser import PlaylistEntry

VOD_EXTS = {".mp4", ".mkv", ".avi", ".mov", ".webm", ".mpg", ".mpeg", ".ts"}

MISC_GROUP = "Misc"

# (pattern, group label); broadcasters before genres
GROUP_PATTERNS: list[tuple[re.Pattern, str]] = [
    # Broadcasters
    (re.compile(r"\b(bbc one|bbc two|bbc three|bbc four|cbbc|cbeebies|bbc scotland)\b", re.I), "BBC"),
    (re.compile(r"\b(itv\s?1|itv\s?2|itv\s?3|itv\s?4|itv\s?x|itv\b)\b", re.I), "ITV"),
    (re.compile(r"\b(channel\s?4|more4|e4|4seven|film4)\b", re.I), "Channel 4"),
    (re.compile(r"\b(channel\s?5|5star|5usa|5select)\b", re.I), "Channel 5"),
    # Genres
    (re.compile(r"\b(gb news|bbc news|sky news|arise|bloomberg|cnbc|inside crime|iran international|alhiwar"
                r"|arise news|bloomberg tv|cnbc europe|euro news|euronews|international)\b", re.I), "News"),
    (re.compile(r"\b(sky\s?sports|bt sport|eurosport|premier sports|mutv|horse\s?&?\s?country)\b", re.I), "Sports"),
    (re.compile(r"\b(cartoon|kids|cbeebies|cbbc|nick|disney|boomerang|babytv)\b", re.I), "Kids"),
    (re.compile(r"\b(shop|shopping|gems|gemporia|jewellery|jewelry)\b", re.I), "Shopping"),
    (re.compile(r"\b(movie|movies|film4|great!\s?movies|great!\s?romance|great!\s?mystery|cinema)\b", re.I), "Movies"),
    (re.compile(r"\b(religion|islam|ahlulbayt|iqra|deen\s?tv|faith|loveworld|kicc|iman|eman|hala london|hadi tv)\b", re.I), "Religion"),
    (re.compile(r"\b(music|brit asia|frecuencia musical|afrobeats|mtv)\b", re.I), "Music"),
    (re.compile(r"\b(horse & country|horse and country|hobby|lifestyle)\b", re.I), "Lifestyle"),
    # Fallthroughs
    (re.compile(r"\b(scotland|london|yorkshire|lincolnshire|east|south west|wales|northern ireland)\b", re.I), "Regional"),
    (re.compile(r"\b(arab|iran|turkish|kurdish|french|indonesian|thai|vietnam)\b", re.I), "International"),
]

TYPO_FIXES: list[tuple[re.Pattern, str]] = [
    (re.compile(r"Jewelery", re.I), "Jewellery"),
]

# Substrings of hosts that tend to be proxied or flaky
UNSTABLE_HOSTS_RE = re.compile(r"\b(playstop|workers\.dev|bozztv|canlitvapp)\b")

_QUALITY_PAREN_RE = re.compile(r"\((?:\d{3,4}p|hd|sd)\)", re.I)
_BRACKET_TAG_RE = re.compile(r"\[[^\]]+\]")
_MULTI_WS_RE = re.compile(r"\s{2,}")
_SXXEXX_RE = re.compile(r"s\d{1,2}e\d{1,2}", re.I)
_SEASON_EPISODE_RE = re.compile(r"(season\s?\d+|episode\s?\d+)", re.I)
_VOD_GROUP_RE = re.compile(r"(\bvod\b|\bmovies?\b|\bseries\b)", re.I)


def clean_title(raw: str | None) -> str:
    """'BBC One (1080p) [Geo-blocked]' -> 'BBC One'"""
    if not raw:
        return ""
    t = raw.strip()
    t = _QUALITY_PAREN_RE.sub("", t).strip()
    t = _BRACKET_TAG_RE.sub("", t).strip()
    t = _MULTI_WS_RE.sub(" ", t).strip()
    for rx, fix in TYPO_FIXES:
        t = rx.sub(fix, t)
    return t


def existing_group(attrs: dict[str, str]) -> str:
    return (attrs.get("group-title") or attrs.get("group") or "").strip()


def infer_group(title: str, current: str | None = None, prefix: str = "UK") -> str:
    if current and current.strip():
        return current
    t = (title or "").lower()
    for rx, label in GROUP_PATTERNS:
        if rx.search(t):
            return f"{prefix} / {label}" if prefix else label
    return f"{prefix} / {MISC_GROUP}" if prefix else MISC_GROUP


def url_extension(url: str) -> str:
    clean = (url or "").split("?")[0].split("#")[0]
    return posixpath.splitext(clean)[1].lower()


def is_vod(entry: PlaylistEntry) -> bool:
    ext = url_extension(entry.url)
    # 1) explicit video file
    if ext in VOD_EXTS:
        return True
    # 2) live entries conventionally carry -1
    if entry.duration > 0:
        return True
    # 3) episode-style title
    title = entry.raw_title or entry.title
    if _SXXEXX_RE.search(title) or _SEASON_EPISODE_RE.search(title):
        return True
    # 4) group says VOD *and* the extension agrees; group text alone is not enough
    grp = existing_group(entry.attrs)
    if _VOD_GROUP_RE.search(grp) and ext in VOD_EXTS:
        return True
    return False


def quality_score(title: str | None, url: str | None) -> int:
    """Tie-breaker only; higher means 'keep this duplicate'."""
    score = 0
    t = (title or "").lower()
    u = (url or "").lower()
    if re.search(r"1080p|\bfull\s?hd\b", t) or "1080" in u:
        score += 30
    if re.search(r"720p|\bhd\b", t) or "720" in u:
        score += 20
    if re.search(r"576p|480p|sd", t) or re.search(r"576|480", u):
        score += 10
    if ".m3u8" in u:
        score += 8
    if ".mpd" in u:
        score += 4
    if u.startswith("https://"):
        score += 3
    if u.startswith("http://"):
        score += 1
    if UNSTABLE_HOSTS_RE.search(u):
        score -= 2
    return score
