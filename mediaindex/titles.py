"""
titles — Display-title cleanup for release-style file names.

Pure functions only. normalize_title() is idempotent.
"""
from __future__ import annotations
import re
import unicodedata

# Resolution, source, codec, audio and release-group markers
QUALITY_TAGS = [
    "dvdrip", "brrip", "hdrip", "bdrip", "bluray", "blu-ray", "webrip", "webdl", "web-dl",
    "hdtv", "cam", "ts", "telesync", "tvrip", "uhd", "4k", "2160p", "1080p", "720p", "480p",
    "xvid", "x264", "x265", "hevc", "aac", "dts", "dolby", "hdr", "proper", "repack",
    "uncut", "extended", "imax", "remastered", "multi", "subs", "dubbed", "dual", "rip",
]

_SEPARATORS_RE = re.compile(r"[_.]+")
_QUALITY_RE = re.compile(r"\b(?:%s)\b" % "|".join(re.escape(t) for t in QUALITY_TAGS), re.IGNORECASE)
# Any (...) or [...] group that mentions a quality marker, e.g. "[1080p x264]", "(BluRay DIVX)"
_TAGGED_GROUP_RE = re.compile(
    r"\s*[\(\[][^\)\]]*?\b(?:%s|divx)\b[^\)\]]*[\)\]]\s*" % "|".join(re.escape(t) for t in QUALITY_TAGS),
    re.IGNORECASE,
)
_CUT_SUFFIX_RE = re.compile(r"\s*-\s*(?:theatrical|extended|director'?s cut)\s*$", re.IGNORECASE)
_PART_SUFFIX_RE = re.compile(r"\s*\bpart\s*\d+\s*$", re.IGNORECASE)
_EMPTY_GROUP_RE = re.compile(r"\(\s*\)|\[\s*\]")
_WS_RE = re.compile(r"\s+")


def strip_diacritics(s: str) -> str:
    if not s:
        return ""
    nfkd = unicodedata.normalize("NFKD", s)
    return "".join(c for c in nfkd if not unicodedata.combining(c))


def collapse_ws(text: str) -> str:
    return _WS_RE.sub(" ", text).strip()


def normalize_title(raw: str | None) -> str:
    """
    Turn 'Some_Movie.2019.(BluRay x264).Part 2' into 'Some Movie 2019'.

    Steps: separators to spaces, drop tagged bracket groups, drop bare quality
    keywords, then peel 'part N' / '- director's cut' style suffixes until none remain.
    """
    if not raw:
        return ""
    cleaned = _SEPARATORS_RE.sub(" ", raw)
    cleaned = _TAGGED_GROUP_RE.sub(" ", cleaned)
    cleaned = _QUALITY_RE.sub(" ", cleaned)
    while _EMPTY_GROUP_RE.search(cleaned):
        cleaned = _EMPTY_GROUP_RE.sub(" ", cleaned)
    cleaned = collapse_ws(cleaned)

    while True:
        peeled = _CUT_SUFFIX_RE.sub("", cleaned)
        peeled = collapse_ws(_PART_SUFFIX_RE.sub("", peeled))
        if peeled == cleaned:
            break
        cleaned = peeled
    return cleaned
