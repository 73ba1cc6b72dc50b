"""Display width measurement for terminal cells.

Provides per-character width lookup for cursor accounting and a
grapheme-aware ``visible_width`` for whole strings.
"""

from __future__ import annotations

import unicodedata

import grapheme
import wcwidth as _wcwidth


# ---------------------------------------------------------------------------
# Grapheme segmenter wrapper
# ---------------------------------------------------------------------------


class _GraphemeSegmenter:
    """Thin wrapper around ``grapheme.graphemes``."""

    @staticmethod
    def segment(text: str) -> list[str]:
        return list(grapheme.graphemes(text))


def get_segmenter() -> _GraphemeSegmenter:
    """Return a grapheme segmenter instance."""
    return _GraphemeSegmenter()


# ---------------------------------------------------------------------------
# Width cache (capped at 512 entries)
# ---------------------------------------------------------------------------

_width_cache: dict[str, int] = {}
_WIDTH_CACHE_MAX = 512


def _cache_width(key: str, value: int) -> int:
    if len(_width_cache) >= _WIDTH_CACHE_MAX:
        _width_cache.clear()
    _width_cache[key] = value
    return value


# ---------------------------------------------------------------------------
# Single characters
# ---------------------------------------------------------------------------


def char_width(ch: str) -> int | None:
    """Return the number of columns *ch* occupies, or ``None``.

    ``None`` means the width is not measurable (C0/C1 control characters
    and anything else ``wcwidth`` reports as -1). Combining marks and other
    zero-width characters return 0.
    """
    if len(ch) != 1:
        raise ValueError(f"expected a single character, got {ch!r}")
    w = _wcwidth.wcwidth(ch)
    if w < 0:
        return None
    return w


def display_width(ch: str) -> int:
    """Width of *ch* with unmeasurable characters counted as zero."""
    return char_width(ch) or 0


# ---------------------------------------------------------------------------
# Grapheme clusters
# ---------------------------------------------------------------------------


def _grapheme_width(g: str) -> int:
    """Return the terminal display width of a single grapheme cluster.

    Rules:
    1. Zero-width characters (control, combining marks, etc.) -> 0
    2. Emoji sequences (VS16, ZWJ, skin tones, flags) -> 2
    3. Otherwise the width of the base codepoint.
    """
    if not g:
        return 0

    if len(g) == 1:
        return display_width(g)

    for ch in g:
        cp = ord(ch)
        if cp == 0xFE0F:  # VS16
            return 2
        if cp == 0x200D:  # ZWJ
            return 2
        if 0x1F3FB <= cp <= 0x1F3FF:  # Skin tone modifiers
            return 2
        if 0x1F1E6 <= cp <= 0x1F1FF:  # Regional indicators
            return 2

    cat = unicodedata.category(g[0])
    if cat.startswith("M") or cat == "Cf":
        return 0

    return display_width(g[0])


def visible_width(text: str) -> int:
    """Calculate the visible terminal width of *text*.

    Uses a fast path for printable ASCII and caches results for
    everything else.
    """
    if not text:
        return 0

    if all(0x20 <= ord(ch) <= 0x7E for ch in text):
        return len(text)

    cached = _width_cache.get(text)
    if cached is not None:
        return cached

    total = 0
    for g in grapheme.graphemes(text):
        total += _grapheme_width(g)

    return _cache_width(text, total)
