"""Creator tag vs. free-text role title compatibility."""
from __future__ import annotations

import re
from collections.abc import Iterable

from apps.core.utils import normalize_text

# Skill category -> accepted spellings. Role titles are free text, so the
# table absorbs the common variants seen in posted roles. Bump the version
# whenever a category or term changes.
SKILL_CATEGORIES_VERSION = 1
SKILL_CATEGORIES: dict[str, frozenset[str]] = {
    "photographer": frozenset({"photographer", "photography", "photo"}),
    "videographer": frozenset({"videographer", "videography", "video"}),
    "model": frozenset({"model", "modeling"}),
    "content_creator": frozenset({"content creator", "content_creator", "content creation"}),
    "social_media_manager": frozenset({"social media manager", "smm", "social media"}),
    "graphic_designer": frozenset({"graphic designer", "graphic_designer", "designer"}),
    "makeup_artist": frozenset({"makeup artist", "makeup_artist", "makeup", "mua"}),
    "stylist": frozenset({"stylist", "styling"}),
    "event_host": frozenset({"event host", "event_host", "host"}),
    "writer": frozenset({"writer", "writing", "copywriter"}),
    "influencer": frozenset({"influencer"}),
    "voice_over": frozenset({"voice over", "voice_over", "vo"}),
}

_TOKEN_SPLIT = re.compile(r"[^a-z0-9]+")


def _stem(token: str) -> str:
    if len(token) > 3 and token.endswith("s") and not token.endswith("ss"):
        return token[:-1]
    return token


def tokenize(text: str | None) -> tuple[str, ...]:
    """Split text into accent-free lowercase word tokens, ignoring plural ``s``."""
    return tuple(_stem(t) for t in _TOKEN_SPLIT.split(normalize_text(text or "")) if t)


def _build_index() -> tuple[dict[tuple[str, ...], str], dict[str, tuple[tuple[str, ...], ...]]]:
    term_to_category: dict[tuple[str, ...], str] = {}
    category_terms: dict[str, tuple[tuple[str, ...], ...]] = {}
    for category, terms in SKILL_CATEGORIES.items():
        tokenized = tuple(sorted({tokenize(term) for term in terms}))
        category_terms[category] = tokenized
        for term_tokens in tokenized:
            term_to_category[term_tokens] = category
    return term_to_category, category_terms


_TERM_TO_CATEGORY, _CATEGORY_TERMS = _build_index()


def category_for(tag: str | None) -> str | None:
    """Skill category a creator tag belongs to, or None."""
    tokens = tokenize(tag)
    if not tokens:
        return None
    return _TERM_TO_CATEGORY.get(tokens)


def _contains_sequence(haystack: tuple[str, ...], needle: tuple[str, ...]) -> bool:
    size = len(needle)
    if not size or size > len(haystack):
        return False
    return any(haystack[i:i + size] == needle for i in range(len(haystack) - size + 1))


def roles_match(creator_tag: str | None, role_title: str | None) -> bool:
    """Whether a creator's tag qualifies them for a role title.

    1. Identical after lower-casing and trimming.
    2. Tag in a skill category: any term of that category occurs as whole
       words in the title ("photography" vs "Senior Photographer").
    3. Otherwise, either string contains the other.
    """
    tag = (creator_tag or "").strip().lower()
    title = (role_title or "").strip().lower()
    if tag == title:
        return True
    if not tag or not title:
        return False

    category = category_for(tag)
    if category is not None:
        title_tokens = tokenize(title)
        return any(
            _contains_sequence(title_tokens, term)
            for term in _CATEGORY_TERMS[category]
        )

    return tag in title or title in tag


def matched_tags(tags: Iterable[str], role_titles: Iterable[str]) -> list[str]:
    """Tags matching at least one of the titles, in tag order, deduplicated."""
    titles = list(role_titles)
    result: list[str] = []
    seen: set[str] = set()
    for tag in tags:
        key = (tag or "").strip().lower()
        if key in seen:
            continue
        if any(roles_match(tag, title) for title in titles):
            seen.add(key)
            result.append(tag)
    return result
