"""Autocomplete for the comma-separated tag field."""

from __future__ import annotations

from typing import Iterable, Sequence

DEFAULT_SUGGESTION_LIMIT = 5


def parse_tags(text: str | None) -> list[str]:
    """Split the tag field into trimmed, non-empty tags (duplicates kept)."""

    if not text:
        return []
    return [segment.strip() for segment in text.split(",") if segment.strip()]


def build_tag_corpus(tag_lists: Iterable[Iterable[str] | None]) -> list[str]:
    """Collect every known tag once, in first-seen order."""

    seen: set[str] = set()
    corpus: list[str] = []
    for tags in tag_lists:
        for tag in tags or ():
            if tag and tag not in seen:
                seen.add(tag)
                corpus.append(tag)
    return corpus


class TagSuggestionMatcher:
    """Suggest known tags for the segment currently being typed."""

    def __init__(
        self, corpus: Sequence[str], limit: int = DEFAULT_SUGGESTION_LIMIT
    ) -> None:
        self._corpus = list(corpus)
        self._limit = limit

    @property
    def corpus(self) -> list[str]:
        return list(self._corpus)

    def suggest(self, text: str | None) -> list[str]:
        """Return corpus tags matching the trailing partial segment.

        Tags already entered in earlier segments are never suggested again.
        """

        segments = (text or "").split(",")
        query = segments[-1].strip().lower()
        if not query:
            return []

        chosen = {segment.strip() for segment in segments[:-1]}
        matches: list[str] = []
        for tag in self._corpus:
            if len(matches) >= self._limit:
                break
            if tag in chosen:
                continue
            if query in tag.lower():
                matches.append(tag)
        return matches

    def commit(self, text: str | None, chosen_tag: str) -> str:
        """Replace the partial segment with ``chosen_tag``.

        The result ends with ``", "`` so the next tag can be typed straight
        away.
        """

        segments = (text or "").split(",")[:-1]
        kept = [segment.strip() for segment in segments if segment.strip()]
        kept.append(chosen_tag)
        return ", ".join(kept) + ", "


__all__ = [
    "TagSuggestionMatcher",
    "build_tag_corpus",
    "parse_tags",
]
