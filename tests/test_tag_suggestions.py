"""Tests for tag autocomplete."""

from __future__ import annotations

import pytest

from taskform.services.tag_suggestions import (
    TagSuggestionMatcher,
    build_tag_corpus,
    parse_tags,
)


@pytest.fixture
def matcher() -> TagSuggestionMatcher:
    return TagSuggestionMatcher(["work", "project", "personal", "prototype"])


class TestSuggest:
    def test_excludes_chosen_tags(self, matcher):
        assert matcher.suggest("work, pro") == ["project", "prototype"]

    def test_chosen_tags_not_suggested_again(self, matcher):
        assert matcher.suggest("project, pro") == ["prototype"]

    def test_query_is_case_insensitive(self, matcher):
        assert matcher.suggest("PERS") == ["personal"]

    def test_empty_query_yields_nothing(self, matcher):
        assert matcher.suggest("") == []
        assert matcher.suggest(None) == []
        assert matcher.suggest("work, ") == []

    def test_limit(self):
        corpus = [f"tag{i}" for i in range(10)]
        assert TagSuggestionMatcher(corpus).suggest("tag") == corpus[:5]
        assert TagSuggestionMatcher(corpus, limit=2).suggest("tag") == corpus[:2]


class TestCommit:
    def test_replaces_partial_segment(self, matcher):
        assert matcher.commit("work, pro", "project") == "work, project, "

    def test_first_tag(self, matcher):
        assert matcher.commit("pro", "project") == "project, "

    def test_normalizes_spacing(self, matcher):
        assert matcher.commit("work,home ,  pe", "personal") == "work, home, personal, "


class TestHelpers:
    def test_parse_tags(self):
        assert parse_tags(" work, , home ,work") == ["work", "home", "work"]
        assert parse_tags("") == []
        assert parse_tags(None) == []

    def test_build_corpus_first_seen_order(self):
        corpus = build_tag_corpus([["b", "a"], None, ["a", "c"], []])
        assert corpus == ["b", "a", "c"]
