"""Unit tests for the local command-suggestion catalog."""

import pytest

from assistant.suggestions import CATALOG, MAX_SUGGESTIONS, Suggestion, get_local_suggestions
from commands import default_registry


class TestGetLocalSuggestions:
    """Tests for get_local_suggestions()."""

    def test_prefix_matches_in_catalog_order(self) -> None:
        suggestions = get_local_suggestions("ls")
        assert [s.command for s in suggestions] == ["ls -la", "lscpu", "lsblk"]

    def test_confidence_decreases_by_rank(self) -> None:
        assert [s.confidence for s in get_local_suggestions("ls")] == [0.9, 0.8, 0.7]

    def test_variation_match_preferred(self) -> None:
        """The first variation starting with the prefix is suggested."""
        suggestions = get_local_suggestions("git c")
        assert suggestions[0].command == "git commit"
        assert suggestions[0].description == "Version control"

    def test_case_insensitive(self) -> None:
        assert get_local_suggestions("PW")[0].command == "pwd"

    @pytest.mark.parametrize("prefix", ["", "   "])
    def test_blank_prefix(self, prefix) -> None:
        assert get_local_suggestions(prefix) == []

    def test_no_match(self) -> None:
        assert get_local_suggestions("zzz") == []

    def test_limit(self) -> None:
        assert len(get_local_suggestions("c")) == MAX_SUGGESTIONS
        assert len(get_local_suggestions("c", limit=1)) == 1
        assert len(get_local_suggestions("c", limit=10)) == 10

    def test_returns_models(self) -> None:
        assert all(isinstance(s, Suggestion) for s in get_local_suggestions("d"))


class TestCatalog:
    """Consistency checks between the catalog and the command table."""

    def test_every_entry_has_variations(self) -> None:
        assert all(entry.variations for entry in CATALOG)

    def test_catalog_commands_are_runnable(self) -> None:
        """Every catalog command name is handled by the dispatcher."""
        missing = [entry.name for entry in CATALOG if entry.name not in default_registry]
        assert missing == []
