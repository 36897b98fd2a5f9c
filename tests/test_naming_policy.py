"""Tests for field naming policies."""

import pytest

from schema_zod.exceptions import ConfigurationError
from schema_zod.models.naming_policy import (
    IDENTITY,
    NamingPolicy,
    get_all_policy_names,
    get_naming_policy,
    split_words,
)


class TestSplitWords:
    """Word splitting used by every case conversion."""

    @pytest.mark.parametrize("name", ["more_more", "more-more", "moreMore", "MoreMore", "more more"])
    def test_separators_and_case_boundaries(self, name):
        """Underscores, hyphens, spaces and case changes all split words."""
        assert [w.lower() for w in split_words(name)] == ["more", "more"]

    def test_acronyms(self):
        """An acronym followed by a capitalized word is split before the word."""
        assert split_words("HTTPServer") == ["HTTP", "Server"]

    def test_digits_stay_with_their_word(self):
        assert split_words("field1_name") == ["field1", "name"]

    def test_empty_name(self):
        assert split_words("") == []


class TestPolicies:
    """Registry entries follow serde's rename_all vocabulary."""

    @pytest.mark.parametrize(
        "policy_name,field_name,expected",
        [
            ("identity", "more_more", "more_more"),
            ("lowercase", "MoreMore", "moremore"),
            ("UPPERCASE", "more_more", "MORE_MORE"),
            ("PascalCase", "more_more", "MoreMore"),
            ("camelCase", "more_more", "moreMore"),
            ("camelCase", "HTTPServer", "httpServer"),
            ("camelCase", "x", "x"),
            ("snake_case", "moreMore", "more_more"),
            ("SCREAMING_SNAKE_CASE", "moreMore", "MORE_MORE"),
            ("kebab-case", "moreMore", "more-more"),
            ("SCREAMING-KEBAB-CASE", "more_more", "MORE-MORE"),
        ],
    )
    def test_conversion(self, policy_name, field_name, expected):
        assert get_naming_policy(policy_name)(field_name) == expected

    def test_unknown_policy(self):
        """Unknown policy names are a configuration error."""
        with pytest.raises(ConfigurationError, match="Unknown naming policy"):
            get_naming_policy("TitleCase")

    def test_registry_lists_identity_first(self):
        names = get_all_policy_names()
        assert names[0] == "identity"
        assert "camelCase" in names

    def test_equality_uses_name_only(self):
        """Policies compare by name so definitions carrying them can be compared."""
        rebuilt = NamingPolicy("camelCase", lambda name: name)
        assert rebuilt == get_naming_policy("camelCase")
        assert hash(rebuilt) == hash(get_naming_policy("camelCase"))
        assert IDENTITY != get_naming_policy("camelCase")
