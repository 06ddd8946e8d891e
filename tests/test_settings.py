"""Tests for configuration parsing."""

import pytest

from tempuser_wordnames.core.exceptions import ConfigurationError
from tempuser_wordnames.core.models import (
    LOCAL,
    InlineWords,
    NamedDeployment,
    RemoteDocument,
    resolve_deployment_target,
)
from tempuser_wordnames.core.settings import WordNamesSettings, build_word_list_config


class TestResolveDeploymentTarget:
    """Tests for local/remote wiki selection."""

    def test_no_central_wiki_is_local(self):
        """Test that the page defaults to the current wiki."""
        assert resolve_deployment_target(None, "enwiki") is LOCAL

    def test_central_wiki_same_as_current_is_local(self):
        """Test that naming the current wiki is still local."""
        assert resolve_deployment_target("enwiki", "enwiki") is LOCAL

    def test_other_central_wiki_is_named(self):
        """Test a different central wiki."""
        assert resolve_deployment_target("metawiki", "enwiki") == NamedDeployment("metawiki")

    def test_no_identity_at_all_is_local(self):
        """Test that missing ids resolve to local."""
        assert resolve_deployment_target(None, None) is LOCAL


class TestBuildWordListConfig:
    """Tests for build_word_list_config."""

    def test_inline_words(self):
        """Test an inline list."""
        config = build_word_list_config({"words": ["kiwi", "lime"]})
        assert config == InlineWords(("kiwi", "lime"))

    def test_page(self):
        """Test a page list on a central wiki."""
        config = build_word_list_config(
            {"page": "MediaWiki:Words"}, central_wiki="metawiki", current_wiki="enwiki"
        )
        assert config == RemoteDocument("MediaWiki:Words", NamedDeployment("metawiki"))

    def test_words_win_over_page(self, caplog):
        """Test that inline words take precedence."""
        with caplog.at_level("WARNING"):
            config = build_word_list_config({"words": ["a"], "page": "Words"})
        assert isinstance(config, InlineWords)
        assert "inline words" in caplog.text

    @pytest.mark.parametrize("raw", [None, {}, [], "Words"])
    def test_missing_list_raises(self, raw):
        """Test that no list at all is a configuration error."""
        with pytest.raises(ConfigurationError):
            build_word_list_config(raw)

    def test_neither_words_nor_page_raises(self):
        """Test a list section without a usable key."""
        with pytest.raises(ConfigurationError):
            build_word_list_config({"page": "   "})

    def test_words_must_be_a_list(self):
        """Test that a bare string is rejected."""
        with pytest.raises(ConfigurationError):
            build_word_list_config({"words": "apple banana"})


class TestWordNamesSettings:
    """Tests for WordNamesSettings.from_config."""

    def test_defaults(self):
        """Test default length, index and offset."""
        settings = WordNamesSettings.from_config({"wordnames": {"list": {"words": ["a"]}}})
        assert settings.length == 3
        assert settings.use_index is True
        assert settings.offset == 0
        assert settings.wiki_id is None

    def test_values_are_coerced(self):
        """Test string values from YAML or env files."""
        settings = WordNamesSettings.from_config(
            {
                "wordnames": {
                    "list": {"page": "Words"},
                    "wiki_id": "enwiki",
                    "length": "4",
                    "use_index": "no",
                    "offset": "1000",
                }
            }
        )
        assert settings.length == 4
        assert settings.use_index is False
        assert settings.offset == 1000
        assert settings.wiki_id == "enwiki"
        assert settings.word_list == RemoteDocument("Words", LOCAL)

    def test_bad_values_use_defaults(self):
        """Test that unparseable values fall back to defaults."""
        settings = WordNamesSettings.from_config(
            {"wordnames": {"list": {"words": ["a"]}, "length": "many", "use_index": "maybe"}}
        )
        assert settings.length == 3
        assert settings.use_index is True

    def test_empty_config_raises(self):
        """Test that an empty config is fatal."""
        with pytest.raises(ConfigurationError):
            WordNamesSettings.from_config({})
