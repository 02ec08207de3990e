"""Tests for configuration loading."""

import json

import pytest

from reviewgate_core.config import GateConfig, ReviewerSource, load_authorized_reviewers, load_config
from reviewgate_core.errors import ConfigError


def test_defaults_applied_when_no_config_file(tmp_path):
    config = load_config(config_path=str(tmp_path / "nonexistent.yml"))
    assert config["reviewers_file"] is None
    assert config["reviewers"] is None


def test_config_file_overrides_defaults(tmp_path):
    cfg = tmp_path / ".gate.yml"
    cfg.write_text("reviewers_file: .github/reviewers.json\n")
    config = load_config(config_path=str(cfg))
    assert config["reviewers_file"] == ".github/reviewers.json"


def test_inline_reviewers_loaded(tmp_path):
    cfg = tmp_path / ".gate.yml"
    cfg.write_text("reviewers:\n  - alice\n  - bob\n")
    config = load_config(config_path=str(cfg))
    assert config["reviewers"] == ["alice", "bob"]


def test_cli_overrides_config_file(tmp_path):
    cfg = tmp_path / ".gate.yml"
    cfg.write_text("reviewers_file: a.json\n")
    config = load_config(config_path=str(cfg), cli_overrides={"reviewers_file": "b.json"})
    assert config["reviewers_file"] == "b.json"


def test_none_cli_overrides_ignored(tmp_path):
    cfg = tmp_path / ".gate.yml"
    cfg.write_text("reviewers_file: a.json\n")
    config = load_config(config_path=str(cfg), cli_overrides={"reviewers_file": None})
    assert config["reviewers_file"] == "a.json"


def test_empty_config_file_uses_defaults(tmp_path):
    cfg = tmp_path / ".gate.yml"
    cfg.write_text("")
    config = load_config(config_path=str(cfg))
    assert config["reviewers_file"] is None


def test_non_mapping_config_file_raises(tmp_path):
    cfg = tmp_path / ".gate.yml"
    cfg.write_text("- alice\n- bob\n")
    with pytest.raises(ConfigError):
        load_config(config_path=str(cfg))


def test_env_token_loaded(monkeypatch):
    monkeypatch.setenv("GITHUB_TOKEN", "gh-token")
    config = load_config(config_path="nonexistent.yml")
    assert config["github_token"] == "gh-token"


class TestGateConfig:
    def test_from_dict_with_file(self):
        gc = GateConfig.from_dict({"github_token": "tok", "reviewers_file": "r.json", "reviewers": None})
        assert gc.credential == "tok"
        assert gc.reviewers == ReviewerSource(path="r.json", logins=None)
        assert gc.reviewers.is_configured

    def test_from_dict_with_inline_list(self):
        gc = GateConfig.from_dict({"github_token": "tok", "reviewers": ["alice"]})
        assert gc.reviewers.logins == ("alice",)
        assert gc.reviewers.is_configured

    def test_empty_token_is_missing(self):
        assert GateConfig.from_dict({"github_token": ""}).credential is None

    def test_unconfigured_source(self):
        assert GateConfig.from_dict({}).reviewers.is_configured is False

    def test_empty_inline_list_counts_as_configured(self):
        assert GateConfig.from_dict({"reviewers": []}).reviewers.is_configured is True

    def test_inline_reviewers_must_be_a_list(self):
        with pytest.raises(ConfigError):
            GateConfig.from_dict({"reviewers": "alice"})

    def test_null_inline_login_rejected(self):
        with pytest.raises(ConfigError):
            GateConfig.from_dict({"reviewers": [None]})

    def test_non_string_inline_login_rejected(self):
        with pytest.raises(ConfigError):
            GateConfig.from_dict({"reviewers": ["alice", 42]})

    def test_non_string_reviewers_file_rejected(self):
        with pytest.raises(ConfigError):
            GateConfig.from_dict({"reviewers_file": 123})


class TestLoadAuthorizedReviewers:
    def test_reads_json_array(self, tmp_path):
        f = tmp_path / "reviewers.json"
        f.write_text(json.dumps(["alice", "bob", "carol"]))
        assert load_authorized_reviewers(ReviewerSource(path=str(f))) == frozenset({"alice", "bob", "carol"})

    def test_file_wins_over_inline(self, tmp_path):
        f = tmp_path / "reviewers.json"
        f.write_text('["alice"]')
        source = ReviewerSource(path=str(f), logins=("bob",))
        assert load_authorized_reviewers(source) == frozenset({"alice"})

    def test_inline_logins(self):
        assert load_authorized_reviewers(ReviewerSource(logins=("alice", "bob"))) == frozenset({"alice", "bob"})

    def test_empty_array_gives_empty_set(self, tmp_path):
        f = tmp_path / "reviewers.json"
        f.write_text("[]")
        assert load_authorized_reviewers(ReviewerSource(path=str(f))) == frozenset()

    def test_empty_logins_dropped(self, tmp_path):
        f = tmp_path / "reviewers.json"
        f.write_text('["alice", ""]')
        assert load_authorized_reviewers(ReviewerSource(path=str(f))) == frozenset({"alice"})

    def test_logins_are_not_trimmed(self, tmp_path):
        f = tmp_path / "reviewers.json"
        f.write_text('[" alice", "bob "]')
        authorized = load_authorized_reviewers(ReviewerSource(path=str(f)))
        assert authorized == frozenset({" alice", "bob "})
        assert "alice" not in authorized

    def test_non_utf8_file_raises(self, tmp_path):
        f = tmp_path / "reviewers.json"
        f.write_bytes(b'["alice\xff"]')
        with pytest.raises(ConfigError, match="Could not read"):
            load_authorized_reviewers(ReviewerSource(path=str(f)))

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(ConfigError, match="Could not read"):
            load_authorized_reviewers(ReviewerSource(path=str(tmp_path / "missing.json")))

    def test_invalid_json_raises(self, tmp_path):
        f = tmp_path / "reviewers.json"
        f.write_text("alice, bob")
        with pytest.raises(ConfigError, match="not valid JSON"):
            load_authorized_reviewers(ReviewerSource(path=str(f)))

    def test_object_instead_of_array_raises(self, tmp_path):
        f = tmp_path / "reviewers.json"
        f.write_text('{"alice": true}')
        with pytest.raises(ConfigError, match="array of login strings"):
            load_authorized_reviewers(ReviewerSource(path=str(f)))

    def test_non_string_entries_raise(self, tmp_path):
        f = tmp_path / "reviewers.json"
        f.write_text('["alice", 42]')
        with pytest.raises(ConfigError):
            load_authorized_reviewers(ReviewerSource(path=str(f)))

    def test_no_source_raises(self):
        with pytest.raises(ConfigError, match="Missing reviewers JSON"):
            load_authorized_reviewers(ReviewerSource())
