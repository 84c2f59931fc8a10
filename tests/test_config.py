"""Tests for run policy and settings."""

import json

import pytest

from devsweep.config import (
    CONFIG_ENV_VAR,
    Policy,
    Settings,
    config_file,
    load_settings,
    parse_domain,
)
from devsweep.errors import ConfigError
from devsweep.models import CleanLevel, Domain


class TestParseDomain:
    def test_known_domain(self):
        assert parse_domain("frontend") is Domain.FRONTEND

    def test_case_insensitive(self):
        assert parse_domain("DevOps") is Domain.DEVOPS

    def test_aliases(self):
        assert parse_domain("data/ml") is Domain.DATAML
        assert parse_domain("ml") is Domain.DATAML

    def test_unknown_domain(self):
        with pytest.raises(ConfigError, match="invalid domain"):
            parse_domain("gamedev")


class TestPolicy:
    def test_defaults(self):
        policy = Policy()
        assert policy.clean_level is CleanLevel.STANDARD
        assert policy.interactive
        assert not policy.dry_run
        assert policy.domains == []

    def test_from_options(self):
        policy = Policy.from_options(
            "aggressive", dry_run=True, interactive=False, domains=["backend", "ml"]
        )
        assert policy.clean_level is CleanLevel.AGGRESSIVE
        assert policy.dry_run
        assert not policy.interactive
        assert policy.domains == [Domain.BACKEND, Domain.DATAML]

    def test_invalid_level(self):
        with pytest.raises(ConfigError):
            Policy.from_options("everything")

    def test_invalid_domain(self):
        with pytest.raises(ConfigError):
            Policy.from_options("standard", domains=["frontend", "nope"])

    def test_comma_separated_domains(self):
        policy = Policy.from_options(domains=["frontend,backend", "ml"])
        assert policy.domains == [Domain.FRONTEND, Domain.BACKEND, Domain.DATAML]

    def test_comma_separated_tolerates_spaces_and_trailing_comma(self):
        policy = Policy.from_options(domains=["mobile, devops,"])
        assert policy.domains == [Domain.MOBILE, Domain.DEVOPS]

    def test_invalid_domain_in_list(self):
        with pytest.raises(ConfigError, match="gamedev"):
            Policy.from_options(domains=["frontend,gamedev"])

    def test_empty_domains_include_all(self):
        policy = Policy()
        assert all(policy.includes_domain(d) for d in Domain)

    def test_domain_filter(self):
        policy = Policy(domains=[Domain.MOBILE])
        assert policy.includes_domain(Domain.MOBILE)
        assert not policy.includes_domain(Domain.SYSTEM)


class TestLoadSettings:
    def test_missing_file_gives_defaults(self, tmp_path):
        settings = load_settings(tmp_path / "none.json")
        assert settings == Settings()
        assert settings.max_concurrent == 4

    def test_reads_file(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(
            json.dumps(
                {
                    "search_dirs": ["~/work"],
                    "protected_paths": ["~/work/keep"],
                    "max_concurrent": 2,
                }
            )
        )

        settings = load_settings(path)

        assert settings.search_dirs == ["~/work"]
        assert settings.protected_paths == ["~/work/keep"]
        assert settings.max_concurrent == 2

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{not json")
        with pytest.raises(ConfigError, match="Cannot read"):
            load_settings(path)

    def test_invalid_values(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"max_concurrent": 0}))
        with pytest.raises(ConfigError, match="Invalid settings"):
            load_settings(path)

    def test_env_var_overrides_location(self, tmp_path, monkeypatch):
        path = tmp_path / "custom.json"
        monkeypatch.setenv(CONFIG_ENV_VAR, str(path))
        assert config_file() == path

    def test_default_location(self, fake_home, monkeypatch):
        monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
        assert config_file() == fake_home / ".devsweep" / "config.json"
