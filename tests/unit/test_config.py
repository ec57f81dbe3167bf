# tests/unit/test_config.py
# ------------------------------------------------------------
# Purpose: Configuration defaults, file loading (YAML/JSON),
#          CLI-style overrides and validation errors.
# ------------------------------------------------------------

import json

import pytest
import yaml

from dashboard_backup.config.manager import ConfigurationManager
from dashboard_backup.models.config import BackupConfig
from dashboard_backup.models.exceptions import ConfigurationError


def test_defaults_match_fixed_file_locations():
    config = ConfigurationManager().load_config()

    assert config.credentials_path == "./accounts_keys.enc"
    assert config.private_key_path == "./private_key.pem"
    assert config.output_dir == "./dashboards_output"
    assert config.nerdgraph_endpoint == "https://api.newrelic.com/graphql"


def test_yaml_file_is_flattened(tmp_path):
    config_file = tmp_path / "config.yaml"
    config_file.write_text(yaml.safe_dump({
        "nerdgraph": {"region": "EU"},
        "paths": {"credentials": "creds.enc", "private_key": "key.pem", "output_dir": "out"},
        "logging": {"level": "DEBUG"},
    }))

    config = ConfigurationManager().load_config(str(config_file))

    assert config.credentials_path == "creds.enc"
    assert config.private_key_path == "key.pem"
    assert config.output_dir == "out"
    assert config.logging_level == "DEBUG"
    assert config.nerdgraph_endpoint == "https://api.eu.newrelic.com/graphql"


def test_json_file_with_endpoint_override(tmp_path):
    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps({"nerdgraph": {"endpoint": "http://localhost:8080/graphql"}}))

    config = ConfigurationManager().load_config(str(config_file))
    assert config.nerdgraph_endpoint == "http://localhost:8080/graphql"


def test_overrides_take_precedence_and_ignore_none(tmp_path):
    config_file = tmp_path / "config.yaml"
    config_file.write_text("paths:\n  output_dir: from_file\n  credentials: file.enc\n")

    config = ConfigurationManager().load_config(
        str(config_file), overrides={"output_dir": "from_cli", "credentials_path": None}
    )

    assert config.output_dir == "from_cli"
    assert config.credentials_path == "file.enc"


def test_invalid_region_is_rejected(tmp_path):
    config_file = tmp_path / "config.yaml"
    config_file.write_text("nerdgraph:\n  region: APAC\n")

    with pytest.raises(ConfigurationError) as excinfo:
        ConfigurationManager().load_config(str(config_file))
    assert "region" in str(excinfo.value)


def test_missing_and_unsupported_files_are_rejected(tmp_path):
    with pytest.raises(ConfigurationError):
        ConfigurationManager().load_config(str(tmp_path / "absent.yaml"))

    ini_file = tmp_path / "config.ini"
    ini_file.write_text("[paths]\n")
    with pytest.raises(ConfigurationError):
        ConfigurationManager().load_config(str(ini_file))


def test_validate_reports_every_problem():
    errors = BackupConfig(credentials_path="", output_dir="", logging_level="LOUD").validate()
    assert len(errors) == 3


def test_sample_config_loads_back(tmp_path):
    sample = tmp_path / "nested" / "config.yaml"
    manager = ConfigurationManager()
    manager.create_sample_config(str(sample))

    config = manager.load_config(str(sample))
    assert config.region == "US"
    assert config.logging_file_path == "./logs/dashboard-backup.log"
