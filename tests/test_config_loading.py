"""Tests for configuration models and the override chain."""

import pytest
import yaml
from pydantic import ValidationError

from mathns import ImportOptions, MathConfig, MathNSConfigError, create, load_config, save_user_config
from mathns.core.config_loader import CONFIG_ENV_VAR, get_config_param
from mathns.core.utils import deep_merge_dicts, load_yaml_file


def write_yaml(path, data):
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path


def test_package_defaults_load():
    config = load_config(force_reload=True)

    assert isinstance(config, MathConfig)
    assert config.epsilon == 1e-12
    assert config.import_defaults == ImportOptions()


def test_user_then_env_then_explicit_override(isolate_config, tmp_path, monkeypatch):
    write_yaml(isolate_config / ".mathns" / "config.yaml", {"precision": 32, "matrix": "Array"})
    env_file = write_yaml(tmp_path / "env.yaml", {"precision": 16})
    explicit = write_yaml(tmp_path / "explicit.yaml", {"import_defaults": {"silent": True}})
    monkeypatch.setenv(CONFIG_ENV_VAR, str(env_file))

    config = load_config(force_reload=True)
    assert config.matrix == "Array"
    assert config.precision == 16

    config = load_config(config_path=explicit)
    assert config.import_defaults.silent is True
    assert config.precision == 16


def test_config_is_cached_until_reload(isolate_config):
    first = load_config()
    assert load_config() is first

    write_yaml(isolate_config / ".mathns" / "config.yaml", {"precision": 8})
    assert load_config().precision == first.precision
    assert load_config(force_reload=True).precision == 8


def test_invalid_config_raises(tmp_path):
    bad = write_yaml(tmp_path / "bad.yaml", {"unknown_key": 1})

    with pytest.raises(MathNSConfigError, match=r"\[502\]"):
        load_config(config_path=bad)


def test_missing_explicit_file_raises(tmp_path):
    with pytest.raises(MathNSConfigError, match=r"\[501\]"):
        load_config(config_path=tmp_path / "missing.yaml")


def test_broken_user_file_is_ignored(isolate_config):
    path = isolate_config / ".mathns" / "config.yaml"
    path.parent.mkdir()
    path.write_text("precision: [unclosed\n")

    assert load_config(force_reload=True).precision == 64


def test_save_user_config_round_trip(isolate_config):
    path = save_user_config(MathConfig(number="BigNumber"))

    assert path == isolate_config / ".mathns" / "config.yaml"
    assert load_yaml_file(path)["number"] == "BigNumber"
    assert load_config().number == "BigNumber"
    assert get_config_param("import_defaults.override") is False
    assert get_config_param("no.such.key", "fallback") == "fallback"


def test_create_loads_config_when_omitted(isolate_config):
    write_yaml(isolate_config / ".mathns" / "config.yaml", {"import_defaults": {"override": True}})

    math = create()
    math.import_({"a": 1})
    math.import_({"a": 2})

    assert math.a == 2


def test_import_options_are_frozen_and_strict():
    options = ImportOptions.from_raw({"wrap": True})
    assert options.wrap is True

    with pytest.raises(ValidationError):
        options.override = True
    with pytest.raises(ValidationError):
        ImportOptions.from_raw({"overide": True})
    assert ImportOptions.from_raw(options) is options


def test_deep_merge_dicts():
    merged = deep_merge_dicts({"a": {"b": 1, "c": 2}, "d": 1}, {"a": {"c": 3}, "e": 4})
    assert merged == {"a": {"b": 1, "c": 3}, "d": 1, "e": 4}
