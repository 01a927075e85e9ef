from pathlib import Path

import pytest
from pydantic import ValidationError

from app.settings import Settings, load_settings


def test_defaults():
    settings = Settings(_env_file=None)
    options = settings.query_options()
    assert (options.fuzziness, options.facet_name, options.facet_field) == (2, "Date", "Date")
    assert settings.port == 8080
    assert settings.static_prefix == "/static"


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("INDEX_DIR", "/srv/archive.idx")
    monkeypatch.setenv("FUZZINESS", "1")
    settings = Settings(_env_file=None)
    assert settings.index_dir == Path("/srv/archive.idx")
    assert settings.query_options().fuzziness == 1


def test_yaml_runtime_overlay(tmp_path):
    cfg = tmp_path / "runtime.yaml"
    cfg.write_text("facet_field: published\nstatic_prefix: archive/\nlog_level: debug\n", encoding="utf-8")
    settings = load_settings(cfg)
    assert settings.facet_field == "published"
    assert settings.static_prefix == "/archive"
    assert settings.log_level == "DEBUG"


def test_missing_runtime_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_settings(tmp_path / "absent.yaml")


def test_root_static_prefix_rejected():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, static_prefix="/")
