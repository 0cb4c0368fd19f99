from __future__ import annotations

from pathlib import Path
import runpy
import sys
import textwrap

import pytest

from campus_transit.config import AppConfig, load_config

SERVE_SCRIPT = Path(__file__).resolve().parents[1] / "scripts" / "serve.py"


VALID_YAML = """
backend:
  request_timeout_seconds: 10
  change_poll_interval_seconds: 3

server:
  host: "127.0.0.1"
  port: 8080
  default_semester: "Fall 2025"

logging:
  level: "INFO"
  log_dir: "logs/"
"""


def _write_yaml(tmp_path, contents: str) -> str:
    path = tmp_path / "config.yaml"
    path.write_text(textwrap.dedent(contents))
    return str(path)


@pytest.fixture(autouse=True)
def backend_env(monkeypatch, tmp_path) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("SUPABASE_URL", "https://example.supabase.co/")
    monkeypatch.setenv("SUPABASE_ANON_KEY", "anon-key")


def test_load_config_valid(tmp_path) -> None:
    path = _write_yaml(tmp_path, VALID_YAML)

    config = load_config(path)

    assert isinstance(config, AppConfig)
    assert config.backend.url == "https://example.supabase.co"
    assert config.backend.api_key == "anon-key"
    assert config.backend.change_poll_interval_seconds == 3
    assert config.server.port == 8080
    assert config.server.default_semester == "Fall 2025"
    assert config.log.level == "INFO"


def test_load_config_missing_url(tmp_path, monkeypatch) -> None:
    path = _write_yaml(tmp_path, VALID_YAML)
    monkeypatch.delenv("SUPABASE_URL")

    with pytest.raises(ValueError, match="SUPABASE_URL"):
        load_config(path)


def test_load_config_blank_key(tmp_path, monkeypatch) -> None:
    path = _write_yaml(tmp_path, VALID_YAML)
    monkeypatch.setenv("SUPABASE_ANON_KEY", "  ")

    with pytest.raises(ValueError, match="SUPABASE_ANON_KEY"):
        load_config(path)


def test_load_config_missing_file(tmp_path) -> None:
    missing_path = tmp_path / "does_not_exist.yaml"

    with pytest.raises(ValueError):
        load_config(str(missing_path))


def test_load_config_missing_server_section(tmp_path) -> None:
    yaml_text = """
    backend:
      request_timeout_seconds: 10
      change_poll_interval_seconds: 3
    logging:
      level: "INFO"
      log_dir: "logs/"
    """
    path = _write_yaml(tmp_path, yaml_text)

    with pytest.raises(ValueError):
        load_config(path)


def test_load_config_missing_poll_interval(tmp_path) -> None:
    yaml_text = """
    backend:
      request_timeout_seconds: 10
    server:
      host: "0.0.0.0"
      port: 8080
      default_semester: "Fall 2025"
    logging:
      level: "INFO"
      log_dir: "logs/"
    """
    path = _write_yaml(tmp_path, yaml_text)

    with pytest.raises(ValueError, match="change_poll_interval_seconds"):
        load_config(path)


def test_serve_exits_when_backend_url_missing(tmp_path, monkeypatch) -> None:
    path = _write_yaml(tmp_path, VALID_YAML)
    monkeypatch.delenv("SUPABASE_URL")
    monkeypatch.setattr(sys, "argv", ["serve.py", "--config", path])
    main = runpy.run_path(str(SERVE_SCRIPT))["main"]

    with pytest.raises(SystemExit, match="SUPABASE_URL"):
        main()
