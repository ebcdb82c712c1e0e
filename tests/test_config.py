"""Tests for config loading and the CLI."""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

import io
import json

import pytest

from contact_guard import create_detector, load_config, load_from_yaml
from contact_guard.cli import main
from contact_guard.patterns import DEFAULT_ALLOW_LIST


# ── Config ───────────────────────────────────────────────────────────

def test_load_config_defaults():
    cfg = load_config({})
    assert cfg["enabled"] is True
    assert cfg["allow_list"] == DEFAULT_ALLOW_LIST
    assert cfg["min_phone_digits"] == 10


def test_load_config_nested_and_allow_lists():
    cfg = load_config({
        "contact_guard": {
            "allow_list": ["example.org"],
            "extra_allow_list": ["cdn.example.net"],
            "min_phone_digits": 11,
        },
    })
    assert cfg["allow_list"] == frozenset({"example.org", "cdn.example.net"})
    assert cfg["min_phone_digits"] == 11


def test_extra_allow_list_keeps_defaults():
    cfg = load_config({"extra_allow_list": ["example.org"]})
    assert cfg["allow_list"] == DEFAULT_ALLOW_LIST | {"example.org"}


def test_disabled_detector_passes_through():
    detector = create_detector({"contact_guard": {"enabled": False}})
    assert not detector.detect("call me at 9876543210").detected
    assert detector.mask("call me at 9876543210") == "call me at 9876543210"


def test_create_detector_uses_allow_list():
    detector = create_detector({"allow_list": ["example.org"]})
    assert not detector.detect("https://example.org/x").detected
    assert detector.detect("https://assignx.com/x").detected


def test_create_detector_accepts_normalized_config():
    detector = create_detector(load_config({"min_phone_digits": 12}))
    assert not detector.detect("9876543210").detected


def test_load_from_yaml(tmp_path):
    pytest.importorskip("yaml")
    path = tmp_path / "guard.yaml"
    path.write_text(
        "contact_guard:\n"
        "  enabled: true\n"
        "  extra_allow_list:\n"
        "    - example.org\n"
    )
    cfg = load_from_yaml(path)
    assert "example.org" in cfg["allow_list"]
    assert "assignx.com" in cfg["allow_list"]


def test_null_min_phone_digits_uses_default(tmp_path):
    assert load_config({"min_phone_digits": None})["min_phone_digits"] == 10
    pytest.importorskip("yaml")
    path = tmp_path / "guard.yaml"
    path.write_text("contact_guard:\n  min_phone_digits:\n")
    assert load_from_yaml(path)["min_phone_digits"] == 10


# ── CLI ──────────────────────────────────────────────────────────────

def _run(monkeypatch, capsys, argv, stdin):
    monkeypatch.setattr("sys.stdin", io.StringIO(stdin))
    main(argv)
    return capsys.readouterr().out


def test_cli_detect(monkeypatch, capsys):
    out = _run(monkeypatch, capsys, ["detect"], "call me at 9876543210")
    data = json.loads(out)
    assert data["detected"] is True
    assert data["categories"] == ["phone_number"]
    assert data["labels"] == ["Phone Number"]
    assert data["matches"] == ["9876543210"]


def test_cli_mask(monkeypatch, capsys):
    out = _run(monkeypatch, capsys, ["mask"], "call me at 9876543210")
    assert out == "call me at [PHONE REDACTED]"


def test_cli_extra_allow_list(monkeypatch, capsys):
    out = _run(monkeypatch, capsys, ["--allow-list", "evil.com", "detect"], "https://evil.com/x")
    assert json.loads(out)["detected"] is False


def test_cli_screen(monkeypatch, capsys):
    stdin = json.dumps([{"sender": "u1", "body": "join t.me/bob"}])
    out = _run(monkeypatch, capsys, ["screen", "--content-key", "body"], stdin)
    data = json.loads(out)
    assert data == [{"sender": "u1", "body": "join [SOCIAL REDACTED]", "flagged": True}]


def test_cli_screen_rejects_bad_json(monkeypatch, capsys):
    with pytest.raises(SystemExit):
        _run(monkeypatch, capsys, ["screen"], "not json")


def test_cli_rejects_bad_digit_count(monkeypatch, capsys):
    with pytest.raises(SystemExit):
        _run(monkeypatch, capsys, ["--min-phone-digits", "0", "detect"], "hi")


def test_cli_rejects_bad_config_file(monkeypatch, capsys, tmp_path):
    pytest.importorskip("yaml")
    path = tmp_path / "guard.yaml"
    path.write_text("min_phone_digits: [10]\n")
    with pytest.raises(SystemExit):
        _run(monkeypatch, capsys, ["--config", str(path), "detect"], "hi")
    with pytest.raises(SystemExit):
        _run(monkeypatch, capsys, ["--config", str(tmp_path / "missing.yaml"), "detect"], "hi")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
