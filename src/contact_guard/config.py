"""YAML/dict config loader for contact-guard.

Supports loading from a YAML file or a plain dict (for embedding in a
larger application config).

Example YAML:

    contact_guard:
      enabled: true
      min_phone_digits: 10
      allow_list:              # replaces the built-in domains
        - assignx.com
      extra_allow_list:        # added on top
        - cdn.example.org
"""

from __future__ import annotations
from pathlib import Path
from typing import Any

from .detector import ContactDetector, DetectorConfig
from .patterns import DEFAULT_ALLOW_LIST, MIN_PHONE_DIGITS
from .types import DetectionResult


class _NoopDetector:
    """Pass-through detector when contact checks are disabled."""
    def detect(self, text: str) -> DetectionResult:
        return DetectionResult.empty()
    def mask(self, text: str) -> str:
        return text
    def contains_contact(self, text: str) -> bool:
        return False


def load_config(data: dict[str, Any]) -> dict[str, Any]:
    """Normalize a config dict (from YAML or inline)."""
    # Support nested under "contact_guard" key or flat
    if "contact_guard" in data:
        data = data["contact_guard"] or {}

    allow_list = data.get("allow_list")
    domains = set(DEFAULT_ALLOW_LIST if allow_list is None else allow_list)
    domains.update(data.get("extra_allow_list") or [])

    min_digits = data.get("min_phone_digits")
    if min_digits is None:   # key absent or explicit null
        min_digits = MIN_PHONE_DIGITS

    return {
        "enabled": data.get("enabled", True),
        "allow_list": frozenset(domains),
        "min_phone_digits": int(min_digits),
    }


def load_from_yaml(path: str | Path) -> dict[str, Any]:
    """Load config from a YAML file."""
    import yaml  # optional dependency
    with open(path) as f:
        return load_config(yaml.safe_load(f) or {})


def create_detector(config: dict[str, Any]) -> ContactDetector:
    """Create a configured detector from a config dict."""
    cfg = load_config(config)   # idempotent on already-normalized dicts

    if not cfg["enabled"]:
        return _NoopDetector()

    return ContactDetector(DetectorConfig(
        allow_list=cfg["allow_list"],
        min_phone_digits=cfg["min_phone_digits"],
    ))
