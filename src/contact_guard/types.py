"""Core types."""

from __future__ import annotations
import re
from dataclasses import dataclass
from enum import Enum

_NON_DIGIT = re.compile(r"\D")


def digit_count(text: str) -> int:
    """Number of digits left once every non-digit is stripped."""
    return len(_NON_DIGIT.sub("", text))


class ContactCategory(str, Enum):
    """Kind of off-platform contact a match points at."""
    PHONE_NUMBER = "phone_number"
    EMAIL = "email"
    SOCIAL_MEDIA = "social_media"
    WEBSITE = "website"
    WHATSAPP = "whatsapp"
    TELEGRAM = "telegram"
    INSTAGRAM = "instagram"
    DISCORD = "discord"

    @property
    def label(self) -> str:
        return CATEGORY_LABELS[self]


# Presentation only, never matched on
CATEGORY_LABELS: dict[ContactCategory, str] = {
    ContactCategory.PHONE_NUMBER: "Phone Number",
    ContactCategory.EMAIL: "Email Address",
    ContactCategory.SOCIAL_MEDIA: "Social Media",
    ContactCategory.WEBSITE: "Website",
    ContactCategory.WHATSAPP: "WhatsApp",
    ContactCategory.TELEGRAM: "Telegram",
    ContactCategory.INSTAGRAM: "Instagram",
    ContactCategory.DISCORD: "Discord",
}


@dataclass(frozen=True, slots=True)
class PatternRule:
    """One regex tagged with the category its matches belong to."""
    category: ContactCategory
    pattern: re.Pattern
    min_digits: int | None = None   # phone rules: reject short numeric runs

    def accepts(self, text: str) -> bool:
        if self.min_digits is None:
            return True
        return digit_count(text) >= self.min_digits


@dataclass(frozen=True, slots=True)
class DetectionResult:
    """Outcome of scanning one message."""
    matches: frozenset[str] = frozenset()
    categories: tuple[ContactCategory, ...] = ()   # first-seen order

    @classmethod
    def empty(cls) -> "DetectionResult":
        return cls()

    @property
    def detected(self) -> bool:
        return bool(self.matches)

    @property
    def labels(self) -> list[str]:
        return [c.label for c in self.categories]

    def describe(self) -> str:
        """User-facing summary, e.g. ``Detected: Phone Number, Email Address``."""
        if not self.detected:
            return ""
        return "Detected: " + ", ".join(self.labels)

    def to_dict(self) -> dict:
        return {
            "detected": self.detected,
            "matches": sorted(self.matches),
            "categories": [c.value for c in self.categories],
        }


class Severity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(slots=True)
class GuardDecision:
    """Verdict for an outgoing chat message."""
    allowed: bool
    result: DetectionResult
    warning: str = ""
    severity: Severity = Severity.LOW
    sanitized_text: str = ""    # masked copy for logs/moderators
    evasion_detected: bool = False   # patterns.detect_evasion() fired
