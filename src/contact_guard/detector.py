"""ContactDetector — the main API.  Flags and redacts off-platform contact details.

Usage:
    from contact_guard import ContactDetector

    detector = ContactDetector()     # reusable, thread-safe after init

    result = detector.detect("call me at 9876543210")
    result.detected                  # True
    result.describe()                # "Detected: Phone Number"

    detector.mask("mail john@acme.com")   # "mail [EMAIL REDACTED]"

Families run in a fixed order (phone → email → social → URL → obfuscation);
that order decides which category is listed first when several apply.
"""

from __future__ import annotations
import logging
import re
from dataclasses import dataclass

from .types import ContactCategory, DetectionResult, PatternRule
from .patterns import (
    DEFAULT_ALLOW_LIST,
    EMAIL_RULE,
    MIN_PHONE_DIGITS,
    OBFUSCATION_RULES,
    PLACEHOLDERS,
    PHONE_RULES,
    SOCIAL_RULES,
    URL_RULE,
    classify_obfuscation,
    is_allow_listed,
    normalize_for_detection,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DetectorConfig:
    """Configuration for the ContactDetector."""
    # Domain substrings exempt from URL matching
    allow_list: frozenset[str] = DEFAULT_ALLOW_LIST
    # Numeric runs with fewer digits are never phone numbers
    min_phone_digits: int = MIN_PHONE_DIGITS

    def __post_init__(self) -> None:
        if self.min_phone_digits < 1:
            raise ValueError(f"min_phone_digits must be positive, got {self.min_phone_digits}")
        object.__setattr__(self, "allow_list", frozenset(self.allow_list))


class ContactDetector:
    """Pattern-based detector for contact sharing in chat messages.

    Holds no state beyond its frozen config; every call is a pure
    function of the input text.
    """

    def __init__(self, config: DetectorConfig | None = None) -> None:
        self.config = config or DetectorConfig()
        if self.config.min_phone_digits == MIN_PHONE_DIGITS:
            self._phone_rules = PHONE_RULES
        else:
            self._phone_rules = tuple(
                PatternRule(r.category, r.pattern, self.config.min_phone_digits)
                for r in PHONE_RULES
            )

    def detect(self, text: str) -> DetectionResult:
        """Scan text and report every contact-sharing match."""
        if not text:
            return DetectionResult.empty()
        text = normalize_for_detection(text)

        matches: set[str] = set()
        categories: dict[ContactCategory, None] = {}   # ordered set

        def record(found: str, category: ContactCategory) -> None:
            matches.add(found)
            categories.setdefault(category, None)

        # --- Phone (digit post-filter) ---
        for rule in self._phone_rules:
            for m in rule.pattern.finditer(text):
                if rule.accepts(m.group()):
                    record(m.group(), rule.category)

        # --- Email ---
        for m in EMAIL_RULE.pattern.finditer(text):
            record(m.group(), EMAIL_RULE.category)

        # --- Social media ---
        for rules in SOCIAL_RULES.values():
            for rule in rules:
                for m in rule.pattern.finditer(text):
                    record(m.group(), rule.category)

        # --- URL (minus allow-listed) ---
        for m in URL_RULE.pattern.finditer(text):
            if is_allow_listed(m.group(), self.config.allow_list):
                continue
            record(m.group(), URL_RULE.category)

        # --- Obfuscation ---
        for rule in OBFUSCATION_RULES:
            for m in rule.pattern.finditer(text):
                record(m.group(), classify_obfuscation(m.group()))

        result = DetectionResult(matches=frozenset(matches), categories=tuple(categories))
        if result.detected:
            logger.debug(
                "contact detection: %d match(es), categories=%s",
                len(result.matches), [c.value for c in result.categories],
            )
        return result

    def mask(self, text: str) -> str:
        """Replace phone, email, social and URL matches with placeholders.

        Obfuscated forms (spelled-out digits, "at"/"dot" emails) are only
        flagged by detect() and are left in place here.

        Zero-width characters and look-alike letters are normalized first;
        when nothing gets masked the original text comes back untouched.
        """
        if not text:
            return text

        normalized = normalize_for_detection(text)
        result = normalized
        for rule in self._phone_rules:
            result = rule.pattern.sub(_phone_replacer(rule), result)

        result = EMAIL_RULE.pattern.sub(PLACEHOLDERS["email"], result)

        for rules in SOCIAL_RULES.values():
            for rule in rules:
                result = rule.pattern.sub(PLACEHOLDERS["social"], result)

        allow_list = self.config.allow_list
        result = URL_RULE.pattern.sub(
            lambda m: m.group() if is_allow_listed(m.group(), allow_list) else PLACEHOLDERS["url"],
            result,
        )

        if result == normalized:
            return text
        logger.debug("masked contact details (%d -> %d chars)", len(text), len(result))
        return result

    def contains_contact(self, text: str) -> bool:
        return self.detect(text).detected


def _phone_replacer(rule: PatternRule):
    def replace(m: re.Match) -> str:
        return PLACEHOLDERS["phone"] if rule.accepts(m.group()) else m.group()
    return replace


# Process-wide default; safe to share since nothing on it mutates
_default = ContactDetector()


def detect(text: str) -> DetectionResult:
    """detect() on the default detector."""
    return _default.detect(text)


def mask(text: str) -> str:
    """mask() on the default detector."""
    return _default.mask(text)
