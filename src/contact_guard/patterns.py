"""Static pattern tables for contact detection.

Every table here is built once at import time and never mutated, so a
single detector can be shared freely between threads.  Families are
listed in evaluation order: phone, email, social, URL, obfuscation.
"""

from __future__ import annotations
import re
from typing import Iterable

from .types import ContactCategory, PatternRule, digit_count

_I = re.IGNORECASE

MIN_PHONE_DIGITS = 10

# Platform-owned domains that may be linked freely.  Entries are substrings,
# so supabase is only exempt for its file-storage path, not the whole host.
DEFAULT_ALLOW_LIST: frozenset[str] = frozenset({
    "assignx.com",
    "assignx.in",
    "supabase.co/storage/",
})

# Masking family → replacement token
PLACEHOLDERS: dict[str, str] = {
    "phone": "[PHONE REDACTED]",
    "email": "[EMAIL REDACTED]",
    "social": "[SOCIAL REDACTED]",
    "url": "[URL REDACTED]",
}


def _phone(regex: str) -> PatternRule:
    return PatternRule(ContactCategory.PHONE_NUMBER, re.compile(regex), MIN_PHONE_DIGITS)


# ── Phone ────────────────────────────────────────────────────────────

PHONE_RULES: tuple[PatternRule, ...] = (
    # Plain Indian mobile: 10 digits starting 6-9
    _phone(r"\b[6-9]\d{9}\b"),

    # Same, with an optional +91 / 91 / 0 prefix
    _phone(r"(?<!\w)(?:\+?91[\s\-]?|0)?[6-9]\d{9}\b"),

    # Generic international grouping.  Loose; the digit
    # post-filter throws away dates, prices and order numbers.
    # Known false positive: a date plus hour ("2024-01-15 10:30") has ten
    # digits and is taken as a phone number.
    _phone(
        r"\+?\d{1,4}[\s.\-]?\(?\d{1,4}\)?[\s.\-]?"
        r"\d{1,4}[\s.\-]?\d{1,4}[\s.\-]?\d{1,4}"
    ),

    # Indian mobile grouped as 5-5 or 3-3-4 with spaces/hyphens
    _phone(
        r"(?<!\w)(?:\+?91[\s\-]?)?[6-9]"
        r"(?:\d{4}[\s\-]\d{5}|\d{2}[\s\-]\d{3}[\s\-]\d{4})\b"
    ),
)

# ── Email ────────────────────────────────────────────────────────────

EMAIL_RULE = PatternRule(
    ContactCategory.EMAIL,
    re.compile(r"\b[\w.%+\-]+@[\w.\-]+\.[A-Za-z]{2,}\b", _I),
)

# ── Social media ─────────────────────────────────────────────────────

# "platform: handle" / "platform @handle"
_HANDLE_SEP = r"\s*(?::\s*@?|@)"

SOCIAL_RULES: dict[ContactCategory, tuple[PatternRule, ...]] = {
    ContactCategory.WHATSAPP: tuple(
        PatternRule(ContactCategory.WHATSAPP, re.compile(p, _I)) for p in (
            r"\bwa\.me/\+?\d+",
            r"\bwhats\s?app(?:\s*:\s*|\s+)\+?\d[\d\s\-]{6,}\d",
            r"\bwhats\s?app\b",
        )
    ),
    ContactCategory.TELEGRAM: tuple(
        PatternRule(ContactCategory.TELEGRAM, re.compile(p, _I)) for p in (
            r"\bt\.me/\w+",
            r"\btelegram" + _HANDLE_SEP + r"\w+",
            r"\btelegram\b",
        )
    ),
    ContactCategory.INSTAGRAM: tuple(
        PatternRule(ContactCategory.INSTAGRAM, re.compile(p, _I)) for p in (
            r"\binstagram\.com/[\w.]+",
            r"\b(?:instagram|insta|ig)" + _HANDLE_SEP + r"[\w.]+",
            r"\binsta(?:gram)?\b",
        )
    ),
    ContactCategory.DISCORD: tuple(
        PatternRule(ContactCategory.DISCORD, re.compile(p, _I)) for p in (
            r"\bdiscord(?:\.gg|(?:app)?\.com/invite)/\w+",
            r"\bdiscord" + _HANDLE_SEP + r"[\w.#]+",
            r"\bdiscord\b",
        )
    ),
}

# ── URL ──────────────────────────────────────────────────────────────

# Brackets are excluded so a URL never swallows an earlier placeholder
URL_RULE = PatternRule(
    ContactCategory.WEBSITE,
    re.compile(r"https?://[^\s<>\"'\[\]]+", _I),
)

# ── Obfuscation ──────────────────────────────────────────────────────

_NUMBER_TOKEN = r"(?:zero|one|two|three|four|five|six|seven|eight|nine|\d)"

# "at" / "@" must be spaced or bracketed; a bare "@" belongs to EMAIL_RULE
_AT = r"(?:\s+(?:at|@)\s+|\s*[(\[]\s*(?:at|@)\s*[)\]]\s*)"
_DOT = r"(?:\.|\s+(?:dot|\.)\s+|\s*[(\[]\s*(?:dot|\.)\s*[)\]]\s*)"

# Category is decided per match by classify_obfuscation(); the one stored
# here is only the fallback.
OBFUSCATION_RULES: tuple[PatternRule, ...] = (
    # Seven or more spelled-out / single-digit tokens: "nine 8 seven six ..."
    PatternRule(
        ContactCategory.PHONE_NUMBER,
        re.compile(rf"\b{_NUMBER_TOKEN}(?:\s+{_NUMBER_TOKEN}){{6,}}\b", _I),
    ),
    # "john at gmail dot com", "john [at] gmail.com"
    PatternRule(
        ContactCategory.EMAIL,
        re.compile(rf"\b[\w.+\-]+{_AT}[\w\-]+{_DOT}(?:com|in|org|net)\b", _I),
    ),
)


def classify_obfuscation(text: str) -> ContactCategory:
    """Guess what an obfuscated match is hiding.

    Anything mentioning "at" or "dot" is treated as an email, the rest as
    a phone number.
    """
    lowered = text.lower()
    if "at" in lowered or "dot" in lowered:
        return ContactCategory.EMAIL
    return ContactCategory.PHONE_NUMBER


def is_allow_listed(url: str, allow_list: Iterable[str]) -> bool:
    lowered = url.lower()
    return any(domain.lower() in lowered for domain in allow_list)


_INDIAN_MOBILE = re.compile(r"^(?:91)?[6-9]\d{9}$")


def is_valid_indian_phone(phone: str) -> bool:
    """True for a 10-digit mobile starting 6-9, optionally prefixed by 91."""
    if digit_count(phone) not in (10, 12):
        return False
    return _INDIAN_MOBILE.match("".join(ch for ch in phone if ch.isdigit())) is not None


# ── Evasion ──────────────────────────────────────────────────────────

_ZERO_WIDTH = re.compile("[\u200B-\u200D\uFEFF]")

# Cyrillic / IPA letters that render like Latin ones
LOOKALIKES: dict[str, str] = {
    "\u0430": "a", "\u0435": "e", "\u043E": "o", "\u0440": "p",
    "\u0441": "c", "\u0443": "y", "\u0445": "x",
    "\u0410": "A", "\u0415": "E", "\u041E": "O", "\u0420": "P", "\u0421": "C",
    "\u0251": "a", "\u0261": "g", "\u026F": "m", "\u0280": "r",
}
_LOOKALIKE_TABLE = str.maketrans(LOOKALIKES)

_LATIN = re.compile(r"[A-Za-z]")
_SPACED_DIGITS = re.compile(r"\d\s+\d\s+\d\s+\d\s+\d")
# Only spellings with a digit swapped in; plain "call me" is not evasion
_LEETSPEAK = re.compile(
    r"ph0ne|\bn0\.?\s*:|3-?m[a4]il|c4ll\s*m[e3]|call\s*m3|wh4ts[a4]pp|whats4pp",
    _I,
)


def normalize_for_detection(text: str) -> str:
    """Drop zero-width characters and map look-alike letters to Latin."""
    return _ZERO_WIDTH.sub("", text).translate(_LOOKALIKE_TABLE)


def detect_evasion(text: str) -> bool:
    """True when the raw text shows signs of dodging the pattern tables."""
    if _ZERO_WIDTH.search(text):
        return True
    # look-alikes only count when mixed into Latin text
    if _LATIN.search(text) and any(ch in LOOKALIKES for ch in text):
        return True
    if _SPACED_DIGITS.search(text):
        return True
    return _LEETSPEAK.search(text) is not None
