"""Chat-send hook — decides whether an outgoing message may go through.

Usage before persisting a message:

    guard = MessageGuard.create()

    decision = guard.check(content)
    if not decision.allowed:
        show_warning(decision.warning)    # "Detected: Phone Number"
        archive(decision.sanitized_text)  # safe to log

Usage for a moderation view over stored messages:

    safe_messages = guard.screen_messages(messages)
"""

from __future__ import annotations
import logging
from dataclasses import dataclass

from .detector import ContactDetector, DetectorConfig
from .patterns import detect_evasion
from .types import DetectionResult, GuardDecision, Severity

logger = logging.getLogger(__name__)

EVASION_WARNING = "Your message appears to contain hidden contact details. Please rephrase."


def severity_for(result: DetectionResult) -> Severity:
    """low: at most one match, medium: 2-3, high: 4 or more."""
    count = len(result.matches)
    if count >= 4:
        return Severity.HIGH
    if count >= 2:
        return Severity.MEDIUM
    return Severity.LOW


@dataclass
class MessageGuard:
    """Blocks chat messages that try to move the conversation off-platform."""

    detector: ContactDetector

    @classmethod
    def create(cls, *, config: DetectorConfig | None = None) -> "MessageGuard":
        return cls(detector=ContactDetector(config))

    def check(self, text: str) -> GuardDecision:
        """Run detection on one outgoing message.

        Signs of evasion block the message even when no pattern matched.
        """
        result = self.detector.detect(text)
        evasion = bool(text) and detect_evasion(text)
        if not result.detected:
            if not evasion:
                return GuardDecision(allowed=True, result=result, sanitized_text=text)
            logger.info("blocked message: evasion without a pattern match")
            return GuardDecision(
                allowed=False,
                result=result,
                warning=EVASION_WARNING,
                severity=Severity.MEDIUM,
                sanitized_text=text,
                evasion_detected=True,
            )

        decision = GuardDecision(
            allowed=False,
            result=result,
            warning=result.describe(),
            severity=severity_for(result),
            sanitized_text=self.detector.mask(text),
            evasion_detected=evasion,
        )
        logger.info(
            "blocked message: severity=%s categories=%s",
            decision.severity.value, [c.value for c in result.categories],
        )
        return decision

    def can_send(self, text: str) -> bool:
        """Quick pattern-only check, e.g. while the user is typing."""
        return not self.detector.detect(text).detected

    def screen_messages(
        self,
        messages: list[dict],
        *,
        content_key: str = "content",
    ) -> list[dict]:
        """Mask contact details in a list of message dicts.

        Text messages come back as new dicts with a ``flagged`` key added;
        anything else is passed through unchanged.  Does NOT mutate the
        originals.
        """
        out: list[dict] = []
        for msg in messages:
            content = msg.get(content_key)
            if isinstance(content, str) and content:
                flagged = self.detector.detect(content).detected
                out.append({**msg, content_key: self.detector.mask(content), "flagged": flagged})
            else:
                out.append(msg)
        return out
