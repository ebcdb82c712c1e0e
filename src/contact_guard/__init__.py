"""Contact Guard — detect and redact off-platform contact sharing in chat."""

from .detector import ContactDetector, DetectorConfig, detect, mask
from .middleware import MessageGuard
from .config import create_detector, load_config, load_from_yaml
from .types import ContactCategory, DetectionResult, GuardDecision, PatternRule, Severity

__all__ = [
    "ContactDetector", "DetectorConfig",
    "detect", "mask",
    "MessageGuard",
    "create_detector", "load_config", "load_from_yaml",
    "ContactCategory", "DetectionResult", "GuardDecision", "PatternRule", "Severity",
]
__version__ = "0.1.0"
