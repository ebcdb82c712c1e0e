"""CLI interface for contact-guard — for moderation scripts and hooks.

Usage:
    # Check a message (stdin: text, stdout: JSON result)
    echo 'call me at 9876543210' | python -m contact_guard.cli detect

    # Redact a message (stdin: text, stdout: masked text)
    echo 'mail john@acme.com' | python -m contact_guard.cli mask

    # Screen stored chat messages (stdin: JSON array, stdout: JSON array)
    echo '[{"sender":"u1","content":"t.me/john"}]' | \
        python -m contact_guard.cli screen
"""

from __future__ import annotations
import argparse
import json
import logging
import sys

from .config import create_detector, load_config, load_from_yaml
from .middleware import MessageGuard


def _build_detector(args: argparse.Namespace):
    try:
        cfg = load_from_yaml(args.config) if args.config else load_config({})
        if args.allow_list:
            cfg["allow_list"] = cfg["allow_list"] | {d for d in args.allow_list.split(",") if d}
        if args.min_phone_digits is not None:
            cfg["min_phone_digits"] = args.min_phone_digits
        return create_detector(cfg)
    except (OSError, TypeError, ValueError) as exc:
        args.parser.error(f"bad config: {exc}")


def cmd_detect(args: argparse.Namespace) -> None:
    """Report contact details found in stdin text."""
    detector = _build_detector(args)
    result = detector.detect(sys.stdin.read())

    output = {**result.to_dict(), "labels": result.labels}
    json.dump(output, sys.stdout, ensure_ascii=False)
    sys.stdout.write("\n")


def cmd_mask(args: argparse.Namespace) -> None:
    """Redact contact details in stdin text."""
    detector = _build_detector(args)
    sys.stdout.write(detector.mask(sys.stdin.read()))


def cmd_screen(args: argparse.Namespace) -> None:
    """Mask a JSON array of message dicts from stdin."""
    guard = MessageGuard(detector=_build_detector(args))
    try:
        messages = json.loads(sys.stdin.read())
    except json.JSONDecodeError as exc:
        args.parser.error(f"screen expects a JSON array on stdin: {exc}")
    if not isinstance(messages, list):
        args.parser.error("screen expects a JSON array on stdin")

    screened = guard.screen_messages(messages, content_key=args.content_key)
    json.dump(screened, sys.stdout, ensure_ascii=False)
    sys.stdout.write("\n")


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="contact_guard",
        description="Detect and redact off-platform contact details in chat messages",
    )
    parser.add_argument("--config", default=None, help="YAML config file")
    parser.add_argument("--allow-list", default="", help="Comma-separated extra allow-listed domains")
    parser.add_argument("--min-phone-digits", type=int, default=None, help="Minimum digits for a phone match")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging on stderr")

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("detect", help="Detect contact details (text stdin)")
    sub.add_parser("mask", help="Redact contact details (text stdin)")
    screen = sub.add_parser("screen", help="Screen chat messages (JSON stdin)")
    screen.add_argument("--content-key", default="content", help="Message field holding the text")

    args = parser.parse_args(argv)
    args.parser = parser

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    cmds = {
        "detect": cmd_detect,
        "mask": cmd_mask,
        "screen": cmd_screen,
    }
    cmds[args.command](args)


if __name__ == "__main__":
    main()
