"""Command-line entry point for sending and inspecting email through the adapter."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Sequence

from .client import Resend
from .config import Settings
from .models import ApiResponse
from .utils import iso_to_epoch
from .webhooks import parse_webhook_body


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Resend-compatible email commands backed by Nylas.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    send = subparsers.add_parser("send", help="Send an email")
    send.add_argument("--from", dest="from_", required=True, help='Sender, e.g. "Name <you@example.com>"')
    send.add_argument("--to", action="append", required=True, help="Recipient (repeatable)")
    send.add_argument("--subject", required=True)
    send.add_argument("--text", help="Plain text body")
    send.add_argument("--html", help="HTML body (wins over --text)")
    send.add_argument("--cc", action="append")
    send.add_argument("--bcc", action="append")
    send.add_argument("--reply-to", action="append")
    send.add_argument("--scheduled-at", type=parse_scheduled_at, help="ISO8601 send time")

    get = subparsers.add_parser("get", help="Fetch one email by id")
    get.add_argument("email_id")

    list_ = subparsers.add_parser("list", help="List recent emails")
    list_.add_argument("--limit", type=int, help="Maximum number of emails to return")

    webhook = subparsers.add_parser("webhook", help="Convert a saved Nylas webhook body")
    webhook.add_argument("file", help="Path to the JSON body, or '-' for stdin")
    return parser


def parse_scheduled_at(value: str) -> str:
    if iso_to_epoch(value) is None:
        raise argparse.ArgumentTypeError(f"Invalid ISO timestamp: {value}")
    return value


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def build_send_payload(args: argparse.Namespace) -> dict:
    payload = {"from": args.from_, "to": args.to, "subject": args.subject}
    optional = {
        "text": args.text,
        "html": args.html,
        "cc": args.cc,
        "bcc": args.bcc,
        "replyTo": args.reply_to,
        "scheduledAt": args.scheduled_at,
    }
    payload.update({key: value for key, value in optional.items() if value})
    return payload


def _emit(result: ApiResponse) -> int:
    print(json.dumps(result.to_dict(), indent=2))
    if result.error is not None:
        logging.error("Request failed: %s (%s)", result.error.message, result.error.name)
        return 1
    return 0


def run_webhook(path: str) -> int:
    if path == "-":
        body = sys.stdin.read()
    else:
        with open(path, "rb") as handle:
            body = handle.read()

    event = parse_webhook_body(body)
    if event is None:
        logging.info("Webhook ignored: not a message.created delivery")
        return 0
    print(json.dumps(event.to_dict(), indent=2))
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "webhook":
        configure_logging("INFO")
        return run_webhook(args.file)

    settings = Settings()
    configure_logging(settings.log_level)
    resend = Resend(settings)

    if args.command == "send":
        return _emit(resend.emails.send(build_send_payload(args)))
    if args.command == "get":
        return _emit(resend.emails.get(args.email_id))
    return _emit(resend.emails.list(limit=args.limit))


if __name__ == "__main__":
    sys.exit(main())
