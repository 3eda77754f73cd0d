"""Command line entry point: run an echo peer or send one request."""

from __future__ import annotations

import sys
import asyncio
import logging
import argparse
import dataclasses

import orjson

from duplex.session import Session
from duplex.errors import SessionError
from duplex.echo import run_echo
from duplex.transport import WebSocketBinding
from duplex.runtime import load_settings, configure_logging

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="duplex", description="Duplex request/response sessions over websockets")
    sub = p.add_subparsers(dest="command", required=True)

    echo = sub.add_parser("echo", help="Run an echo peer")
    echo.add_argument("--host", default="127.0.0.1")
    echo.add_argument("--port", type=int, default=8765)

    req = sub.add_parser("request", help="Send one message and print the reply")
    req.add_argument("url", help="ws:// or wss:// URL")
    req.add_argument("message", help="JSON message body")
    req.add_argument("--timeout", type=float, default=None, help="Reply timeout in seconds")
    return p.parse_args(argv)


async def request_once(url: str, message: object, timeout_s: float | None) -> object:
    settings = load_settings()
    session: Session[object] = Session(
        dataclasses.replace(settings.session, url=None, should_reconnect=False),
        binding=WebSocketBinding(settings.transport),
    )
    session.connect(url)
    try:
        return await session.request(message, timeout_s=timeout_s)
    finally:
        session.disconnect()


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging()

    if args.command == "echo":
        try:
            asyncio.run(run_echo(args.host, args.port))
        except KeyboardInterrupt:
            logger.info("echo: stopped")
        return 0

    try:
        message = orjson.loads(args.message)
    except orjson.JSONDecodeError as exc:
        print(f"message is not valid JSON: {exc}", file=sys.stderr)
        return 1
    try:
        reply = asyncio.run(request_once(args.url, message, args.timeout))
    except SessionError as exc:
        print(f"request failed: {exc}", file=sys.stderr)
        return 2
    print(orjson.dumps(reply).decode("utf-8"))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
