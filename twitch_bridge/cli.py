"""Command-line host that drives a session at a fixed tick rate."""

from __future__ import annotations

import argparse
import logging
import sys
import time
from collections.abc import Callable, Mapping, Sequence

from .config import BridgeConfig, load_config
from .logging_config import LoggerConfigurator
from .logs.logger import logger
from .session import TwitchSession


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="twitch-bridge",
        description="Print chat events from your own Twitch channel.",
    )
    parser.add_argument(
        "--health-check",
        action="store_true",
        help="validate configuration and exit",
    )
    parser.add_argument(
        "--viewers", action="store_true", help="print the viewer count and exit"
    )
    parser.add_argument(
        "--chatters",
        type=int,
        metavar="N",
        help="print N random chatters and exit",
    )
    return parser


def attach_printers(session: TwitchSession) -> None:
    events = session.events
    events.add_message_listener(lambda nick, text: print(f"💬 {nick}: {text}"))
    events.add_subscription_listener(lambda sub, _raw: print(f"⭐ {sub} subscribed"))
    events.add_first_connect_listener(lambda: print("👋 Connected to chat"))
    events.add_disconnect_listener(lambda: print("🔌 Disconnected"))


def run_loop(
    session: TwitchSession,
    tick_rate: float,
    *,
    sleep: Callable[[float], None] = time.sleep,
    clock: Callable[[], float] = time.monotonic,
    max_ticks: int | None = None,
) -> None:
    """Tick ``session`` roughly ``tick_rate`` times per second until interrupted."""
    interval = 1.0 / tick_rate
    last = clock()
    ticks = 0
    while max_ticks is None or ticks < max_ticks:
        now = clock()
        session.tick(now - last)
        last = now
        ticks += 1
        sleep(interval)


def _health_check(environ: Mapping[str, str] | None = None) -> int:
    try:
        config = load_config(environ)
    except ValueError as e:
        logger.log_event("app", "health_failed", level=logging.ERROR, error=str(e))
        return 1
    if not config.access_token:
        logger.log_event(
            "app", "health_failed", level=logging.ERROR, error="no access token"
        )
        return 1
    logger.log_event("app", "health_ok")
    return 0


def main(
    argv: Sequence[str] | None = None,
    session_factory: Callable[..., TwitchSession] | None = None,
) -> int:
    """Entry point. Returns a process exit code."""
    args = build_parser().parse_args(argv)
    LoggerConfigurator({"report_on_exit": not args.health_check}).configure()

    if args.health_check:
        return _health_check()

    try:
        config: BridgeConfig = load_config()
    except ValueError:
        return 1
    if not config.access_token:
        logger.log_event("app", "missing_token", level=logging.ERROR)
        return 1

    logger.log_event("app", "starting")
    session = (session_factory or TwitchSession)(config=config)
    attach_printers(session)
    try:
        if not session.start(config.access_token):
            return 1
        if args.viewers:
            print(f"👀 Viewers: {session.get_viewer_count()}")
            return 0
        if args.chatters is not None:
            for nick in session.get_random_chatters(args.chatters):
                print(nick)
            return 0
        run_loop(session, config.tick_rate)
    except KeyboardInterrupt:
        logger.log_event("app", "interrupted", level=logging.WARNING)
    finally:
        session.stop()
        session.api.close()
        logger.log_event("app", "shutdown")
    return 0


def run() -> None:
    sys.exit(main())
