"""Structured ``domain_action`` event logging.

Every line carries a fixed-width ``[user#channel]`` column. Outside DEBUG
only the human text follows it; with ``DEBUG=true`` the event name leads
the line and the remaining keyword context trails it.
"""

from __future__ import annotations

import logging
import sys

from ..logging_config import build_formatter, debug_requested

PREFIX_WIDTH = 24
EVENT_WIDTH = 32
CONSOLE_FORMAT = "%(log_color)s%(levelname)-8s%(reset)s %(message)s"


def render_human(
    domain: str, action: str, context: dict[str, object]
) -> tuple[str, bool]:
    """Human text for an event, and whether it had to be derived from the name."""
    # Looked up per call so reload_event_templates() takes effect
    from .event_catalog import EVENT_TEMPLATES

    template = EVENT_TEMPLATES.get((domain, action))
    if template is None:
        return f"{domain.replace('_', ' ')}: {action.replace('_', ' ')}", True
    try:
        return template.format(**context), False
    except (KeyError, IndexError, ValueError):
        return template, False


def format_prefix(user: object = None, channel: object = None) -> str:
    label = user if isinstance(user, str) and user else "system"
    if isinstance(channel, str) and channel:
        label = f"{label}#{channel}"
    return "[" + label.ljust(PREFIX_WIDTH)[:PREFIX_WIDTH] + "]"


def _event_column(event_name: str) -> str:
    if len(event_name) > EVENT_WIDTH:
        return event_name[: EVENT_WIDTH - 1] + "…"
    return event_name.ljust(EVENT_WIDTH)


class BridgeLogger:
    """Event logger writing colored lines to stdout.

    Args:
        name: Underlying ``logging`` logger name.
        log_file: Optional path that also receives every event, uncolored.
        attach_console: Add the stdout handler. When attached the logger
            stops propagating so events are not printed again by the root
            handler that ``LoggerConfigurator`` installs.
    """

    def __init__(
        self,
        name: str = "twitch_bridge",
        log_file: str | None = None,
        *,
        attach_console: bool = True,
    ) -> None:
        self.logger = logging.getLogger(name)
        self.logger.handlers.clear()
        self.logger.setLevel(logging.DEBUG if debug_requested() else logging.INFO)

        if attach_console:
            console = logging.StreamHandler(sys.stdout)
            console.setFormatter(build_formatter(CONSOLE_FORMAT, stream=sys.stdout))
            self.logger.addHandler(console)
            self.logger.propagate = False

        if log_file:
            file_handler = logging.FileHandler(log_file, encoding="utf-8")
            file_handler.setFormatter(
                logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
            )
            self.logger.addHandler(file_handler)

    def set_level(self, level: int) -> None:
        self.logger.setLevel(level)

    def log_event(
        self,
        domain: str,
        action: str,
        level: int = logging.INFO,
        human: str | None = None,
        *,
        exc_info: bool = False,
        **kwargs: object,
    ) -> None:
        """Log the ``domain_action`` event.

        ``user`` and ``channel`` fill the prefix column. The other keyword
        arguments format the catalog template and are listed in DEBUG.
        """
        if not self.logger.isEnabledFor(level):
            return
        prefix = format_prefix(kwargs.pop("user", None), kwargs.pop("channel", None))
        if human is None:
            human, derived = render_human(domain, action, kwargs)
            if derived:
                kwargs["derived"] = True

        event_name = f"{domain}_{action}".lower()
        if debug_requested():
            msg = f"{_event_column(event_name)} {prefix} {human}"
            if kwargs:
                msg += " (" + ", ".join(f"{k}={v}" for k, v in kwargs.items()) + ")"
        else:
            msg = f"{prefix} {human or event_name}"
        self.logger.log(level, msg, exc_info=exc_info)


logger = BridgeLogger()
