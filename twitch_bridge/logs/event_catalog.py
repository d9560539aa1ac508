"""Human-readable text for logged events, keyed by ``(domain, action)``.

Templates ship as ``event_templates.json`` inside this package and use
``str.format`` placeholders filled from the event's keyword arguments.
"""

from __future__ import annotations

import json
from importlib import resources
from pathlib import Path
from typing import Any

TEMPLATES_RESOURCE = "event_templates.json"

EVENT_TEMPLATES: dict[tuple[str, str], str] = {}


def _flatten(raw: Any) -> dict[tuple[str, str], str]:
    if not isinstance(raw, dict):
        return {}
    return {
        (domain, action): template
        for domain, actions in raw.items()
        if isinstance(domain, str) and isinstance(actions, dict)
        for action, template in actions.items()
        if isinstance(action, str) and isinstance(template, str)
    }


def _read_templates(path: Path | None) -> str:
    if path is not None:
        return path.read_text(encoding="utf-8")
    return resources.files(__package__).joinpath(TEMPLATES_RESOURCE).read_text(encoding="utf-8")


def _load_event_templates(path: Path | None = None) -> dict[tuple[str, str], str]:
    """Load templates from ``path``, or the bundled file when omitted.

    A missing or unreadable file yields a single ``("app", "load_error")``
    entry; the logger then derives text from event names.
    """
    try:
        return _flatten(json.loads(_read_templates(path)))
    except FileNotFoundError:
        return {("app", "load_error"): "Event templates file missing"}
    except (OSError, ValueError) as e:
        return {("app", "load_error"): f"Failed to load event templates: {e}"[:200]}


def reload_event_templates(path: Path | None = None) -> None:
    global EVENT_TEMPLATES  # noqa: PLW0603
    EVENT_TEMPLATES = _load_event_templates(path)


reload_event_templates()

__all__ = ["EVENT_TEMPLATES", "TEMPLATES_RESOURCE", "reload_event_templates"]
