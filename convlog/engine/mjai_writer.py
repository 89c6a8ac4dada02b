"""mjai writer - one compact JSON object per line."""

import json
import logging
import sys
from typing import Iterable, List

from convlog.engine.event import Event

logger = logging.getLogger(__name__)


def event_to_json(event: Event) -> str:
    return json.dumps(event.to_mjai(), ensure_ascii=False, separators=(",", ":"))


def dumps_events(events: Iterable[Event]) -> str:
    """Serialize events to mjai lines (trailing newline included)."""
    lines: List[str] = [event_to_json(e) for e in events]
    if not lines:
        return ""
    return "\n".join(lines) + "\n"


def write_events(events: Iterable[Event], path: str = "-") -> int:
    """Write events to path ("-" for stdout). Returns the line count."""
    text = dumps_events(events)
    if path == "-":
        sys.stdout.write(text)
    else:
        with open(path, "w", encoding="utf-8") as f:
            f.write(text)
        logger.info("wrote %s", path)
    return text.count("\n")
