from __future__ import annotations

import json
import logging
from typing import Any

LOGGER = logging.getLogger(__name__)

UNPARSEABLE_PLACEHOLDER = "None"


def _is_bracketed(text: str) -> bool:
    return text.startswith("[") and text.endswith("]")


def _recover_bracketed(text: str) -> list[str]:
    recovered = text.strip("[]").replace('"', "").strip().strip(",").strip()
    if not recovered:
        return [UNPARSEABLE_PLACEHOLDER]
    if _is_bracketed(recovered):
        return _normalize_text(recovered) or [UNPARSEABLE_PLACEHOLDER]
    return [recovered]


def _normalize_text(value: str) -> list[str]:
    text = value.strip()
    if not text:
        return []
    if not _is_bracketed(text):
        return [text]

    try:
        parsed = json.loads(text)
    except ValueError:
        LOGGER.debug("Recovering malformed list encoding: %r", text)
        return _recover_bracketed(text)

    if not isinstance(parsed, list):
        return _recover_bracketed(text)
    if not parsed:
        return []

    items: list[str] = []
    for element in parsed:
        if isinstance(element, str):
            items.extend(_normalize_text(element))
    return items or [UNPARSEABLE_PLACEHOLDER]


def normalize_list_field(raw: Any) -> list[str]:
    """Coerce a stored list field (array, bare string or JSON-encoded string) to ``list[str]``.

    Items are trimmed and empty items dropped. Malformed bracketed strings
    degrade to a single recovered item, or ``["None"]`` when nothing usable
    remains. Never raises, and re-applying it to its own output is a no-op.
    """
    if raw is None:
        return []
    if isinstance(raw, str):
        return _normalize_text(raw)
    if isinstance(raw, (list, tuple)):
        items: list[str] = []
        for element in raw:
            if isinstance(element, str):
                items.extend(_normalize_text(element))
        return items
    return []
