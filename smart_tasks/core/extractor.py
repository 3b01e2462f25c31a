"""Extraction of the trailing instruction from a model reply.

The model is asked to end its reply with one flat JSON object. The
instruction is taken to start at the last ``{`` in the reply and to end
where brace depth returns to zero. Everything from that ``{`` onward is
dropped from the text shown to the user, even when it fails to parse.

Since the scan starts at the last ``{``, a wrapped reply such as
``{"action": {"type": ...}}`` resolves to the inner object, and the
``{"action":`` prefix stays in the display text. The ``action`` unwrap in
``parse_action`` only applies to objects decoded elsewhere.
"""

import json
from dataclasses import dataclass, field
from typing import Any

from pydantic import ValidationError

from smart_tasks.prompts.schemas import ACTION_ADAPTER, Action, NoneAction


@dataclass
class ExtractedReply:
    """A model reply split into user-visible text and one action."""
    display_text: str
    action: Action = field(default_factory=NoneAction)


def find_instruction_span(text: str) -> tuple[int, int | None]:
    """Locate the trailing instruction.

    Returns:
        ``(start, end)`` where ``start`` is the index of the last ``{`` (or -1
        when there is none) and ``end`` is the index just past its balancing
        ``}``, or None when the braces never balance.
    """
    start = text.rfind("{")
    if start == -1:
        return -1, None

    depth = 0
    for i in range(start, len(text)):
        char = text[i]
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return start, i + 1
    return start, None


def parse_action(data: Any) -> Action:
    """Normalize a decoded JSON value into an action.

    Tries the object itself first, then one level down under ``action``.
    Anything that matches neither shape is ``none``.
    """
    candidates = [data]
    if isinstance(data, dict) and isinstance(data.get("action"), dict):
        candidates.append(data["action"])

    for candidate in candidates:
        if not isinstance(candidate, dict):
            continue
        try:
            return ACTION_ADAPTER.validate_python(candidate)
        except ValidationError:
            continue
    return NoneAction()


def extract_action(reply: str, logger: Any | None = None) -> ExtractedReply:
    """Split a raw model reply into display text and its trailing action.

    Args:
        reply: Raw reply text from the model.
        logger: Optional logger; parse failures are logged at debug level.
    """
    start, end = find_instruction_span(reply)
    if start == -1:
        return ExtractedReply(display_text=reply)

    display_text = reply[:start].strip()
    if end is None:
        return ExtractedReply(display_text=display_text)

    raw = reply[start:end]
    try:
        data = json.loads(raw, strict=False)
    except json.JSONDecodeError as e:
        if logger is not None:
            logger.debug(f"[EXTRACT] Could not parse instruction {raw!r}: {e}")
        return ExtractedReply(display_text=display_text)

    return ExtractedReply(display_text=display_text, action=parse_action(data))
