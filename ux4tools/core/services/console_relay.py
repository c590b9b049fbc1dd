"""
Console relay — flatten browser console arguments into transcript lines.

Each argument of each ``console.*`` call becomes one line:

    - objects and arrays → indented JSON
    - strings starting with ``%c`` lose the marker
    - pure CSS strings (the style half of a ``%c`` pair) are dropped
    - everything else → ``str()``
"""

from __future__ import annotations

import json
import re
from collections.abc import Iterable
from typing import Any

_CSS_RE = re.compile(
    r"^\s*(color|background(-color)?|font(-\w+)?|padding|margin|border(-\w+)?|text-\w+)\s*:",
    re.IGNORECASE,
)


def flatten_console_value(value: Any) -> str | None:
    """One transcript line for a console argument, or None to skip it."""
    if isinstance(value, (dict, list)):
        return json.dumps(value, indent="\t", default=str)
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"

    text = str(value)
    if _CSS_RE.match(text):
        return None
    if text.startswith("%c"):
        text = text[2:]
    return text


def flatten_console_args(values: Iterable[Any]) -> list[str]:
    lines = []
    for value in values:
        line = flatten_console_value(value)
        if line is not None:
            lines.append(line)
    return lines
