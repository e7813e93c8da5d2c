# uiquery/selectors/css.py
from __future__ import annotations

import re
from typing import List

_IDENT_CHAR = re.compile(r"[a-zA-Z0-9_\-]|[^\x00-\x7f]")
_NMSTART = re.compile(r"[_a-zA-Z]|[^\x00-\x7f]")


def _escape_char(char: str) -> str:
    if re.match(r"[ -/:-~]", char):
        return "\\" + char
    # hex escape needs a trailing space so following hex digits are not absorbed
    return f"\\{ord(char):x} "


def escape(value: str) -> str:
    """Escape a string for use as a CSS identifier (id or class name)."""
    if not value:
        return value
    out = []
    rest = value
    if rest[0] in "-_":
        out.append(rest[0])
        rest = rest[1:]
    if rest:
        first, rest = rest[0], rest[1:]
        out.append(first if _NMSTART.match(first) else _escape_char(first))
    out.extend(c if _IDENT_CHAR.match(c) else _escape_char(c) for c in rest)
    return "".join(out)


def escape_attr(value: str) -> str:
    """Escape a string for use inside a single-quoted CSS attribute value."""
    return value.replace("\\", "\\\\").replace("'", "\\'")


def split(css: str) -> List[str]:
    """
    Split a selector list on its top-level commas.
    Commas inside quotes, brackets or parentheses do not split.
    """
    selectors: List[str] = []
    current: List[str] = []
    depth = 0
    quote = None
    escaped = False

    for ch in css:
        if escaped:
            current.append(ch)
            escaped = False
            continue
        if ch == "\\":
            current.append(ch)
            escaped = True
            continue
        if quote:
            if ch == quote:
                quote = None
            current.append(ch)
            continue
        if ch in "'\"":
            quote = ch
        elif ch in "([":
            depth += 1
        elif ch in ")]":
            depth = max(0, depth - 1)
        elif ch == "," and depth == 0:
            selectors.append("".join(current).strip())
            current = []
            continue
        current.append(ch)

    selectors.append("".join(current).strip())
    return selectors
