# uiquery/selectors/regexp_disassembler.py
from __future__ import annotations

"""Regex disassembly
-------------------
Neither CSS nor XPath 1.0 can evaluate a regular expression, so a regex value
is approximated by the literal substrings every match must contain. The
result is a superset filter; exact regex matching is left to whoever runs the
query.
"""

import re
import unicodedata
from typing import List, Pattern, Union

_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "f": "\f", "v": "\v"}
_CLASS_ESCAPES = set("dDwWsSbBAZzGxuUpP")
_HEX_WIDTH = {"x": 2, "u": 4, "U": 8}


class RegexpDisassembler:
    def __init__(self, regexp: Union[Pattern[str], str]):
        if isinstance(regexp, str):
            regexp = re.compile(regexp)
        self.regexp = regexp

    @property
    def casefold(self) -> bool:
        return bool(self.regexp.flags & re.IGNORECASE)

    def alternated_substrings(self) -> List[List[str]]:
        """
        Literal substrings required by each top-level alternative.
        Empty when some alternative has no required literal (nothing can be
        filtered without losing matches).
        """
        if self.regexp.flags & re.VERBOSE:
            return []
        alternatives = [self._required_literals(a) for a in _split_alternatives(self.regexp.pattern)]
        if any(not strs for strs in alternatives):
            return []
        return alternatives

    def substrings(self) -> List[str]:
        """Literal substrings required when the regex has no top-level alternation."""
        alternated = self.alternated_substrings()
        if len(alternated) != 1:
            return []
        return alternated[0]

    def _required_literals(self, source: str) -> List[str]:
        runs: List[str] = []
        run: List[str] = []

        def flush() -> None:
            if run:
                runs.append("".join(run))
                run.clear()

        i = 0
        n = len(source)
        while i < n:
            ch = source[i]
            literal = None
            start = i
            if ch == "\\" and i + 1 < n:
                nxt = source[i + 1]
                i += 2
                if nxt == "N" and i < n and source[i] == "{":
                    end = source.index("}", i)
                    literal = unicodedata.lookup(source[i + 1 : end])
                    i = end + 1
                elif nxt.isdigit():
                    # backreference or octal escape, up to three digits
                    while i < n and source[i].isdigit() and i - start < 4:
                        i += 1
                    flush()
                elif nxt in _CLASS_ESCAPES:
                    i += _HEX_WIDTH.get(nxt, 0)
                    flush()
                else:
                    literal = _ESCAPES.get(nxt, nxt)
            elif ch == "[":
                i = _skip_class(source, i)
                flush()
            elif ch == "(":
                i = _skip_group(source, i)
                flush()
            elif ch in ".^$":
                i += 1
                flush()
            else:
                literal = ch
                i += 1

            if literal is not None and self.casefold and not literal.isascii():
                # translate() only folds ASCII letters
                literal = None
                flush()

            i, min_zero, repeated = _read_quantifier(source, i)
            if literal is not None:
                if min_zero:
                    flush()
                    continue
                run.append(literal)
                if repeated:
                    flush()
            elif min_zero or repeated:
                flush()

        flush()
        if self.casefold:
            return [r.upper() for r in runs]
        return runs


def _split_alternatives(source: str) -> List[str]:
    parts: List[str] = []
    start = 0
    depth = 0
    i = 0
    in_class = False
    while i < len(source):
        ch = source[i]
        if ch == "\\":
            i += 2
            continue
        if in_class:
            if ch == "]":
                in_class = False
        elif ch == "[":
            in_class = True
        elif ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
        elif ch == "|" and depth == 0:
            parts.append(source[start:i])
            start = i + 1
        i += 1
    parts.append(source[start:])
    return parts


def _skip_class(source: str, i: int) -> int:
    i += 1
    if i < len(source) and source[i] == "^":
        i += 1
    if i < len(source) and source[i] == "]":
        i += 1
    while i < len(source) and source[i] != "]":
        i += 2 if source[i] == "\\" else 1
    return i + 1


def _skip_group(source: str, i: int) -> int:
    depth = 0
    while i < len(source):
        ch = source[i]
        if ch == "\\":
            i += 2
            continue
        if ch == "[":
            i = _skip_class(source, i)
            continue
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
            if depth == 0:
                return i + 1
        i += 1
    return i


def _read_quantifier(source: str, i: int):
    """Return (next index, allows zero repetitions, allows several repetitions)."""
    if i >= len(source):
        return i, False, False
    ch = source[i]
    if ch in "*?+":
        i += 1
        if i < len(source) and source[i] in "?+":
            i += 1  # lazy / possessive
        return i, ch in "*?", ch in "*+"
    if ch == "{":
        m = re.match(r"\{(\d*)(,?)(\d*)\}", source[i:])
        if m:
            i += m.end()
            if i < len(source) and source[i] in "?+":
                i += 1
            low = int(m.group(1) or 0)
            high = m.group(3)
            repeated = bool(m.group(2)) and (not high or int(high) > 1) or (not m.group(2) and low > 1)
            return i, low == 0, repeated
    return i, False, False
