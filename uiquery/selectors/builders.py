# uiquery/selectors/builders.py
from __future__ import annotations

"""Expression builders
---------------------
Format-specific helpers that add attribute constraints to an existing
expression. ``XPathBuilder`` works on the XPath expression tree,
``CSSBuilder`` on CSS selector strings. Both accept the same value kinds:

- str (or anything else, stringified): attribute equals value
- compiled regex: attribute contains the literal parts the regex requires
- True / False: attribute present / absent
- list (class only): every class present, ``!name`` entries must be absent
- XPath expression (XPath only): used as a predicate on the attribute
"""

from typing import Any, List, Optional, Pattern, Union
import re

from uiquery import xpath as X
from uiquery.selectors import css as CSS
from uiquery.selectors.regexp_disassembler import RegexpDisassembler


def _is_regexp(value: Any) -> bool:
    return isinstance(value, re.Pattern)


def _as_list(value: Any) -> List[Any]:
    if isinstance(value, (list, tuple, set, frozenset)):
        return list(value)
    return [value]


def _case_sensitive(regexp: Pattern[str]) -> Pattern[str]:
    # CSS keeps the original case and relies on the `i` attribute flag instead
    return re.compile(regexp.pattern, regexp.flags & ~re.IGNORECASE)


class XPathBuilder:
    def __init__(self, expression: Union[X.Expression, str, None] = None):
        self.expression = expression if expression is not None else X.descendant()

    def add_attribute_conditions(self, **conditions: Any) -> Union[X.Expression, str]:
        for name, value in conditions.items():
            cond = self.class_conditions(value) if name == "class" else self.attribute_conditions({name: value})
            if cond is None:
                continue
            if isinstance(self.expression, X.Expression):
                self.expression = self.expression[cond]
            else:
                self.expression = f"({self.expression})[{cond}]"
        return self.expression

    def attribute_conditions(self, attributes: dict) -> Optional[X.Expression]:
        conditions = []
        for attribute, value in attributes.items():
            node = X.attr(attribute)
            if isinstance(value, X.Expression):
                conditions.append(node[value])
            elif _is_regexp(value):
                conditions.append(node[self.regexp_conditions(value)])
            elif value is True:
                conditions.append(node)
            elif value is False or value is None:
                conditions.append(~node)
            else:
                conditions.append(node.equals(str(value)))
        return X.all_of(*conditions)

    def class_conditions(self, classes: Any) -> Optional[X.Expression]:
        if isinstance(classes, X.Expression) or _is_regexp(classes):
            return self.attribute_conditions({"class": classes})
        conditions = []
        for klass in _as_list(classes):
            klass = str(klass)
            if klass.startswith("!"):
                conditions.append(~X.attr("class").contains_word(klass[1:]))
            else:
                conditions.append(X.attr("class").contains_word(klass))
        return X.all_of(*conditions)

    def regexp_conditions(self, regexp: Pattern[str]) -> Optional[X.Expression]:
        disassembler = RegexpDisassembler(regexp)
        condition = X.current()
        if disassembler.casefold:
            condition = condition.uppercase()
        return X.any_of(
            *(X.all_of(*(condition.contains(s) for s in strs)) for strs in disassembler.alternated_substrings())
        )


class CSSBuilder:
    def __init__(self, expression: Optional[str] = None):
        self.expression = expression or ""

    def add_attribute_conditions(self, **attributes: Any) -> str:
        for name, value in attributes.items():
            if name == "class":
                conditions = [self.class_conditions(value)]
            elif _is_regexp(value):
                conditions = self.regexp_conditions(name, value)
            else:
                conditions = [self.attribute_conditions({name: value})]
            conditions = [c for c in conditions if c]
            if not conditions:
                continue
            self.expression = ", ".join(
                ", ".join(sel + cond for cond in conditions) for sel in CSS.split(self.expression)
            )
        return self.expression

    def attribute_conditions(self, attributes: dict) -> str:
        parts = []
        for attribute, value in attributes.items():
            if isinstance(value, X.Expression):
                raise TypeError(
                    f"XPath expressions are not supported for the {attribute!r} filter with CSS based selectors"
                )
            if _is_regexp(value):
                flag = " i" if value.flags & re.IGNORECASE else ""
                parts.extend(
                    f"[{attribute}*='{CSS.escape_attr(s)}'{flag}]"
                    for s in RegexpDisassembler(_case_sensitive(value)).substrings()
                )
            elif value is True:
                parts.append(f"[{attribute}]")
            elif value is False or value is None:
                parts.append(f":not([{attribute}])")
            elif attribute == "id":
                parts.append(f"#{CSS.escape(str(value))}")
            else:
                parts.append(f"[{attribute}='{CSS.escape_attr(str(value))}']")
        return "".join(parts)

    def class_conditions(self, classes: Any) -> str:
        if isinstance(classes, X.Expression):
            raise TypeError("XPath expressions are not supported for the 'class' filter with CSS based selectors")
        if _is_regexp(classes):
            return self.attribute_conditions({"class": classes})
        names = [str(c) for c in _as_list(classes)]
        positive = "".join(f".{CSS.escape(c)}" for c in names if not c.startswith("!"))
        negative = "".join(f":not(.{CSS.escape(c[1:])})" for c in names if c.startswith("!"))
        return positive + negative

    def regexp_conditions(self, name: str, regexp: Pattern[str]) -> List[str]:
        flag = " i" if regexp.flags & re.IGNORECASE else ""
        source = _case_sensitive(regexp)
        return [
            "".join(f"[{name}*='{CSS.escape_attr(s)}'{flag}]" for s in strs)
            for strs in RegexpDisassembler(source).alternated_substrings()
        ]
