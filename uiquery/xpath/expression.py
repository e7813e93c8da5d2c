# uiquery/xpath/expression.py
from __future__ import annotations

"""XPath expression tree
-----------------------
Small composable node types that render to XPath 1.0 strings.

Nodes are immutable; every operation returns a new node. Boolean logic uses
the bitwise operators (``&`` and, ``|`` or, ``~`` not), ``+`` builds a
node-set union and ``expr[cond]`` adds a predicate. ``None`` conditions are
ignored so optional constraints can be passed straight through.

Text predicates built with :meth:`Expression.is_` are rendered as equality
when ``exact=True`` (the default) and as ``contains()`` otherwise.
"""

import functools
import operator
from typing import Any, Iterable, Optional, Sequence, Union as _U

_LOWER = "abcdefghijklmnopqrstuvwxyz"
_UPPER = _LOWER.upper()

NameArg = _U[str, "Expression"]


def quote(value: str) -> str:
    """Quote a Python string as an XPath 1.0 string literal."""
    if "'" not in value:
        return f"'{value}'"
    if '"' not in value:
        return f'"{value}"'
    pieces = value.split("'")
    quoted = [f"'{piece}'" for piece in pieces]
    return "concat(" + ", \"'\", ".join(quoted) + ")"


def _render_value(value: Any, exact: bool) -> str:
    if isinstance(value, Expression):
        return value.render(exact)
    if isinstance(value, bool):
        return "true()" if value else "false()"
    if isinstance(value, (int, float)):
        return repr(value)
    if isinstance(value, str):
        return quote(value)
    raise TypeError(f"Cannot use {type(value).__name__} value {value!r} in an XPath expression")


def _name_test(names: Sequence[NameArg], exact: bool) -> str:
    if not names:
        return "*"
    if len(names) == 1:
        name = names[0]
        return name.render(exact) if isinstance(name, Expression) else name
    return "*[" + " | ".join(f"self::{n}" for n in names) + "]"


class Expression:
    """Base node. Subclasses implement :meth:`render`."""

    def render(self, exact: bool) -> str:  # pragma: no cover - abstract
        raise NotImplementedError

    def to_xpath(self, exact: bool = True) -> str:
        return self.render(exact)

    def __str__(self) -> str:
        return self.to_xpath()

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.to_xpath()}>"

    # ---------- navigation ----------

    def axis(self, name: str, *names: NameArg) -> "Expression":
        return Step(self, name, names)

    def descendant(self, *names: NameArg) -> "Expression":
        return Step(self, "descendant", names)

    def child(self, *names: NameArg) -> "Expression":
        return Step(self, "child", names)

    def self_axis(self, *names: NameArg) -> "Expression":
        return Step(self, "self", names)

    def attr(self, name: str) -> "Expression":
        return Attribute(self, name)

    def join(self, path: "Expression") -> "Expression":
        """Evaluate the relative `path` from every node this expression selects."""
        return path.relative_to(self)

    def relative_to(self, base: "Expression") -> "Expression":
        return self

    def where(self, *conditions: Any) -> "Expression":
        expr: Expression = self
        for cond in conditions:
            if cond is None:
                continue
            expr = Where(expr, _as_condition(cond))
        return expr

    def __getitem__(self, condition: Any) -> "Expression":
        if isinstance(condition, tuple):
            return self.where(*condition)
        return self.where(condition)

    def union(self, *others: "Expression") -> "Expression":
        return Union(self, *others)

    def __add__(self, other: "Expression") -> "Expression":
        return self.union(other)

    # ---------- string functions ----------

    def string(self) -> "Expression":
        return Function("string", self)

    def normalize_space(self) -> "Expression":
        return Function("normalize-space", self)

    def contains(self, value: Any) -> "Expression":
        return Function("contains", self, value)

    def starts_with(self, value: Any) -> "Expression":
        return Function("starts-with", self, value)

    def ends_with(self, value: Any) -> "Expression":
        # XPath 1.0 has no ends-with()
        tail = Function(
            "substring",
            self,
            Binary(
                "+",
                Binary("-", Function("string-length", self), Function("string-length", value)),
                1,
            ),
        )
        return tail.equals(value)

    def contains_word(self, word: str) -> "Expression":
        padded = Function("concat", " ", Function("normalize-space", self), " ")
        return padded.contains(f" {word} ")

    def uppercase(self) -> "Expression":
        return Function("translate", self, _LOWER, _UPPER)

    def lowercase(self) -> "Expression":
        return Function("translate", self, _UPPER, _LOWER)

    def count(self) -> "Expression":
        return Function("count", self)

    # ---------- comparison / boolean ----------

    def equals(self, value: Any) -> "Expression":
        return Binary("=", self, value)

    def not_equals(self, value: Any) -> "Expression":
        return Binary("!=", self, value)

    def is_(self, value: Any) -> "Expression":
        return Is(self, value)

    def one_of(self, *values: Any) -> "Expression":
        return any_of(*(self.equals(v) for v in values))

    def and_(self, other: Any) -> "Expression":
        return Binary("and", self, other)

    def or_(self, other: Any) -> "Expression":
        return Binary("or", self, other)

    def not_(self) -> "Expression":
        return Function("not", self)

    def __and__(self, other: Any) -> "Expression":
        return self.and_(other)

    def __or__(self, other: Any) -> "Expression":
        return self.or_(other)

    def __invert__(self) -> "Expression":
        return self.not_()


class Current(Expression):
    def render(self, exact: bool) -> str:
        return "."

    def relative_to(self, base: Expression) -> Expression:
        return base


class Raw(Expression):
    """A literal XPath fragment inserted as-is."""

    def __init__(self, source: str):
        self.source = source

    def render(self, exact: bool) -> str:
        return self.source

    def relative_to(self, base: Expression) -> Expression:
        raise TypeError(f"cannot re-root raw XPath {self.source!r} under another expression")


class Anywhere(Expression):
    def __init__(self, names: Sequence[NameArg]):
        self.names = tuple(names)

    def render(self, exact: bool) -> str:
        return "//" + _name_test(self.names, exact)

    def relative_to(self, base: Expression) -> Expression:
        return Step(base, "descendant", self.names)


class Step(Expression):
    def __init__(self, base: Expression, axis: str, names: Sequence[NameArg]):
        self.base = base
        self.axis_name = axis
        self.names = tuple(names)

    def render(self, exact: bool) -> str:
        base = self.base.render(exact)
        test = _name_test(self.names, exact)
        if self.axis_name == "descendant":
            return f"{base}//{test}"
        if self.axis_name == "child":
            return f"{base}/{test}"
        return f"{base}/{self.axis_name}::{test}"

    def relative_to(self, base: Expression) -> Expression:
        return Step(self.base.relative_to(base), self.axis_name, self.names)


class Attribute(Expression):
    def __init__(self, base: Expression, name: str):
        self.base = base
        self.name = name

    def render(self, exact: bool) -> str:
        if isinstance(self.base, Current):
            return f"@{self.name}"
        return f"{self.base.render(exact)}/@{self.name}"

    def relative_to(self, base: Expression) -> Expression:
        return Attribute(self.base.relative_to(base), self.name)


class Where(Expression):
    def __init__(self, base: Expression, condition: Expression):
        self.base = base
        self.condition = condition

    def render(self, exact: bool) -> str:
        return f"{self.base.render(exact)}[{self.condition.render(exact)}]"

    def relative_to(self, base: Expression) -> Expression:
        # predicates keep their own context node
        return Where(self.base.relative_to(base), self.condition)


class Binary(Expression):
    def __init__(self, op: str, left: Any, right: Any):
        self.op = op
        self.left = left
        self.right = right

    def render(self, exact: bool) -> str:
        return f"({_render_value(self.left, exact)} {self.op} {_render_value(self.right, exact)})"


class Function(Expression):
    def __init__(self, name: str, *args: Any):
        self.name = name
        self.args = args

    def render(self, exact: bool) -> str:
        return f"{self.name}(" + ", ".join(_render_value(a, exact) for a in self.args) + ")"


class Is(Expression):
    def __init__(self, left: Any, right: Any):
        self.left = left
        self.right = right

    def render(self, exact: bool) -> str:
        if exact:
            return Binary("=", self.left, self.right).render(exact)
        return Function("contains", self.left, self.right).render(exact)


class Union(Expression):
    """Node-set union. Navigation and predicates apply to every member."""

    def __init__(self, *members: Expression):
        flat: list[Expression] = []
        for m in members:
            flat.extend(m.members if isinstance(m, Union) else (m,))
        self.members = tuple(flat)

    def render(self, exact: bool) -> str:
        if len(self.members) == 1:
            return self.members[0].render(exact)
        return "(" + " | ".join(m.render(exact) for m in self.members) + ")"

    def where(self, *conditions: Any) -> Expression:
        return Union(*(m.where(*conditions) for m in self.members))

    def axis(self, name: str, *names: NameArg) -> Expression:
        return Union(*(m.axis(name, *names) for m in self.members))

    def descendant(self, *names: NameArg) -> Expression:
        return Union(*(m.descendant(*names) for m in self.members))

    def child(self, *names: NameArg) -> Expression:
        return Union(*(m.child(*names) for m in self.members))

    def self_axis(self, *names: NameArg) -> Expression:
        return Union(*(m.self_axis(*names) for m in self.members))

    def attr(self, name: str) -> Expression:
        return Union(*(m.attr(name) for m in self.members))

    def relative_to(self, base: Expression) -> Expression:
        return Union(*(m.relative_to(base) for m in self.members))


def _as_condition(cond: Any) -> Expression:
    if isinstance(cond, Expression):
        return cond
    if isinstance(cond, str):
        return Raw(cond)
    raise TypeError(f"Predicate must be an XPath expression or string, not {type(cond).__name__}")


# ---------- module-level constructors ----------

def current() -> Expression:
    return Current()


def descendant(*names: NameArg) -> Expression:
    return Current().descendant(*names)


def child(*names: NameArg) -> Expression:
    return Current().child(*names)


def axis(name: str, *names: NameArg) -> Expression:
    return Current().axis(name, *names)


def anywhere(*names: NameArg) -> Expression:
    return Anywhere(names)


def attr(name: str) -> Expression:
    return Current().attr(name)


def string() -> Expression:
    return Function("string", Current())


def text() -> Expression:
    return Raw("text()")


def local_name() -> Expression:
    return Function("local-name", Current())


def function(name: str, *args: Any) -> Expression:
    return Function(name, *args)


def raw(source: str) -> Expression:
    return Raw(source)


def union(*members: Expression) -> Expression:
    return Union(*members)


def _reduce(op, conditions: Iterable[Optional[Expression]]) -> Optional[Expression]:
    present = [c for c in conditions if c is not None]
    if not present:
        return None
    return functools.reduce(op, present)


def all_of(*conditions: Optional[Expression]) -> Optional[Expression]:
    """Conjunction of the given conditions; None when nothing constrains."""
    return _reduce(operator.and_, conditions)


def any_of(*conditions: Optional[Expression]) -> Optional[Expression]:
    """Disjunction of the given conditions; None when nothing constrains."""
    return _reduce(operator.or_, conditions)
