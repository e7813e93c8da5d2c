# uiquery/selectors/registry.py
from __future__ import annotations

from typing import Any, Callable, Dict, Iterator, Optional

from uiquery.selectors.definition import Definition
from uiquery.selectors.errors import UnknownSelectorKind
from uiquery.utils.logger import get_logger

log = get_logger(__name__)

Mutation = Callable[[Definition], Any]


class SelectorRegistry:
    """
    Name -> Definition mapping, kept in registration order.

    Not thread-safe: register and update during setup, read afterwards, or
    guard mutations with your own lock.
    """

    def __init__(self) -> None:
        self._definitions: Dict[str, Definition] = {}

    def __contains__(self, name: object) -> bool:
        return str(name) in self._definitions

    def __iter__(self) -> Iterator[Definition]:
        return iter(list(self._definitions.values()))

    def __len__(self) -> int:
        return len(self._definitions)

    def names(self) -> list[str]:
        return list(self._definitions)

    # ---------- mutation ----------

    def add(self, name: str, **options: Any) -> Definition:
        """Create and register a Definition; replaces any existing one with that name."""
        return self.register(Definition(str(name), **options))

    def register(self, definition: Definition) -> Definition:
        if definition.name in self._definitions:
            log.debug(f"Replacing selector definition {definition.name!r}")
        self._definitions[definition.name] = definition
        return definition

    def update(self, name: str, mutation: Optional[Mutation] = None):
        """
        Apply `mutation(definition)` to an existing definition in place.
        Without `mutation`, returns a decorator:

            @registry.update("field")
            def _(definition):
                ...
        """
        definition = self[name]
        if mutation is None:
            def decorator(fn: Mutation) -> Mutation:
                fn(definition)
                return fn
            return decorator
        mutation(definition)
        return definition

    def remove(self, name: str) -> Optional[Definition]:
        return self._definitions.pop(str(name), None)

    # ---------- lookup ----------

    def __getitem__(self, name: str) -> Definition:
        try:
            return self._definitions[str(name)]
        except KeyError:
            raise UnknownSelectorKind(str(name)) from None

    def get(self, name: str) -> Optional[Definition]:
        return self._definitions.get(str(name))

    def for_locator(self, locator: Any) -> Optional[Definition]:
        """First definition (in registration order) that accepts `locator` by shape, or None."""
        for definition in self._definitions.values():
            if definition.match(locator):
                return definition
        return None


# Process-wide default registry; built-in selectors register here on import of uiquery.selectors
registry = SelectorRegistry()
