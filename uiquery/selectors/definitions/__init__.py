# uiquery/selectors/definitions/__init__.py
"""
Built-in selector kinds
-----------------------
Importing this package registers every built-in kind on the default
registry. Module order is registration order, which decides
`registry.for_locator` ties.
"""

from . import basic, fields, clickable, containers  # noqa: F401

__all__: list[str] = []
