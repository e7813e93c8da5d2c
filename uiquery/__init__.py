# uiquery/__init__.py
"""
uiquery
-------
Compile UI element locators (field labels, link text, ids, ...) into XPath
or CSS queries. Start with:

  from uiquery.selectors import Selector
  Selector("field").compile("Email").to_xpath()
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
