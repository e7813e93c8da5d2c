import os
import textwrap

import lxml.html
import pytest

from uiquery import xpath as X
from uiquery.utils.config import get_settings


PAGE = textwrap.dedent(
    """
    <html><body>
      <a id="home" href="/" data-t="home">Home</a>
      <a id="nohref" data-t="nohref">Anchor only</a>
      <a href="/help" title="Get help" data-t="help"><img alt="Help icon"/></a>
      <a href="/ext" target="_blank" data-t="ext">External</a>

      <input type="submit" id="save" value="Save" data-t="save"/>
      <button id="go" data-t="btn-go">Go now</button>
      <button disabled="disabled" data-t="btn-disabled">Go now</button>
      <input type="image" alt="Search" data-t="img-btn"/>
      <input type="reset" value="Clear" name="clear" data-t="reset"/>

      <form>
        <label for="name-field" data-t="name-label">Name</label>
        <input id="name-field" type="text" name="name" placeholder="Your name" data-t="name-input"/>
        <input type="hidden" name="token" data-t="hidden"/>
        <input type="checkbox" id="agree" value="yes" checked="checked" data-t="agree"/>
        <label data-t="news-label">Newsletter <input type="checkbox" id="news" value="weekly" data-t="newsletter"/></label>
        <input type="radio" name="size" value="s" id="size-s" data-t="size-s"/>
        <label for="size-s">Small</label>
        <textarea id="bio" data-t="bio"></textarea>
        <input type="file" id="avatar" multiple="multiple" data-t="avatar"/>
        <select id="color" data-t="color">
          <option>Red</option>
          <option selected="selected">Green</option>
        </select>
        <select id="empty" data-t="empty-select"><option>Red</option></select>
        <input list="browsers" id="browser" data-t="browser"/>
        <datalist id="browsers">
          <option value="Firefox"></option>
          <option value="Chrome">Chrome</option>
        </datalist>
        <fieldset id="shipping" data-t="shipping"><legend>Shipping</legend></fieldset>
      </form>

      <table id="prices" data-t="prices"><caption>Prices</caption></table>
      <iframe id="frame1" name="embed" data-t="frame1"></iframe>
    </body></html>
    """
)


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch, tmp_path):
    """Isolate every test from UIQUERY_* env vars and any local .env file."""
    for key in list(os.environ):
        if key.startswith("UIQUERY_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def page():
    return lxml.html.fromstring(PAGE)


@pytest.fixture
def found(page):
    """Return the data-t markers of the elements a compiled query selects."""

    def _found(query, exact=True, css=False):
        if css:
            nodes = page.cssselect(query)
        else:
            source = query.to_xpath(exact=exact) if isinstance(query, X.Expression) else query
            nodes = page.xpath(source)
        return {n.get("data-t") for n in nodes}

    return _found
