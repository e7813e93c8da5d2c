# uiquery/cli.py
from __future__ import annotations

"""Command-line interface
------------------------
Inspect the registered selector kinds, view effective config and compile a
locator plus filters into a query. Thin wrapper around the selectors package.
"""

import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import click
import yaml

from uiquery import xpath as X
from uiquery.selectors import Selector, UnknownSelectorKind, UnsupportedFormat, registry
from uiquery.utils.config import SelectorConfig, get_settings
from uiquery.utils.logger import bound, get_logger, set_log_level


# -------- helpers --------


def _echo_json(obj) -> None:
    click.echo(json.dumps(obj, indent=2, ensure_ascii=False))


def _parse_filter(raw: str) -> tuple[str, Any]:
    key, sep, value = raw.partition("=")
    if not sep or not key.strip():
        raise click.BadParameter(f"expected KEY=VALUE, got {raw!r}", param_hint="--filter")
    # YAML scalars so `true`, `3` and `[a, b]` arrive typed
    return key.strip(), yaml.safe_load(value) if value else ""


def _load_filters_file(path: str) -> Dict[str, Any]:
    data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise click.BadParameter("filters file must contain a mapping", param_hint="--filters-file")
    return {str(k): v for k, v in data.items()}


def _render(expression: Any, exact: bool) -> str:
    if isinstance(expression, X.Expression):
        return expression.to_xpath(exact=exact)
    return str(expression)


# -------- CLI root --------


@click.group(context_settings=dict(help_option_names=["-h", "--help"]))
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    default=None,
    help="Override LOG_LEVEL from settings",
)
@click.version_option(package_name="uiquery")
def cli(log_level: Optional[str]):
    # Initialize settings + logger once at process start
    _ = get_settings()
    if log_level:
        set_log_level(log_level.upper())


# -------- commands --------


@cli.command("config")
def cmd_config():
    """Print effective configuration (after .env & env vars)."""
    _echo_json(get_settings().model_dump(mode="json"))


@cli.command("list")
@click.option("--json", "as_json", is_flag=True, default=False, help="Emit JSON instead of text")
def cmd_list(as_json: bool):
    """List registered selector kinds."""
    rows = [
        {
            "name": d.name,
            "label": d.label,
            "formats": sorted(d.expressions),
            "default_format": d.default_format,
            "locator": d.locator_description(),
            "filters": d.filter_names,
            "description": d.description,
        }
        for d in registry
    ]
    if as_json:
        _echo_json(rows)
        return

    click.echo(f"Found {len(rows)} selector kind(s):\n")
    for row in rows:
        filters = ", ".join(row["filters"]) or "-"
        click.echo(f" - {row['name']}  [{'/'.join(row['formats'])}]  filters: {filters}")
        if row["description"]:
            click.echo(f"     {row['description']}")


@cli.command("compile")
@click.argument("kind")
@click.argument("locator", required=False)
@click.option("--format", "fmt", type=click.Choice(["xpath", "css"], case_sensitive=False), default=None)
@click.option("--filter", "filters", multiple=True, metavar="KEY=VALUE", help="Filter option (repeatable)")
@click.option("--filters-file", type=click.Path(dir_okay=False, exists=True), default=None,
              help="YAML mapping of filter options; --filter entries override it")
@click.option("--aria-label/--no-aria-label", default=None, help="Override ENABLE_ARIA_LABEL from settings")
@click.option("--test-id", default=None, help="Override TEST_ID from settings")
@click.option("--fuzzy", is_flag=True, default=False, help="Render text predicates as containment")
def cmd_compile(
    kind: str,
    locator: Optional[str],
    fmt: Optional[str],
    filters: List[str],
    filters_file: Optional[str],
    aria_label: Optional[bool],
    test_id: Optional[str],
    fuzzy: bool,
):
    """
    Compile a selector kind into an XPath expression or CSS selector.

    Examples:
      uiquery compile field Email
      uiquery compile link "Sign in" --filter href=/login
      uiquery compile element input --format css --filter "class=[btn, '!hidden']"
    """
    settings = get_settings()
    log = get_logger(__name__)

    try:
        definition = registry[kind]
    except UnknownSelectorKind as e:
        click.echo(str(e), err=True)
        sys.exit(2)

    if fmt is None and settings.DEFAULT_FORMAT is not None and definition.supports(settings.DEFAULT_FORMAT.value):
        fmt = settings.DEFAULT_FORMAT.value

    options: Dict[str, Any] = _load_filters_file(filters_file) if filters_file else {}
    options.update(_parse_filter(raw) for raw in filters)

    config = SelectorConfig(
        enable_aria_label=settings.ENABLE_ARIA_LABEL if aria_label is None else aria_label,
        test_id=test_id if test_id is not None else settings.TEST_ID,
    )
    selector = Selector(definition, config=config, format=fmt)
    log.debug(f"CLI compile {kind} format={selector.format} options={options}")

    try:
        with bound(kind=kind, format=selector.format):
            expression = selector.compile(locator, **options)
    except UnsupportedFormat as e:
        click.echo(str(e), err=True)
        sys.exit(2)
    except (TypeError, ValueError) as e:
        click.echo(f"ERR {e}", err=True)
        sys.exit(1)

    if expression is None:
        click.echo(f"Selector {kind!r} has no format", err=True)
        sys.exit(1)

    click.echo(_render(expression, exact=settings.EXACT_TEXT and not fuzzy))

    for error in selector.errors:
        click.echo(f"ERR {error}", err=True)
    sys.exit(1 if selector.errors else 0)


def main() -> None:
    cli(prog_name="uiquery")


if __name__ == "__main__":
    main()
