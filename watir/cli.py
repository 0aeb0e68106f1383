# watir/cli.py
from __future__ import annotations

"""Command-line interface
------------------------
Inspect effective settings, show how a selector compiles to a query, and try
a selector against a live page.
"""

import json
import re
import sys
from pathlib import Path
from typing import Any, Optional

import click
import yaml

from watir.container import accessor_names, element_class_for
from watir.exceptions import WatirError
from watir.utils.config import get_settings
from watir.utils.logger import bind, get_logger, set_log_level, unbind

_REGEX_LITERAL = re.compile(r"^/(?P<pattern>.*)/(?P<flags>[imsx]*)$", re.DOTALL)
_FLAGS = {"i": re.IGNORECASE, "m": re.MULTILINE, "s": re.DOTALL, "x": re.VERBOSE}


# -------- helpers --------


def _echo_json(obj) -> None:
    click.echo(json.dumps(obj, indent=2, ensure_ascii=False, default=str))


def _regexify(value: Any) -> Any:
    """Turn "/pattern/flags" strings into compiled regular expressions, recursively."""
    if isinstance(value, str):
        m = _REGEX_LITERAL.match(value)
        if not m:
            return value
        flags = 0
        for f in m.group("flags"):
            flags |= _FLAGS[f]
        return re.compile(m.group("pattern"), flags)
    if isinstance(value, list):
        return [_regexify(v) for v in value]
    return value


def parse_selector(text: str) -> dict:
    """Parse a YAML/JSON flow mapping such as '{id: submit, class: /btn-.*/}'."""
    try:
        data = yaml.safe_load(text) if text.strip() else {}
    except yaml.YAMLError as e:
        raise click.BadParameter(f"not valid YAML: {e}") from e
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise click.BadParameter(f"selector must be a mapping, got {type(data).__name__}")
    return {str(k): _regexify(v) for k, v in data.items()}


def _element_type(value: str):
    try:
        return element_class_for(value)
    except KeyError:
        raise click.BadParameter(f"unknown element type {value!r}; choose from: {', '.join(accessor_names())}")


# -------- CLI root --------


@click.group(context_settings=dict(help_option_names=["-h", "--help"]))
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    default=None,
    help="Override LOG_LEVEL from settings",
)
def cli(log_level: Optional[str]):
    _ = get_settings()
    if log_level:
        set_log_level(log_level.upper())


# -------- commands --------


@cli.command("config")
def cmd_config():
    """Print effective configuration (after .env & env vars)."""
    s = get_settings()
    data = {k: (str(v) if isinstance(v, Path) else v) for k, v in s.model_dump(mode="json").items()}
    _echo_json(data)


@cli.command("xpath")
@click.argument("element_type")
@click.argument("selector", default="{}")
@click.option("--all", "multiple", is_flag=True, default=False, help="Build the query used for a collection")
def cmd_xpath(element_type: str, selector: str, multiple: bool):
    """
    Show how SELECTOR compiles for ELEMENT_TYPE, without a browser.

    Examples:
      watir xpath button '{text: Submit}'
      watir xpath div '{class: [a, b], data_role: /panel/}'
    """
    cls, defaults = _element_type(element_type)
    sel = {**defaults, **parse_selector(selector)}
    try:
        strategy = cls.build_strategy(sel, multiple=multiple)
    except WatirError as e:
        click.echo(f"ERR {e}")
        sys.exit(1)
    _echo_json({
        "how": strategy.how,
        "what": strategy.what,
        "filters": [f.name for f in strategy.filters],
        "index": strategy.index,
    })


@cli.command("locate")
@click.argument("url")
@click.argument("element_type")
@click.argument("selector", default="{}")
@click.option("--browser", "browser_name", type=str, default=None, help="Override WATIR_BROWSER")
@click.option("--timeout", type=float, default=None, help="Seconds to wait for a match (default: WATIR_DEFAULT_TIMEOUT)")
def cmd_locate(url: str, element_type: str, selector: str, browser_name: Optional[str], timeout: Optional[float]):
    """Open URL and list the elements matching SELECTOR."""
    from watir.browser import Browser
    from watir.elements.collection import ElementCollection

    log = get_logger(__name__)
    cls, defaults = _element_type(element_type)
    sel = {**defaults, **parse_selector(selector)}

    bind(command="locate")
    browser = Browser(browser=browser_name)
    try:
        browser.goto(url)
        found = ElementCollection(browser, sel, cls)
        try:
            found.wait_until(lambda c: c.exists, timeout=timeout)
        except WatirError as e:
            log.debug(f"no match: {e}")

        elements = list(found)
        click.echo(f"Found {len(elements)} match(es) for {element_type} {sel!r}")
        for el in elements:
            text = (el.text or "").strip().replace("\n", " ")
            click.echo(f" - [{el.collection_index}] <{el.tag_name}> {type(el).__name__} {text[:60]!r}")
        code = 0 if elements else 1
    finally:
        browser.close()
        unbind("command")
    sys.exit(code)


def main() -> None:
    cli(prog_name="watir")


if __name__ == "__main__":
    main()
