"""CLI entry point for markvault (mvault) — render flat markdown notes to HTML."""

from __future__ import annotations

import functools
import json
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable

    from markvault.config import Settings

import click

from markvault.blocks import has_unterminated_fence
from markvault.config import find_config, load_settings, xdg_config_path
from markvault.errors import (
    ConfigError,
    DocumentError,
    DocumentNotFoundError,
    MarkvaultError,
    output_error,
    output_notice,
)
from markvault.markup import render, render_document
from markvault.output import render as render_output
from markvault.tasks import find_tasks, make_toggle_handler

# ---------------------------------------------------------------------------
# Shared output options decorator
# ---------------------------------------------------------------------------


def output_options(f: Callable[..., Any]) -> Callable[..., Any]:
    """Shared decorator that adds --format, --json, --fields to a command."""

    @click.option(
        "--format", "fmt", type=click.Choice(["table", "json", "jsonl", "csv"]), default="table", help="Output format."
    )
    @click.option("--json", "json_flag", is_flag=True, help="Shortcut for --format json.")
    @click.option("--fields", "fields_str", default=None, help="Comma-separated field list.")
    @functools.wraps(f)
    def wrapper(*args: Any, fmt: str, json_flag: bool, fields_str: str | None, **kwargs: Any) -> Any:
        if json_flag:
            fmt = "json"
        fields = [s.strip() for s in fields_str.split(",")] if fields_str else None
        kwargs["fmt"] = fmt
        kwargs["fields"] = fields
        return f(*args, **kwargs)

    return wrapper


# ---------------------------------------------------------------------------
# Document I/O helpers
# ---------------------------------------------------------------------------


def _read_source(file: str) -> str:
    """Read markdown from a path, or from stdin when *file* is ``-``."""
    if file == "-":
        return click.get_text_stream("stdin").read()
    path = Path(file)
    if not path.is_file():
        raise DocumentNotFoundError(f"No such markdown file: {file}")
    try:
        # newline="" keeps "\r" and "\r\n" so line indices match the raw source
        with open(path, encoding="utf-8", newline="") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise DocumentError(f"Cannot read {file}: {e}") from e


def _read_stylesheet(path: Path) -> str:
    """Read the configured export stylesheet."""
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(
            f"Cannot read stylesheet {path}: {e}",
            suggestions=["Fix the stylesheet path or remove it to use the built-in print style"],
        ) from e


def _write_output(text: str, output: str | None) -> None:
    """Write rendered text to a file, or to stdout when no path is given."""
    if output is None:
        click.echo(text, nl=False)
        return
    try:
        Path(output).write_text(text, encoding="utf-8")
    except OSError as e:
        raise DocumentError(f"Cannot write {output}: {e}") from e


def _warn_unterminated_fence(source: str, settings: Settings) -> None:
    """Emit a stderr notice when a code fence is left open at end of input."""
    if has_unterminated_fence(source.split("\n")):
        output_notice("unterminated_fence", policy=settings.unterminated_fence)


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
def cli() -> None:
    """markvault (mvault) — flat markdown to HTML, with task checkbox patching."""


# ---------------------------------------------------------------------------
# usage
# ---------------------------------------------------------------------------


@cli.command()
def usage() -> None:
    """Self-documentation for scripts and agents."""
    text = f"""# mvault — Markdown to HTML CLI

## Commands

### Setup
- `mvault init [--force]`
  Create config at ~/.config/markvault/config.toml.
  --force overwrites an existing file.

### Rendering
- `mvault render [FILE] [-o OUT]`
  Render FILE (or stdin when FILE is omitted or `-`) to an HTML fragment.

- `mvault export FILE [--title TEXT] [-o OUT]`
  Standalone printable HTML page. Title defaults to the file name stem.

### Tasks
- `mvault tasks list FILE [--json] [--format table|json|jsonl|csv] [--fields a,b]`
  List `- [ ]` / `- [x]` items with their zero-based line index.

- `mvault tasks toggle FILE LINE [--checked|--unchecked]`
  Set (or flip, when neither flag is given) the task on LINE and save FILE.
  A LINE that is not a task item leaves the file untouched ("changed": false).

## Supported syntax
- `#`..`######` headings, `> ` quotes (one line each)
- `- ` bullets, `1. ` numbered items, `- [ ]` / `- [x]` tasks (no nesting)
- ``` fences (content copied verbatim)
- `**bold**`, `*italic*`, `code`, `![alt](src)`, `[text](href)`

## Config
  File: {_config_file_path()}
  Keys: unterminated_fence = "flush" | "drop", stylesheet = "path/to/print.css"
"""
    click.echo(text)


def _config_file_path() -> str:
    """Return the resolved config file path for display."""
    try:
        found = find_config()
    except MarkvaultError as e:
        return f"(error: {e})"
    if found:
        return str(found)
    return "(not found — run `mvault init` to create)"


# ---------------------------------------------------------------------------
# init
# ---------------------------------------------------------------------------

_CONFIG_TEMPLATE = """\
# markvault configuration

# What to do with a code fence that is never closed:
#   "flush" renders it as a code block, "drop" discards its content.
unterminated_fence = "{policy}"

# Custom CSS for `mvault export` (defaults to the built-in print style)
# stylesheet = "~/notes/print.css"
"""


@cli.command()
@click.option("--force", is_flag=True, help="Overwrite existing config file.")
def init(force: bool) -> None:
    """Create a config file at ~/.config/markvault/config.toml."""
    target = xdg_config_path()

    if target.exists() and not force:
        click.echo(f"Config already exists: {target}")
        click.echo("Use --force to overwrite.")
        raise SystemExit(1)

    policy = click.prompt(
        "Unterminated code fence policy",
        type=click.Choice(["flush", "drop"]),
        default="flush",
    )

    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(_CONFIG_TEMPLATE.format(policy=policy))

    click.echo(f"Config written to {target}")
    click.echo("Run `mvault usage` to see the available commands.")


# ---------------------------------------------------------------------------
# render / export
# ---------------------------------------------------------------------------


@cli.command("render")
@click.argument("file", default="-")
@click.option("-o", "--output", default=None, help="Write HTML to this path instead of stdout.")
def render_cmd(file: str, output: str | None) -> None:
    """Render a markdown file to an HTML fragment."""
    try:
        settings = load_settings()
        source = _read_source(file)
        _warn_unterminated_fence(source, settings)
        _write_output(render(source, unterminated_fence=settings.unterminated_fence), output)
    except MarkvaultError as e:
        output_error(e.error_type, str(e), e.suggestions)


@cli.command()
@click.argument("file")
@click.option("--title", default=None, help="Document title (default: file name stem).")
@click.option("-o", "--output", default=None, help="Write HTML to this path instead of stdout.")
def export(file: str, title: str | None, output: str | None) -> None:
    """Export a markdown file as a standalone, printable HTML page."""
    try:
        settings = load_settings()
        source = _read_source(file)
        _warn_unterminated_fence(source, settings)
        stylesheet = _read_stylesheet(settings.stylesheet) if settings.stylesheet else None
        page = render_document(
            source,
            title or (Path(file).stem if file != "-" else "Untitled"),
            stylesheet=stylesheet,
            unterminated_fence=settings.unterminated_fence,
        )
        _write_output(page, output)
    except MarkvaultError as e:
        output_error(e.error_type, str(e), e.suggestions)


# ---------------------------------------------------------------------------
# tasks
# ---------------------------------------------------------------------------

TASK_COLUMNS = ["line", "checked", "text"]


@cli.group()
def tasks() -> None:
    """Inspect and toggle task-list items."""


@tasks.command("list")
@click.argument("file")
@output_options
def tasks_list(file: str, fmt: str, fields: list[str] | None) -> None:
    """List task items with their source line index."""
    try:
        source = _read_source(file)
        data = [t.model_dump() for t in find_tasks(source)]
        click.echo(render_output(data, fmt=fmt, fields=fields, columns=TASK_COLUMNS))
    except MarkvaultError as e:
        output_error(e.error_type, str(e), e.suggestions)


@tasks.command("toggle")
@click.argument("file")
@click.argument("line", type=click.IntRange(min=0))
@click.option("--checked/--unchecked", "checked", default=None, help="New state (default: flip the current one).")
def tasks_toggle(file: str, line: int, checked: bool | None) -> None:
    """Set the checkbox on LINE (zero-based) and save FILE."""
    try:
        if file == "-":
            raise DocumentError("tasks toggle needs a file path, not stdin")
        path = Path(file)
        source = _read_source(file)

        if checked is None:
            current = {t.line: t.checked for t in find_tasks(source)}
            checked = not current.get(line, True)

        def save(patched: str) -> None:
            try:
                with open(path, "w", encoding="utf-8", newline="") as f:
                    f.write(patched)
            except OSError as e:
                raise DocumentError(f"Cannot write {file}: {e}") from e

        handler = make_toggle_handler(lambda: source, save)
        result = handler(line, checked)
        if not result.changed:
            output_notice("toggle_skipped", line=line, checked=checked)
        click.echo(json.dumps(result.model_dump(), indent=2, ensure_ascii=False))
    except MarkvaultError as e:
        output_error(e.error_type, str(e), e.suggestions)
