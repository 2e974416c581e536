"""Output formatting - table, JSON, JSONL, CSV with field selection."""

from __future__ import annotations

import csv
import io
import json
from typing import Any


def format_json(data: Any, indent: int = 2) -> str:
    """Format data as JSON string."""
    return json.dumps(data, indent=indent, default=str, ensure_ascii=False)


def format_jsonl(items: list[dict[str, Any]]) -> str:
    """Format items as line-delimited JSON (one JSON object per line)."""
    lines = [json.dumps(item, default=str, ensure_ascii=False) for item in items]
    return "\n".join(lines)


def format_csv_str(rows: list[dict[str, Any]], columns: list[str] | None = None) -> str:
    """Format rows as CSV string."""
    if not rows:
        return ""
    cols = columns or list(rows[0].keys())
    buf = io.StringIO()
    writer = csv.DictWriter(buf, fieldnames=cols, extrasaction="ignore")
    writer.writeheader()
    for row in rows:
        writer.writerow({k: row.get(k, "") for k in cols})
    return buf.getvalue()


def format_table(rows: list[dict[str, Any]], columns: list[str] | None = None) -> str:
    """Format rows as a pretty aligned table using rich."""
    if not rows:
        return "No results."
    from rich.console import Console
    from rich.table import Table
    from rich.text import Text

    cols = columns or list(rows[0].keys())
    table = Table(show_header=True, header_style="bold")
    for col in cols:
        table.add_column(col, justify="right" if col == "line" else "left", no_wrap=col != "text")

    for row in rows:
        table.add_row(*[Text(_cell(row.get(c, ""))) for c in cols])

    buf = io.StringIO()
    console = Console(file=buf, force_terminal=False, width=160)
    console.print(table)
    return buf.getvalue()


def _cell(value: Any) -> str:
    if isinstance(value, bool):
        return "x" if value else ""
    return str(value)


def select_fields(data: Any, fields: list[str]) -> Any:
    """Filter output to specified fields only."""
    if isinstance(data, dict):
        return _pick(data, fields)
    if isinstance(data, list):
        return [_pick(item, fields) for item in data]
    return data


def _pick(d: dict[str, Any], fields: list[str]) -> dict[str, Any]:
    return {k: v for k, v in d.items() if k in fields}


def render(
    data: Any,
    fmt: str = "table",
    fields: list[str] | None = None,
    columns: list[str] | None = None,
) -> str:
    """Render data in the specified format."""
    if fields:
        data = select_fields(data, fields)
        if columns:
            columns = [c for c in columns if c in fields]

    rows = data if isinstance(data, list) else [data]
    if fmt == "json":
        return format_json(data)
    elif fmt == "jsonl":
        return format_jsonl(rows)
    elif fmt == "csv":
        return format_csv_str(rows, columns)
    elif fmt == "table":
        return format_table(rows, columns)
    else:
        return format_json(data)
