"""Exception hierarchy and structured error output."""

from __future__ import annotations

import json
import sys


class MarkvaultError(Exception):
    """Base exception for all markvault CLI errors."""

    error_type: str = "markvault_error"
    suggestions: list[str] = []

    def __init__(self, message: str, suggestions: list[str] | None = None) -> None:
        super().__init__(message)
        if suggestions is not None:
            self.suggestions = suggestions


class ConfigError(MarkvaultError):
    """Configuration error (missing config file, invalid setting, etc.)."""

    error_type = "config_error"
    suggestions = [
        "Run `mvault init` to create a config file",
        "Or unset MARKVAULT_CONFIG to use auto-discovery",
    ]


class DocumentNotFoundError(MarkvaultError):
    """Markdown source file does not exist."""

    error_type = "document_not_found"
    suggestions = ["Check the path, or pass `-` to read from stdin"]


class DocumentError(MarkvaultError):
    """Markdown source file exists but cannot be read or decoded."""

    error_type = "document_error"
    suggestions = ["Make sure the file is readable UTF-8 text"]


def output_error(error_type: str, message: str, suggestions: list[str] | None = None, exit_code: int = 1) -> None:
    """Write a structured error to stderr and exit."""
    err: dict[str, dict[str, str | list[str]]] = {"error": {"type": error_type, "message": message}}
    if suggestions:
        err["error"]["suggestions"] = suggestions
    print(json.dumps(err, ensure_ascii=False), file=sys.stderr)
    sys.exit(exit_code)


def output_notice(kind: str, **details: object) -> None:
    """Write a compact single-line JSON notice to stderr (non-fatal)."""
    msg = {"notice": {"kind": kind, **details}}
    print(json.dumps(msg, separators=(",", ":"), ensure_ascii=False), file=sys.stderr)
