"""Loader error carrying the offending file's path."""

from __future__ import annotations

import os
from typing import Iterable

import yaml
from pydantic import ValidationError

MAX_VALIDATION_SNIPPETS = 3


class LoaderError(RuntimeError):
    """Wraps tree-definition load failures with file path context."""

    def __init__(self, file_path: str, message: str, *, cause: Exception | None = None):
        self.file_path = file_path
        self.message = message
        self.cause = cause
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        base = f"{self.message} ({self._display_path(self.file_path)})"
        if isinstance(self.cause, ValidationError):
            return f"{base}: {self._format_validation_errors(self.cause.errors())}"
        if isinstance(self.cause, yaml.MarkedYAMLError) and self.cause.problem_mark is not None:
            mark = self.cause.problem_mark
            return f"{base}: line {mark.line + 1}, column {mark.column + 1}: {self.cause.problem}"
        if self.cause:
            return f"{base}: {self.cause}"
        return base

    @staticmethod
    def _display_path(path: str) -> str:
        if path.startswith("<"):
            return path
        try:
            return os.path.relpath(path)
        except ValueError:  # pragma: no cover - different drive on Windows
            return path

    @staticmethod
    def _format_validation_errors(errors: Iterable[dict]) -> str:
        error_list = list(errors)
        snippets = []
        for err in error_list[:MAX_VALIDATION_SNIPPETS]:
            loc = ".".join(str(entry) for entry in err.get("loc", [])) or "<root>"
            snippets.append(f"{loc}: {err.get('msg') or err.get('type') or 'validation error'}")
        remaining = len(error_list) - len(snippets)
        if remaining > 0:
            snippets.append(f"... ({remaining} more)")
        return "; ".join(snippets)

    def __str__(self) -> str:
        return self._build_message()


__all__ = ["LoaderError"]
