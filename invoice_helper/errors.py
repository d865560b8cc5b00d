# invoice_helper/errors.py
"""
Error kinds raised by invoice_helper.

All of them derive from ``ValueError`` so callers that already guard against
bad input with ``except ValueError`` keep working. A locator miss is not an
error: it is reported as ``None``.
"""
from __future__ import annotations


class InvalidColumnLabel(ValueError):
    """A column label is empty or contains something other than ASCII letters."""

    def __init__(self, label: object) -> None:
        super().__init__(f"Invalid column label: {label!r}")
        self.label = label


class InvalidAmount(ValueError):
    """A matched amount token does not parse to a finite number."""

    def __init__(self, text: object) -> None:
        super().__init__(f"Invalid amount: {text!r}")
        self.text = text


class MissingInput(ValueError):
    """A required grid, document, column or file was not supplied."""


class DocumentTextError(ValueError):
    """Text could not be extracted from a PDF document."""
