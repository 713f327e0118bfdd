"""Shared domain error messages and error types."""

from typing import Iterable


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Referenced time entry or invoice does not exist in the expected set."""


class LayoutError(DomainError):
    """Page geometry cannot hold the invoice layout.

    Raised for configuration faults only, never for valid invoice content.
    """


class RenderError(DomainError):
    """Document renderer failed to produce or write the invoice document."""

    def __init__(self, message: str, invoice_number: str | None = None):
        super().__init__(message)
        self.invoice_number = invoice_number


def invoice_not_found(invoice_id: str) -> str:
    """Return message for missing invoice."""
    return f"Invoice {invoice_id} not found"


def entries_not_unbilled(entry_ids: Iterable[str]) -> str:
    """Return message for entries that are unknown or already billed."""
    ids = sorted(entry_ids)
    noun = "entry" if len(ids) == 1 else "entries"
    return f"Time {noun} not unbilled (unknown or already billed): {', '.join(ids)}"


def required_field(field: str) -> str:
    """Return message for a blank required field."""
    return f"{field} is required"


def must_be_positive(field: str, value: object) -> str:
    """Return message for a non-positive quantity."""
    return f"{field} must be greater than zero (got {value})"


def malformed_record(key: str, detail: str) -> str:
    """Return message for persisted data that does not match its schema."""
    return f"Malformed data under '{key}': {detail}"


def render_failed(invoice_number: str, detail: object) -> str:
    """Return message for a renderer failure."""
    return f"Could not render invoice {invoice_number}: {detail}"
