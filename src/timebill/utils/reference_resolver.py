"""Utility for resolving user-typed references to entry and invoice IDs."""

from typing import Iterable

from timebill.domain.entities import Invoice, TimeEntry
from timebill.domain.errors import NotFoundError, ValidationError, invoice_not_found


def _match_prefix(ref: str, ids: Iterable[str]) -> list[str]:
    return [candidate for candidate in ids if candidate.startswith(ref)]


def resolve_entry_ids(entries: Iterable[TimeEntry], refs: Iterable[str]) -> list[str]:
    """Resolve full IDs or unique ID prefixes of unbilled entries.

    Args:
        entries: Unbilled entries to search
        refs: Full IDs or unique prefixes

    Returns:
        Full entry IDs in the order given

    Raises:
        NotFoundError: If a reference matches no entry
        ValidationError: If a prefix matches more than one entry
    """
    ids = [entry.id for entry in entries]
    resolved = []
    for ref in refs:
        ref = ref.strip()
        if ref in ids:
            resolved.append(ref)
            continue
        matches = _match_prefix(ref, ids) if ref else []
        if not matches:
            raise NotFoundError(f"No unbilled time entry matches '{ref}'")
        if len(matches) > 1:
            raise ValidationError(f"'{ref}' matches {len(matches)} time entries; use more characters")
        resolved.append(matches[0])
    return resolved


def resolve_invoice(invoices: Iterable[Invoice], ref: str) -> Invoice:
    """Resolve an invoice by ID, unique ID prefix, or invoice number.

    Raises:
        NotFoundError: If nothing matches
        ValidationError: If the reference is ambiguous
    """
    invoices = list(invoices)
    ref = ref.strip()
    for invoice in invoices:
        if invoice.id == ref:
            return invoice

    by_number = [invoice for invoice in invoices if invoice.number == ref]
    if len(by_number) == 1:
        return by_number[0]
    if len(by_number) > 1:
        raise ValidationError(f"Several invoices are numbered '{ref}'; use the invoice ID")

    matches = [invoice for invoice in invoices if ref and invoice.id.startswith(ref)]
    if len(matches) == 1:
        return matches[0]
    if len(matches) > 1:
        raise ValidationError(f"'{ref}' matches {len(matches)} invoices; use more characters")
    raise NotFoundError(invoice_not_found(ref))
