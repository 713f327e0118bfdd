"""Billing ledger domain service.

The ledger owns the unbilled time entries and the invoice collection. A time
entry moves from the unbilled set into exactly one invoice, and both
collections are committed together so the move is never half applied.
"""

import logging
import threading
import uuid
from dataclasses import replace
from datetime import date, datetime, time, UTC
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from timebill.database.base import Store, UNBILLED_ITEMS_KEY, INVOICES_KEY
from timebill.database.mappers import (
    entries_from_list,
    invoices_from_list,
    time_entry_to_dict,
    invoice_to_dict,
)
from timebill.domain.entities import (
    Invoice,
    InvoiceSummary,
    TimeEntry,
    TimeEntryDraft,
)
from timebill.domain.errors import (
    NotFoundError,
    ValidationError,
    entries_not_unbilled,
    invoice_not_found,
    must_be_positive,
    required_field,
)
from timebill.utils.money import money, quantize_hours, to_decimal

logger = logging.getLogger(__name__)


def _new_id() -> str:
    return uuid.uuid4().hex


def _now() -> datetime:
    return datetime.now(UTC)


def preview_totals(items: Sequence[TimeEntry], rate: Decimal) -> tuple[Decimal, Decimal]:
    """Return (total hours, total amount) an invoice for ``items`` would carry."""
    total_hours = sum((item.hours for item in items), Decimal("0"))
    return total_hours, money(total_hours * to_decimal(rate))


class BillingLedger:
    """Service for logging time and billing it into invoices."""

    def __init__(self, store: Store):
        """Initialize billing ledger.

        Args:
            store: Store holding the unbilled items and invoices
        """
        self.store = store
        self._lock = threading.RLock()

    # State access
    def _load_unbilled(self) -> list[TimeEntry]:
        return entries_from_list(self.store.load(UNBILLED_ITEMS_KEY, []), UNBILLED_ITEMS_KEY)

    def _load_invoices(self) -> list[Invoice]:
        return invoices_from_list(self.store.load(INVOICES_KEY, []), INVOICES_KEY)

    # Time entries
    def log_time(self, draft: TimeEntryDraft) -> TimeEntry:
        """Log a unit of work as unbilled.

        Args:
            draft: Date, description and hours of the work

        Returns:
            The logged time entry

        Raises:
            ValidationError: If the description is blank or hours are not positive
        """
        description = (draft.description or "").strip()
        if not description:
            raise ValidationError(required_field("Description"))
        try:
            hours = quantize_hours(draft.hours)
        except ValueError as e:
            raise ValidationError(f"Hours: {e}") from e
        if hours <= 0:
            raise ValidationError(must_be_positive("Hours", hours))

        entry = TimeEntry(
            id=_new_id(),
            date=draft.date,
            description=description,
            hours=hours,
            created_at=_now(),
        )
        with self._lock:
            unbilled = self._load_unbilled()
            unbilled.append(entry)
            self.store.save(UNBILLED_ITEMS_KEY, [time_entry_to_dict(e) for e in unbilled])
        logger.info("Logged %s hours on %s (entry %s)", hours, entry.date, entry.id)
        return entry

    def list_unbilled(self) -> list[TimeEntry]:
        """List unbilled entries in the order they were logged."""
        return self._load_unbilled()

    def select_for_billing(self, ids: Iterable[str]) -> list[TimeEntry]:
        """Select unbilled entries by ID.

        Args:
            ids: Time entry IDs

        Returns:
            Matching entries in logging order

        Raises:
            ValidationError: If no IDs are given
            NotFoundError: If any ID is unknown or already billed
        """
        wanted = set(ids)
        if not wanted:
            raise ValidationError("Select at least one time entry to bill")
        unbilled = self._load_unbilled()
        found = {entry.id for entry in unbilled}
        missing = wanted - found
        if missing:
            raise NotFoundError(entries_not_unbilled(missing))
        return [entry for entry in unbilled if entry.id in wanted]

    # Invoices
    def create_invoice(
        self,
        number: str,
        client_name: str,
        client_address: Optional[str],
        items: Sequence[TimeEntry],
        rate: Decimal,
    ) -> Invoice:
        """Bill time entries into a new invoice.

        The entries are removed from the unbilled set and the invoice is added
        to the collection in a single store commit.

        Args:
            number: Invoice number shown to the client
            client_name: Client name
            client_address: Optional multi-line client address
            items: Entries to bill, in the order they should appear
            rate: Hourly rate to bill at

        Returns:
            The new invoice

        Raises:
            ValidationError: If number, client name or items are missing, the
                rate is not positive, or an entry is listed twice
            NotFoundError: If any entry is not currently unbilled
        """
        number = (number or "").strip()
        client_name = (client_name or "").strip()
        if not number:
            raise ValidationError(required_field("Invoice number"))
        if not client_name:
            raise ValidationError(required_field("Client name"))
        if not items:
            raise ValidationError("An invoice needs at least one time entry")
        try:
            rate = money(rate)
        except ValueError as e:
            raise ValidationError(f"Hourly rate: {e}") from e
        if rate <= 0:
            raise ValidationError(must_be_positive("Hourly rate", rate))

        item_ids = [item.id for item in items]
        if len(set(item_ids)) != len(item_ids):
            raise ValidationError("The same time entry cannot be billed twice on one invoice")

        with self._lock:
            unbilled = self._load_unbilled()
            invoices = self._load_invoices()

            unbilled_by_id = {entry.id: entry for entry in unbilled}
            missing = set(item_ids) - set(unbilled_by_id)
            if missing:
                raise NotFoundError(entries_not_unbilled(missing))

            # Bill the stored snapshot, not whatever the caller passed in
            billed = tuple(unbilled_by_id[item_id] for item_id in item_ids)
            total_hours, total_amount = preview_totals(billed, rate)
            now = _now()
            invoice = Invoice(
                id=_new_id(),
                number=number,
                date=now,
                client_name=client_name,
                client_address=(client_address or "").strip("\n"),
                items=billed,
                total_hours=total_hours,
                total_amount=total_amount,
                is_paid=False,
                created_at=now,
                hourly_rate=rate,
            )

            billed_ids = set(item_ids)
            remaining = [entry for entry in unbilled if entry.id not in billed_ids]
            invoices.append(invoice)
            self.store.save_many(
                {
                    UNBILLED_ITEMS_KEY: [time_entry_to_dict(e) for e in remaining],
                    INVOICES_KEY: [invoice_to_dict(inv) for inv in invoices],
                }
            )

        logger.info(
            "Created invoice %s for %s: %s hours, %s",
            invoice.number,
            invoice.client_name,
            invoice.total_hours,
            invoice.total_amount,
        )
        return invoice

    def get_invoice(self, invoice_id: str) -> Invoice:
        """Get invoice by ID.

        Raises:
            NotFoundError: If the invoice does not exist
        """
        for invoice in self._load_invoices():
            if invoice.id == invoice_id:
                return invoice
        raise NotFoundError(invoice_not_found(invoice_id))

    def list_invoices(self) -> list[Invoice]:
        """List all invoices in creation order."""
        return self._load_invoices()

    def set_paid(self, invoice_id: str, paid: bool) -> Invoice:
        """Mark an invoice as paid or unpaid.

        Raises:
            NotFoundError: If the invoice does not exist
        """
        with self._lock:
            invoices = self._load_invoices()
            for index, invoice in enumerate(invoices):
                if invoice.id == invoice_id:
                    break
            else:
                raise NotFoundError(invoice_not_found(invoice_id))

            updated = replace(invoice, is_paid=bool(paid))
            invoices[index] = updated
            self.store.save(INVOICES_KEY, [invoice_to_dict(inv) for inv in invoices])

        logger.info("Invoice %s marked %s", updated.number, "paid" if updated.is_paid else "unpaid")
        return updated

    def filter_invoices(self, since: datetime | date | None = None) -> list[Invoice]:
        """List invoices dated on or after ``since``.

        Args:
            since: Inclusive lower bound; a date means the start of that day
                (UTC). None returns every invoice.

        Returns:
            Matching invoices in creation order
        """
        invoices = self._load_invoices()
        if since is None:
            return invoices
        if not isinstance(since, datetime):
            since = datetime.combine(since, time.min, tzinfo=UTC)
        elif since.tzinfo is None:
            since = since.replace(tzinfo=UTC)
        return [invoice for invoice in invoices if invoice.date >= since]

    @staticmethod
    def summarize(invoices: Sequence[Invoice]) -> InvoiceSummary:
        """Aggregate hours and amounts for a list of invoices."""
        zero = Decimal("0")
        total_hours = sum((inv.total_hours for inv in invoices), zero)
        total_amount = sum((inv.total_amount for inv in invoices), zero)
        total_paid = sum((inv.total_amount for inv in invoices if inv.is_paid), zero)
        return InvoiceSummary(
            count=len(invoices),
            total_hours=total_hours,
            total_amount=money(total_amount),
            total_paid=money(total_paid),
            total_outstanding=money(total_amount - total_paid),
        )
