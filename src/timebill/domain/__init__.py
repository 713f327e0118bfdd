"""Domain layer for timebill application."""

from timebill.domain.ledger import BillingLedger
from timebill.domain.settings import SettingsService

__all__ = [
    "BillingLedger",
    "SettingsService",
]
