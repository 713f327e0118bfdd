"""User settings domain service."""

import logging
from decimal import Decimal

from timebill.database.base import Store, USER_SETTINGS_KEY
from timebill.database.mappers import settings_from_dict, settings_to_dict
from timebill.domain.entities import UserSettings
from timebill.domain.errors import ValidationError, must_be_positive
from timebill.utils.money import money

logger = logging.getLogger(__name__)


class SettingsService:
    """Service for reading and saving the sender's settings."""

    def __init__(self, store: Store):
        """Initialize settings service.

        Args:
            store: Store holding the settings record
        """
        self.store = store

    def get(self) -> UserSettings:
        """Get the saved settings, or empty settings if none were saved."""
        record = self.store.load(USER_SETTINGS_KEY)
        if record is None:
            return UserSettings.empty()
        return settings_from_dict(record, USER_SETTINGS_KEY)

    def save(self, name: str, address: str, hourly_rate: Decimal | str | float) -> UserSettings:
        """Save sender name, address and hourly rate.

        Raises:
            ValidationError: If the hourly rate is not a positive number
        """
        try:
            rate = money(hourly_rate)
        except ValueError as e:
            raise ValidationError(f"Hourly rate: {e}") from e
        if rate <= 0:
            raise ValidationError(must_be_positive("Hourly rate", rate))

        settings = UserSettings(name=(name or "").strip(), address=address or "", hourly_rate=rate)
        self.store.save(USER_SETTINGS_KEY, settings_to_dict(settings))
        logger.info("Saved settings for %s at rate %s", settings.name, rate)
        return settings
