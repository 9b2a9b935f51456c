"""Per-owner preferences."""

import logging

from pocketledger.database.base import Database
from pocketledger.domain.entities import CURRENCIES
from pocketledger.domain.validation import require_choice

logger = logging.getLogger(__name__)


class SettingsService:
    """Display currency of an owner. Amounts are never converted."""

    def __init__(self, db: Database):
        self.db = db

    def get_currency(self, owner_id: str) -> str:
        """Currency code used to display amounts, BRL unless changed."""
        return self.db.get_currency(owner_id)

    def set_currency(self, owner_id: str, currency: str) -> str:
        """Change the display currency.

        Raises:
            ValidationError: If the currency is not supported
        """
        currency = require_choice(currency.upper(), "currency", CURRENCIES)
        stored = self.db.set_currency(owner_id, currency)
        logger.debug("Currency for %s set to %s", owner_id, stored)
        return stored
