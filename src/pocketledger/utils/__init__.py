"""Utility functions for pocketledger."""

from pocketledger.utils.date_parser import (
    end_of_month,
    first_day_next_month,
    parse_date,
    start_of_month,
)
from pocketledger.utils.amount_parser import parse_amount
from pocketledger.utils.account_resolver import resolve_account

__all__ = [
    "parse_date",
    "parse_amount",
    "resolve_account",
    "start_of_month",
    "end_of_month",
    "first_day_next_month",
]
