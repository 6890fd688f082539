"""Input validators for account numbers, aliases and phone numbers."""

import re

from pispi_sdk.constants import UEMOA_COUNTRIES

# [country code][bank code][account number], e.g. CIC2344256727788288822
ACCOUNT_NUMBER_RE = re.compile(r"^[A-Z]{2,3}\d{19,22}$")
SHID_ALIAS_RE = re.compile(r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE)
PHONE_NUMBER_RE = re.compile(r"^\+?[1-9]\d{8,12}$")


def is_valid_account_number(account_number: str) -> bool:
    return bool(ACCOUNT_NUMBER_RE.match(account_number))


def is_valid_shid_alias(alias: str) -> bool:
    """SHID aliases are UUIDs."""
    return bool(SHID_ALIAS_RE.match(alias))


def is_valid_phone_number(phone_number: str) -> bool:
    """Loose check for West African numbers (MBNO aliases); spaces and dashes are ignored."""
    return bool(PHONE_NUMBER_RE.match(re.sub(r"[\s-]", "", phone_number)))


def get_country_from_account(account_number: str) -> str | None:
    return UEMOA_COUNTRIES.get(account_number[:2])
