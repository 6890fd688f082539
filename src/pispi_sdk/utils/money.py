"""Amount helpers. PI-SPI expresses every amount in centimes (1 XOF = 100 centimes)."""

import math
from decimal import ROUND_HALF_UP, Decimal

from pispi_sdk.constants import CENTIMES_PER_XOF, CURRENCY


def format_amount(centimes: int) -> str:
    """Format centimes as whole XOF with space-grouped thousands, e.g. ``"1 500 XOF"``."""
    xof = (Decimal(centimes) / CENTIMES_PER_XOF).quantize(Decimal(1), rounding=ROUND_HALF_UP)
    return f"{int(xof):,} {CURRENCY}".replace(",", " ")


def xof_to_centimes(xof: float) -> int:
    return math.floor(xof * CENTIMES_PER_XOF + 0.5)


def centimes_to_xof(centimes: int) -> float:
    return centimes / CENTIMES_PER_XOF
