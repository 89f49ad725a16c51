# storefront/utils/money.py
from decimal import Decimal, ROUND_HALF_UP

CENT = Decimal("0.01")


def to_money(value) -> Decimal:
    """Zaokragla kwote do 2 miejsc (ROUND_HALF_UP), float przez str zeby nie ciagnac bledu binarnego."""
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def to_minor_units(value) -> int:
    return int(to_money(value) * 100)
