from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Union

from eliteshop.config import settings
from eliteshop.constants import CURRENCY_SYMBOLS

Number = Union[Decimal, int, float, str]


def to_money(v: Number, decimals: int | None = None) -> Decimal:
    """Decimal rounded half-up to the shop's number of decimals."""
    places = settings.decimals if decimals is None else decimals
    quant = Decimal(1).scaleb(-places)
    return Decimal(str(v)).quantize(quant, rounding=ROUND_HALF_UP)


def money(v: Number) -> str:
    amount = to_money(v)
    symbol = CURRENCY_SYMBOLS.get(settings.currency)
    if symbol:
        sign = "-" if amount < 0 else ""
        return f"{sign}{symbol}{abs(amount):,.{settings.decimals}f}"
    return f"{amount:,.{settings.decimals}f} {settings.currency}"
