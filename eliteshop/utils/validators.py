from decimal import Decimal, InvalidOperation


def require_positive_int(v, name: str = "value") -> int:
    if isinstance(v, bool) or not isinstance(v, int):
        raise ValueError(f"{name} must be an integer")
    if v <= 0:
        raise ValueError(f"{name} must be > 0")
    return v


def require_price(v, name: str = "price") -> Decimal:
    try:
        d = Decimal(str(v))
    except InvalidOperation:
        raise ValueError(f"{name} is not a number: {v!r}")
    if not d.is_finite():
        raise ValueError(f"{name} must be finite")
    if d < 0:
        raise ValueError(f"{name} must be >= 0")
    return d


def require_id(v, name: str = "id") -> str:
    if not isinstance(v, str) or not v.strip():
        raise ValueError(f"bad {name}: {v!r}")
    return v
