from __future__ import annotations

from decimal import Decimal, InvalidOperation, localcontext

from .project_constants import TOKEN_DECIMALS

_SCALE = 10**TOKEN_DECIMALS

# uint256 has 78 digits; the default 28-digit context would round.
_PREC = 100


def to_tokens(raw_amount: int) -> Decimal:
    with localcontext() as ctx:
        ctx.prec = _PREC
        return Decimal(raw_amount).scaleb(-TOKEN_DECIMALS)


def format_tokens(raw_amount: int) -> str:
    whole, frac = divmod(raw_amount, _SCALE)
    if not frac:
        return f"{whole:,}"
    frac_s = str(frac).rjust(TOKEN_DECIMALS, "0").rstrip("0")
    return f"{whole:,}.{frac_s}"


def parse_tokens(text: str) -> int:
    """
    "50" -> 50 * 10**18, "0.5" -> 5 * 10**17.
    Rejects negatives and anything finer than the smallest unit.
    """
    try:
        d = Decimal(str(text).replace("_", "").strip())
    except InvalidOperation as e:
        raise ValueError(f"Not a token amount: {text!r}") from e
    if not d.is_finite() or d < 0:
        raise ValueError(f"Not a token amount: {text!r}")
    with localcontext() as ctx:
        ctx.prec = _PREC
        raw = d.scaleb(TOKEN_DECIMALS)
        if raw != raw.to_integral_value():
            raise ValueError(f"More than {TOKEN_DECIMALS} decimal places: {text!r}")
        return int(raw)
