from typing import Tuple

from shielded_pool.errors import DomainError

BASIS_POINTS = 10000


def _non_negative(value, what: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise DomainError(what, value)
    return value


def get_fee(amount: int, is_inclusive: bool, fee_bp: int) -> Tuple[int, int]:
    """
    Split `amount` into (base, fee) at `fee_bp` basis points.

    Exclusive amounts are the base and the fee is charged on top of them,
    inclusive amounts already contain the fee. Products are taken before the
    floor division; python ints never overflow so no width is imposed here.
    """
    amount = _non_negative(amount, "amount")
    fee_bp = _non_negative(fee_bp, "fee basis points")

    if is_inclusive:
        base = amount * BASIS_POINTS // (BASIS_POINTS + fee_bp)
        fee = amount - base
    else:
        base = amount
        fee = amount * fee_bp // BASIS_POINTS

    return base, fee
