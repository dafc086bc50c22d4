"""Checked integers for reserve, share and fee math.

On chain every amount is an unsigned u64 (u128 for intermediates) and the
program aborts on a division by zero or a negative difference. Quotes must
fail at the same point, so pool math goes through SafeInt:

    from amm_quote.safe_int import S

    lp_out = (S(amount) * lp_supply // reserve).to_u64()

Intermediate products are exact Python ints (u128 in the program); the u64
width is enforced when a quoted amount is narrowed with to_u64().
"""

from __future__ import annotations

from functools import total_ordering

U64_MAX = 2**64 - 1
U128_MAX = 2**128 - 1


class SafeIntError(ArithmeticError):
    """Checked arithmetic failed."""


class DivisionByZero(SafeIntError):
    """Divisor was zero."""


class Underflow(SafeIntError):
    """Difference went below zero."""


class IntegerOverflow(SafeIntError):
    """Value outside the unsigned range it was narrowed to."""


def _raw(x: SafeInt | int) -> int:
    return x._value if isinstance(x, SafeInt) else x


def _checked_sub(lhs: int, rhs: int) -> SafeInt:
    if rhs > lhs:
        raise Underflow(f"Underflow: {lhs} - {rhs} is negative")
    return SafeInt(lhs - rhs)


def _checked_div(lhs: int, rhs: int, *, round_up: bool = False) -> SafeInt:
    if rhs == 0:
        raise DivisionByZero(f"Division by zero: {lhs} / 0")
    quotient, remainder = divmod(lhs, rhs)
    if round_up and remainder:
        quotient += 1
    return SafeInt(quotient)


@total_ordering
class SafeInt:
    """Unsigned-style integer whose subtraction and division are checked.

    Attributes:
        value: Wrapped Python int
    """

    __slots__ = ("_value",)
    _value: int

    def __init__(self, value: int | SafeInt) -> None:
        if isinstance(value, SafeInt):
            value = value._value
        elif isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"SafeInt requires int, got {type(value).__name__}")
        self._value = value

    @property
    def value(self) -> int:
        return self._value

    def __repr__(self) -> str:
        return f"S({self._value})"

    def __str__(self) -> str:
        return str(self._value)

    def __int__(self) -> int:
        return self._value

    __index__ = __int__

    def __bool__(self) -> bool:
        return bool(self._value)

    def __hash__(self) -> int:
        return hash(self._value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, (SafeInt, int)):
            return NotImplemented
        return self._value == _raw(other)

    def __lt__(self, other: SafeInt | int) -> bool:
        return self._value < _raw(other)

    def __add__(self, other: SafeInt | int) -> SafeInt:
        return SafeInt(self._value + _raw(other))

    __radd__ = __add__

    def __mul__(self, other: SafeInt | int) -> SafeInt:
        return SafeInt(self._value * _raw(other))

    __rmul__ = __mul__

    def __sub__(self, other: SafeInt | int) -> SafeInt:
        return _checked_sub(self._value, _raw(other))

    def __rsub__(self, other: int) -> SafeInt:
        return _checked_sub(other, self._value)

    def __floordiv__(self, other: SafeInt | int) -> SafeInt:
        return _checked_div(self._value, _raw(other))

    def __rfloordiv__(self, other: int) -> SafeInt:
        return _checked_div(other, self._value)

    def ceiling_div(self, other: SafeInt | int) -> SafeInt:
        """Division rounding toward +inf; used wherever the pool must not lose dust."""
        return _checked_div(self._value, _raw(other), round_up=True)

    def saturating_sub(self, other: SafeInt | int) -> SafeInt:
        """Difference floored at zero."""
        return SafeInt(max(self._value - _raw(other), 0))

    def abs_diff(self, other: SafeInt | int) -> SafeInt:
        return SafeInt(abs(self._value - _raw(other)))

    def within(self, other: SafeInt | int, tolerance: int) -> bool:
        """Convergence test for the Newton iterations: |self - other| <= tolerance."""
        return abs(self._value - _raw(other)) <= tolerance

    def to_u64(self) -> int:
        """The value as an on-chain u64 amount.

        Raises:
            IntegerOverflow: If the value is outside [0, 2^64 - 1]
        """
        if not 0 <= self._value <= U64_MAX:
            raise IntegerOverflow(f"Value does not fit u64: {self._value}")
        return self._value


S = SafeInt
