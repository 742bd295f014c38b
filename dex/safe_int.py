"""Checked integer arithmetic for reserve and share bookkeeping.

Pool accounting must never silently produce a negative reserve or divide
by an empty reserve, so both faults raise instead. Python ints never
overflow, which keeps products such as ``amount * 99 * reserve`` exact
until the final division.

Usage pattern:
    from dex.safe_int import S

    def withdrawal(burn: int, reserve: int, supply: int) -> int:
        return (S(burn) * S(reserve) // S(supply)).value
"""

from __future__ import annotations


class SafeIntError(ArithmeticError):
    """Base class for pool arithmetic faults."""

    pass


class DivisionByZero(SafeIntError):
    """Division by an empty reserve or supply."""

    pass


class Underflow(SafeIntError):
    """Subtraction would take an amount below zero."""

    pass


class SafeInt:
    """Pool amount with checked subtraction and division.

    Attributes:
        value: The underlying integer value (read-only)
    """

    __slots__ = ("_value",)
    _value: int

    def __init__(self, value: int | SafeInt) -> None:
        if isinstance(value, SafeInt):
            self._value = value._value
        elif isinstance(value, int) and not isinstance(value, bool):
            self._value = value
        else:
            raise TypeError(f"SafeInt requires int, got {type(value).__name__}")

    @property
    def value(self) -> int:
        return self._value

    def __repr__(self) -> str:
        return f"SafeInt({self._value})"

    def __add__(self, other: SafeInt | int) -> SafeInt:
        return SafeInt(self._value + _extract_value(other))

    def __sub__(self, other: SafeInt | int) -> SafeInt:
        """Subtract an amount.

        Raises:
            Underflow: If the result would be negative
        """
        other_val = _extract_value(other)
        if other_val > self._value:
            raise Underflow(f"Underflow: {self._value} - {other_val}")
        return SafeInt(self._value - other_val)

    def __mul__(self, other: SafeInt | int) -> SafeInt:
        return SafeInt(self._value * _extract_value(other))

    def __floordiv__(self, other: SafeInt | int) -> SafeInt:
        """Floor division, the rounding every pool formula uses by default.

        Raises:
            DivisionByZero: If other is zero
        """
        return SafeInt(self._value // _nonzero(other, self._value))

    def ceiling_div(self, other: SafeInt | int) -> SafeInt:
        """Division rounded up, for requirements charged to the caller.

        Raises:
            DivisionByZero: If other is zero
        """
        return SafeInt(-(-self._value // _nonzero(other, self._value)))


def _extract_value(x: SafeInt | int) -> int:
    if isinstance(x, SafeInt):
        return x._value
    return x


def _nonzero(divisor: SafeInt | int, dividend: int) -> int:
    value = _extract_value(divisor)
    if value == 0:
        raise DivisionByZero(f"Division by zero: {dividend} / 0")
    return value


S = SafeInt
