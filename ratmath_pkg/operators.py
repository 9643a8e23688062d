"""Python operator protocol shared by the numeric value types.

Each value type implements the named operations (``add``, ``subtract``, ...);
this mixin maps Python's arithmetic dunders onto them so that ``a + b`` and
``a.add(b)`` follow the same widening rules.
"""

from __future__ import annotations

from typing import Any


def _promotion():
    from . import promotion

    return promotion


class ArithmeticMixin:
    """Map ``+ - * / ** unary-`` onto named operations."""

    __slots__ = ()

    def __add__(self, other: Any):
        if not _promotion().is_operand(other):
            return NotImplemented
        return self.add(other)

    def __radd__(self, other: Any):
        if not _promotion().is_operand(other):
            return NotImplemented
        return _promotion().coerce(other).add(self)

    def __sub__(self, other: Any):
        if not _promotion().is_operand(other):
            return NotImplemented
        return self.subtract(other)

    def __rsub__(self, other: Any):
        if not _promotion().is_operand(other):
            return NotImplemented
        return _promotion().coerce(other).subtract(self)

    def __mul__(self, other: Any):
        if not _promotion().is_operand(other):
            return NotImplemented
        return self.multiply(other)

    def __rmul__(self, other: Any):
        if not _promotion().is_operand(other):
            return NotImplemented
        return _promotion().coerce(other).multiply(self)

    def __truediv__(self, other: Any):
        if not _promotion().is_operand(other):
            return NotImplemented
        return self.divide(other)

    def __rtruediv__(self, other: Any):
        if not _promotion().is_operand(other):
            return NotImplemented
        return _promotion().coerce(other).divide(self)

    def __pow__(self, exponent: Any):
        if isinstance(exponent, bool) or not isinstance(exponent, int):
            exponent = getattr(exponent, "value", None)
            if not isinstance(exponent, int):
                return NotImplemented
        return self.pow(exponent)

    def __neg__(self):
        return self.negate()

    def __pos__(self):
        return self


def exponent_value(exponent: Any) -> int:
    """Return ``exponent`` as a plain int, accepting ints and Integer values."""
    if isinstance(exponent, bool):
        raise TypeError("Exponent must be an integer")
    if isinstance(exponent, int):
        return exponent
    value = getattr(exponent, "value", None)
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    raise TypeError(f"Exponent must be an integer, not {type(exponent).__name__}")
