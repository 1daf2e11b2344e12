"""
Numeric kinds supported by SI formatting and parsing.

The SI algorithm is written once against the small capability set of
NumericOps; each kind supplies its own arithmetic:

    single   numpy.float32      narrow binary float, about 7 significant digits
    double   float              wide binary float, about 15-17 significant digits
    decimal  decimal.Decimal    exact decimal arithmetic, 28 significant digits

Binary kinds scale by exactly representable powers of ten where possible;
the decimal kind scales with Decimal.scaleb(), which only shifts the exponent
and introduces no rounding error.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import math
import operator
import sys
from abc import ABC, abstractmethod
from decimal import Decimal, InvalidOperation
from enum import StrEnum, unique
from fractions import Fraction
from typing import Any, Generic, TypeVar

# Third-party ----------------------------------------------------------------------------------------------------------
import numpy as np

# Local ----------------------------------------------------------------------------------------------------------------
from .tools import fmt_type

N = TypeVar("N")


# Classes --------------------------------------------------------------------------------------------------------------

@unique
class NumericKind(StrEnum):
    """
    Numeric representations handled by the SI codec.

    Attributes:
        SINGLE (str)  : numpy.float32
        DOUBLE (str)  : float
        DECIMAL (str) : decimal.Decimal
    """
    SINGLE = "single"
    DOUBLE = "double"
    DECIMAL = "decimal"


class NumericOps(ABC, Generic[N]):
    """Capability set the SI algorithm needs from a numeric kind."""

    kind: NumericKind

    @abstractmethod
    def coerce(self, value: Any) -> N:
        """Convert a supported Python or NumPy number to this kind."""

    @abstractmethod
    def parse(self, text: str) -> N:
        """
        Parse numeric text.

        Raises:
            ValueError: text is not a number of this kind.
        """

    @abstractmethod
    def log10(self, magnitude: N) -> float:
        """Base-10 logarithm of a positive finite magnitude."""

    @abstractmethod
    def power_of_ten(self, exponent: int) -> N:
        """10**exponent, correctly rounded to this kind."""

    @abstractmethod
    def scale_down(self, value: N, exponent: int) -> N:
        """value / 10**exponent."""

    @abstractmethod
    def scale_up(self, value: N, exponent: int) -> N:
        """value * 10**exponent."""

    @abstractmethod
    def to_decimal(self, value: N) -> Decimal:
        """The exact value as a Decimal."""

    @abstractmethod
    def shortest_decimal(self, value: N) -> Decimal:
        """Shortest Decimal that converts back to value in this kind."""

    @abstractmethod
    def nan(self) -> N:
        """A quiet NaN of this kind."""

    def is_finite(self, value: N) -> bool:
        return math.isfinite(value)

    def is_negative(self, value: N) -> bool:
        return value < 0

    def is_zero(self, value: N) -> bool:
        return value == 0

    def magnitude(self, value: N) -> N:
        """Absolute value."""
        return abs(value)

    def negate(self, value: N) -> N:
        return -value

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class DoubleOps(NumericOps[float]):
    kind = NumericKind.DOUBLE

    def coerce(self, value: Any) -> float:
        return float(value)

    def parse(self, text: str) -> float:
        return float(text)

    def log10(self, magnitude: float) -> float:
        return math.log10(magnitude)

    def power_of_ten(self, exponent: int) -> float:
        # The literal is correctly rounded, 10.0 ** exponent may be off by one ulp
        return float(f"1e{exponent}")

    def scale_down(self, value: float, exponent: int) -> float:
        # Powers of ten up to 10**22 are exact doubles, so divide or multiply by an exact one
        if exponent >= 0:
            return value / self.power_of_ten(exponent)
        return value * self.power_of_ten(-exponent)

    def scale_up(self, value: float, exponent: int) -> float:
        if exponent >= 0:
            return value * self.power_of_ten(exponent)
        return value / self.power_of_ten(-exponent)

    def to_decimal(self, value: float) -> Decimal:
        return Decimal(value)

    def shortest_decimal(self, value: float) -> Decimal:
        return Decimal(repr(value))

    def nan(self) -> float:
        return math.nan


class SingleOps(NumericOps[np.float32]):
    """
    numpy.float32 kind.

    Arithmetic runs in double precision and the result is rounded to float32
    once, so scaling never accumulates single precision error.
    """

    kind = NumericKind.SINGLE

    _double = DoubleOps()

    def coerce(self, value: Any) -> np.float32:
        return np.float32(value)

    def parse(self, text: str) -> np.float32:
        return np.float32(self._double.parse(text))

    def log10(self, magnitude: np.float32) -> float:
        return math.log10(float(magnitude))

    def power_of_ten(self, exponent: int) -> np.float32:
        return np.float32(self._double.power_of_ten(exponent))

    def scale_down(self, value: np.float32, exponent: int) -> np.float32:
        return np.float32(self._double.scale_down(float(value), exponent))

    def scale_up(self, value: np.float32, exponent: int) -> np.float32:
        return np.float32(self._double.scale_up(float(value), exponent))

    def to_decimal(self, value: np.float32) -> Decimal:
        return Decimal(float(value))

    def shortest_decimal(self, value: np.float32) -> Decimal:
        return Decimal(np.format_float_positional(value, unique=True, trim="-"))

    def nan(self) -> np.float32:
        return np.float32(np.nan)

    def is_finite(self, value: np.float32) -> bool:
        return bool(np.isfinite(value))

    def is_negative(self, value: np.float32) -> bool:
        return bool(value < 0)

    def is_zero(self, value: np.float32) -> bool:
        return bool(value == 0)


class DecimalOps(NumericOps[Decimal]):
    kind = NumericKind.DECIMAL

    def coerce(self, value: Any) -> Decimal:
        if isinstance(value, Decimal):
            return value
        if isinstance(value, (float, np.floating)):
            # Shortest repr keeps 0.1 as Decimal('0.1') rather than its binary expansion
            return Decimal(repr(float(value)))
        if isinstance(value, Fraction):
            return Decimal(value.numerator) / Decimal(value.denominator)
        if isinstance(value, (int, np.integer)):
            return Decimal(int(value))
        return Decimal(str(value))

    def parse(self, text: str) -> Decimal:
        try:
            return Decimal(text.strip())
        except InvalidOperation as e:
            raise ValueError(f"invalid decimal literal: {text!r}") from e

    def log10(self, magnitude: Decimal) -> float:
        return float(magnitude.log10())

    def power_of_ten(self, exponent: int) -> Decimal:
        return Decimal(1).scaleb(exponent)

    def scale_down(self, value: Decimal, exponent: int) -> Decimal:
        return value.scaleb(-exponent)

    def scale_up(self, value: Decimal, exponent: int) -> Decimal:
        return value.scaleb(exponent)

    def to_decimal(self, value: Decimal) -> Decimal:
        return value

    def shortest_decimal(self, value: Decimal) -> Decimal:
        return value

    def nan(self) -> Decimal:
        return Decimal("NaN")

    def is_finite(self, value: Decimal) -> bool:
        return value.is_finite()

    def is_negative(self, value: Decimal) -> bool:
        return value.is_signed() and not value.is_zero()

    def is_zero(self, value: Decimal) -> bool:
        return value.is_zero()

    def magnitude(self, value: Decimal) -> Decimal:
        # copy_abs/copy_negate never round to the context precision
        return value.copy_abs()

    def negate(self, value: Decimal) -> Decimal:
        return value.copy_negate()


NUMERIC_OPS: dict[NumericKind, NumericOps] = {
    NumericKind.SINGLE: SingleOps(),
    NumericKind.DOUBLE: DoubleOps(),
    NumericKind.DECIMAL: DecimalOps(),
}


# Methods --------------------------------------------------------------------------------------------------------------

def get_ops(kind: NumericKind | str) -> NumericOps:
    """
    Capability set of a numeric kind.

    Raises:
        ValueError: kind is not a known NumericKind.
    """
    try:
        return NUMERIC_OPS[NumericKind(kind)]
    except ValueError:
        raise ValueError(
            f"unknown numeric kind {kind!r}, expected one of {[k.value for k in NumericKind]}"
        ) from None


def kind_of(value: Any) -> NumericKind:
    """
    Numeric kind a value is formatted as.

    numpy.float32 (and float16) map to single, Decimal to decimal, every other
    real number (int, float, Fraction, NumPy integers and float64) to double.
    Integers and Fractions too large for a float map to decimal, which holds them exactly.

    Raises:
        TypeError: value is bool or not a real number.

    Examples:
        >>> kind_of(1.5)
        <NumericKind.DOUBLE: 'double'>
        >>> kind_of(np.float32(1.5))
        <NumericKind.SINGLE: 'single'>
        >>> kind_of(Decimal("1.5"))
        <NumericKind.DECIMAL: 'decimal'>
    """
    # Boolean first, bool is a subclass of int
    if isinstance(value, (bool, np.bool_)):
        raise TypeError(f"boolean values not supported, got {value!r}")

    if isinstance(value, Decimal):
        return NumericKind.DECIMAL

    if isinstance(value, (int, Fraction)) and abs(value) > sys.float_info.max:
        return NumericKind.DECIMAL

    if isinstance(value, (np.float32, np.float16)):
        return NumericKind.SINGLE

    if isinstance(value, (int, float, Fraction, np.integer, np.floating)):
        return NumericKind.DOUBLE

    # Third-party integers via __index__, floats via __float__
    if hasattr(value, "__index__"):
        try:
            operator.index(value)
            return NumericKind.DOUBLE
        except TypeError:
            pass
    if hasattr(value, "__float__") and not isinstance(value, (str, bytes, complex)):
        return NumericKind.DOUBLE

    raise TypeError(
        f"unsupported numeric type: {fmt_type(value)}. "
        f"Expected int, float, Decimal, Fraction, or a NumPy real scalar"
    )
