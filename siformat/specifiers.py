"""
Precision specifiers for rendering SI-scaled numbers.

A specifier is a letter optionally followed by a digit count, in the style of
standard numeric format strings with invariant culture:

    G<n>   n significant digits, fixed or scientific notation (G, R: shortest round-trip)
    F<n>   n digits after the decimal point (default 2)
    N<n>   as F, with ',' thousands grouping (default 2)
    E<n>   scientific notation with n mantissa decimals (default 6)

All rendering works on exact Decimal values with round-half-to-even.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import re
from dataclasses import dataclass
from decimal import Decimal, Context, ROUND_HALF_EVEN, localcontext
from enum import StrEnum, unique
from typing import Self

# Local ----------------------------------------------------------------------------------------------------------------
from .tools import fmt_type, fmt_value


# Classes --------------------------------------------------------------------------------------------------------------

@unique
class SpecStyle(StrEnum):
    """
    Rendering styles of a precision specifier.

    Attributes:
        GENERAL (str)    : Significant digits, fixed or scientific - G6
        ROUND_TRIP (str) : Shortest digits that round-trip the numeric kind - R
        FIXED (str)      : Digits after the decimal point - F2
        NUMBER (str)     : Digits after the decimal point with grouping - N2
        EXPONENT (str)   : Scientific notation - E6
    """
    GENERAL = "G"
    ROUND_TRIP = "R"
    FIXED = "F"
    NUMBER = "N"
    EXPONENT = "E"


_DEFAULT_DIGITS = {
    SpecStyle.FIXED: 2,
    SpecStyle.NUMBER: 2,
    SpecStyle.EXPONENT: 6,
}

# Shortest round-trip output switches to scientific notation from this exponent up
_ROUND_TRIP_SCI_EXPONENT = 15

_SPEC_PATTERN = re.compile(r"^([GgRrFfNnEe])(\d{0,3})$")


@dataclass(frozen=True)
class PrecisionSpec:
    """
    A parsed precision specifier such as "G6" or "N2".

    digits is None where the style has no digit count: general without digits
    and round-trip both render the shortest round-trip digits of the value.
    """

    style: SpecStyle
    digits: int | None = None
    upper: bool = True

    @classmethod
    def parse(cls, spec: "str | PrecisionSpec") -> Self:
        """
        Parse a specifier string.

        Raises:
            TypeError: spec is not a str or PrecisionSpec.
            ValueError: spec is not a recognized specifier.

        Examples:
            >>> PrecisionSpec.parse("G6")
            PrecisionSpec(style=<SpecStyle.GENERAL: 'G'>, digits=6, upper=True)
            >>> PrecisionSpec.parse("n").digits
            2
        """
        if isinstance(spec, PrecisionSpec):
            return spec
        if not isinstance(spec, str):
            raise TypeError(f"precision spec must be str, got {fmt_type(spec)}")

        match = _SPEC_PATTERN.match(spec.strip())
        if match is None:
            raise ValueError(
                f"invalid precision spec {fmt_value(spec)}, expected one of G<n>, R, F<n>, N<n>, E<n>"
            )
        letter, digits_str = match.groups()
        style = SpecStyle(letter.upper())
        digits = int(digits_str) if digits_str else None

        if style is SpecStyle.ROUND_TRIP:
            digits = None
        elif style is SpecStyle.GENERAL:
            # G0 means the default shortest representation
            digits = digits or None
        elif digits is None:
            digits = _DEFAULT_DIGITS[style]

        return cls(style=style, digits=digits, upper=letter.isupper())

    @property
    def is_shortest(self) -> bool:
        """True if rendering uses the shortest round-trip digits rather than a digit count."""
        return self.digits is None

    def round(self, number: Decimal) -> Decimal:
        """
        Round a non-negative Decimal the way render() will display it.

        Used to detect a scaled value reaching 1000 after rounding.
        """
        if self.is_shortest or number.is_zero():
            return number

        with localcontext(_render_context(number, self.digits)):
            if self.style is SpecStyle.GENERAL:
                return _round_significant(number, self.digits)
            if self.style is SpecStyle.EXPONENT:
                return _round_significant(number, self.digits + 1)
            return number.quantize(Decimal(1).scaleb(-self.digits), rounding=ROUND_HALF_EVEN)

    def render(self, number: Decimal) -> str:
        """
        Render a non-negative Decimal; the sign is composed by the caller.

        Examples:
            >>> PrecisionSpec.parse("G4").render(Decimal("500.0"))
            '500'
            >>> PrecisionSpec.parse("G3").render(Decimal("1e28"))
            '1.00E+28'
            >>> PrecisionSpec.parse("N2").render(Decimal("1.5"))
            '1.50'
        """
        if number.is_signed():
            raise ValueError(f"render() expects a non-negative number, got {fmt_value(number)}")

        with localcontext(_render_context(number, self.digits or 0)):
            match self.style:
                case SpecStyle.GENERAL | SpecStyle.ROUND_TRIP if self.is_shortest:
                    return self._render_shortest(number)
                case SpecStyle.GENERAL:
                    return self._render_general(number, self.digits)
                case SpecStyle.FIXED:
                    return f"{self.round(number):.{self.digits}f}"
                case SpecStyle.NUMBER:
                    return f"{self.round(number):,.{self.digits}f}"
                case SpecStyle.EXPONENT:
                    return self._render_scientific(number, self.digits + 1, exp_width=3)
        raise AssertionError(f"unhandled precision style {self.style!r}")

    def __str__(self) -> str:
        letter = self.style.value if self.upper else self.style.value.lower()
        return letter if self.digits is None else f"{letter}{self.digits}"

    def _render_general(self, number: Decimal, digits: int) -> str:
        if number.is_zero():
            return "0"
        rounded = _round_significant(number, digits)
        exponent = rounded.adjusted()
        if exponent >= digits or exponent < -5:
            return self._render_scientific(number, digits, exp_width=2)
        return _strip_zeros(f"{rounded:f}")

    def _render_shortest(self, number: Decimal) -> str:
        if number.is_zero():
            return "0"
        # Shortest digits are produced by the numeric kind, here the coefficient is used as-is
        digits = len(number.normalize().as_tuple().digits)
        exponent = number.adjusted()
        if exponent >= _ROUND_TRIP_SCI_EXPONENT or exponent < -5:
            return _strip_mantissa_zeros(self._render_scientific(number, digits, exp_width=2))
        return _strip_zeros(f"{number:f}")

    def _render_scientific(self, number: Decimal, digits: int, exp_width: int) -> str:
        e_char = "E" if self.upper else "e"
        if number.is_zero():
            mantissa = f"{Decimal(0):.{digits - 1}f}"
            return f"{mantissa}{e_char}+{0:0{exp_width}d}"
        rounded = _round_significant(number, digits)
        exponent = rounded.adjusted()
        mantissa = rounded.scaleb(-exponent)
        sign = "-" if exponent < 0 else "+"
        return f"{mantissa:.{digits - 1}f}{e_char}{sign}{abs(exponent):0{exp_width}d}"


# Methods --------------------------------------------------------------------------------------------------------------

def _render_context(number: Decimal, digits: int) -> Context:
    """Decimal context wide enough to hold every digit render() may produce for number."""
    if not number.is_finite():
        raise ValueError(f"cannot render non-finite {fmt_value(number)}")
    num_tuple = number.as_tuple()
    precision = len(num_tuple.digits) + abs(num_tuple.exponent) + digits + 8
    return Context(prec=max(precision, 28), rounding=ROUND_HALF_EVEN)


def _round_significant(number: Decimal, digits: int) -> Decimal:
    """Round to the given count of significant digits, keeping trailing zeros."""
    if number.is_zero():
        return number
    quantum = Decimal(1).scaleb(number.adjusted() - digits + 1)
    rounded = number.quantize(quantum, rounding=ROUND_HALF_EVEN)
    if rounded.adjusted() != number.adjusted():
        # Rounded up into the next decade, e.g. 9.996 -> 10.00, drop the extra digit
        quantum = Decimal(1).scaleb(rounded.adjusted() - digits + 1)
        rounded = rounded.quantize(quantum, rounding=ROUND_HALF_EVEN)
    return rounded


def _strip_zeros(fixed: str) -> str:
    """Strip trailing fractional zeros and a dangling decimal point."""
    if "." in fixed:
        fixed = fixed.rstrip("0").rstrip(".")
    return fixed


def _strip_mantissa_zeros(scientific: str) -> str:
    """Strip trailing zeros from the mantissa of a scientific string."""
    for e_char in "Ee":
        if e_char in scientific:
            mantissa, _, exponent = scientific.partition(e_char)
            return f"{_strip_zeros(mantissa)}{e_char}{exponent}"
    return scientific
