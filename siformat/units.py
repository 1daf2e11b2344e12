#
# SIFormat Units of Measurement Formatting
#

# Standard library -----------------------------------------------------------------------------------------------------
import math
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Self

# Local ----------------------------------------------------------------------------------------------------------------
from .exceptions import OutOfRangeError, OutOfRangeWarning, UndefinedExponentError
from .numeric import NumericKind, NumericOps, get_ops, kind_of
from .options import SIOptions, resolve_options
from .parser import parse_parts
from .prefixes import PaddingPolicy, PrefixEntry, SI_PREFIXES, GREEK_MU, MAX_EXPONENT, MIN_EXPONENT
from .specifiers import PrecisionSpec
from .tools import fmt_type, warn_external

# @formatter:off

# SI prefixes are defined for magnitudes in [10^-24, 10^27)
RANGE_MIN_EXPONENT = -24
RANGE_MAX_EXPONENT = 27

# @formatter:on


# Classes --------------------------------------------------------------------------------------------------------------

@dataclass(frozen=True)
class SIQuantity:
    """
    A number with a unit, displayed with the SI prefix that brings it into [1, 1000).

    The value is held unscaled in its numeric kind (float, numpy.float32 or
    Decimal). The prefix, the scaled value and the text are derived from it:

        >>> q = SIQuantity(1500, unit="m", precision="N2")
        >>> q.prefix.long_name, q.scaled, str(q)
        ('kilo', 1.5, '1.50 km')

    Units of 3 or more characters take long prefixes (kilo-metres), shorter
    ones take symbols (km); padding controls the dash and trailing space.

    Zero renders unscaled, negative values render their scaled magnitude with
    a sign, and magnitudes outside [1e-24, 1e27) render unscaled. Non-finite
    values raise UndefinedExponentError.

    For parsing SI text into a quantity, use SIQuantity.parse().
    """

    value: Any
    unit: str = ""
    precision: str | PrecisionSpec | None = None
    padding: PaddingPolicy | str | None = None
    options: SIOptions | None = field(default=None, repr=False, compare=False)

    _kind: NumericKind | None = field(init=False, default=None, repr=False)
    _spec: PrecisionSpec | None = field(init=False, default=None, repr=False)
    _prefix: PrefixEntry | None = field(init=False, default=None, repr=False)
    _scaled: Any = field(init=False, default=None, repr=False)
    _in_range: bool = field(init=False, default=True, repr=False)

    def __post_init__(self):
        opts = resolve_options(self.options)
        kind = kind_of(self.value)
        ops = get_ops(kind)

        if not isinstance(self.unit, str):
            raise TypeError(f"unit must be str, got {fmt_type(self.unit)}")

        # Frozen dataclass: resolved defaults are written back with object.__setattr__
        value = ops.coerce(self.value)
        spec = PrecisionSpec.parse(self.precision if self.precision is not None else opts.precision)
        padding = PaddingPolicy.parse(self.padding) if self.padding is not None else opts.padding

        object.__setattr__(self, "value", value)
        object.__setattr__(self, "options", opts)
        object.__setattr__(self, "precision", str(spec))
        object.__setattr__(self, "padding", padding)
        object.__setattr__(self, "_kind", kind)
        object.__setattr__(self, "_spec", spec)

        prefix, scaled, in_range = _si_scale(value, ops, spec, opts)

        object.__setattr__(self, "_prefix", prefix)
        object.__setattr__(self, "_scaled", scaled)
        object.__setattr__(self, "_in_range", in_range)

    @classmethod
    def parse(
            cls,
            text: str,
            kind: NumericKind | str = NumericKind.DOUBLE,
            *,
            unit: str | None = None,
            precision: str | PrecisionSpec | None = None,
            options: SIOptions | None = None,
    ) -> Self:
        """
        Parse SI text such as "12.3 km" or "1.5 kilo-metres" into a quantity.

        The quantity carries the unscaled value and the unit without its prefix:

            >>> q = SIQuantity.parse("1.23456 pico-farad")
            >>> q.unit, q.prefix.long_name
            ('farad', 'pico')

        Args:
            text: SI text, '<number> <prefixed unit>'.
            kind: Numeric kind of the parsed value.
            unit: Expected unit; makes prefix detection exact for any unit string.
            precision: Precision spec of the returned quantity.
            options: Per-call options.

        Raises:
            InvalidNumberError, MalformedInputError, UnknownPrefixError: see parse_si().
        """
        opts = resolve_options(options)
        value, _, base_unit = parse_parts(text, get_ops(kind), unit=unit, options=opts)
        return cls(value, unit=base_unit, precision=precision, options=opts)

    def __str__(self):
        return self.as_str

    @property
    def as_str(self) -> str:
        """Number with prefixed unit as a string, e.g. '12.3456 exa-metres'."""
        if not self.units_str:
            text = self.number_str
        else:
            text = f"{self.number_str} {self.units_str}"
        if self.padding.trailing_space:
            text += " "
        return text

    @property
    def exponent(self) -> int:
        """Power of ten of the selected prefix, 0 when unscaled."""
        return self._prefix.exponent

    @property
    def in_range(self) -> bool:
        """False if the magnitude lies outside [1e-24, 1e27) and the value is rendered unscaled."""
        return self._in_range

    @property
    def is_long_form(self) -> bool:
        """True if the unit is long enough to take a long prefix name."""
        return len(self.unit) >= self.options.long_form_min_length

    @property
    def kind(self) -> NumericKind:
        return self._kind

    @property
    def number_str(self) -> str:
        """Numerical part of the string representation, rendered per precision."""
        ops = get_ops(self._kind)
        negative = ops.is_negative(self._scaled)
        number = _render_decimal(ops, ops.magnitude(self._scaled), self._spec)
        return ("-" if negative else "") + self._spec.render(number.copy_abs())

    @property
    def prefix(self) -> PrefixEntry:
        """Selected SI prefix entry, the empty entry when unscaled."""
        return self._prefix

    @property
    def prefix_str(self) -> str:
        """
        Prefix text as it attaches to the unit.

        Example:
            'kilo-' for kilo-metres with a dash policy, 'k' for km, '' when unscaled.
        """
        if self._prefix.is_empty:
            return ""
        if self.is_long_form:
            long_name = self._prefix.long_name
            return f"{long_name}-" if self.padding.dash else long_name
        symbol = self._prefix.short_symbol
        if symbol == GREEK_MU:
            symbol = self.options.micro_symbol
        return symbol

    @property
    def scaled(self) -> Any:
        """
        Value divided by 10**exponent, in the value's numeric kind.

        Example:
            12.3456 for 123.456e17 displayed as 12.3456 exa-metres.
        """
        return self._scaled

    @property
    def units_str(self) -> str:
        """Prefixed unit, e.g. 'km' or 'kilo-metres'."""
        return f"{self.prefix_str}{self.unit}"


# Methods --------------------------------------------------------------------------------------------------------------

def format_si(
        value: Any,
        precision: str | PrecisionSpec | None = None,
        unit: str = "",
        padding: PaddingPolicy | str | None = None,
        *,
        options: SIOptions | None = None,
) -> str:
    """
    Format a value with the SI prefix that scales it into [1, 1000).

    It takes the decimal exponent of the value and reduces it to its residue
    three bucket, divides the value by that power of ten and prefixes the unit
    with the matching SI prefix:

        "yotta-", "zetta-", "exa-", "peta-", "tera-", "giga-", "mega-", "kilo-",
        "", "milli-", "micro-", "nano-", "pico-", "femto-", "atto-", "zepto-", "yocto-"

    Units shorter than 3 characters take short symbols instead:

        "Y", "Z", "E", "P", "T", "G", "M", "k",
        "", "m", "μ", "n", "p", "f", "a", "z", "y"

    No prefix is used for values in [1, 1000). Hecto, deca, deci and centi are
    not supported. Values at or above 1e27 or below 1e-24 are returned
    unscaled, without SI prefix.

    Args:
        value: float, int, numpy.float32, Decimal or another real number.
        precision: Precision spec such as "G6" or "N2", see PrecisionSpec.
        unit: Unit like "metres", "watt" or "l".
        padding: PaddingPolicy, or its value such as "dash".
        options: Per-call options, module options if None.

    Returns:
        Formatted string, e.g. "9.46 peta-metres".

    Raises:
        TypeError: value is not a supported real number or unit is not a str.
        UndefinedExponentError: value is non-finite, or non-positive under non_positive="raise".
        OutOfRangeError: value is out of range under out_of_range="raise".

    Examples:
        >>> format_si(123.456e17, "G6", "metres")
        '12.3456 exa-metres'
        >>> format_si(98.7654e-21, "G6", "g")
        '98.7654 zg'
        >>> format_si(Decimal("1234.5678901234567890123"), "G21", "grams")
        '1.23456789012345678901 kilo-grams'
    """
    return SIQuantity(value, unit=unit, precision=precision, padding=padding, options=options).as_str


def _render_decimal(ops: NumericOps, magnitude: Any, spec: PrecisionSpec) -> Decimal:
    """Exact Decimal to render, or the kind's shortest round-trip digits for shortest specs."""
    if spec.is_shortest:
        return ops.shortest_decimal(magnitude)
    return ops.to_decimal(magnitude)


def _si_scale(value: Any, ops: NumericOps, spec: PrecisionSpec, opts: SIOptions) -> tuple[PrefixEntry, Any, bool]:
    """
    Select the SI prefix for value.

    Returns:
        (prefix entry, value scaled by the prefix, in-range flag)
    """
    if not ops.is_finite(value):
        raise UndefinedExponentError(value, "value is not finite")

    if ops.is_zero(value):
        if opts.non_positive == "raise":
            raise UndefinedExponentError(value, "log10 of zero")
        return SI_PREFIXES.no_prefix, value, True

    negative = ops.is_negative(value)
    if negative and opts.non_positive == "raise":
        raise UndefinedExponentError(value, "log10 of a negative value")

    magnitude = ops.magnitude(value)

    if magnitude >= ops.power_of_ten(RANGE_MAX_EXPONENT) or magnitude < ops.power_of_ten(RANGE_MIN_EXPONENT):
        if opts.out_of_range == "raise":
            raise OutOfRangeError(value)
        if opts.out_of_range == "warn":
            warn_external(
                f"{value!r} is outside the SI prefix range [1e-24, 1e27), rendered without prefix",
                OutOfRangeWarning,
            )
        return SI_PREFIXES.no_prefix, value, False

    bucket = min(max(math.floor(ops.log10(magnitude) / 3) * 3, MIN_EXPONENT), MAX_EXPONENT)

    # log10 may be off by an ulp next to exact powers of ten, settle the bucket on exact comparisons
    if bucket < MAX_EXPONENT and magnitude >= ops.power_of_ten(bucket + 3):
        bucket += 3
    elif bucket > MIN_EXPONENT and magnitude < ops.power_of_ten(bucket):
        bucket -= 3

    scaled = ops.scale_down(magnitude, bucket)

    # Rounding may carry 999.9999 to 1000, which belongs to the next prefix
    if opts.rebucket and bucket < MAX_EXPONENT:
        if spec.round(_render_decimal(ops, scaled, spec)) >= 1000:
            bucket += 3
            scaled = ops.scale_down(magnitude, bucket)

    if negative:
        scaled = ops.negate(scaled)
    return SI_PREFIXES.entry_for_exponent(bucket), scaled, True
