"""
Parse SI-prefixed text such as "12.34 km" or "1.5 kilo-metres" back into numbers.

Text is expected as '<number> <prefixed unit>'. The prefix is resolved in a
fixed order:

    1. With an explicit unit=, the text before the unit is the prefix, long or short.
    2. A dash marks a long prefix: "pico-farad".
    3. A single-character unit has no prefix: "m".
    4. A unit led by a full long prefix name: "kilometres".
    5. A short unit (3 characters by default) led by a prefix symbol: "km", "μF".

Anything else is read unscaled.

Rule 4 also fires for units that merely start with a prefix name: "5 micron"
reads as 5e-06. Pass unit="micron" to read it as 5, as for "5 mol" under rule 5.
A dashed unit whose first token only starts with a long prefix name takes that
prefix: "1.5 kilowatt-hours" is 1500 watt-hours.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from typing import Any, Literal

# Local ----------------------------------------------------------------------------------------------------------------
from .exceptions import InvalidNumberError, MalformedInputError, UnknownPrefixError, UnknownPrefixWarning
from .numeric import NumericKind, NumericOps, get_ops
from .options import SIOptions, resolve_options
from .prefixes import PrefixEntry, SI_PREFIXES
from .sentinels import NOT_FOUND
from .tools import fmt_type, warn_external

OnError = Literal["raise", "nan", "none"]


# Methods --------------------------------------------------------------------------------------------------------------

def parse_si(
        text: str,
        kind: NumericKind | str = NumericKind.DOUBLE,
        *,
        unit: str | None = None,
        on_error: OnError = "raise",
        options: SIOptions | None = None,
) -> Any:
    """
    Parse SI text like "12.34 km" into the unscaled number 1.234e4.

    Args:
        text: SI text, e.g. "1.23456 km", "10 pF" or "1.23456 mega-litres".
        kind: Numeric kind of the result, "single" (numpy.float32), "double" (float)
            or "decimal" (Decimal).
        unit: Expected unit without prefix. When given, whatever precedes the unit
            is the prefix, which removes any ambiguity for units such as "Pa" or "mol".
        on_error: How to handle malformed text or an invalid number:

            - "raise": Raise MalformedInputError or InvalidNumberError (default)
            - "nan": Return NaN of the requested kind
            - "none": Return None

        options: Per-call options, module options if None.

    Returns:
        The number scaled by the SI prefix, in the requested kind.

    Raises:
        MalformedInputError: No space between number and unit, or an unexpected unit.
        InvalidNumberError: The number part is not a number.
        UnknownPrefixError: A prefix token matches no SI prefix under unknown_prefix="raise".

    Examples:
        >>> parse_si("1.23456 km")
        1234.56
        >>> parse_si("1.23456 pico-farad")
        1.23456e-12
        >>> parse_si("1.234567890123456789012 km", kind="decimal")
        Decimal('1234.567890123456789012')
    """
    if on_error not in ("raise", "nan", "none"):
        raise ValueError(f"on_error must be one of 'raise', 'nan', 'none', got {on_error!r}")

    ops = get_ops(kind)
    opts = resolve_options(options)
    try:
        value, _, _ = parse_parts(text, ops, unit=unit, options=opts)
    except (InvalidNumberError, MalformedInputError):
        if on_error == "raise":
            raise
        return ops.nan() if on_error == "nan" else None
    return value


def parse_single(text: str, *, unit: str | None = None, options: SIOptions | None = None):
    """Parse SI text into numpy.float32, see parse_si()."""
    return parse_si(text, NumericKind.SINGLE, unit=unit, options=options)


def parse_double(text: str, *, unit: str | None = None, options: SIOptions | None = None) -> float:
    """Parse SI text into float, see parse_si()."""
    return parse_si(text, NumericKind.DOUBLE, unit=unit, options=options)


def parse_decimal(text: str, *, unit: str | None = None, options: SIOptions | None = None):
    """Parse SI text into Decimal, see parse_si()."""
    return parse_si(text, NumericKind.DECIMAL, unit=unit, options=options)


def parse_parts(
        text: str,
        ops: NumericOps,
        *,
        unit: str | None = None,
        options: SIOptions | None = None,
) -> tuple[Any, PrefixEntry, str]:
    """
    Split SI text into its scaled value, prefix entry and unit without prefix.

    Examples:
        >>> parse_parts("1.5 kilo-metres", get_ops("double"))
        (1500.0, PrefixEntry(index=-1, long_name='kilo', short_symbol='k'), 'metres')
    """
    if not isinstance(text, str):
        raise TypeError(f"SI text must be str, got {fmt_type(text)}")
    if unit is not None and not isinstance(unit, str):
        raise TypeError(f"unit must be str or None, got {fmt_type(unit)}")
    opts = resolve_options(options)

    number_part, separator, unit_part = text.strip().partition(" ")
    unit_part = unit_part.strip()
    if not separator or not unit_part:
        raise MalformedInputError(text, "expected '<number> <unit>' separated by a space")

    try:
        # Thousands grouping as written by the N specifier: 1,234.5
        number = ops.parse(number_part.replace(",", ""))
    except (ValueError, ArithmeticError) as e:
        raise InvalidNumberError(text, number_part) from e

    if unit is not None:
        prefix, base_unit = _resolve_with_unit(text, unit_part, unit, opts)
    else:
        prefix, base_unit = _resolve_prefix(text, unit_part, opts)

    if not prefix.is_empty:
        number = ops.scale_up(number, prefix.exponent)
    return number, prefix, base_unit


def _resolve_prefix(text: str, unit_part: str, opts: SIOptions) -> tuple[PrefixEntry, str]:
    """Prefix entry and bare unit of a prefixed unit with no unit hint."""
    no_prefix = SI_PREFIXES.no_prefix

    # Long form with dash: pico-farad
    if "-" in unit_part:
        token, _, rest = unit_part.partition("-")
        position = SI_PREFIXES.bucket_from_long_prefix(token)
        if position is not NOT_FOUND:
            return SI_PREFIXES[position], rest

        # Dashed unit written without a prefix dash: kilowatt-hours
        position = SI_PREFIXES.bucket_from_long_prefix(token, partial=True)
        if position is NOT_FOUND:
            _unknown_prefix(text, token, opts)
            return no_prefix, unit_part
        prefix = SI_PREFIXES[position]
        return prefix, unit_part[len(prefix.long_name):]

    # m for metres on its own, no prefix
    if len(unit_part) == 1:
        return no_prefix, unit_part

    # Long form without dash: kilometres
    position = SI_PREFIXES.bucket_from_long_prefix(unit_part, partial=True)
    if position is not NOT_FOUND:
        prefix = SI_PREFIXES[position]
        return prefix, unit_part[len(prefix.long_name):]

    # Short form: km, μF; longer units such as metres are not read as m + etres
    max_length = opts.short_symbol_max_length
    if max_length is None or len(unit_part) <= max_length:
        position = SI_PREFIXES.bucket_from_short_symbol(unit_part[0])
        if position is not NOT_FOUND:
            return SI_PREFIXES[position], unit_part[1:]

    return no_prefix, unit_part


def _resolve_with_unit(text: str, unit_part: str, unit: str, opts: SIOptions) -> tuple[PrefixEntry, str]:
    """Prefix entry of a prefixed unit known to end with unit."""
    if unit_part == unit:
        return SI_PREFIXES.no_prefix, unit
    if not unit_part.endswith(unit):
        raise MalformedInputError(text, f"expected unit {unit!r}")

    head = unit_part[:len(unit_part) - len(unit)]
    dashed = head.endswith("-")
    token = head[:-1] if dashed else head

    position = SI_PREFIXES.bucket_from_long_prefix(token)
    if position is NOT_FOUND and not dashed:
        position = SI_PREFIXES.bucket_from_short_symbol(token)
    if position is NOT_FOUND:
        _unknown_prefix(text, token, opts)
        return SI_PREFIXES.no_prefix, unit
    return SI_PREFIXES[position], unit


def _unknown_prefix(text: str, token: str, opts: SIOptions):
    if opts.unknown_prefix == "raise":
        raise UnknownPrefixError(text, token)
    if opts.unknown_prefix == "warn":
        warn_external(
            f"unknown SI prefix {token!r} in {text!r}, value read unscaled",
            UnknownPrefixWarning,
        )
