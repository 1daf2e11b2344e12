"""
SIFormat configuration.

Options are frozen dataclasses. The module holds one current SIOptions
instance which configure() replaces as a whole; every public formatting and
parsing call also accepts an explicit options= override.

Example:
    >>> _ = configure(preset="strict")
    >>> _ = configure(precision="G4")   # merged onto the current "strict" state
    >>> get_options().precision
    'G4'
"""

# Standard library -----------------------------------------------------------------------------------------------------
from dataclasses import dataclass, fields, replace
from typing import Literal, Self

# Local ----------------------------------------------------------------------------------------------------------------
from .prefixes import PaddingPolicy, GREEK_MU, MICRO_SIGN
from .specifiers import PrecisionSpec
from .tools import fmt_type, fmt_value

# Classes --------------------------------------------------------------------------------------------------------------

OutOfRangePolicy = Literal["passthrough", "warn", "raise"]
UnknownPrefixPolicy = Literal["ignore", "warn", "raise"]
NonPositivePolicy = Literal["sign", "raise"]
Preset = Literal["default", "strict", "compat"]

_OUT_OF_RANGE_POLICIES = ("passthrough", "warn", "raise")
_UNKNOWN_PREFIX_POLICIES = ("ignore", "warn", "raise")
_NON_POSITIVE_POLICIES = ("sign", "raise")


def _check_choice(name: str, value, choices: tuple[str, ...]):
    if value not in choices:
        raise ValueError(f"{name} must be one of {choices}, got {fmt_value(value)}")


@dataclass(frozen=True)
class SIOptions:
    """
    Formatting and parsing options.

    Attributes:
        precision: Default precision spec for format_si(), e.g. "G6" or "N2".
        padding: Default padding policy for format_si().
        long_form_min_length: Units at least this long get long prefixes (kilo-metres),
            shorter ones get symbols (km).
        short_symbol_max_length: When parsing a unit with no dash, the first character is
            read as a prefix symbol only if the unit is at most this long; None removes the
            limit, so '12 metres' reads as milli-etres.
        micro_symbol: Symbol emitted for micro, GREEK SMALL LETTER MU or MICRO SIGN.
        rebucket: Move to the next prefix when rounding takes the scaled value to 1000.
        out_of_range: Values outside [1e-24, 1e27) are rendered unscaled ("passthrough"),
            rendered unscaled with an OutOfRangeWarning ("warn"), or rejected ("raise").
        unknown_prefix: Unrecognized prefix tokens while parsing are ignored, warned about or rejected.
        non_positive: Zero renders unscaled and negatives render as a signed scaled magnitude
            ("sign"), or both raise UndefinedExponentError ("raise").
    """

    precision: str = "G6"
    padding: PaddingPolicy = PaddingPolicy.DASH_ONLY
    long_form_min_length: int = 3
    short_symbol_max_length: int | None = 3
    micro_symbol: str = GREEK_MU
    rebucket: bool = True
    out_of_range: OutOfRangePolicy = "passthrough"
    unknown_prefix: UnknownPrefixPolicy = "ignore"
    non_positive: NonPositivePolicy = "sign"

    def __post_init__(self):
        # Fail early on an invalid precision spec, the str itself is kept
        PrecisionSpec.parse(self.precision)

        if not isinstance(self.padding, PaddingPolicy):
            object.__setattr__(self, "padding", PaddingPolicy.parse(self.padding))

        if not isinstance(self.long_form_min_length, int) or self.long_form_min_length < 1:
            raise ValueError(f"long_form_min_length must be int >= 1, got {fmt_value(self.long_form_min_length)}")

        if self.short_symbol_max_length is not None:
            if not isinstance(self.short_symbol_max_length, int) or self.short_symbol_max_length < 2:
                raise ValueError(
                    f"short_symbol_max_length must be int >= 2 or None, got {fmt_value(self.short_symbol_max_length)}"
                )

        if self.micro_symbol not in (GREEK_MU, MICRO_SIGN):
            raise ValueError(f"micro_symbol must be {GREEK_MU!r} or {MICRO_SIGN!r}, got {fmt_value(self.micro_symbol)}")

        _check_choice("out_of_range", self.out_of_range, _OUT_OF_RANGE_POLICIES)
        _check_choice("unknown_prefix", self.unknown_prefix, _UNKNOWN_PREFIX_POLICIES)
        _check_choice("non_positive", self.non_positive, _NON_POSITIVE_POLICIES)

    @classmethod
    def compat(cls) -> Self:
        """No rebucketing, and a first-letter prefix symbol is read for units of any length."""
        return cls(rebucket=False, short_symbol_max_length=None)

    @classmethod
    def strict(cls) -> Self:
        """Reject out-of-range values, unknown prefixes and non-positive values."""
        return cls(out_of_range="raise", unknown_prefix="raise", non_positive="raise")

    def merge(self, **kwargs) -> Self:
        """
        Return a copy with the given fields replaced.

        Raises:
            TypeError: An unknown option name was given.
        """
        names = {f.name for f in fields(self)}
        unknown = set(kwargs) - names
        if unknown:
            raise TypeError(f"unknown option(s): {', '.join(sorted(unknown))}")
        return replace(self, **kwargs)


_PRESETS = {
    "default": SIOptions,
    "strict": SIOptions.strict,
    "compat": SIOptions.compat,
}

_options = SIOptions()


# Methods --------------------------------------------------------------------------------------------------------------

def configure(preset: Preset | None = None, **overrides) -> SIOptions:
    """
    Update the module options and return them.

    Args:
        preset: Start from a named preset ("default", "strict", "compat"),
            or from the current options if None.
        **overrides: SIOptions fields to replace.
    """
    global _options
    if preset is None:
        base = _options
    elif preset in _PRESETS:
        base = _PRESETS[preset]()
    else:
        raise ValueError(f"unknown preset {fmt_value(preset)}, expected one of {tuple(_PRESETS)}")
    _options = base.merge(**overrides)
    return _options


def get_options() -> SIOptions:
    """Current module options."""
    return _options


def resolve_options(options: SIOptions | None) -> SIOptions:
    """Per-call options if given, otherwise the module options."""
    if options is None:
        return _options
    if not isinstance(options, SIOptions):
        raise TypeError(f"options must be SIOptions, got {fmt_type(options)}")
    return options

