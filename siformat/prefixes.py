#
# SIFormat SI Prefix Table
#

# Standard library -----------------------------------------------------------------------------------------------------
from dataclasses import dataclass
from enum import StrEnum, unique
from typing import Final

# Local ----------------------------------------------------------------------------------------------------------------
from .collections import FrozenBiMap
from .sentinels import NOT_FOUND, NotFoundType
from .tools import fmt_type, fmt_value

# @formatter:off

# Order dependent: position 0 is yotta (10^24), position 16 is yocto (10^-24)
LONG_PREFIXES: Final = (
    "yotta", "zetta", "exa", "peta", "tera", "giga", "mega", "kilo",
    "", "milli", "micro", "nano", "pico", "femto", "atto", "zepto", "yocto",
)
SHORT_PREFIXES: Final = "YZEPTGMk mμnpfazy"

NO_PREFIX_POSITION: Final = 8
MAX_EXPONENT: Final = 24
MIN_EXPONENT: Final = -24

# Space never occurs inside a prefix token, so the no-scaling slot cannot match real input
_NO_PREFIX_PLACEHOLDER: Final = " "

MICRO_SIGN: Final = "µ"         # U+00B5, accepted as an alias of GREEK SMALL LETTER MU
GREEK_MU: Final = "μ"           # U+03BC
SYMBOL_ALIASES: Final = {MICRO_SIGN: GREEK_MU}

# @formatter:on


# Classes --------------------------------------------------------------------------------------------------------------

@unique
class PaddingPolicy(StrEnum):
    """
    How a prefix attaches to the unit in formatted text.

    Attributes:
        DASH_ONLY (str)                : Dash between long prefix and unit - 1.5 kilo-metres
        DASH_WITH_TRAILING_SPACE (str) : As DASH_ONLY, plus one trailing space - 1.5 kilo-metres␣
        TRAILING_SPACE_ONLY (str)      : No dash, one trailing space - 1.5 kilometres␣
        NO_DASH_NO_SPACE (str)         : Prefix concatenated to unit - 1.5 kilometres

    Short symbols never take a dash; the trailing space applies to both forms.
    """
    DASH_ONLY = "dash"
    DASH_WITH_TRAILING_SPACE = "dash_space"
    TRAILING_SPACE_ONLY = "space"
    NO_DASH_NO_SPACE = "none"

    @classmethod
    def parse(cls, value: "PaddingPolicy | str") -> "PaddingPolicy":
        """
        Policy from a member, its value ("dash") or its name ("DASH_ONLY").

        Raises:
            ValueError: value names no policy.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            if value in cls._value2member_map_:
                return cls(value)
            if value.upper() in cls.__members__:
                return cls[value.upper()]
        raise ValueError(f"invalid padding {fmt_value(value)}, expected one of {[p.value for p in cls]}")

    @property
    def dash(self) -> bool:
        return self in (PaddingPolicy.DASH_ONLY, PaddingPolicy.DASH_WITH_TRAILING_SPACE)

    @property
    def trailing_space(self) -> bool:
        return self in (PaddingPolicy.DASH_WITH_TRAILING_SPACE, PaddingPolicy.TRAILING_SPACE_ONLY)


@dataclass(frozen=True)
class PrefixEntry:
    """
    One SI prefix of the table.

    index is the signed bucket: -8 is yotta (10^24), 0 is no scaling, 8 is yocto (10^-24).
    """

    index: int
    long_name: str
    short_symbol: str

    @property
    def exponent(self) -> int:
        """Power of ten the prefix stands for, e.g. 3 for kilo."""
        return -3 * self.index

    @property
    def is_empty(self) -> bool:
        """True for the no-scaling entry."""
        return self.index == 0

    @property
    def position(self) -> int:
        """Zero-based table position, 0 for yotta up to 16 for yocto."""
        return self.index + NO_PREFIX_POSITION

    def __str__(self) -> str:
        return self.long_name


class PrefixTable:
    """
    Immutable lookup between table positions, exponents and SI prefix text.

    Positions 0..16 walk yotta (10^24) to yocto (10^-24) in steps of 10^3,
    position 8 is the empty "no scaling" entry. A module-wide instance is
    available as SI_PREFIXES.
    """

    __slots__ = ("_entries", "_long", "_short")

    def __init__(self, long_prefixes: tuple[str, ...] = LONG_PREFIXES, short_prefixes: str = SHORT_PREFIXES):
        if len(long_prefixes) != len(short_prefixes):
            raise ValueError(
                f"long and short prefixes must align 1:1, got {len(long_prefixes)} and {len(short_prefixes)}"
            )
        if len(long_prefixes) != 2 * NO_PREFIX_POSITION + 1:
            raise ValueError(f"prefix table must hold {2 * NO_PREFIX_POSITION + 1} entries")
        if long_prefixes[NO_PREFIX_POSITION] or short_prefixes[NO_PREFIX_POSITION] != _NO_PREFIX_PLACEHOLDER:
            raise ValueError("the no-scaling entry must sit in the middle of the table")

        self._entries = tuple(
            PrefixEntry(
                index=position - NO_PREFIX_POSITION,
                long_name=long_name,
                short_symbol=symbol.strip(),
            )
            for position, (long_name, symbol) in enumerate(zip(long_prefixes, short_prefixes))
        )
        self._long = FrozenBiMap(
            (position, long_name or _NO_PREFIX_PLACEHOLDER) for position, long_name in enumerate(long_prefixes)
        )
        self._short = FrozenBiMap(enumerate(short_prefixes))

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self):
        return iter(self._entries)

    def __getitem__(self, position: int) -> PrefixEntry:
        return self._entries[self._check_position(position)]

    def __repr__(self) -> str:
        return f"PrefixTable({', '.join(e.short_symbol or '-' for e in self._entries)})"

    @property
    def entries(self) -> tuple[PrefixEntry, ...]:
        return self._entries

    @property
    def no_prefix(self) -> PrefixEntry:
        return self._entries[NO_PREFIX_POSITION]

    def long_prefix_at(self, position: int) -> str:
        """Long prefix name at position, "" for the no-scaling entry."""
        return self._entries[self._check_position(position)].long_name

    def short_symbol_at(self, position: int) -> str:
        """Short prefix symbol at position, "" for the no-scaling entry."""
        return self._entries[self._check_position(position)].short_symbol

    def entry_for_exponent(self, exponent: int) -> PrefixEntry:
        """
        Entry for a power of ten that is a multiple of 3 in [-24, 24].

        Raises:
            ValueError: exponent is not a multiple of 3 or is out of the table range.
        """
        if not isinstance(exponent, int) or isinstance(exponent, bool):
            raise TypeError(f"exponent must be int, got {fmt_type(exponent)}")
        if exponent % 3 or not MIN_EXPONENT <= exponent <= MAX_EXPONENT:
            raise ValueError(
                f"exponent must be a multiple of 3 in [{MIN_EXPONENT}, {MAX_EXPONENT}], got {exponent}"
            )
        return self._entries[NO_PREFIX_POSITION - exponent // 3]

    def bucket_from_long_prefix(self, text: str, *, partial: bool = False) -> int | NotFoundType:
        """
        Table position of a long prefix name, or NOT_FOUND.

        Matching is case-insensitive and exact: 'kilo' matches, 'k' and 'kil' do not.
        With partial=True a long name may also be the leading part of text, so
        'kilometres' resolves to kilo; the longest such name wins.

        Examples:
            >>> SI_PREFIXES.bucket_from_long_prefix("pico")
            12
            >>> SI_PREFIXES.bucket_from_long_prefix("kilometres", partial=True)
            7
            >>> SI_PREFIXES.bucket_from_long_prefix("") is NOT_FOUND
            True
        """
        if not isinstance(text, str):
            raise TypeError(f"prefix text must be str, got {fmt_type(text)}")

        token = text.casefold()
        if not token.strip():
            return NOT_FOUND
        position = self._long.get_key(token, NOT_FOUND)
        if position is not NOT_FOUND or not partial:
            return position

        best: int | NotFoundType = NOT_FOUND
        best_length = 0
        for position, long_name in self._long.items():
            if long_name != _NO_PREFIX_PLACEHOLDER and token.startswith(long_name) and len(long_name) > best_length:
                best, best_length = position, len(long_name)
        return best

    def bucket_from_short_symbol(self, char: str) -> int | NotFoundType:
        """
        Table position of a single-character prefix symbol, or NOT_FOUND.

        Matching is case-sensitive ('M' is mega, 'm' is milli). The micro sign
        U+00B5 is accepted for micro.

        Examples:
            >>> SI_PREFIXES.bucket_from_short_symbol("k")
            7
            >>> SI_PREFIXES.bucket_from_short_symbol("µ") == SI_PREFIXES.bucket_from_short_symbol("μ")
            True
            >>> SI_PREFIXES.bucket_from_short_symbol(" ") is NOT_FOUND
            True
        """
        if not isinstance(char, str):
            raise TypeError(f"prefix symbol must be str, got {fmt_type(char)}")
        if len(char) != 1 or char == _NO_PREFIX_PLACEHOLDER:
            return NOT_FOUND
        return self._short.get_key(SYMBOL_ALIASES.get(char, char), NOT_FOUND)

    def _check_position(self, position: int) -> int:
        if not isinstance(position, int) or isinstance(position, bool):
            raise TypeError(f"position must be int, got {fmt_type(position)}")
        if not 0 <= position < len(self._entries):
            raise IndexError(f"position must be in [0, {len(self._entries) - 1}], got {fmt_value(position)}")
        return position


SI_PREFIXES: Final = PrefixTable()
