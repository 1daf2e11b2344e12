"""
Sentinel objects for lookups that may fail where None would be ambiguous.

Sentinels:
    NOT_FOUND: Indicates a failed lookup in the SI prefix table

Example:
    >>> position = SI_PREFIXES.bucket_from_short_symbol("k")
    >>> if position is NOT_FOUND:
    ...     position = NO_PREFIX_POSITION
"""

from typing import Final

__all__ = [
    'NOT_FOUND',
    'NotFoundType',
]


# Sentinel Types -------------------------------------------------------------------------------------------------------

class NotFoundType:
    """
    Sentinel type for NOT_FOUND.

    Return value for prefix lookups that fail. Position 0 is a valid table
    position (yotta), so neither 0 nor None can signal a miss.
    """
    __slots__ = ()
    _instance: 'NotFoundType | None' = None

    def __new__(cls) -> 'NotFoundType':
        """Ensures singleton behavior."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return '<NOT_FOUND>'

    def __bool__(self) -> bool:
        """Returns False, a miss is falsy."""
        return False

    def __reduce__(self) -> tuple:
        """Ensure pickling returns the singleton instance."""
        return (self.__class__, ())


NOT_FOUND: Final[NotFoundType] = NotFoundType()

