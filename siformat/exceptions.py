"""
SIFormat errors and warnings.

Every error is local, synchronous and non-retryable. All errors derive from
SIFormatError, itself a ValueError, so callers that only care about "bad
input" can catch ValueError.

Warnings are emitted with the standard warnings machinery when the matching
option is set to "warn".
"""

# Standard library -----------------------------------------------------------------------------------------------------
from typing import Any

# Local ----------------------------------------------------------------------------------------------------------------
from .tools import fmt_value

__all__ = [
    "SIFormatError",
    "InvalidNumberError",
    "MalformedInputError",
    "UndefinedExponentError",
    "OutOfRangeError",
    "UnknownPrefixError",
    "OutOfRangeWarning",
    "UnknownPrefixWarning",
]


# Errors ---------------------------------------------------------------------------------------------------------------

class SIFormatError(ValueError):
    """Base class for SI formatting and parsing errors."""


class InvalidNumberError(SIFormatError):
    """
    The numeric portion of SI text failed to parse.

    Attributes:
        text: The complete input text.
        number: The offending numeric substring.
    """

    def __init__(self, text: str, number: str):
        self.text = text
        self.number = number
        super().__init__(f"cannot parse number {number!r} from SI text {text!r}")


class MalformedInputError(SIFormatError):
    """
    SI text does not have the '<number> <unit>' shape.

    Attributes:
        text: The complete input text.
        reason: Short description of what is missing.
    """

    def __init__(self, text: Any, reason: str):
        self.text = text
        self.reason = reason
        super().__init__(f"malformed SI text {text!r}: {reason}")


class UndefinedExponentError(SIFormatError):
    """The decimal exponent of the value is undefined (non-finite, or non-positive when configured so)."""

    def __init__(self, value: Any, reason: str):
        self.value = value
        self.reason = reason
        super().__init__(f"decimal exponent undefined for {fmt_value(value)}: {reason}")


class OutOfRangeError(SIFormatError):
    """The value magnitude lies outside the SI prefix range [1e-24, 1e27)."""

    def __init__(self, value: Any):
        self.value = value
        super().__init__(f"value {fmt_value(value)} outside SI prefix range [1e-24, 1e27)")


class UnknownPrefixError(SIFormatError):
    """
    A prefix token in SI text matches no SI prefix.

    Attributes:
        text: The complete input text.
        token: The unrecognized prefix token.
    """

    def __init__(self, text: str, token: str):
        self.text = text
        self.token = token
        super().__init__(f"unknown SI prefix {token!r} in {text!r}")


# Warnings -------------------------------------------------------------------------------------------------------------

class OutOfRangeWarning(UserWarning):
    """Value rendered without an SI prefix because its magnitude is outside [1e-24, 1e27)."""


class UnknownPrefixWarning(UserWarning):
    """Value parsed unscaled because its prefix token was not recognized."""
