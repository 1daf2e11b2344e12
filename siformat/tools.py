#
# SIFormat Tools
#

# Standard library -----------------------------------------------------------------------------------------------------
import sys
import warnings
from typing import Any

_PACKAGE_PREFIX = __name__.rpartition(".")[0] + "."


# Methods --------------------------------------------------------------------------------------------------------------

def fmt_type(obj: Any, *, max_repr: int = 120) -> str:
    """Format type information for exception messages.

    Examples:
        >>> fmt_type(42)
        '<type: int>'
        >>> fmt_type(int)
        '<type: int>'
    """
    target_type = obj if isinstance(obj, type) else type(obj)
    try:
        type_name = target_type.__name__
    except AttributeError:
        type_name = str(target_type)

    module_name = getattr(target_type, "__module__", None)
    if module_name and module_name not in ("builtins", "decimal"):
        type_name = f"{module_name.split('.')[0]}.{type_name}"

    return f"<type: {_fmt_truncate(type_name, max_repr)}>"


def fmt_value(x: Any, *, max_repr: int = 120) -> str:
    """
    Format a single value as a type-value pair for exception and warning messages.

    Broken __repr__ methods are handled gracefully with fallback formatting.

    Examples:
        >>> fmt_value(42)
        '<int: 42>'
        >>> fmt_value("kilo-metres", max_repr=8)
        "<str: 'kilo...>"
    """
    t = type(x).__name__
    try:
        base_repr = repr(x)
    except Exception as e:
        base_repr = f"<{t} object (repr failed: {type(e).__name__})>"

    # ASCII style escapes inner ">" to avoid clashing with the wrapper
    base_repr = base_repr.replace(">", "\\>")
    return f"<{t}: {_fmt_truncate(base_repr, max_repr)}>"


def warn_external(message: str, category: type[Warning]):
    """Issue a warning attributed to the first caller outside this package."""
    frame = sys._getframe(1)
    stacklevel = 2
    while frame is not None and frame.f_globals.get("__name__", "").startswith(_PACKAGE_PREFIX):
        frame = frame.f_back
        stacklevel += 1
    warnings.warn(message, category, stacklevel=stacklevel)


def _fmt_truncate(s: str, max_len: int, ellipsis: str = "...") -> str:
    """Truncate s to at most max_len characters, ellipsis included."""
    if max_len < 1:
        raise ValueError(f"max_len must be >= 1, got {max_len}")
    if len(s) <= max_len:
        return s
    if max_len <= len(ellipsis):
        return s[:max_len]
    return s[:max_len - len(ellipsis)] + ellipsis
