"""printf-style text rendering into fixed-size byte windows.

The renderer follows a "render what fits, report what was needed" contract
so that a caller writing into spare buffer capacity can retry with exactly
the right amount of room.
Pure functions with no side effects besides writing into the window.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Tuple

from .errors import FormatError

DEFAULT_ENCODING = "utf-8"


def render(fmt: str, args: Tuple[Any, ...], encoding: str = DEFAULT_ENCODING) -> bytes:
    """Render `fmt % args` and encode the result.

    A single mapping argument is used for named conversions like `%(key)s`.

    Raises:
        FormatError: If the format does not match its arguments or the
            result cannot be encoded

    Examples:
        >>> render("%s=%d", ("answer", 42))
        b'answer=42'
        >>> render("%(name)s", ({"name": "x"},))
        b'x'
    """
    if len(args) == 1 and isinstance(args[0], Mapping):
        values = args[0]
    else:
        values = args

    try:
        return (fmt % values).encode(encoding)
    except (TypeError, ValueError, LookupError) as e:
        raise FormatError(f"cannot format string: {e}") from e


def render_into(
    window: memoryview,
    fmt: str,
    args: Tuple[Any, ...],
    encoding: str = DEFAULT_ENCODING,
) -> int:
    """Render into `window`, reserving its last byte for a terminator.

    Nothing is written unless the whole output fits in `len(window) - 1`
    bytes.

    Args:
        window: Writable destination
        fmt: printf-style format string
        args: Format arguments
        encoding: Text encoding of the output

    Returns:
        Number of bytes the output needs, excluding the terminator. The
        output fit if and only if this is less than len(window).
    """
    output = render(fmt, args, encoding)
    required = len(output)
    if required < len(window):
        window[:required] = output
    return required
