"""
argcursor faults (structural errors and content diagnostics) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every issue the cursor can
  surface. Codes are grouped by domain so logs/searches stay predictable.
- OutOfRangeError: the structural failure. Raised synchronously when a cursor is
  asked for more tokens than it holds; never absorbed by the library.
- Diagnostic and its subclasses: content failures (malformed or out-of-range user
  values). Never raised; written to the cursor's sink and recorded on the cursor.
- report(): write a diagnostic to a borrowed sink (rich styling on terminals only).

Two channels, never conflated
- Asking for more than is available is a caller bug → exception.
- A user typing "12abc" is not → one or two lines on the sink, parsing continues.

Integration
- Cursor operations raise OutOfRangeError before touching any state.
- extract_into()/RangeValidator build diagnostics and hand them to Cursor.report().
"""
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console
from rich.text import Text

from .utils import isatty


class FaultCode(IntEnum):
    """
    canonical fault codes used across the library (stable identifiers).

    grouping (by high-level domain)
    - structural (211xx)
      • OUT_OF_RANGE
    - conversion (2111x / 2211x)
      • UNPARSABLE_VALUE, PARTIAL_VALUE (warning)
    - range validation (2112x)
      • VALUE_TOO_SMALL, VALUE_TOO_LARGE

    spacing leaves room for future additions without reshuffling existing codes.
    """
    # --- structural errors (21xxx) ---
    OUT_OF_RANGE                = 21101

    # --- conversion errors (21xxx) ---
    UNPARSABLE_VALUE            = 21111

    # --- range errors (21xxx) ---
    VALUE_TOO_SMALL             = 21121
    VALUE_TOO_LARGE             = 21122

    # --- warnings (22xxx) ---
    PARTIAL_VALUE               = 22111



class OutOfRangeError(IndexError):
    """
    structural failure: the cursor cannot satisfy the request.

    subclasses IndexError so generic sequence-style handlers keep working.
    options carry the context of the failed call (position, offset, size, total).
    """
    code = FaultCode.OUT_OF_RANGE

    def __init__(self, message, /, **options):
        assert isinstance(message, str)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)


class Diagnostic:
    """
    base type for content diagnostics written to a cursor's sink.

    a diagnostic is a value, not an exception: it holds the exact text that will
    be written (possibly several lines) plus free-form context options (token,
    bound, value...). rendering goes through __rich__ so hosts may restyle it via
    a __styles__ mapping in __main__.
    """
    code: FaultCode
    severity = "error"

    def __init__(self, message, /, **options):
        assert isinstance(message, str)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return self.message

    def __repr__(self):
        return "%s(%r)" % (type(self).__name__, self.message)

    def __eq__(self, other):
        if not isinstance(other, Diagnostic):
            return NotImplemented
        return type(self) is type(other) and self.message == other.message

    def __hash__(self):
        return hash((type(self), self.message))

    def __rich__(self):
        main = __import__("__main__")

        styles = defaultdict(str, {
            "error-label": "bold #FF4DA6",  # friendly pinky label
            "warning-label": "bold #FFB400",  # amber label for warnings
            "error-message": "#C8C8D0",  # soft light gray message
            "warning-message": "#D6D6DE",  # slightly lighter gray body
        } | getattr(main, "__styles__", {}))

        lines = []
        # Only "\n" separates lines; any other control character belongs to the token.
        for line in self.message.split("\n"):
            label, colon, rest = line.partition(": ")
            # Only the leading "Error:"/"Warning:" word is a label.
            if colon and not lines:
                lines.append(Text.assemble(
                    (label + ":", styles[self.severity + "-label"]),
                    (" " + rest, styles[self.severity + "-message"]),
                ))
            else:
                lines.append(Text(line, styles[self.severity + "-message"]))
        return Text("\n").join(lines)


class UnparsableValue(Diagnostic):
    code = FaultCode.UNPARSABLE_VALUE


class PartialValue(Diagnostic):
    code = FaultCode.PARTIAL_VALUE
    severity = "warning"


class ValueTooSmall(Diagnostic):
    code = FaultCode.VALUE_TOO_SMALL


class ValueTooLarge(Diagnostic):
    code = FaultCode.VALUE_TOO_LARGE


def report(diagnostic, sink, /):
    """
    render a diagnostic to a borrowed text sink.

    contract
    - sink only needs write(); it is never flushed-and-closed here.
    - non-terminal sinks receive the exact message followed by a newline, byte for
      byte (tabs, carriage returns and other control characters included).
    - terminals get the styled rich rendering; lines are never wrapped.
    """
    if not isinstance(diagnostic, Diagnostic):
        raise TypeError("report() argument must be a diagnostic")
    if not isatty(sink):
        sink.write(diagnostic.message + "\n")
        return
    console = Console(
        file=sink,
        color_system="auto",
        force_jupyter=False,
        highlight=False,
        markup=False,
        emoji=False,
        soft_wrap=True,
    )
    console.print(diagnostic)


__all__ = (
    "FaultCode",
    "OutOfRangeError",
    "Diagnostic",
    "UnparsableValue",
    "PartialValue",
    "ValueTooSmall",
    "ValueTooLarge",
    "report",
)
