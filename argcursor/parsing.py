"""
Typed extraction from a cursor.

- Slot: mutable output holder (target type + value) filled by extract_into().
- extract_into(cursor, slot): parse the next token into the slot; problems with
  the token are written to the cursor's sink, never raised.
- RangeValidator: transient helper returned by Cursor.range(); its
  validate_into(slot) parses like extract_into() and then reports bound
  violations. The value is assigned whatever the outcome.

Only running out of tokens raises (OutOfRangeError from Cursor.next()).
"""
import builtins
import math
from numbers import Real

from .converters import parse_prefix
from .faults import *
from .utils import *


class Slot:
    """
    Output holder for extract_into() and RangeValidator.validate_into().

    - type: callable used to convert the token (int, float, str, any type with a
      registered prefix parser, or any callable taking the whole token).
    - value: the assigned value, or the default until something is assigned.
    - assigned: True once a value was stored, or when a default was given.
    """

    def __init__(self, type=str, default=Unset, /):
        if not callable(type):
            raise TypeError("Slot() first argument must be callable")
        self._type = type
        self._value = coalesce(default)
        self._assigned = default is not Unset

    @property
    def type(self):
        return self._type

    @property
    def value(self):
        return self._value

    @value.setter
    def value(self, value):
        self._value = value
        self._assigned = True

    @property
    def assigned(self):
        return self._assigned

    def __repr__(self):
        typename = getattr(self._type, "__name__", repr(self._type))
        if not self._assigned:
            return "Slot(%s)" % typename
        return "Slot(%s, %r)" % (typename, self._value)


def extract_into(cursor, target, /):
    """
    Consume the next token of 'cursor' and convert it into 'target'.

    Outcomes
    - nothing parses: "Error: could not parse <token>." is reported, the slot is
      left as it was, returns False.
    - a prefix parses: the prefix value is assigned, a two-line "partially parsed"
      warning names the unparsed bit, returns True.
    - the whole token parses: assigned silently, returns True.

    Raises OutOfRangeError (from cursor.next()) when the cursor is exhausted.
    """
    if not isinstance(target, Slot):
        raise TypeError("extract_into() second argument must be a slot")

    token = cursor.next()
    try:
        value, consumed = parse_prefix(target.type, token)
    except ValueError:
        cursor.report(UnparsableValue(
            "Error: could not parse %s." % token,
            token=token,
            type=target.type,
        ))
        return False

    target.value = value
    if consumed < len(token):
        cursor.report(PartialValue(
            "Warning: partially parsed string\nUnparsed bit: '%s'" % token[consumed:],
            token=token,
            unparsed=token[consumed:],
            value=value,
        ))
    return True


def _render(bound, type):
    # Bounds print in the target's number type: 14 for ints, %g otherwise.
    if isinstance(type, builtins.type) and issubclass(type, int) and math.isfinite(bound):
        return str(int(bound))
    return "%g" % bound


class RangeValidator:
    """
    Bound check for the next number of a cursor.

    The number should be within [min, max]; when min == max the range is
    [min, +inf). Out-of-range numbers are still parsed and assigned; the
    violation is only reported to the cursor's sink.

    Both checks run independently and the bounds are never reordered: an
    inverted range (min > max) is taken as [min, +inf).
    """

    def __init__(self, cursor, min, max=Unset, /):
        max = coalesce(max, min)
        if not isinstance(min, Real) or not isinstance(max, Real):
            raise TypeError("RangeValidator() bounds must be real numbers")
        self._cursor = cursor
        self._min = float(min)
        self._max = float(max)

    @property
    def min(self):
        return self._min

    @property
    def max(self):
        return self._max

    @property
    def bounded(self):
        """
        Whether the range has a genuine upper bound.
        """
        return self._min < self._max

    def validate_into(self, target, /):
        """
        Parse the next token into 'target' and report bound violations.

        The label names the previous token ("Error: argument to --val") when one
        was consumed, and falls back to "Error: number" otherwise.

        Returns False when the token did not parse at all (no bound check runs),
        True otherwise.
        """
        if not isinstance(target, Slot):
            raise TypeError("validate_into() argument must be a slot")

        cursor = self._cursor
        if cursor.remaining_count() < cursor.total_count():
            label = "Error: argument to " + cursor.peek(-1)
        else:
            label = "Error: number"

        if not extract_into(cursor, target):
            return False

        value = target.value
        if value < self._min:
            cursor.report(ValueTooSmall(
                "%s must be greater than %s." % (label, _render(self._min, target.type)),
                value=value,
                bound=self._min,
            ))
        if self._min < self._max and self._max < value:
            cursor.report(ValueTooLarge(
                "%s must be smaller than %s." % (label, _render(self._max, target.type)),
                value=value,
                bound=self._max,
            ))
        return True

    def extract(self, type, default=None, /):
        """
        Validate the next token as 'type' and return it (or 'default' when nothing parsed).
        """
        self.validate_into(slot := Slot(type, default))
        return slot.value

    def __repr__(self):
        upper = "%g]" % self._max if self.bounded else "inf)"
        return "RangeValidator([%g, %s)" % (self._min, upper)


__all__ = (
    "Slot",
    "extract_into",
    "RangeValidator",
)
