"""
Textual conversion contract: prefix parsers.

Every target type must answer two questions about a token: did anything parse,
and how many characters were consumed. The second one is what lets extract_into()
tell a clean value ("12") from a value with trailing garbage ("12abc").

Resolution order for parse_prefix(type, text)
1. a prefix parser registered with @converter(type) (exact type match);
2. a __parse_prefix__(text) classmethod defined on the type;
3. otherwise the type is called on the whole token: success is a full parse,
   ValueError/TypeError means nothing parsed.

Built-in parsers follow stream-extraction rules: leading whitespace is skipped,
then the longest valid prefix is read.

    >>> parse_prefix(int, "  42x")
    (42, 4)
    >>> parse_prefix(str, "one two")
    ('one', 3)
"""
import builtins
import re
from decimal import Decimal
from fractions import Fraction

_converters = {}

_INTEGER = re.compile(r"\s*([+-]?[0-9]+)")
_REAL = re.compile(
    r"\s*([+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?))"
)
_RATIONAL = re.compile(
    r"\s*([+-]?(?:[0-9]+/[0-9]+|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?))"
)
_BOOLEAN = re.compile(r"\s*(true|false|[01])(?![0-9])", re.IGNORECASE)
_WORD = re.compile(r"\s*(\S+)")


def converter(type, /):
    """
    Register a prefix parser for the given type.

    The decorated function receives the raw token and returns (value, consumed),
    or raises ValueError when no prefix of the token is a valid value.

        @converter(Path)
        def _path(text):
            return Path(text), len(text)
    """
    if not isinstance(type, builtins.type):
        raise TypeError("converter() argument must be a type")

    def decorator(function):
        if not callable(function):
            raise TypeError("@converter() must be applied to a callable")
        _converters[type] = function
        return function

    return decorator


def _match(pattern, text, kind):
    if (match := pattern.match(text)) is None:
        raise ValueError("no %s prefix in %r" % (kind, text))
    return match


@converter(int)
def _integer(text):
    match = _match(_INTEGER, text, "integer")
    return int(match.group(1)), match.end()


@converter(float)
def _real(text):
    match = _match(_REAL, text, "real")
    return float(match.group(1)), match.end()


@converter(Decimal)
def _decimal(text):
    match = _match(_REAL, text, "decimal")
    return Decimal(match.group(1)), match.end()


@converter(Fraction)
def _rational(text):
    match = _match(_RATIONAL, text, "rational")
    try:
        return Fraction(match.group(1)), match.end()
    except ZeroDivisionError:
        raise ValueError("zero denominator in %r" % text) from None


@converter(bool)
def _boolean(text):
    match = _match(_BOOLEAN, text, "boolean")
    return match.group(1).lower() in ("1", "true"), match.end()


@converter(str)
def _word(text):
    match = _match(_WORD, text, "word")
    return match.group(1), match.end()


def parse_prefix(type, text, /):
    """
    Parse the longest valid prefix of text as the given type.

    Returns
    - (value, consumed): consumed counts every character read, including skipped
      leading whitespace; consumed < len(text) means trailing characters remain.

    Raises
    - ValueError when no prefix parses.
    - TypeError when type is not callable.
    """
    if not isinstance(text, str):
        raise TypeError("parse_prefix() second argument must be a string")
    if not callable(type):
        raise TypeError("parse_prefix() first argument must be callable")

    if (function := _converters.get(type)) is not None:
        return function(text)

    if callable(hook := getattr(type, "__parse_prefix__", None)):
        return hook(text)

    try:
        return type(text), len(text)
    except (ValueError, TypeError) as exception:
        raise ValueError("cannot convert %r with %r" % (text, type)) from exception


__all__ = (
    "converter",
    "parse_prefix",
)
