r"""
argcursor argument cursor.

Overview
- Cursor: an argument vector wrapped in a stateful, peekable, shiftable sequence.
  • position-tracked reads: peek(), peek(offset), shift(), next().
  • sub-cursors for sub-command style interfaces: sub_range(), sub_range_until(),
    sub_command(), sub_command_until().
  • typed reads: extract() and range(), built on argcursor.parsing.

State
- arguments: the tokens after the program name (argv[1:]), or whatever was appended.
- position: index of the next unread token; 0 <= position <= len(arguments).
- program_name: metadata only, never part of the arguments.
- diagnostic_sink: borrowed text stream (sys.stderr by default) that receives
  content diagnostics; swapping it takes effect for every later diagnostic.

Failure guarantee
- Every failing operation raises OutOfRangeError before touching any state.
- Exception: sub_command()/sub_command_until() consume the name token first, and
  that consumption is not rolled back when the slice that follows fails.

Quick example:
    >>> cursor = Cursor(["prog", "--threads", "4", "build", "a", "b"])
    >>> cursor.next()
    '--threads'
    >>> threads = cursor.range(1, 64).extract(int)
    >>> build = cursor.sub_command(2)
    >>> build.program_name, build.arguments
    ('build', ('a', 'b'))
"""
import sys

from .faults import *
from .parsing import RangeValidator, Slot, extract_into
from .utils import *


class Cursor:
    """
    Stateful cursor over an argument vector.

    Construction
    - Cursor(argv): argv[0] becomes program_name, argv[1:] the arguments.
    - Cursor(): empty; populate with append() and name it via program_name.

    Not thread-safe: give each worker its own cursor (sub_range() partitions a
    vector into independent cursors).
    """
    arguments = mirror("arguments")
    position = mirror("position")
    faults = mirror("faults")

    def __init__(self, argv=Unset, /, *, sink=Unset):
        if isinstance(argv, str):
            raise TypeError("Cursor() argument must be an iterable of strings, not a string")
        argv = list(coalesce(argv, ()))
        for token in argv:
            if not isinstance(token, str):
                raise TypeError("Cursor() argument must be an iterable of strings")

        self._program_name = argv[0] if argv else ""
        self._arguments = argv[1:]
        self._position = 0
        self._sink = coalesce(sink, sys.stderr)
        self._faults = []

    @classmethod
    def from_process(cls, *, sink=Unset):
        """
        Build a cursor from the running process's sys.argv.
        """
        return cls(sys.argv, sink=sink)

    # Inspection

    def remaining_count(self):
        """
        Number of tokens not read yet.
        """
        return len(self._arguments) - self._position

    def total_count(self):
        """
        Number of tokens held, regardless of position.
        """
        return len(self._arguments)

    def peek(self, offset=0, /):
        """
        Look at the token at position + offset without moving.

        offset may be negative to look at tokens already consumed; peek(0) is peek().

        Raises OutOfRangeError when position + offset is outside the arguments.
        """
        if not isinstance(offset, int):
            raise TypeError("peek() argument must be an integer")

        index = self._position + offset
        if index < 0:
            raise OutOfRangeError(
                "The index must not become negative.",
                position=self._position,
                offset=offset,
                total=len(self._arguments),
            )
        if index >= len(self._arguments):
            raise OutOfRangeError(
                "No argument left to peek." if offset == 0 else "Argument vector too short.",
                position=self._position,
                offset=offset,
                total=len(self._arguments),
            )
        return self._arguments[index]

    def shift(self):
        """
        Advance by one token.

        Raises OutOfRangeError when there is nothing left to shift past.
        """
        if self._position >= len(self._arguments):
            raise OutOfRangeError(
                "No arguments left to shift.",
                position=self._position,
                total=len(self._arguments),
            )
        self._position += 1

    def next(self):
        """
        Return the next token and advance past it.

        Raises OutOfRangeError when exhausted; the cursor is left untouched.
        """
        # peek() raises before anything moves.
        token = self.peek()
        self.shift()
        return token

    # Mutation

    def append(self, value, /):
        """
        Append a token at the end; position is not affected.
        """
        if not isinstance(value, str):
            raise TypeError("append() argument must be a string")
        self._arguments.append(value)

    @property
    def program_name(self):
        return self._program_name

    @program_name.setter
    def program_name(self, name):
        self._program_name = name

    @property
    def diagnostic_sink(self):
        """
        Borrowed text stream receiving diagnostics; the cursor never closes it.
        """
        return self._sink

    @diagnostic_sink.setter
    def diagnostic_sink(self, sink):
        self._sink = sink

    def report(self, diagnostic, /):
        """
        Record a diagnostic and write it to the current sink.
        """
        if not isinstance(diagnostic, Diagnostic):
            raise TypeError("report() argument must be a diagnostic")
        self._faults.append(diagnostic)
        report(diagnostic, self._sink)

    # Sub-sequence extraction

    def sub_range(self, size, /):
        """
        Carve the next 'size' tokens into a new, independent cursor.

        The new cursor has an empty program_name, position 0 and the default sink.
        This cursor advances by 'size'.

        Raises OutOfRangeError when fewer than 'size' tokens remain; nothing moves.
        """
        if not isinstance(size, int) or isinstance(size, bool):
            raise TypeError("sub_range() argument must be an integer")
        if size < 0 or self._position + size > len(self._arguments):
            raise OutOfRangeError(
                "Not enough arguments to form a sub-range.",
                position=self._position,
                size=size,
                total=len(self._arguments),
            )

        cursor = type(self)()
        cursor._arguments = self._arguments[self._position:self._position + size]
        self._position += size
        return cursor

    def sub_range_until(self, predicate, /):
        """
        Carve tokens into a new cursor until predicate(token) holds.

        The token satisfying the predicate stays in this cursor. When no token
        satisfies it, every remaining token is taken. Never raises OutOfRangeError.
        """
        if not callable(predicate):
            raise TypeError("sub_range_until() argument must be callable")

        end = self._position
        while end < len(self._arguments) and not predicate(self._arguments[end]):
            end += 1

        cursor = type(self)()
        cursor._arguments = self._arguments[self._position:end]
        self._position = end
        return cursor

    def sub_command(self, size, /):
        """
        Same as sub_range(), but the next token becomes the new cursor's program_name.

        Advances by 'size + 1'. The name token is consumed before the slice is
        attempted and stays consumed if the slice raises OutOfRangeError.
        """
        name = self.next()
        cursor = self.sub_range(size)
        cursor.program_name = name
        return cursor

    def sub_command_until(self, predicate, /):
        """
        Same as sub_range_until(), but the next token becomes the program_name.

        The name token is never tested against the predicate. Raises
        OutOfRangeError only when there is no name token to read.
        """
        name = self.next()
        cursor = self.sub_range_until(predicate)
        cursor.program_name = name
        return cursor

    # Typed reads

    def range(self, min, max=Unset, /):
        """
        Return a range validator for the next token.

        Use like this:
            cursor = Cursor(sys.argv)
            if cursor.next() == "--val":
                cursor.range(2, 14).validate_into(slot)

        range(min) and range(min, min) both mean [min, +inf).

        The error label is built from the previous token ("argument to --val").
        When scanning several values in a row, use extract_into() directly and
        write your own messages.
        """
        return RangeValidator(self, min, max)

    def extract(self, type, default=None, /):
        """
        Parse the next token as 'type' and return it (or 'default' when nothing parsed).

        Raises OutOfRangeError when exhausted; parse problems go to the sink.
        """
        extract_into(self, slot := Slot(type, default))
        return slot.value

    # Protocols

    def __len__(self):
        return self.remaining_count()

    def __iter__(self):
        return self

    def __next__(self):
        if self._position >= len(self._arguments):
            raise StopIteration
        return self.next()

    def __rich_repr__(self):
        yield "program_name", self._program_name
        yield "arguments", tuple(self._arguments)
        yield "position", self._position

    def __repr__(self):
        return "%s(%s)" % (
            type(self).__name__,
            ", ".join("%s=%r" % pair for pair in self.__rich_repr__()),
        )


__all__ = (
    "Cursor",
)
