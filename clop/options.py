r"""
clop option table: descriptors, arity and the ordered table.

Overview
- Arity: how many values an option consumes and under which syntax.
  • NONE: presence-only, e.g. -v / --verbose.
  • REQUIRED: exactly one value, e.g. -i 42 / --integer=42.
  • OPTIONAL: a value only when an '=' makes the association, e.g. --logfile[=PATH].

- Descriptor: one declared option (spellings, arity, id, help and handler).
  Validated on construction; a descriptor with neither a short nor a long
  spelling cannot exist.

- Table: an explicit, ordered and immutable sequence of descriptors with
  first-match-wins lookups for long names and short characters.

- @option(...): decorator factory that builds a Descriptor around a handler.

Handlers
- A handler receives the per-call parse context and returns a status:
  • 0 (or None): success, scanning continues.
  • negative: fatal, the parse aborts and returns this exact value.
  • positive: soft failure, scanning continues but the parse returns -1.

Quick example:
    >>> from clop import Arity, Table, option
    >>> @option(short="v", long="verbose", help="Be verbose")
    ... def on_verbose(context):
    ...     context.user["verbose"] = True
    ...
    >>> @option(short="i", long="integer", arity=Arity.REQUIRED)
    ... def on_integer(context):
    ...     context.user["integer"] = int(context.value)
    ...
    >>> table = Table(on_verbose, on_integer)
"""
from collections.abc import Sequence
from enum import IntEnum

from .utils import *


class Arity(IntEnum):
    """
    number of values (0 or 1) an option consumes and the syntax it accepts.
    """
    NONE     = 0
    REQUIRED = 1
    OPTIONAL = 2


def _sanitize_short(short):
    if short is None:
        return None
    if not isinstance(short, str):
        raise TypeError("short spelling must be a string")
    if len(short) != 1:
        raise ValueError("short spelling must be exactly one character, not %r" % short)
    if short in "-=" or short.isspace():
        raise ValueError("short spelling %r is not allowed" % short)
    return short


def _sanitize_long(long):
    if long is None:
        return None
    if not isinstance(long, str):
        raise TypeError("long spelling must be a string")
    if not long:
        raise ValueError("long spelling must be a non-empty string")
    if long.startswith("-"):
        raise ValueError("long spelling %r must be given without leading dashes" % long)
    if "=" in long:
        raise ValueError("long spelling %r must not contain '='" % long)
    return long


def _sanitize_arity(arity):
    if isinstance(arity, bool) or not isinstance(arity, int):
        raise TypeError("arity must be an Arity member, not %r" % type(arity).__name__)
    try:
        return Arity(arity)
    except ValueError:
        raise ValueError("arity %r is outside of %s" % (arity, ", ".join(map(str, map(int, Arity))))) from None


class Descriptor:
    """
    one declared option: how it is spelled, how many values it takes and who handles it.

    construction (all keyword-only except the handler)
    - handler: callable receiving the parse context, returning 0/None, <0 or >0.
    - short: single character for "-x" (optional).
    - long: name for "--name" (optional).
    - arity: Arity (plain 0/1/2 are coerced), default Arity.NONE.
    - id: caller-defined integer, default 0; lets descriptors share a handler.
    - help: help text shown by the help renderer (optional).

    invariants
    - at least one of short/long is set (TypeError otherwise).
    - the descriptor is immutable once built.
    """
    __slots__ = ("_handler", "_arity", "_id", "_short", "_long", "_help")

    handler = view("handler")
    arity = view("arity")
    id = view("id")
    short = view("short")
    long = view("long")
    help = view("help")

    def __init__(self, handler, /, *, short=None, long=None, arity=Arity.NONE, id=0, help=None):
        if not callable(handler):
            raise TypeError("descriptor handler must be callable")
        short = _sanitize_short(short)
        long = _sanitize_long(long)
        if short is None and long is None:
            raise TypeError("descriptor requires at least a short or a long spelling")
        if isinstance(id, bool) or not isinstance(id, int):
            raise TypeError("descriptor id must be an integer")
        if help is not None and not isinstance(help, str):
            raise TypeError("descriptor help must be a string")

        object.__setattr__(self, "_handler", handler)
        object.__setattr__(self, "_arity", _sanitize_arity(arity))
        object.__setattr__(self, "_id", id)
        object.__setattr__(self, "_short", short)
        object.__setattr__(self, "_long", long)
        object.__setattr__(self, "_help", help)

    def __setattr__(self, name, value, /):
        raise AttributeError("descriptor is read-only")

    def __delattr__(self, name, /):
        raise AttributeError("descriptor is read-only")

    def __call__(self, context, /):
        return self._handler(context)

    @property
    def spellings(self):
        """
        the spellings as typed on a command line, short first ("-x", "--name").
        """
        return tuple(spelling for spelling in (
            "-" + self._short if self._short is not None else None,
            "--" + self._long if self._long is not None else None,
        ) if spelling is not None)

    def __repr__(self):
        return "%s(%s, arity=%s, id=%d)" % (
            type(self).__name__,
            ", ".join(map(repr, self.spellings)),
            self._arity.name,
            self._id,
        )

    def __rich_repr__(self):
        yield "short", self._short, None
        yield "long", self._long, None
        yield "arity", self._arity
        yield "id", self._id, 0
        yield "help", self._help, None


class Table(Sequence):
    """
    ordered, immutable sequence of descriptors.

    lookups scan in declaration order and return the first exact match, so
    duplicated spellings resolve to the earliest descriptor.
    """
    __slots__ = ("_descriptors",)

    def __init__(self, *descriptors):
        for index, descriptor in enumerate(descriptors):
            if not isinstance(descriptor, Descriptor):
                raise TypeError("table entry %d must be a Descriptor, not %r" % (index, type(descriptor).__name__))
        self._descriptors = descriptors

    def __getitem__(self, index):
        if isinstance(index, slice):
            return type(self)(*self._descriptors[index])
        return self._descriptors[index]

    def __len__(self):
        return len(self._descriptors)

    def __repr__(self):
        return "%s(%s)" % (type(self).__name__, ", ".join(map(repr, self._descriptors)))

    def find_long(self, name, /):
        """
        first descriptor whose long spelling equals `name` (length and content), or None.
        """
        for descriptor in self._descriptors:
            if descriptor.long == name:
                return descriptor
        return None

    def find_short(self, char, /):
        """
        first descriptor whose short spelling equals `char`, or None.
        """
        for descriptor in self._descriptors:
            if descriptor.short == char:
                return descriptor
        return None


def option(*, short=None, long=None, arity=Arity.NONE, id=0, help=None):
    """
    build a Descriptor around the decorated handler.

    the spellings are validated immediately, so a bad declaration fails at
    import time of the declaring module rather than during parsing.

        @option(short="l", long="logfile", arity=Arity.OPTIONAL)
        def on_logfile(context):
            ...
    """
    # validate eagerly; the handler is the only piece missing here
    if _sanitize_short(short) is None and _sanitize_long(long) is None:
        raise TypeError("option() requires at least a short or a long spelling")

    @rename("option")
    def wrapper(handler):
        return Descriptor(handler, short=short, long=long, arity=arity, id=id, help=help)

    return wrapper


__all__ = (
    "Arity",
    "Descriptor",
    "Table",
    "option",
)
