"""
clop dispatch engine: classify argv tokens, resolve values, call handlers.

What this module provides
- Settings: immutable configuration of one or many parse calls (enabled
  arities, negative-number recognition, diagnostic rendering).
- Context: the per-call state handed to every handler.
- parse_at(offset, argv, table, user): scan argv from `offset`.
- parse(argv, table, user): scan argv from index 1 (index 0 is the program).

Return contract
- negative: the parse failed. Either a handler returned this exact value, or
  -1 after a malformed token, a missing value, or any soft failure.
- non-negative: index of the first non-option token; len(argv) when every
  token was consumed as an option.

Token classification (in order)
- a token not starting with '-' stops the scan.
- a lone '-' is malformed (fatal).
- '-' followed by a digit stops the scan when negatives are recognized.
- '--' starts a long option ('--' alone is malformed), '-' a short cluster.

Value resolution
- long REQUIRED: '--name=value', or the next token.
- long OPTIONAL: '--name=value', '--name= value', '--name =value',
  '--name = value'; a bare following token is never taken.
- short REQUIRED: the rest of the token verbatim (a leading '=' included),
  or the next token.
- short OPTIONAL: '-x=value', '-x= value', '-x =value', '-x = value'.

Resumable scan
    index = 1
    while index < len(argv):
        index = parse_at(index, argv, table, data)
        if index < 0:
            raise SystemExit(1)
        if index < len(argv):
            positionals.append(argv[index])
        index += 1
"""
from .faults import *
from .options import Arity, Table
from .utils import *


class Settings:
    """
    immutable parse configuration.

    fields
    - arities: enabled Arity kinds (default: all). At least one must stay
      enabled; a table using a disabled kind is rejected when parsing starts.
    - negatives: treat '-<digit>...' as a non-option value (default True).
    - colorful: colored diagnostics (default False).
    - fancy: diagnostics inside a rich Panel (default False).
    - console: rich Console receiving diagnostics (default: stderr console).
    - prog: program name in diagnostics (default: __main__.__prog__ or argv[0]).
    """
    __slots__ = ("_arities", "_negatives", "_colorful", "_fancy", "_console", "_prog")

    arities = view("arities")
    negatives = view("negatives")
    colorful = view("colorful")
    fancy = view("fancy")
    console = view("console")
    prog = view("prog")

    def __init__(self, *, arities=tuple(Arity), negatives=True, colorful=False, fancy=False, console=Unset, prog=Unset):
        arities = frozenset(map(Arity, arities))
        if not arities:
            raise ValueError("at least one arity kind must remain enabled")
        if prog is not Unset and not isinstance(prog, str):
            raise TypeError("prog must be a string")
        object.__setattr__(self, "_arities", arities)
        object.__setattr__(self, "_negatives", bool(negatives))
        object.__setattr__(self, "_colorful", bool(colorful))
        object.__setattr__(self, "_fancy", bool(fancy))
        object.__setattr__(self, "_console", console)
        object.__setattr__(self, "_prog", prog)

    def __setattr__(self, name, value, /):
        raise AttributeError("settings are read-only")

    def __repr__(self):
        return "%s(arities=%s, negatives=%r, colorful=%r, fancy=%r)" % (
            type(self).__name__,
            "{%s}" % ", ".join(arity.name for arity in sorted(self._arities)),
            self._negatives,
            self._colorful,
            self._fancy,
        )


class Context:
    """
    per-call parse state handed to handlers.

    read-only
    - argv, argc, table, user, prog, settings

    updated by the engine before each handler call
    - index: position of the token being processed (for a value taken from
      the next token, the position of that value).
    - value: resolved value of the in-flight option, None when absent.
    - descriptor: the descriptor being dispatched.
    """
    __slots__ = ("_argv", "_table", "_user", "_prog", "_settings", "index", "value", "descriptor")

    argv = view("argv")
    prog = view("prog")
    settings = view("settings")

    def __init__(self, argv, table, user, /, *, prog, settings, index=0):
        self._argv = argv
        self._table = table
        self._user = user
        self._prog = prog
        self._settings = settings
        self.index = index
        self.value = None
        self.descriptor = None

    @property
    def table(self):
        return self._table

    @property
    def user(self):
        """
        the caller's object as passed to parse_at(), same identity, never copied.
        """
        return self._user

    @property
    def argc(self):
        return len(self._argv)

    def __repr__(self):
        return "%s(index=%d, value=%r, descriptor=%r)" % (type(self).__name__, self.index, self.value, self.descriptor)


DEFAULTS = Settings()


def _report(context, fault, /, **options):
    settings = context.settings
    report(
        fault,
        prog=context.prog,
        index=context.index,
        colorful=settings.colorful,
        fancy=settings.fancy,
        console=coalesce(settings.console, None),
        **options,
    )
    return -1 if fault.fatal else 1


def _peek(context):
    following = context.index + 1
    return context.argv[following] if following < context.argc else Unset


def _take(context):
    value = _peek(context)
    if value is not Unset:
        context.index += 1
    return value


def _dispatch(context, descriptor, value):
    context.descriptor = descriptor
    context.value = value
    status = descriptor(context)
    if status is None:
        return 0
    if isinstance(status, bool) or not isinstance(status, int):
        raise TypeError("handler of %s must return an int or None, not %r" % (
            " / ".join(descriptor.spellings), type(status).__name__
        ))
    return status


def _missing_assigned(context, spelling):
    return _report(context, MissingArgumentError(
        "missing argument after '=' of %s option %s" % ("long" if spelling.startswith("--") else "short", spelling),
        title="missing argument",
        code=FaultCode.MISSING_ASSIGNED_ARGUMENT,
        hint="put a value after '=' (for example: %s=<value>)" % spelling,
        token=spelling,
    ))


def _parse_long(context, body):
    if not body:
        return _report(context, MalformedTokenError(
            "missing long option --???",
            title="malformed option",
            code=FaultCode.MISSING_LONG_OPTION,
            hint="write the option name right after '--' (for example: --name)",
            token="--",
        ))

    name, assigned, suffix = body.partition("=")
    descriptor = context.table.find_long(name)
    if descriptor is None:
        return _report(context, UnrecognizedOptionError(
            "unrecognized long option --%s" % body,
            title="unrecognized option",
            code=FaultCode.UNRECOGNIZED_LONG_OPTION,
            hint="check the spelling of --%s" % name,
            token="--" + body,
        ))

    spelling = "--" + descriptor.long
    match descriptor.arity:
        case Arity.NONE:
            return _dispatch(context, descriptor, None)
        case Arity.REQUIRED:
            if suffix:
                return _dispatch(context, descriptor, suffix)
            if (value := _take(context)) is Unset:
                return _report(context, MissingArgumentError(
                    "missing argument of long option %s" % spelling,
                    title="missing argument",
                    code=FaultCode.MISSING_LONG_ARGUMENT,
                    hint="pass a value (for example: %s=<value> or %s <value>)" % (spelling, spelling),
                    token=spelling,
                ))
            return _dispatch(context, descriptor, value)
        case Arity.OPTIONAL:
            if assigned:
                if suffix:
                    return _dispatch(context, descriptor, suffix)
                if (value := _take(context)) is Unset:
                    return _missing_assigned(context, spelling)
                return _dispatch(context, descriptor, value)
            following = _peek(context)
            if following is Unset or not following.startswith("="):
                return _dispatch(context, descriptor, None)
            context.index += 1
            if following[1:]:
                return _dispatch(context, descriptor, following[1:])
            if (value := _take(context)) is Unset:
                return _missing_assigned(context, spelling)
            return _dispatch(context, descriptor, value)


def _parse_cluster(context, body):
    failed = False
    position = 0
    while position < len(body):
        char = body[position]
        rest = body[position + 1:]
        descriptor = context.table.find_short(char)
        if descriptor is None:
            _report(context, UnrecognizedOptionError(
                "unrecognized option -%s" % char,
                title="unrecognized option",
                code=FaultCode.UNRECOGNIZED_SHORT_OPTION,
                hint="check the spelling of -%s" % char,
                token="-" + char,
            ))
            failed = True
            position += 1
            continue

        value = None
        # the walk over this token ends once an option took a value
        consumed = False
        match descriptor.arity:
            case Arity.NONE:
                pass
            case Arity.REQUIRED:
                if rest:
                    value = rest
                elif (value := _take(context)) is Unset:
                    return _report(context, MissingArgumentError(
                        "missing argument for option '%s'" % char,
                        title="missing argument",
                        code=FaultCode.MISSING_SHORT_ARGUMENT,
                        hint="pass a value (for example: -%s<value> or -%s <value>)" % (char, char),
                        token="-" + char,
                    ))
                consumed = True
            case Arity.OPTIONAL:
                if rest.startswith("="):
                    if rest[1:]:
                        value = rest[1:]
                    elif (value := _take(context)) is Unset:
                        return _missing_assigned(context, "-" + char)
                elif not rest:
                    following = _peek(context)
                    if following is not Unset and following.startswith("="):
                        context.index += 1
                        if following[1:]:
                            value = following[1:]
                        elif (value := _take(context)) is Unset:
                            return _missing_assigned(context, "-" + char)
                consumed = value is not None

        status = _dispatch(context, descriptor, value)
        if status < 0:
            return status
        if status > 0:
            failed = True
        if consumed:
            break
        position += 1

    return 1 if failed else 0


def _resolve_prog(argv, settings):
    if settings.prog is not Unset:
        return settings.prog
    prog = getattr(__import__("__main__"), "__prog__", Unset)
    if isinstance(prog, str):
        return prog
    return argv[0] if argv else "clop"


def parse_at(offset, argv, table, user=None, /, *, settings=Unset):
    """
    scan `argv` from `offset`, dispatching every recognized option to its handler.

    parameters
    - offset: int, first index to inspect (0 <= offset <= len(argv)).
    - argv: sequence of str, the full argument vector (argv[0] is the program).
    - table: Table (or an iterable of Descriptor) of recognized options.
    - user: opaque object forwarded to handlers as context.user.
    - settings: Settings, defaults to DEFAULTS.

    returns
    - the index of the first non-option token, or a negative status.

    raises
    - TypeError / ValueError for caller contract violations: non-str tokens,
      bad offset, a table using a disabled arity, a handler returning a
      non-int. Exceptions raised by handlers propagate unchanged.
    """
    settings = coalesce(settings, DEFAULTS)
    if not isinstance(settings, Settings):
        raise TypeError("settings must be a Settings instance")
    argv = tuple(argv)
    for index, token in enumerate(argv):
        if not isinstance(token, str):
            raise TypeError("argv[%d] must be a string, not %r" % (index, type(token).__name__))
    if not isinstance(table, Table):
        table = Table(*table)
    for descriptor in table:
        if descriptor.arity not in settings.arities:
            raise ValueError("%r uses the disabled arity %s" % (descriptor, descriptor.arity.name))
    if isinstance(offset, bool) or not isinstance(offset, int):
        raise TypeError("offset must be an integer")
    if not 0 <= offset <= len(argv):
        raise ValueError("offset %d is outside of 0..%d" % (offset, len(argv)))

    context = Context(argv, table, user, prog=_resolve_prog(argv, settings), settings=settings, index=offset)
    failed = False

    while context.index < context.argc:
        token = argv[context.index]
        if not token.startswith("-"):
            break  # no (further) option present

        if len(token) == 1:
            return _report(context, MalformedTokenError(
                "missing option -?",
                title="malformed option",
                code=FaultCode.MISSING_OPTION,
                hint="write the option right after '-' (for example: -x)",
                token=token,
            ))

        if settings.negatives and "0" <= token[1] <= "9":
            break  # negative number, not an option

        context.value = None
        context.descriptor = None

        if token.startswith("--"):
            status = _parse_long(context, token[2:])
        else:
            status = _parse_cluster(context, token[1:])

        if status < 0:
            return status
        if status > 0:
            failed = True
        context.index += 1

    return -1 if failed else context.index


def parse(argv, table, user=None, /, *, settings=Unset):
    """
    scan `argv` from index 1; see parse_at().
    """
    argv = tuple(argv)
    return parse_at(min(1, len(argv)), argv, table, user, settings=settings)


__all__ = (
    "Settings",
    "Context",
    "DEFAULTS",
    "parse_at",
    "parse",
)
