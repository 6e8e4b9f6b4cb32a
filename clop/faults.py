"""
clop faults (parse diagnostics) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every diagnostic the
  engine emits. Codes are grouped by domain to keep logs/searches predictable.
- ParseFault: base type carrying message + options; knows how to render itself
  through rich, plain or colored, with or without panel chrome.
- report(): central entry point to surface a fault on the configured console.

Severity
- fatal faults (malformed tokens, missing values) abort the scan; the engine
  returns a negative status right after reporting them.
- soft faults (unrecognized options) are reported and the scan continues; the
  overall result becomes a failure at the end of the scan.

Faults are reported, never raised, by the engine: the integer return contract
carries the outcome. Hosts may still raise them themselves.

Integration
- the host application can expose __prog__, __styles__ and __codes__ in
  __main__ to override the program name, the palette and the code labels.
"""
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the parser (stable identifiers).

    grouping (by high-level domain)
    - malformed tokens (2111x)
      • MISSING_OPTION, MISSING_LONG_OPTION
    - unrecognized options (2112x)
      • UNRECOGNIZED_LONG_OPTION, UNRECOGNIZED_SHORT_OPTION
    - missing values (2113x)
      • MISSING_LONG_ARGUMENT, MISSING_SHORT_ARGUMENT, MISSING_ASSIGNED_ARGUMENT
    """
    # --- malformed tokens ---
    MISSING_OPTION            = 21111
    MISSING_LONG_OPTION       = 21112

    # --- unrecognized options ---
    UNRECOGNIZED_LONG_OPTION  = 21121
    UNRECOGNIZED_SHORT_OPTION = 21122

    # --- missing values ---
    MISSING_LONG_ARGUMENT     = 21131
    MISSING_SHORT_ARGUMENT    = 21132
    MISSING_ASSIGNED_ARGUMENT = 21133

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class ParseFault(Exception):
    """
    base diagnostic of the parser.

    options commonly carried
    - prog: program name for the header (argv[0] unless overridden).
    - code: FaultCode of the fault.
    - title: short title for the header.
    - hint: one clear, actionable sentence.
    - token / index: offending token and its position in the argument vector.
    - colorful / fancy: rendering switches (see Settings).
    """
    fatal = True

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str) or message is Unset
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return "%s: %s" % (self.options.get("prog", "clop"), self.message)

    def __rich__(self):
        main = __import__("__main__")
        colorful = self.options.get("colorful", False)
        fancy = self.options.get("fancy", False)

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF" if self.fatal else "bold #FFB400",
            "title": "bold #FF4DA6" if self.fatal else "bold #FFC2E0",

            # body
            "message": "#C8C8D0",
            "position": "#6B6F7A",
            "hint-arrow": "#9CE19C dim",
            "hint": "italic #9CE19C",
        } | getattr(main, "__styles__", {}))

        def styler(style):
            return styles[style] if colorful else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if isinstance(fragment, Text):
                return fragment if colorful else Text(fragment.plain)
            return Text(str(fragment), style)

        header = Text.assemble(
            "[ ",
            text(self.options.get("prog", "clop"), styler("prog-name")),
            " — ",
            text(self.options["code"].normalize() if "code" in self.options else "", styler("code")),
            " | ",
            text(self.options.get("title", "").title(), styler("title")),
            " ]",
        )
        message = text(str(self), styler("message"))
        if "index" in self.options:
            # position in the argument vector, argv[0] being the program
            message = Text.assemble(message, " ", text("(argv[%d])" % self.options["index"], styler("position")))
        renders = [message]
        if self.options.get("hint"):
            renders.append(Text.assemble(text(" → ", styler("hint-arrow")), text(self.options["hint"], styler("hint"))))

        if fancy:
            return Panel(Group(*renders), title=header, title_align="left")

        return Group(header, *renders)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class MalformedTokenError(ParseFault): ...
class MissingArgumentError(ParseFault): ...


class UnrecognizedOptionError(ParseFault):
    fatal = False


def report(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __rich__ and __replace__ methods (see ParseFault).
    - options are merged into the fault via __replace__(**options) before printing.
    - the fault is printed on options["console"] when given, otherwise on the
      module console (stderr). Nothing is raised.

    returns
    - the merged fault, so callers may keep it for later inspection.
    """
    if (
        not hasattr(fault, "__rich__") or
        not callable(fault.__rich__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("report() argument must have a __rich__ and __replace__ methods")
    target = options.pop("console", None)
    if target is None:
        target = console
    fault = fault.__replace__(**options)
    target.print(fault, markup=False, highlight=False)
    return fault


__all__ = (
    "FaultCode",
    "ParseFault",
    "MalformedTokenError",
    "MissingArgumentError",
    "UnrecognizedOptionError",
    "report",
)
