"""
clop help rendering: spell descriptors and list a whole table.

Layout of one entry (format_table)

      -l [=PARAM], --logfile [=PARAM]
    <TAB>Logfile. If set logging is enabled.
    <TAB>You can name a explicit logfile in PARAM
    <blank line>

Parameter suffixes: " PARAM" for REQUIRED, " [=PARAM]" for OPTIONAL, nothing
for NONE. print_table() renders the same layout through rich, optionally
colored; the palette can be overridden with __styles__ in __main__.
"""
import sys
from collections import defaultdict

from rich.console import Console
from rich.text import Text

from .options import Arity

PARAMS = {
    Arity.NONE: "",
    Arity.REQUIRED: " PARAM",
    Arity.OPTIONAL: " [=PARAM]",
}


def format_option(descriptor, /):
    """
    spell a descriptor as on a command line, e.g. "-i PARAM, --integer PARAM".

    handy in handler diagnostics:
        print("bad value for %s" % format_option(context.descriptor), file=sys.stderr)
    """
    param = PARAMS[descriptor.arity]
    return ", ".join(spelling + param for spelling in descriptor.spellings)


def _indent(help):
    return "\n\t".join((help or "").split("\n"))


def format_table(table, /):
    """
    format every descriptor of `table` as a help listing (see module docs).
    """
    return "".join("  %s\n\t%s\n\n" % (format_option(descriptor), _indent(descriptor.help)) for descriptor in table)


def print_table(table, /, console=None, *, colorful=False):
    """
    print the help listing of `table` on `console` (stdout by default).
    """
    if console is None:
        console = Console(file=sys.stdout)

    styles = defaultdict(str, {
        "option-name": "bold #00E6FF",
        "metavar": "bold #FFD600",
        "description": "#9CA3AF",
    } | getattr(__import__("__main__"), "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    for descriptor in table:
        param = PARAMS[descriptor.arity]
        spellings = Text(", ").join(
            Text.assemble((spelling, styler("option-name")), (param, styler("metavar")))
            for spelling in descriptor.spellings
        )
        console.print(Text.assemble("  ", spellings), markup=False, highlight=False, soft_wrap=True)
        console.print(Text("\t" + _indent(descriptor.help), styler("description")), markup=False, highlight=False, soft_wrap=True)
        console.print(soft_wrap=True)


__all__ = (
    "format_option",
    "format_table",
    "print_table",
)
