import re
import sys

from rich.console import Console
from rich.pretty import pprint

from clop import *


def on_flag(context):
    context.user["flags"] |= 1 << context.descriptor.id


def on_integer(context):
    # optional sign then decimal digits only, nothing before or after
    if not re.fullmatch(r"[+-]?[0-9]+", context.value):
        Console(stderr=True, soft_wrap=True).print(
            "%s: argument no: %d option: %s expects a decimal number and not: %r" % (
                context.prog, context.index, format_option(context.descriptor), context.value
            ),
            markup=False,
            highlight=False,
        )
        return -1
    context.user["integer"] = int(context.value)
    return 0


def main(argv):
    data = {"logfile": None, "flags": 0, "integer": 0, "positionals": []}

    @option(short="h", long="help", help="Print this help and exit")
    def on_help(context):
        console = Console(soft_wrap=True)
        console.print("Usage: %s [options] [arguments]\nOptions:" % context.prog, markup=False, highlight=False)
        print_table(context.table, console)
        raise SystemExit(0)

    @option(short="l", long="logfile", arity=Arity.OPTIONAL, help="Logfile. If set logging is enabled.\n"
                                                                   "You can name a explicit logfile in PARAM")
    def on_logfile(context):
        context.user["logfile"] = context.value if context.value is not None else "/var/log/myDefaultLogfile"

    table = Table(
        on_help,
        on_logfile,
        Descriptor(on_flag, short="a", id=0, help="Set flag 'a'"),
        Descriptor(on_flag, short="b", id=1, help="Set flag 'b'"),
        Descriptor(on_flag, short="c", id=2, help="Set flag 'c'"),
        Descriptor(on_integer, short="i", long="integer", arity=Arity.REQUIRED, help="Read a integer number in PARAM"),
    )

    # options and non-option arguments may be mixed freely
    index = 1
    while index < len(argv):
        index = parse_at(index, argv, table, data)
        if index < 0:
            return 1
        if index < len(argv):
            data["positionals"].append(argv[index])
        index += 1

    pprint(data)
    return 0


if __name__ == '__main__':
    sys.exit(main(sys.argv))
