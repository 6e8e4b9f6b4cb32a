"""
Help module behavioral tests (option spelling and table listing).

Conventions
- Test method names follow CamelCase per project convention.
"""
import io
import unittest
from unittest import TestCase

from rich.console import Console

from clop import Arity, Descriptor, Table, format_option, format_table, print_table


def noop(context):
    return 0


class TestHelp(TestCase):

    def setUp(self):
        self.table = Table(
            Descriptor(noop, short="h", long="help", help="Print this help and exit"),
            Descriptor(noop, short="l", long="logfile", arity=Arity.OPTIONAL,
                       help="Logfile. If set logging is enabled.\nYou can name a explicit logfile in PARAM"),
            Descriptor(noop, short="a", help="Set flag 'a'"),
            Descriptor(noop, long="integer", arity=Arity.REQUIRED),
        )

    def testFormatNone(self):
        self.assertEqual(format_option(self.table[0]), "-h, --help")

    def testFormatOptional(self):
        self.assertEqual(format_option(self.table[1]), "-l [=PARAM], --logfile [=PARAM]")

    def testFormatShortOnly(self):
        self.assertEqual(format_option(self.table[2]), "-a")

    def testFormatRequiredLongOnly(self):
        self.assertEqual(format_option(self.table[3]), "--integer PARAM")

    def testFormatTable(self):
        self.assertEqual(format_table(self.table[1:3]), (
            "  -l [=PARAM], --logfile [=PARAM]\n"
            "\tLogfile. If set logging is enabled.\n"
            "\tYou can name a explicit logfile in PARAM\n"
            "\n"
            "  -a\n"
            "\tSet flag 'a'\n"
            "\n"
        ))

    def testFormatTableWithoutHelp(self):
        self.assertEqual(format_table(self.table[3:]), "  --integer PARAM\n\t\n\n")

    def testPrintTable(self):
        stream = io.StringIO()
        print_table(self.table, Console(file=stream, width=200))
        output = stream.getvalue()
        self.assertIn("  -h, --help\n", output)
        self.assertIn("-l [=PARAM], --logfile [=PARAM]", output)
        self.assertIn("Print this help and exit", output)
        self.assertIn("You can name a explicit logfile in PARAM", output)
        self.assertNotIn("\x1b[", output)

    def testPrintTableDoesNotWrapLongHelp(self):
        stream = io.StringIO()
        table = Table(Descriptor(noop, short="a", help=" ".join(("x" * 30, "y" * 30, "z" * 30))))
        print_table(table, Console(file=stream, width=80))
        output = stream.getvalue()
        self.assertEqual(output.count("\n"), format_table(table).count("\n"))
        self.assertIn("z" * 30, output.splitlines()[1])


if __name__ == '__main__':
    unittest.main()
