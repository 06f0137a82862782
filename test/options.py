"""
Options module behavioral tests (declaration parsing, naming, help lines).

Scope
- Validate Option declaration strings: "[--][section.]name[,[-]shorthand]".
- Validate derived names (full_name, display_name) and read-only fields.
- Validate help rendering: padding column, default annotation, wrapping, hidden.
- Validate Section ordering, replacement, visibility and width.

Conventions
- Test method names follow CamelCase per project convention.
"""
import io
import unittest
from unittest import TestCase

from rich.console import Console

from progopts import Option, Section, BooleanParameter, StringParameter, UInt32Parameter, SealedOptionsError


class OptionNamingTest(TestCase):

    def testSectionNameAndShorthand(self):
        option = Option("--server.endpoints,-e", "server endpoints", StringParameter())
        self.assertEqual(option.section, "server")
        self.assertEqual(option.name, "endpoints")
        self.assertEqual(option.shorthand, "e")
        self.assertEqual(option.full_name, "server.endpoints")
        self.assertEqual(option.display_name, "--server.endpoints")

    def testGlobalOption(self):
        option = Option("--quiet,-q", "be quiet", BooleanParameter())
        self.assertEqual(option.section, "")
        self.assertEqual(option.full_name, "quiet")
        self.assertEqual(option.display_name, "--quiet")
        self.assertEqual(option.shorthand, "q")

    def testDashesAreOptional(self):
        option = Option("server.endpoints,e", "", StringParameter())
        self.assertEqual(option.full_name, "server.endpoints")
        self.assertEqual(option.shorthand, "e")

    def testNoShorthand(self):
        option = Option("--database.journal-size", "", UInt32Parameter())
        self.assertEqual(option.shorthand, "")

    def testDeclarationRoundTrip(self):
        for section, name, shorthand in (("server", "ports", "p"), ("", "no-server", "n"), ("db", "x-y", "z")):
            declaration = "--%s,-%s" % (section + "." + name if section else name, shorthand)
            option = Option(declaration, "", StringParameter())
            self.assertEqual(option.full_name, section + "." + name if section else name)
            self.assertEqual(option.shorthand, shorthand)

    def testSplitName(self):
        self.assertEqual(Option.split_name("--a.b"), ("a", "b"))
        self.assertEqual(Option.split_name("a.b.c"), ("a", "b.c"))
        self.assertEqual(Option.split_name("--plain"), ("", "plain"))

    def testStripHelpers(self):
        self.assertEqual(Option.strip_prefix("--name"), "name")
        self.assertEqual(Option.strip_prefix("-n"), "-n")
        self.assertEqual(Option.strip_shorthand("-n"), "n")
        self.assertEqual(Option.strip_shorthand("n"), "n")

    def testFieldsAreReadOnly(self):
        option = Option("--quiet", "", BooleanParameter())
        with self.assertRaises(AttributeError):
            option.name = "loud"  # NOQA

    def testParameterTypeChecked(self):
        with self.assertRaises(TypeError):
            Option("--quiet", "", object())
        with self.assertRaises(TypeError):
            Option(42, "", BooleanParameter())


class OptionHelpTest(TestCase):

    def testNameWithType(self):
        option = Option("--server.ports", "the server ports", UInt32Parameter(8529))
        self.assertEqual(option.name_with_type(), "--server.ports <uint32>")
        self.assertEqual(option.options_width(), len("--server.ports <uint32>"))

    def testHiddenOptionHasNoWidthAndNoHelp(self):
        option = Option("--debugging.crash-me", "", BooleanParameter(), hidden=True)
        self.assertEqual(option.options_width(), 0)
        self.assertEqual(option.help_lines(80, 30), [])

    def testSingleLineWithDefault(self):
        option = Option("--server.ports", "the server ports", UInt32Parameter(8529))
        lines = option.help_lines(80, 30)
        self.assertEqual(len(lines), 1)
        self.assertEqual(
            lines[0].plain,
            "  " + "--server.ports <uint32>".ljust(30) + "   " + "the server ports (default: 8529)"
        )

    def testFlagsHaveNoDefaultAnnotation(self):
        option = Option("--quiet", "tell the server to be quiet", BooleanParameter())
        self.assertNotIn("default", option.help_lines(80, 20)[0].plain)

    def testWrappedDescriptionIsIndented(self):
        option = Option("--x", "alpha beta gamma delta", BooleanParameter())
        lines = option.help_lines(30, 10)
        self.assertEqual([line.plain for line in lines], [
            "  " + "--x".ljust(10) + "   " + "alpha beta ",
            " " * 15 + "gamma delta",
        ])

    def testPrintHelpWritesLines(self):
        file = io.StringIO()
        option = Option("--server.ports", "the server ports", UInt32Parameter(8529))
        option.print_help(80, 30, Console(file=file, width=200))
        self.assertIn("--server.ports <uint32>", file.getvalue())
        self.assertIn("(default: 8529)", file.getvalue())


class SectionTest(TestCase):

    def testDisplayNameUsesAlias(self):
        self.assertEqual(Section("", "globals", "global options").display_name, "global options")
        self.assertEqual(Section("server", "server options").display_name, "server")

    def testOptionsOrderedByName(self):
        section = Section("server", "")
        for name in ("ports", "endpoints", "int32-value"):
            section.add_option(Option("--server." + name, "", StringParameter()))
        self.assertEqual(list(section.options), ["endpoints", "int32-value", "ports"])

    def testDuplicateNameReplacesOption(self):
        section = Section("server", "")
        section.add_option(Option("--server.ports", "first", StringParameter()))
        section.add_option(Option("--server.ports", "second", StringParameter()))
        self.assertEqual(len(section.options), 1)
        self.assertEqual(section.options["ports"].description, "second")

    def testSealedSectionRefusesOptions(self):
        section = Section("server", "")
        section.add_option(Option("--server.ports", "", StringParameter()))
        section.seal()
        with self.assertRaises(SealedOptionsError):
            section.add_option(Option("--server.late", "", StringParameter()))
        self.assertEqual(list(section.options), ["ports"])

    def testOptionsViewIsReadOnly(self):
        section = Section("server", "")
        with self.assertRaises(TypeError):
            section.options["x"] = None  # NOQA

    def testHasOptions(self):
        section = Section("server", "")
        self.assertFalse(section.has_options())
        section.add_option(Option("--server.hidden", "", StringParameter(), hidden=True))
        self.assertFalse(section.has_options())
        section.add_option(Option("--server.visible", "", StringParameter()))
        self.assertTrue(section.has_options())

    def testHiddenSectionHasNoOptionsAndNoWidth(self):
        section = Section("debugging", "", hidden=True)
        section.add_option(Option("--debugging.crash-me", "", BooleanParameter()))
        self.assertFalse(section.has_options())
        self.assertEqual(section.options_width(), 0)
        self.assertEqual(section.help_lines(80, 20), [])

    def testOptionsWidthIsWidestVisibleOption(self):
        section = Section("server", "")
        section.add_option(Option("--server.a", "", StringParameter()))
        section.add_option(Option("--server.much-longer-name", "", StringParameter(), hidden=True))
        section.add_option(Option("--server.bb", "", StringParameter()))
        self.assertEqual(section.options_width(), len("--server.bb <string>"))

    def testHelpLines(self):
        section = Section("server", "Server options")
        section.add_option(Option("--server.ports", "the server ports", UInt32Parameter(8529)))
        lines = [line.plain for line in section.help_lines(80, 25)]
        self.assertEqual(lines[0], "Section 'server' (Server options)")
        self.assertIn("--server.ports <uint32>", lines[1])
        self.assertEqual(lines[-1], "")


if __name__ == "__main__":
    unittest.main()
