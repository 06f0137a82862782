r"""
Progopts front ends: command-line arguments and INI-style config files.

Both parsers are thin tokenizers. Every value they find goes through
ProgramOptions.set_value(), so an option behaves the same whether it was
given on the command line or in a config file. Both stop at the first
failure (the registry has already recorded and printed it) and leave the
values applied so far in place.

ArgumentParser
- argv[0] (the program name) is skipped.
- "--name", "--section.name": long option; "-x": shorthand; anything else is
  a positional argument, recorded verbatim.
- "--name=value" / "-x=value": inline value (the first "=" splits).
- "--name value": when the option requires a value, the next token is taken
  whole as its value (even if it starts with a dash); options that need no
  value are set right away with an empty value.
- help_section(argv): "*" for a bare "--help", "<section>" for
  "--help-<section>", "" when no help was requested. Callers check it before
  parse().

IniFileParser
- one statement per line, three shapes (anything else is an error):
    comment/blank   ^[ \t]*([#;].*)?$
    section header  ^[ \t]*\[([-_A-Za-z0-9]*)\][ \t]*$
    assignment      ^[ \t]*(([-_A-Za-z0-9]*\.)?[-_A-Za-z0-9]*)[ \t]*=[ \t]*(.*)?[ \t]*$
- a key that already contains a "." is used as-is; other keys are prefixed
  with the current section (if any).
- failures are reported as: config file '<path>', line #<n>
"""
import os
import re
import sys
from collections.abc import Iterable

from .faults import *
from .program import ProgramOptions
from .utils import *


class ArgumentParser:
    """
    Parse command-line arguments into a ProgramOptions registry.
    """
    context = "command-line options"

    def __init__(self, options, /):
        if not isinstance(options, ProgramOptions):
            raise TypeError("argument parser needs program options")
        self._options = options

    @staticmethod
    def _sanitize(argv):
        if argv is Unset:
            return list(sys.argv)
        if isinstance(argv, str) or not isinstance(argv, Iterable):
            raise TypeError("argv must be an iterable of strings")
        argv = list(argv)
        if not all(isinstance(item, str) for item in argv):
            raise TypeError("argv must be an iterable of strings")
        return argv

    def help_section(self, argv=Unset, /):
        """
        name of the section help was requested for, "*" for all, "" for none.
        """
        for current in self._sanitize(argv)[1:]:
            if current.startswith("--help"):
                if len(current) <= 7:
                    return "*"
                return current[7:]
        return ""

    def parse(self, argv=Unset, /):
        """
        parse argv (sys.argv when omitted); returns True when all went well.
        """
        options = self._options
        context = self.context

        # option still waiting for its value (from the previous token)
        last = ""

        for current in self._sanitize(argv)[1:]:
            if last:
                option, value = last, current
            else:
                if current.startswith("--"):
                    dashes = 2
                elif current.startswith("-"):
                    dashes = 1
                else:
                    options.add_positional(current)
                    continue

                option, equals, value = current[dashes:].partition("=")
                if dashes == 1:
                    option = options.translate_shorthand(option)

                if not equals:
                    if not options.require(option, context):
                        return False
                    if not options.requires_value(option):
                        if not options.set_value(option, "", context):
                            return False
                    else:
                        last = option
                    continue

            if not options.set_value(option, value, context):
                return False
            last = ""

        if last:
            return options.fail(MissingValueError(
                "no value specified for option '%s'" % last,
                title="missing value",
                code=FaultCode.MISSING_VALUE,
                input=last,
                hint="pass a value after a space or inline (for example: --%s=<value>)" % last,
                docs=getdoc(FaultCode.MISSING_VALUE),
            ), context)

        return True


class IniFileParser:
    """
    Parse an INI-style config file into a ProgramOptions registry.
    """
    comment = re.compile(r"[ \t]*([#;].*)?")
    section = re.compile(r"[ \t]*\[([-_A-Za-z0-9]*)\][ \t]*")
    assignment = re.compile(r"[ \t]*(([-_A-Za-z0-9]*\.)?[-_A-Za-z0-9]*)[ \t]*=[ \t]*(.*)?[ \t]*")

    def __init__(self, options, /):
        if not isinstance(options, ProgramOptions):
            raise TypeError("config file parser needs program options")
        self._options = options

    def parse(self, filename, /):
        """
        parse a UTF-8 config file (a leading byte order mark is skipped); returns True when all went well.
        """
        filename = os.fspath(filename)
        context = "config file '%s'" % filename

        try:
            file = open(filename, encoding="utf-8-sig")
        except OSError as exception:
            return self._options.fail(UnreadableFileError(
                "unable to open file",
                title="unreadable file",
                code=FaultCode.UNREADABLE_FILE,
                input=filename,
                hint="check that %r exists and is readable" % filename,
                docs=getdoc(FaultCode.UNREADABLE_FILE),
                exception=exception,
            ), context)

        with file:
            try:
                return self.parse_lines(file, filename)
            except UnicodeDecodeError as exception:
                return self._options.fail(UnreadableFileError(
                    "unable to decode file as utf-8",
                    title="unreadable file",
                    code=FaultCode.UNREADABLE_FILE,
                    input=filename,
                    hint="save %r with utf-8 encoding" % filename,
                    docs=getdoc(FaultCode.UNREADABLE_FILE),
                    exception=exception,
                ), context)

    def parse_lines(self, lines, /, filename="<string>"):
        """
        parse config lines (any iterable of strings, e.g. an open file).

        line numbers are 1-based and count comment and blank lines too.
        """
        options = self._options
        current = ""

        for number, line in enumerate(lines, start=1):
            line = line.rstrip("\r\n")

            if self.comment.fullmatch(line):
                continue

            context = "config file '%s', line #%d" % (filename, number)

            if match := self.section.fullmatch(line):
                current = match[1]
            elif match := self.assignment.fullmatch(line):
                value = match[3] or ""
                if not current or match[2]:
                    option = match[1]
                else:
                    option = current + "." + match[1]

                if not options.set_value(option, value, context):
                    return False
            else:
                return options.fail(UnknownLineError(
                    "unknown line type",
                    title="unknown line type",
                    code=FaultCode.UNKNOWN_LINE_TYPE,
                    input=line,
                    line=number,
                    hint="use '[section]', 'name = value', or start the line with '#' or ';'",
                    docs=getdoc(FaultCode.UNKNOWN_LINE_TYPE),
                ), context)

        return True


__all__ = (
    "ArgumentParser",
    "IniFileParser",
)
