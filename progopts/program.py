"""
Progopts registry: declare, seal, resolve and set program options.

What this module provides
- ProgramOptions: the registry owning every Section/Option of a program.
  • Declaration API: add_section / add_hidden_section / add_obsolete_section,
    add_option / add_hidden_option / add_obsolete_option.
  • Lifecycle: open (declarations allowed) → sealed (values only) → parsed.
  • Resolution: require(), requires_value(), translate_shorthand(), get().
  • Mutation: set_value() is the single validating path shared by the
    command-line and config-file parsers.
  • Reporting: fail() records a fault, flags the run as failed, prints the
    fault (with its parse context) to stderr, and returns False so that
    parsers can bail out with `return options.fail(...)`.
  • Help: print_usage(), print_help(section), print_sections_help().

- ProcessingResult: the observable outcome of all parse passes
  (touched option names, positional arguments, failure flag, recorded faults).

Error policy
- Programmer mistakes (declaring after seal, unknown section, duplicate
  shorthand) raise StructureError subclasses immediately.
- User mistakes (unknown option, bad value, ...) are faults: recorded and
  printed, never raised. The host decides whether to exit.

Quick start
    from progopts import ProgramOptions, ArgumentParser, BooleanParameter

    options = ProgramOptions("prog", "usage: #progname# [<options>]")
    options.add_section("", "global options")
    options.add_option("--quiet,-q", "be quiet", quiet := BooleanParameter())
    options.seal()

    if ArgumentParser(options).parse(["prog", "-q"]):
        print(quiet.value)  # True
"""
import builtins

from rich.console import Console
from rich.text import Text

from . import similarity as _similarity
from .faults import *
from .options import Option, Section
from .parameters import Parameter, ObsoleteParameter
from .utils import *

PROGNAME = "#progname#"


class ProcessingResult:
    """
    outcome of option processing.

    - touched: set of full option names whose setter ran at least once.
    - positionals: positional arguments in order of appearance.
    - failed: monotonic; once a failure is recorded it stays set for the run.
    - faults: every recorded fault, in order.
    """
    __slots__ = ("_positionals", "_touched", "_failed", "_faults")

    positionals = mirror("positionals")
    faults = mirror("faults")

    def __init__(self):
        self._positionals = []
        self._touched = set()
        self._failed = False
        self._faults = []

    def touch(self, name, /):
        self._touched.add(name)

    def touched(self, name=Unset, /):
        """
        with a name: whether that option was touched ("--" prefix allowed).
        without: the frozen set of all touched full names.
        """
        if name is Unset:
            return frozenset(self._touched)
        return Option.strip_prefix(name) in self._touched

    @property
    def failed(self):
        return self._failed

    def fail(self, fault, /):
        self._faults.append(fault)
        self._failed = True

    def add_positional(self, value, /):
        self._positionals.append(value)

    def __repr__(self):
        return "processing-result(touched=%r, positionals=%r, failed=%r)" % (
            sorted(self._touched), self._positionals, self._failed
        )


class ProgramOptions:
    """
    Program options registry (typically one per program run).

    Parameters
    - progname: str
      name of the binary (argv[0]); replaces "#progname#" in `usage`.
    - usage: str
      usage line printed at the top of help.
    - more: str
      lead-in printed before the list of "--help-<section>" switches.
    - terminal_width: Callable[[], int] | None
      help wrapping width; defaults to the stdout console width.
    - similarity: Callable[[str, str], int] | None
      distance used for "did you mean" suggestions; None disables suggestions.
    - colorful / fancy: bool
      rendering flags for faults and help.
    - stdout / stderr: rich Console | None
      output targets for help and faults (tests inject recording consoles).
    """

    def __init__(
            self,
            progname,
            usage="",
            more="",
            *,
            terminal_width=None,
            similarity=_similarity.levenshtein,
            colorful=False,
            fancy=False,
            stdout=None,
            stderr=None,
    ):
        if not isinstance(progname, str):
            raise TypeError("program name must be a string")
        if not isinstance(usage, str) or not isinstance(more, str):
            raise TypeError("usage and more must be strings")
        if terminal_width is not None and not callable(terminal_width):
            raise TypeError("terminal width must be callable")
        if similarity is not None and not callable(similarity):
            raise TypeError("similarity must be callable")

        self._progname = progname
        self._usage = usage.replace(PROGNAME, progname, 1)
        self._more = more
        self._stdout = stdout if stdout is not None else Console(highlight=False)
        self._stderr = stderr if stderr is not None else Console(stderr=True, highlight=False)
        self._terminal_width = terminal_width or (lambda: self._stdout.width)
        self._similarity = similarity
        self._colorful = bool(colorful)
        self._fancy = bool(fancy)
        self._sections = {}
        self._shorthands = {}
        self._processing_result = ProcessingResult()
        self._sealed = False

    progname = mirror("progname")
    usage = mirror("usage")
    sections = mirror("sections")
    shorthands = mirror("shorthands")
    sealed = mirror("sealed")
    processing_result = mirror("processing_result")

    # ── Declaration ─────────────────────────────────────────────────────────

    def seal(self):
        """
        forbid further declarations (sections included); values can still be set.
        sealing twice is a no-op.
        """
        for section in self._sections.values():
            section.seal()
        self._sealed = True

    def _check_if_sealed(self):
        if self._sealed:
            raise SealedOptionsError("program options are already sealed")

    def add_section(self, section, description=Unset, /):
        """
        add a section, either as a Section or as (name, description).

        a section name that is already registered keeps its first declaration.
        """
        self._check_if_sealed()
        if not isinstance(section, Section):
            section = Section(section, coalesce(description, ""))
        elif description is not Unset:
            raise TypeError("add_section() takes no description when given a section")
        section = self._sections.setdefault(section.name, section)
        ordered = sorted(self._sections.items())
        self._sections.clear()
        self._sections.update(ordered)
        return section

    def add_hidden_section(self, name, description, /):
        return self.add_section(Section(name, description, hidden=True))

    def add_obsolete_section(self, name, /):
        return self.add_section(Section(name, "", hidden=True, obsolete=True))

    def add_option(self, option, description=Unset, parameter=Unset, /):
        """
        add an option, either as an Option or as (declaration, description, parameter).

        Raises
        - SealedOptionsError: the registry is sealed.
        - UnknownSectionError: the option names an undeclared section.
        - DuplicateShorthandError: the shorthand is already taken.
        """
        if not isinstance(option, Option):
            option = Option(option, coalesce(description, ""), parameter)
        elif description is not Unset or parameter is not Unset:
            raise TypeError("add_option() takes no description/parameter when given an option")
        return self._add_option(option)

    def add_hidden_option(self, name, description, parameter, /):
        return self._add_option(Option(name, description, parameter, hidden=True))

    def add_obsolete_option(self, name, description, /):
        return self._add_option(Option(name, description, ObsoleteParameter(), hidden=True, obsolete=True))

    def _add_option(self, option):
        self._check_if_sealed()
        try:
            section = self._sections[option.section]
        except KeyError:
            raise UnknownSectionError("no section defined for program option %s" % option.display_name) from None

        if option.shorthand:
            if option.shorthand in self._shorthands:
                raise DuplicateShorthandError("shorthand option already defined for option %s" % option.display_name)
            self._shorthands[option.shorthand] = option.full_name

        section.add_option(option)
        return option

    # ── Resolution ──────────────────────────────────────────────────────────

    def _lookup(self, name):
        """
        resolve a name into (section, option); either may be None.
        """
        section_name, option_name = Option.split_name(name)
        section = self._sections.get(section_name)
        if section is None:
            return None, None
        return section, section.options.get(option_name)

    def translate_shorthand(self, name, /):
        """
        full option name for a shorthand letter; unknown names come back unchanged.
        """
        return self._shorthands.get(name, name)

    def require(self, name, /, context=Unset):
        """
        check that an option exists; reports an unknown-option fault when it does not.
        """
        section, option = self._lookup(name)
        if option is None:
            return self.unknown_option(name, context)
        return True

    def requires_value(self, name, /):
        """
        whether the option expects a value; unknown names are treated as not requiring one.
        """
        _, option = self._lookup(name)
        if option is None:
            return False
        return option.parameter.requires_value

    def get(self, name, type=Parameter, /):
        """
        typed accessor for the parameter bound to an option.

        returns the parameter when it is an instance of `type`, otherwise None
        (also None for unknown names).
        """
        if not isinstance(type, builtins.type) or not issubclass(type, Parameter):
            raise TypeError("get() type must be a parameter type")
        _, option = self._lookup(name)
        if option is None or not isinstance(option.parameter, type):
            return None
        return option.parameter

    def walk(self, callback, /, only_touched=False):
        """
        call callback(section, option) for every non-obsolete option of every
        non-obsolete section, in registry order (sections and options by name).
        """
        for section in self._sections.values():
            if section.obsolete:
                continue
            for option in section.options.values():
                if option.obsolete:
                    continue
                if only_touched and not self._processing_result.touched(option.full_name):
                    continue
                callback(section, option)

    def similar(self, value, /, cutoff=8, limit=4):
        """
        display names of the options closest to `value` (see progopts.similarity).
        """
        if self._similarity is None:
            return []
        candidates = []
        self.walk(lambda section, option: candidates.append((option.full_name, option.display_name)))
        return _similarity.similar(value, candidates, self._similarity, cutoff, limit)

    # ── Mutation ────────────────────────────────────────────────────────────

    def set_value(self, name, value, /, context=Unset):
        """
        validate and store a value for an option.

        behavior
        - unknown section/option: unknown-option fault (with suggestions).
        - obsolete section: accepted silently, nothing is touched.
        - obsolete option: accepted silently, marked as touched.
        - otherwise: the parameter validates the value; a ValueError becomes an
          invalid-value fault, success marks the option as touched.
        """
        section, option = self._lookup(name)
        if section is None:
            return self.unknown_option(name, context)
        if section.obsolete:
            return True
        if option is None:
            return self.unknown_option(name, context)

        if option.obsolete:
            self._processing_result.touch(option.full_name)
            return True

        try:
            option.parameter.set(value)
        except ValueError as exception:
            return self.fail(InvalidValueError(
                "error setting value for option '%s': %s" % (name, exception),
                title="invalid value",
                code=FaultCode.INVALID_VALUE,
                input=name,
                value=value,
                hint="run '%s --help' to see the expected type of %s" % (self._progname, option.display_name),
                docs=getdoc(FaultCode.INVALID_VALUE),
                exception=exception,
            ), context)

        self._processing_result.touch(option.full_name)
        return True

    def add_positional(self, value, /):
        self._processing_result.add_positional(value)

    # ── Reporting ───────────────────────────────────────────────────────────

    def unknown_option(self, name, /, context=Unset):
        """
        report an unknown option along with close matches; always returns False.
        """
        suggestions = self.similar(name)
        return self.fail(UnknownOptionError(
            "unknown option '%s'" % name,
            title="unknown option",
            code=FaultCode.UNKNOWN_OPTION,
            input=name,
            suggestions=suggestions,
            hint="run '%s --help' to see all available options" % self._progname,
            docs=getdoc(FaultCode.UNKNOWN_OPTION),
        ), context)

    def fail(self, fault, /, context=Unset):
        """
        single reporting path for user-facing failures.

        records the fault (with its context and rendering flags), marks the run
        as failed, prints the fault to stderr and returns False.
        """
        if isinstance(fault, str):
            fault = OptionsFault(fault, title="error")
        if not isinstance(fault, OptionsFault):
            raise TypeError("fail() argument must be a fault or a message")
        fault = fault.__replace__(
            context=coalesce(context, fault.options.get("context", "program options")),
            progname=self._progname,
            colorful=self._colorful,
            fancy=self._fancy,
        )
        self._processing_result.fail(fault)
        self._stderr.print(fault, soft_wrap=True)
        return False

    # ── Help ────────────────────────────────────────────────────────────────

    def _styler(self, style):
        if not self._colorful:
            return ""
        return ({
            "usage": "bold #36C5F0",
            "section-name": "bold #FFFFFF",
            "option-name": "bold #00E6FF",
            "description": "#9CA3AF",
            "more": "#737373",
        } | getattr(__import__("__main__"), "__styles__", {})).get(style, "")

    def options_width(self):
        """
        widest visible name/type label across all sections.
        """
        return max((section.options_width() for section in self._sections.values()), default=0)

    def print_usage(self):
        self._stdout.print(Text(self._usage, self._styler("usage")), soft_wrap=True)
        self._stdout.print(soft_wrap=True)

    def print_help(self, section="*", /):
        """
        print usage, the help of the requested section ("*" for all), then the
        list of per-section help switches.
        """
        self.print_usage()

        width = self._terminal_width()
        column = self.options_width()

        for current in self._sections.values():
            if section == "*" or section == current.name:
                current.print_help(width, column, self._stdout, self._styler)

        self.print_sections_help()

    def print_sections_help(self):
        line = Text(self._more, self._styler("more"))
        for section in self._sections.values():
            if section.name and section.has_options():
                line.append(" --help-" + section.name, self._styler("option-name"))
        self._stdout.print(line, soft_wrap=True)

    def __repr__(self):
        return "program-options(%r, sections=%r, sealed=%r)" % (
            self._progname, list(self._sections), self._sealed
        )


__all__ = (
    "PROGNAME",
    "ProcessingResult",
    "ProgramOptions",
)
