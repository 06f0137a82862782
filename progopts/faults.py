"""
Progopts faults (parse failures and structural errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for all user-facing failures.
  Codes are grouped by domain (name resolution, values, config files) to keep
  copy consistent and make logs/searches predictable.
- OptionsFault: base type for user-facing failures. A fault carries a message and
  options (title, code, context, hint, ...) and knows how to render itself with rich.
  Faults are recorded and printed by the registry; they are never raised at the caller.
- StructureError: base type for programmer mistakes made through the declaration
  API (sealed registry, unknown section, duplicate shorthand). These are raised.
- getdoc(): optional description lookup for a code from the host application.

Rendering
- Every fault names the parse context it happened in (“command-line options”,
  “config file 'x.conf', line #3”), followed by the message and an optional hint.
- Styling is configurable via __styles__ in __main__ and is suppressed entirely
  when the registry is not colorful.
"""
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset


class FaultCode(IntEnum):
    """
    canonical fault codes used by the parsers (stable identifiers).

    grouping
    - resolution (2110x)
      • UNKNOWN_OPTION, MISSING_VALUE
    - values (2111x)
      • INVALID_VALUE
    - config files (2112x)
      • UNKNOWN_LINE_TYPE, UNREADABLE_FILE

    spacing leaves room for future additions without reshuffling existing codes.
    """
    # --- resolution failures ---
    UNKNOWN_OPTION              = 21101
    MISSING_VALUE               = 21102

    # --- value failures ---
    INVALID_VALUE               = 21111

    # --- config file failures ---
    UNKNOWN_LINE_TYPE           = 21121
    UNREADABLE_FILE             = 21122

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class OptionsFault(Exception):
    """
    user-facing failure reported while processing options.

    options (all optional, merged through __replace__)
    - progname: program name shown in the header.
    - context: where the failure happened (e.g., "command-line options").
    - title: short lowercased title; code: FaultCode.
    - hint: one actionable sentence; suggestions: list of display names.
    - colorful / fancy: rendering flags forwarded by the registry.
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def code(self):
        return self.options.get("code")

    @property
    def context(self):
        return self.options.get("context")

    def __str__(self):
        return "error while processing %s: %s" % (self.options.get("context", "options"), self.message)

    def __rich__(self):
        main = __import__("__main__")
        colorful = self.options.get("colorful", False)
        fancy = self.options.get("fancy", False)

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-context": "#8A8A96",  # dim context line
            "error-message": "#C8C8D0",  # soft light gray message
            "suggestion": "bold #00E5FF",  # suggested option names
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            return Text(str(fragment), styles[style] if colorful else "")

        header = Text.assemble(
            "[ ",
            text(self.options.get("progname", "options"), "prog-name"),
            " — ",
            text(self.code.normalize() if self.code else "", "code"),
            " | ",
            text(self.options.get("title", "error").title(), "error-title"),
            " ]"
        )
        context = text("error while processing %s:" % self.options.get("context", "options"), "error-context")
        message = Text.assemble("  ", text(self.message, "error-message"))

        body = [context, message]
        if suggestions := self.options.get("suggestions"):
            body.append(text("did you mean one of these?", "error-message"))
            body.extend(Text.assemble("  ", text(suggestion, "suggestion")) for suggestion in suggestions)
        if hint := self.options.get("hint"):
            body.append(Text.assemble(text(" → ", "hint-arrow"), text(hint, "hint")))

        if fancy:
            return Panel(Group(*body), title=header, title_align="left")

        return Group(header, *body, Text(""))

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class UnknownOptionError(OptionsFault): ...
class MissingValueError(OptionsFault): ...
class InvalidValueError(OptionsFault): ...
class UnknownLineError(OptionsFault): ...
class UnreadableFileError(OptionsFault): ...


class StructureError(Exception):
    """
    programmer mistake made through the declaration API.

    raised synchronously while declaring sections/options; never recorded as a
    parse failure and never shown to end users as such.
    """


class SealedOptionsError(StructureError): ...
class UnknownSectionError(StructureError): ...
class DuplicateShorthandError(StructureError): ...


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    the host application may expose a __docs__ mapping in __main__ where keys
    are FaultCode instances and values are short documentation strings.
    when not found, returns None.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "FaultCode",
    "OptionsFault",
    "UnknownOptionError",
    "MissingValueError",
    "InvalidValueError",
    "UnknownLineError",
    "UnreadableFileError",
    "StructureError",
    "SealedOptionsError",
    "UnknownSectionError",
    "DuplicateShorthandError",
    "getdoc",
)
