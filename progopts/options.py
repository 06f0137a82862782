r"""
Progopts data model: options and sections.

Overview
- Option: one named, typed setting.
  • Declared from a single string such as "--server.endpoints,-e" which is
    parsed once into section ("server"), name ("endpoints") and shorthand ("e").
  • full_name is "section.name" (or just "name" in the global section) and
    display_name is "--" + full_name.
  • Owns exactly one Parameter; the parameter's internal state is the only
    thing that changes after declaration.

- Section: named, ordered collection of options.
  • The empty name is the global (unnamed) section.
  • Options are kept ordered by name; a later option with the same name
    replaces the earlier one.
  • alias overrides the name shown in help.
  • Sealed together with its registry; a sealed section refuses new options.

Help layout
    Section 'server' (Server options description goes here)
      --server.endpoints <string...>   server endpoints (default: "tcp://...")
      --server.ports <port...>         the server ports (default: 8529,
                                       16384)

- column: the registry computes one width over all visible options so that
  descriptions line up across sections.
- descriptions wrap at (terminal width - column - 6); see utils.wordwrap.
"""
from rich.text import Text

from .faults import SealedOptionsError
from .parameters import Parameter
from .utils import *


def _plain(style, /):
    return ""


class Option:
    """
    Single program option.

    Parameters
    - value: str
      declaration string: "[--][section.]name[,[-]shorthand]".
    - description: str
      one-line help text.
    - parameter: Parameter
      typed value holder (validation, default rendering, type description).
    - hidden: bool
      excluded from help (still accepted and still offered as a suggestion).
    - obsolete: bool
      accepted and silently discarded (marked as touched, never set).
    """
    __slots__ = ("_section", "_name", "_description", "_shorthand", "_parameter", "_hidden", "_obsolete")

    section = mirror("section")
    name = mirror("name")
    description = mirror("description")
    shorthand = mirror("shorthand")
    parameter = mirror("parameter")
    hidden = mirror("hidden")
    obsolete = mirror("obsolete")

    def __init__(self, value, description, parameter, hidden=False, obsolete=False):
        if not isinstance(value, str):
            raise TypeError("option declaration must be a string")
        if not isinstance(description, str):
            raise TypeError("option description must be a string")
        if not isinstance(parameter, Parameter):
            raise TypeError("option parameter must be a parameter")

        self._section, self._name = self.split_name(value)
        self._shorthand = ""
        self._description = description
        self._parameter = parameter
        self._hidden = bool(hidden)
        self._obsolete = bool(obsolete)

        name, comma, shorthand = self._name.partition(",")
        if comma:
            self._name = name
            self._shorthand = self.strip_shorthand(shorthand)

    @property
    def full_name(self):
        if not self._section:
            return self._name
        return self._section + "." + self._name

    @property
    def display_name(self):
        return "--" + self.full_name

    def name_with_type(self):
        return self.display_name + " " + self._parameter.type_description()

    def options_width(self):
        """
        width of the rendered name + type label, or 0 when hidden.
        """
        if self._hidden:
            return 0
        return len(self.name_with_type())

    def help_lines(self, width, column, styler=_plain):
        """
        Render the help entry for this option as a list of rich Text lines.

        The first line carries the padded name/type label; continuation lines
        are indented to the same column. Hidden options render nothing.
        `styler` maps a palette key ("option-name", "description") to a style.
        """
        if self._hidden:
            return []

        value = self._description
        if self._parameter.requires_value:
            value += " (default: %s)" % self._parameter.value_string()

        lines = []
        for index, part in enumerate(wordwrap(value, width - column - 6)):
            label = self.name_with_type() if index == 0 else ""
            lines.append(Text.assemble(
                "  ",
                Text(pad(label, column), styler("option-name")),
                "   ",
                Text(trim(part), styler("description"))
            ))
        return lines

    def print_help(self, width, column, console, styler=_plain):
        for line in self.help_lines(width, column, styler):
            console.print(line, soft_wrap=True)

    @staticmethod
    def strip_prefix(name, /):
        """
        strip one leading "--" from a name.
        """
        return name[2:] if name.startswith("--") else name

    @staticmethod
    def strip_shorthand(name, /):
        """
        strip one leading "-" from a shorthand.
        """
        return name[1:] if name.startswith("-") else name

    @staticmethod
    def split_name(name, /):
        """
        split an option name at its first "." into (section, name).

        names without a "." belong to the global section "".
        """
        section, dot, rest = Option.strip_prefix(name).partition(".")
        if not dot:
            return "", section
        return section, rest

    def __repr__(self):
        return "option(%r, parameter=%r, hidden=%r, obsolete=%r)" % (
            self.display_name, self._parameter, self._hidden, self._obsolete
        )


class Section:
    """
    Named group of options.
    """
    __slots__ = ("_name", "_description", "_alias", "_hidden", "_obsolete", "_options", "_sealed")

    name = mirror("name")
    description = mirror("description")
    alias = mirror("alias")
    hidden = mirror("hidden")
    obsolete = mirror("obsolete")
    options = mirror("options")
    sealed = mirror("sealed")

    def __init__(self, name, description, alias="", hidden=False, obsolete=False):
        if not isinstance(name, str):
            raise TypeError("section name must be a string")
        if not isinstance(description, str):
            raise TypeError("section description must be a string")
        if not isinstance(alias, str):
            raise TypeError("section alias must be a string")
        self._name = name
        self._description = description
        self._alias = alias
        self._hidden = bool(hidden)
        self._obsolete = bool(obsolete)
        self._options = {}
        self._sealed = False

    def seal(self):
        """
        forbid further options; the owning registry seals its sections when it is sealed.
        """
        self._sealed = True

    def add_option(self, option, /):
        if not isinstance(option, Option):
            raise TypeError("section can only hold options")
        if self._sealed:
            raise SealedOptionsError("section '%s' is already sealed" % self.display_name)
        self._options[option.name] = option
        ordered = sorted(self._options.items())
        self._options.clear()
        self._options.update(ordered)

    @property
    def display_name(self):
        return self._alias or self._name

    def has_options(self):
        """
        whether the section shows up in help (not hidden, one visible option at least).
        """
        if self._hidden:
            return False
        return any(not option.hidden for option in self._options.values())

    def options_width(self):
        if self._hidden:
            return 0
        return max((option.options_width() for option in self._options.values()), default=0)

    def help_lines(self, width, column, styler=_plain):
        if not self.has_options():
            return []
        lines = [Text.assemble(
            "Section '",
            Text(self.display_name, styler("section-name")),
            "' (%s)" % self._description
        )]
        for option in self._options.values():
            lines.extend(option.help_lines(width, column, styler))
        lines.append(Text(""))
        return lines

    def print_help(self, width, column, console, styler=_plain):
        for line in self.help_lines(width, column, styler):
            console.print(line, soft_wrap=True)

    def __repr__(self):
        return "section(%r, options=%d, hidden=%r, obsolete=%r)" % (
            self._name, len(self._options), self._hidden, self._obsolete
        )


__all__ = (
    "Option",
    "Section",
)
