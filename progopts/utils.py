"""
Progopts utilities (internal helpers, carefully exposed)

Scope
- Core building blocks used across the package for consistent semantics and output.
- Public-but-internal leaning: stable enough for consumers, designed primarily
  to support the options/program/parsers layers.

Overview
- UnsetType / Unset
  • Singleton sentinel to represent “value not provided” without conflating with None.
  • Falsey (bool(Unset) is False), printable as "Unset", and non-subclassable.

- coalesce(value, default=None)
  • Replace Unset with a concrete default, but preserve legitimate falsey values like None/0/"".

- rename(callable, name) / @rename("name")
  • Assign stable __name__/__qualname__ to generated accessors for clean tracebacks.

- mirror("attr")
  • Read-only property factory exposing a private backing field (self._attr) through
    an immutable view (tuple / MappingProxyType / frozenset).

- pad(text, length), trim(text), wordwrap(text, size)
  • Fixed-column help layout primitives used by Option.print_help().

Quick examples
    >>> coalesce(Unset, "fallback")
    'fallback'
    >>> pad("--quiet", 10)
    '--quiet   '
    >>> wordwrap("tell the server to be quiet", 12)
    ['tell the ', 'server to ', 'be quiet']
"""
import builtins
import functools
from collections.abc import Sequence, Mapping, Set
from types import MappingProxyType
from typing import final


@final
class UnsetType:
    """
    Internal sentinel type representing a value that was not provided.

    Characteristics
    - Boolean-false: bool(Unset) is False, but it is distinct from None and 0.
    - Printable: repr(Unset) -> "Unset" for friendly diagnostics.
    - Non-subclassable: this type is sealed; do not subclass.
    - Singleton per process: UnsetType() always yields the same instance.
    """

    def __or__(self, other, /):
        """
        Support PEP 604 unions in annotations and isinstance checks (e.g., str | Unset).
        """
        try:
            return type(self) | other
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        """
        Support reversed PEP 604 unions when Unset appears on the right.
        """
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


def coalesce(object, default=None, /):
    """
    Resolve the Unset sentinel to a concrete default.

    Falsey values like None, 0 or "" are preserved as-is; only Unset is replaced.

    Examples
    - coalesce("name", "fallback") -> "name"
    - coalesce(Unset, "fallback")  -> "fallback"
    - coalesce("", "fallback")     -> ""
    """
    return object if object is not Unset else default


def rename(*parameters):
    """
    Set a stable __name__/__qualname__ on a callable, or return a decorator
    that will do so later.

    Forms
    - rename(callable, name) -> callable
    - rename(name) -> decorator
    """
    match len(parameters):
        case 2:
            callable, name = parameters
            if not builtins.callable(callable):
                raise TypeError("rename() first argument must be callable")
            if not isinstance(name, str):
                raise TypeError("rename() second argument must be a string")
            try:
                callable.__qualname__ = name
                callable.__name__ = name
            except (AttributeError, TypeError):
                raise TypeError("rename() first argument must be a updatable callable") from None
            return callable
        case 1:
            name, = parameters
            if not isinstance(name, str):
                raise TypeError("@rename() argument must be a string")

            def wrapper(callable):
                if not builtins.callable(callable):
                    raise TypeError("@rename() must be applied to a callable")
                return rename(callable, name)

            return rename(wrapper, "rename")
        case _:
            raise TypeError("rename takes 1 to 2 arguments but %d were given" % len(parameters))


def _freeze(object):
    """
    Shallow read-only view of a container.

    - Sequence (non-string) → tuple
    - Mapping               → MappingProxyType (live, read-only)
    - Set                   → frozenset
    - other types           → returned as-is
    """
    if isinstance(object, Sequence) and not isinstance(object, str):
        return tuple(object)
    if isinstance(object, Mapping):
        return MappingProxyType(object)
    if isinstance(object, Set):
        return frozenset(object)
    return object


def mirror(name, /):
    """
    Define a read-only property that mirrors the private attribute "_{name}".

    Containers are exposed through read-only views so that the public API cannot
    be used to mutate registry state behind its back (e.g., adding an option to a
    section after the registry has been sealed).
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        return _freeze(getattr(self, "_" + name))

    return property(getter)


def pad(text, length, /):
    """
    Right-pad `text` with spaces up to `length`; longer text is truncated.
    """
    if len(text) >= length:
        return text[:length]
    return text + " " * (length - len(text))


def trim(text, /):
    """
    Strip leading blanks (spaces, tabs, line terminators) only.
    """
    return text.lstrip(" \t\n\r")


def wordwrap(text, size, /):
    """
    Split `text` into chunks of at most `size` characters.

    Each chunk ends right after the last '.', ',' or ' ' found at or before
    index size - 1. When there is no such break point, or it lies before the
    middle of the limit, the chunk is cut hard at `size` so that wrapping
    never degenerates into tiny fragments. A non-positive size disables
    wrapping and yields the text as a single chunk.
    """
    result = []
    rest = text

    if size > 0:
        while len(rest) > size:
            cut = max(rest.rfind(char, 0, size) for char in "., ")
            if cut == -1 or cut < size // 2:
                cut = size
            else:
                cut += 1
            result.append(rest[:cut])
            rest = rest[cut:]

    result.append(rest)
    return result


Unset = UnsetType()
"""
Internal sentinel for “not provided”.

Use Unset as a default when None (or an empty string) is a valid, user-meaningful
value but you still need to distinguish “no input” from an explicit value.
"""


__all__ = (
    # Functions
    "coalesce",
    "rename",
    "mirror",
    "pad",
    "trim",
    "wordwrap",

    # Types
    "UnsetType",

    # Constants
    "Unset",
)
