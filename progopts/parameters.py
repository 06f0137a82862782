"""
Progopts parameters: the typed values bound to options.

Contract
- Every option owns exactly one Parameter. The registry only relies on the
  abstract capability below; it never inspects concrete parameter types.
  • requires_value: whether the option expects a value token on the command line.
  • name: human type name ("integer", "string", ...).
  • type_description(): label rendered in help next to the option name.
  • value_string(): the current value, rendered for "(default: ...)" and listings.
  • set(value): validate and store a raw string; raise ValueError with a short,
    lowercased reason on rejection. The registry reports that reason as an
    invalid-value failure attributed to the option.
  • value: the typed Python value, for read-back after parsing.

Stock parameters
- BooleanParameter, StringParameter
- IntegerParameter (+ Int32Parameter, Int64Parameter, UInt32Parameter, UInt64Parameter)
- DoubleParameter
- BoundedParameter (narrows a numeric parameter)
- DiscreteValuesParameter (restricts a parameter to a closed set)
- VectorParameter (repeatable options, one element per set())
- ObsoleteParameter (accepts anything, stores nothing)

Example
    >>> port = BoundedParameter(UInt32Parameter(8529), 1024, 65535)
    >>> port.set("80")
    Traceback (most recent call last):
    ...
    ValueError: number out of range (must be between 1024 and 65535)
"""
from abc import ABC, abstractmethod

_TRUTHY = frozenset({"true", "yes", "on", "1"})
_FALSY = frozenset({"false", "no", "off", "0"})


class Parameter(ABC):
    """
    abstract capability bound to an option.

    subclasses set `name`, implement set()/value_string(), and expose `value`.
    """
    name = "value"

    @property
    def requires_value(self):
        return True

    @property
    @abstractmethod
    def value(self): ...

    def type_description(self):
        return "<%s>" % self.name if self.requires_value else ""

    @abstractmethod
    def value_string(self): ...

    @abstractmethod
    def set(self, value, /): ...

    def __repr__(self):
        return "%s(%s)" % (type(self).__name__, self.value_string())


class BooleanParameter(Parameter):
    """
    true/false switch.

    when `required` is False (the default), the option works as a flag: it
    takes no value token on the command line and an empty value means True.
    an explicit value is still accepted via '--name=value' or a config file.
    """
    name = "boolean"

    def __init__(self, default=False, /, *, required=False):
        self._value = bool(default)
        self._required = bool(required)

    @property
    def requires_value(self):
        return self._required

    @property
    def value(self):
        return self._value

    def value_string(self):
        return "true" if self._value else "false"

    def set(self, value, /):
        if not value and not self._required:
            self._value = True
            return
        if (lowered := value.strip().lower()) in _TRUTHY:
            self._value = True
        elif lowered in _FALSY:
            self._value = False
        else:
            raise ValueError("invalid value. expecting 'true' or 'false'")


class StringParameter(Parameter):
    name = "string"

    def __init__(self, default="", /):
        self._value = default

    @property
    def value(self):
        return self._value

    def value_string(self):
        return "\"%s\"" % self._value

    def set(self, value, /):
        self._value = value


class IntegerParameter(Parameter):
    """
    integral number within [minimum, maximum].

    the fixed-width variants below only differ by name and bounds.
    """
    name = "integer"
    minimum = -2 ** 63
    maximum = 2 ** 63 - 1

    def __init__(self, default=0, /, *, minimum=None, maximum=None):
        if minimum is not None:
            self.minimum = minimum
        if maximum is not None:
            self.maximum = maximum
        self._value = default

    @property
    def value(self):
        return self._value

    def value_string(self):
        return str(self._value)

    def convert(self, value, /):
        try:
            return int(value.strip(), 10)
        except ValueError:
            raise ValueError("invalid numeric value") from None

    def check(self, number, /):
        if not self.minimum <= number <= self.maximum:
            raise ValueError("number out of range")

    def set(self, value, /):
        number = self.convert(value)
        self.check(number)
        self._value = number


class Int32Parameter(IntegerParameter):
    name = "int32"
    minimum = -2 ** 31
    maximum = 2 ** 31 - 1


class Int64Parameter(IntegerParameter):
    name = "int64"


class UInt32Parameter(IntegerParameter):
    name = "uint32"
    minimum = 0
    maximum = 2 ** 32 - 1


class UInt64Parameter(IntegerParameter):
    name = "uint64"
    minimum = 0
    maximum = 2 ** 64 - 1


class DoubleParameter(IntegerParameter):
    name = "double"
    minimum = float("-inf")
    maximum = float("inf")

    def convert(self, value, /):
        try:
            return float(value.strip())
        except ValueError:
            raise ValueError("invalid numeric value") from None


class BoundedParameter(Parameter):
    """
    narrows a numeric parameter to [minimum, maximum] (inclusive).
    """

    def __init__(self, base, minimum, maximum, /):
        if not isinstance(base, IntegerParameter):
            raise TypeError("bounded parameter base must be a numeric parameter")
        if minimum > maximum:
            raise ValueError("bounded parameter minimum cannot exceed its maximum")
        self._base = base
        self.minimum = minimum
        self.maximum = maximum

    @property
    def name(self):
        return self._base.name

    @property
    def value(self):
        return self._base.value

    def value_string(self):
        return self._base.value_string()

    def set(self, value, /):
        number = self._base.convert(value)
        if not self.minimum <= number <= self.maximum:
            raise ValueError("number out of range (must be between %s and %s)" % (self.minimum, self.maximum))
        self._base.set(value)


class DiscreteValuesParameter(Parameter):
    """
    restricts a parameter to a closed set of raw string values.
    """

    def __init__(self, base, choices, /):
        if not isinstance(base, Parameter):
            raise TypeError("discrete values parameter base must be a parameter")
        if not (choices := tuple(choices)):
            raise ValueError("discrete values parameter needs at least one choice")
        self._base = base
        self._choices = choices

    @property
    def name(self):
        return self._base.name

    @property
    def requires_value(self):
        return self._base.requires_value

    @property
    def choices(self):
        return self._choices

    @property
    def value(self):
        return self._base.value

    def type_description(self):
        return self._base.type_description()

    def value_string(self):
        return self._base.value_string()

    def set(self, value, /):
        if value not in self._choices:
            raise ValueError("invalid value '%s'. possible values: %s" % (value, ", ".join(map(repr, self._choices))))
        self._base.set(value)


class VectorParameter(Parameter):
    """
    repeatable option: every set() validates and appends one element.

    `factory` builds element parameters: factory() for a new element and
    factory(default) for each declared default. the first successful set()
    discards the declared defaults, later ones accumulate.
    """

    def __init__(self, factory, /, default=()):
        if not callable(factory):
            raise TypeError("vector parameter factory must be callable")
        self._factory = factory
        self._elements = [factory(item) for item in default]
        self._pristine = True

    @property
    def name(self):
        return self._factory().name + "..."

    @property
    def value(self):
        return [element.value for element in self._elements]

    def value_string(self):
        return ", ".join(element.value_string() for element in self._elements)

    def set(self, value, /):
        element = self._factory()
        element.set(value)
        if self._pristine:
            self._elements.clear()
            self._pristine = False
        self._elements.append(element)


class ObsoleteParameter(Parameter):
    """
    placeholder for options that are still accepted but no longer do anything.
    """
    name = "obsolete"

    @property
    def requires_value(self):
        return False

    @property
    def value(self):
        return None

    def value_string(self):
        return "-"

    def set(self, value, /):
        pass


__all__ = (
    "Parameter",
    "BooleanParameter",
    "StringParameter",
    "IntegerParameter",
    "Int32Parameter",
    "Int64Parameter",
    "UInt32Parameter",
    "UInt64Parameter",
    "DoubleParameter",
    "BoundedParameter",
    "DiscreteValuesParameter",
    "VectorParameter",
    "ObsoleteParameter",
)
