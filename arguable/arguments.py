r"""
Arguable argument specifications.

Overview
- Specs
  • Positional: an argument identified by its place among non-option tokens
    (fixed arity N >= 1, or VARIABLE to take every remaining token).
  • Option: an argument triggered by one of its directive strings (e.g., -o/--output);
    arity 0 (boolean switch, BOOL only), fixed N >= 1, or VARIABLE.

- Shared capability set (Argument base)
  • matches(token): does this token select the argument?
  • format(): usage-line fragment (rich Text).
  • explain(): multi-line help entry (rich Text), help text wrapped at 80 columns.
  • name / type / nargs / descr / variable, describe_type().

- Introspection & representation
  • ArgumentType metaclass provides stable __repr__/__rich_repr__ and exposes the
    fields listed in __introspectable__ as read-only properties.

Metadata (sanitized on construction, InvalidSpecError on violation)
- name: non-empty string without whitespace.
- type: ValueType or one of bool/int/float/str; NULL is rejected.
- nargs: int or VARIABLE (Ellipsis, "..." accepted); see each spec for ranges.
- descr: Unset | str (short help), non-empty when provided.
- directives (Option only): one or more unique strings without whitespace.

Quick example:
    >>> Positional("files", str, VARIABLE).format().plain
    'files...'
    >>> Option("-n", "--num", name="num", type=int).format().plain
    '[{-n|--num} num]'
"""
import functools
import operator
import re
import textwrap
from types import EllipsisType

from rich.text import Text

from .faults import FaultCode, InvalidSpecError
from .utils import *
from .values import ValueType

VARIABLE = Ellipsis
"""arity marker for greedy (unbounded) consumption."""

WIDTH = 80
INDENT = 8


class ArgumentType(type):
    """
    Metaclass that turns specs into introspectable descriptors.

    Responsibilities
    - Derive __typename__ from the class name (camel-case split with hyphens),
      used in messages.
    - Expose fields listed in __introspectable__ as read-only properties via mirror().
    - Provide stable, readable __repr__/__rich_repr__ implementations.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            """
            Return a concise, stable representation with key metadata.

            Example
            - option(directives=('-v', '--verbose'), name='verbose', ...)
            """
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            """
            Yield (name, object) pairs for pretty printers.
            """
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _invalid(message, hint, **context):
    return InvalidSpecError(
        message,
        title="invalid argument",
        code=FaultCode.INVALID_SPEC,
        hint=hint,
        **context
    )


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: normalize and validate metadata shared by every spec.

    - name: non-empty string without whitespace.
    - type: normalized to a ValueType; NULL is rejected.
    - descr: Unset becomes None; provided strings are trimmed and must be non-empty.

    The dict is modified in place.
    """
    if not isinstance(name := metadata["name"], str):
        raise _invalid(f"{cls.__typename__} name must be a string", "name it with a plain string")
    elif not re.fullmatch(r"\S+", name):
        raise _invalid(f"{cls.__typename__} name {name!r} must be non-empty without whitespace",
                       "use a single word such as 'input'")

    try:
        type = ValueType.of(metadata["type"])
    except TypeError as exception:
        raise _invalid(f"{cls.__typename__} {name!r} has an unknown type",
                       "use bool, int, float, str or a ValueType", cause=exception) from None
    if type is ValueType.NULL:
        raise _invalid(f"{cls.__typename__} {name!r} cannot use the null type",
                       "use bool, int, float, str or a ValueType")
    metadata["type"] = type

    if not isinstance(descr := metadata["descr"], str | Unset):
        raise _invalid(f"{cls.__typename__} {name!r} 'descr' must be a string", "describe it with plain text")
    elif isinstance(descr, str) and not (descr := descr.strip()):
        raise _invalid(f"{cls.__typename__} {name!r} 'descr' cannot be empty", "omit it or write a short sentence")
    metadata["descr"] = coalesce(descr)


def _sanitize_nargs(cls, metadata, /, *, minimum):
    """
    Internal: validate the arity against the allowed minimum.

    VARIABLE may be spelled as Ellipsis or the literal "...". Booleans are
    rejected even though they are ints.
    """
    name = metadata["name"]
    if (nargs := metadata["nargs"]) == "...":
        nargs = VARIABLE
    if isinstance(nargs, bool) or not isinstance(nargs, int | EllipsisType):
        raise _invalid(f"{cls.__typename__} {name!r} 'nargs' must be an integer or VARIABLE",
                       "use a count such as 1 or 2, or VARIABLE for any number")
    if isinstance(nargs, int) and nargs < minimum:
        raise _invalid(f"{cls.__typename__} {name!r} 'nargs' must be at least {minimum}",
                       "use a count of at least %d, or VARIABLE" % minimum)
    metadata["nargs"] = nargs


def _sanitize_directives(cls, metadata, /):
    """
    Internal: validate option directives.

    Directives must be non-empty strings without whitespace and unique inside
    the option. Registration order is kept: the first directive leads in help.
    """
    name = metadata["name"]
    if not metadata["directives"]:
        raise _invalid(f"{cls.__typename__} {name!r} must specify at least one directive",
                       "add a directive such as '-%s' or '--%s'" % (name[:1], name))

    directives = []
    for directive in metadata["directives"]:
        if not isinstance(directive, str):
            raise _invalid(f"{cls.__typename__} {name!r} directives must be strings", "use strings such as '--name'")
        elif not re.fullmatch(r"\S+", directive):
            raise _invalid(f"{cls.__typename__} {name!r} directive {directive!r} must be non-empty without whitespace",
                           "use a single token such as '--%s'" % name)
        elif directive in directives:
            raise _invalid(f"{cls.__typename__} {name!r} directives cannot contain duplicates",
                           "list %r only once" % directive)
        directives.append(directive)
    metadata["directives"] = tuple(directives)


def _wrap(descr):
    # help text column: 8 spaces of indent, 80 columns overall
    return textwrap.wrap(descr, width=WIDTH, initial_indent=" " * INDENT, subsequent_indent=" " * INDENT)


def _plain(style):
    return ""


class Argument(metaclass=ArgumentType):
    """
    Capabilities shared by Positional and Option.

    Subclasses provide matches(), format() and the head line of explain().
    """

    @property
    def variable(self):
        return self.nargs is VARIABLE

    def describe_type(self):
        """
        human label of the element type; BOOL has none and raises TypeMismatchError.
        """
        return self.type.describe()

    def matches(self, token, /):
        raise NotImplementedError

    def format(self, styler=_plain):
        raise NotImplementedError

    def _headline(self, styler):
        raise NotImplementedError

    def explain(self, styler=_plain):
        """
        Return the help block: a head line then the description wrapped at 80 columns.
        """
        lines = [self._headline(styler)]
        if self.descr:
            lines.extend(Text(line, styler("argument-description")) for line in _wrap(self.descr))
        return Text("\n").join(lines)


class Positional(Argument):
    """
    Positional argument specification.

    Positional(name, type=str, nargs=1, descr=Unset)

    - nargs: fixed count N >= 1, or VARIABLE to take every remaining token.
    - matches(token) is name equality.
    """

    __introspectable__ = (
        "name",
        "type",
        "nargs",
        "descr",
    )

    def __init__(self, name, /, type=str, nargs=1, descr=Unset):
        metadata = {
            "name": name,
            "type": type,
            "nargs": nargs,
            "descr": descr,
        }
        _sanitize_metadata(Positional, metadata)
        _sanitize_nargs(Positional, metadata, minimum=1)

        for name, object in metadata.items():
            setattr(self, "_" + name, object)

    def matches(self, token, /):
        return token == self.name

    def format(self, styler=_plain):
        """
        usage fragment: 'name', 'name(0) name(1) ...' or 'name...'.
        """
        style = styler("positional-name")
        if self.variable:
            return Text(f"{self.name}...", style)
        if self.nargs == 1:
            return Text(self.name, style)
        return Text(" ".join(f"{self.name}({index})" for index in range(self.nargs)), style)

    def _headline(self, styler):
        label = self.describe_type()
        types = ",".join([label] * (1 if self.variable else self.nargs))
        if self.variable:
            types += ",..."
        return Text.assemble(
            "  ",
            (self.name, styler("positional-name")),
            " [",
            (types, styler("metavar")),
            "]:",
        )


class Option(Argument):
    """
    Optional argument specification.

    Option(*directives, name, type=bool, nargs=Unset, descr=Unset)

    - directives: one or more strings, any of which triggers the option.
    - nargs: 0 (switch, BOOL only), fixed count N >= 1, or VARIABLE. When
      omitted it is 0 for BOOL and 1 for every other type.
    - matches(token) is directive membership.
    """

    __introspectable__ = (
        "directives",
        "name",
        "type",
        "nargs",
        "descr",
    )

    def __init__(self, *directives, name, type=bool, nargs=Unset, descr=Unset):
        metadata = {
            "directives": directives,
            "name": name,
            "type": type,
            "nargs": nargs,
            "descr": descr,
        }
        _sanitize_metadata(Option, metadata)
        _sanitize_directives(Option, metadata)
        metadata["nargs"] = coalesce(nargs, 0 if metadata["type"] is ValueType.BOOL else 1)
        _sanitize_nargs(Option, metadata, minimum=0)

        if metadata["nargs"] == 0 and metadata["type"] is not ValueType.BOOL:
            raise _invalid(f"option {metadata['name']!r} with no values must be a bool",
                           "declare it as bool or give it a positive 'nargs'")

        for name, object in metadata.items():
            setattr(self, "_" + name, object)

    @property
    def switch(self):
        """
        True for zero-arity (presence-only) options.
        """
        return self.nargs == 0

    def matches(self, token, /):
        return token in self._directives

    def _directives_text(self, styler):
        return Text("|".join(self.directives), styler("option-name"))

    def format(self, styler=_plain):
        """
        usage fragment: '[-d]', '[{-d|--dir}]' plus ' name', ' name(0) name(1)...' or ' name...'.
        """
        directives = self._directives_text(styler)
        if len(self.directives) > 1:
            directives = Text.assemble("{", directives, "}")

        metavar = styler("metavar")
        if self.switch:
            suffix = Text("")
        elif self.variable:
            suffix = Text(f" {self.name}...", metavar)
        elif self.nargs == 1:
            suffix = Text(f" {self.name}", metavar)
        else:
            suffix = Text("".join(f" {self.name}({index})" for index in range(self.nargs)), metavar)

        return Text.assemble("[", directives, suffix, "]")

    def _headline(self, styler):
        if self.switch:
            types = ""
        elif self.variable:
            types = f" [{self.name}:{self.describe_type()},...]"
        elif self.nargs == 1:
            types = f" [{self.name}:{self.describe_type()}]"
        else:
            label = self.describe_type()
            types = " [" + ",".join(f"{self.name}({index}):{label}" for index in range(self.nargs)) + "]"

        return Text.assemble("  ", self._directives_text(styler), (types, styler("metavar")), ":")


__all__ = (
    # Classes (specifications)
    "Argument",
    "Positional",
    "Option",

    # Constants
    "VARIABLE",
)

# Remove the internal metaclass from the module namespace to avoid accidental
# exposure in docs, autocompletion, or star-imports. Not part of the public API.
del ArgumentType
