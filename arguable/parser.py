r"""
Arguable parser: registration, the two-pass matching engine and rendering.

Overview
- Parser
  • Registry of Option specs (checked in registration order) and Positional
    specs (assigned in registration order).
  • parse(): two passes over the token stream, producing a ResultStore.
  • Rendering: format (usage line), explain (help blocks), show_help and
    display_status, all through rich.
- invoke(): collaborator that turns ParseError and help requests into process
  exits. The parser itself never exits.

Algorithm
- Pass 1 (options). Scan left to right. The first option whose directives
  contain the token consumes it:
  • arity 0 records a single BOOL "true";
  • fixed N takes the next N tokens (InsufficientArgumentsError when fewer remain);
  • VARIABLE takes tokens until the stream ends or a token matches any directive.
  Tokens no option claims go to the remaining sequence.
- Pass 2 (positionals). Fixed N takes exactly N remaining tokens, VARIABLE takes
  all of them; a positional facing an exhausted sequence fails.
- Leftover tokens and repeated options only warn (UnparsedTokensWarning,
  DuplicatedOptionWarning); a repeated option keeps its first values.
- Any TypeMismatchError/InsufficientArgumentsError aborts the parse: the store is
  reset to an UNPARSED one and ParseError is raised from the cause.

Known limitation
- A VARIABLE option stops at any token equal to a registered directive, so such a
  token can never be one of its values. There is no escaping.

Quick example:
    >>> parser = Parser(["-n", "3", "a.txt", "b.txt"], prog="demo")
    >>> _ = parser.add_option("-n", "--num", name="num", type=int)
    >>> _ = parser.add_argument("files", nargs=VARIABLE)
    >>> parser.parse().getall("files")
    ['a.txt', 'b.txt']
"""
import functools
import os
import shlex
import sys
from collections import defaultdict
from collections.abc import Iterable
from types import MappingProxyType

from rich.console import Console
from rich.text import Text

from .arguments import Option, Positional
from .faults import (
    DuplicatedOptionWarning,
    FaultCode,
    InsufficientArgumentsError,
    InvalidSpecError,
    ParseError,
    TypeMismatchError,
    UnparsedTokensWarning,
    trigger,
)
from .results import ParseState, ResultStore
from .utils import *
from .values import Value, ValueType

HELP = "help"


@functools.cache
def _ordinal(number):
    """
    Return a human-friendly ordinal label for a 1-based position.

    - 1..10 are rendered as words ("first"…"tenth").
    - Other numbers use numeric ordinals with correct English suffixes.
    """
    try:
        return {
            1: "first",
            2: "second",
            3: "third",
            4: "fourth",
            5: "fifth",
            6: "sixth",
            7: "seventh",
            8: "eighth",
            9: "ninth",
            10: "tenth",
        }[number]
    except KeyError:
        pass

    # 11th, 12th, 13th (and 111th, 112th, 113th, …)
    if 10 < number % 100 < 20:
        return f"{number}th"

    return f'{number}%s' % {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th")


def _tokenize(tokens, caller, /):
    """
    Normalize a token source into a list of strings.

    - Unset: sys.argv[1:].
    - str: shell-like string split with shlex.split.
    - Iterable[str]: taken verbatim (empty strings included).
    """
    if tokens is Unset:
        return list(sys.argv[1:])
    elif isinstance(tokens, str):
        return shlex.split(tokens)
    elif isinstance(tokens, Iterable):
        tokens = list(tokens)
        if not all(isinstance(token, str) for token in tokens):
            raise TypeError(f"{caller} argument must be a string or an iterable of strings")
        return tokens
    raise TypeError(f"{caller} argument must be a string or an iterable of strings")


def _console(file, /):
    """
    Resolve a rendering target: a Console as-is, a text stream wrapped in a
    Console, or Unset for standard output.
    """
    if isinstance(file, Console):
        return file
    if file is Unset:
        return Console()
    if not hasattr(file, "write"):
        raise TypeError("file must be a rich Console or a writable text stream")
    return Console(file=file)


def _invalid(message, hint, **context):
    return InvalidSpecError(
        message,
        title="invalid argument",
        code=FaultCode.INVALID_SPEC,
        hint=hint,
        **context
    )


def _insufficient(message, hint, **context):
    return InsufficientArgumentsError(
        message,
        title="missing values",
        code=FaultCode.INSUFFICIENT_ARGUMENTS,
        hint=hint,
        **context
    )


class Parser:
    """
    Typed command-line parser.

    Parser(tokens=Unset, /, descr=Unset, prog=Unset, *, helper=True, colorful=False, fancy=False)

    - tokens: default token stream for parse() (see _tokenize).
    - descr: program description shown on top of the help.
    - prog: program name; defaults to the basename of sys.argv[0].
    - helper: register the -h/--help switch under the reserved name "help".
    - colorful/fancy: rich styling of help output and of faults reported by invoke().

    Palette keys (override through a __styles__ mapping in __main__)
    - usage-label, prog-name, description-section, group-label
    - positional-name, option-name, metavar, argument-description, status-label
    """

    def __init__(self, tokens=Unset, /, descr=Unset, prog=Unset, *, helper=True, colorful=False, fancy=False):
        self._tokens = _tokenize(tokens, "Parser()")
        self._descr = Unset
        self.describe(descr)

        if not isinstance(prog, str | Unset):
            raise TypeError("Parser() 'prog' must be a string")
        self._prog = coalesce(prog, os.path.basename(sys.argv[0]) or "arguable")
        self._colorful = bool(colorful)
        self._fancy = bool(fancy)

        self._options = []
        self._positionals = []
        self._store = ResultStore()

        if helper:
            self._register(Option("-h", "--help", name=HELP, descr="show this help message and exit"))

    tokens = mirror("tokens")
    options = mirror("options")
    positionals = mirror("positionals")
    prog = mirror("prog")
    colorful = mirror("colorful")
    fancy = mirror("fancy")

    @property
    def descr(self):
        return coalesce(self._descr)

    @property
    def store(self):
        return self._store

    @property
    def completed(self):
        return self._store.completed

    def describe(self, descr, /):
        """
        Replace the program description (Unset clears it).
        """
        if not isinstance(descr, str | Unset):
            raise TypeError("describe() argument must be a string")
        if isinstance(descr, str):
            descr = descr.strip() or Unset
        self._descr = descr
        return self

    def _register(self, argument, /):
        for registered in (*self._options, *self._positionals):
            if registered.name == argument.name:
                raise _invalid(f"argument name {argument.name!r} is already in use",
                               "pick another name", argument=argument)

        if isinstance(argument, Option):
            claimed = {directive for option in self._options for directive in option.directives}
            for directive in argument.directives:
                if directive in claimed:
                    raise _invalid(f"directive {directive!r} of option {argument.name!r} is already in use",
                                   "pick another directive", argument=argument)
            self._options.append(argument)
        else:
            if self._positionals and self._positionals[-1].variable:
                raise _invalid(
                    f"positional {argument.name!r} cannot follow the variable positional {self._positionals[-1].name!r}",
                    "register the variable positional last", argument=argument,
                )
            self._positionals.append(argument)

        # a new spec invalidates whatever the last parse produced
        self._store = ResultStore()
        return argument

    def _reserve(self, name, /):
        if name == HELP:
            raise _invalid(f"argument name {HELP!r} is reserved",
                           "pick another name; -h/--help is registered by the parser")

    def add_argument(self, name, /, type=str, nargs=1, descr=Unset):
        """
        Register a positional argument and return its spec.
        """
        self._reserve(name)
        return self._register(Positional(name, type, nargs, descr))

    def add_option(self, *directives, name, type=bool, nargs=Unset, descr=Unset):
        """
        Register an optional argument and return its spec.
        """
        self._reserve(name)
        return self._register(Option(*directives, name=name, type=type, nargs=nargs, descr=descr))

    def _directive(self, token):
        return any(option.matches(token) for option in self._options)

    def _convert(self, argument, token, index, /):
        try:
            return Value(argument.type, token)
        except TypeMismatchError as exception:
            kind = type(argument).__typename__
            raise TypeMismatchError(
                "%s %r value %r at %s position is not a valid %s" % (
                    kind, argument.name, token, _ordinal(index + 1), argument.type.value
                ),
                title="type mismatch",
                code=FaultCode.TYPE_MISMATCH,
                hint=exception.options.get("hint"),
                token=token,
                index=index,
                argument=argument,
            ) from exception

    def _extract(self, tokens, namespace, warnings, /):
        """
        Pass 1: consume option tokens; return the (index, token) pairs left over.
        """
        remaining = []
        index = 0
        while index < len(tokens):
            token = tokens[index]
            option = next((option for option in self._options if option.matches(token)), None)
            if option is None:
                remaining.append((index, token))
                index += 1
                continue

            start = index
            index += 1
            if option.switch:
                values = [Value(ValueType.BOOL, "true")]
            elif option.variable:
                values = []
                while index < len(tokens) and not self._directive(tokens[index]):
                    values.append(self._convert(option, tokens[index], index))
                    index += 1
            else:
                if len(tokens) - index < option.nargs:
                    raise _insufficient(
                        "option %r at %s position requires %s" % (
                            token, _ordinal(start + 1),
                            "a value" if option.nargs == 1 else "exactly %d values" % option.nargs
                        ),
                        "pass %d value(s) after %r" % (option.nargs, token),
                        token=token, index=start, argument=option,
                    )
                values = [self._convert(option, tokens[index + offset], index + offset) for offset in range(option.nargs)]
                index += option.nargs

            if option.name in namespace:
                warnings.append(DuplicatedOptionWarning(
                    "option %r at %s position was already given; its first values are kept" % (token, _ordinal(start + 1)),
                    title="repeated option",
                    code=FaultCode.DUPLICATED_OPTION,
                    hint="pass %r only once" % token,
                    token=token,
                    index=start,
                    argument=option,
                ))
                continue
            namespace[option.name] = values

        return remaining

    def _assign(self, remaining, namespace, warnings, /):
        """
        Pass 2: hand the remaining tokens to positionals in registration order.
        """
        cursor = 0
        for positional in self._positionals:
            left = len(remaining) - cursor
            if positional.variable:
                if left < 1:
                    raise _insufficient(
                        "positional %r requires at least one value" % positional.name,
                        "pass one or more values for %r" % positional.name,
                        argument=positional,
                    )
                count = left
            else:
                if left < positional.nargs:
                    raise _insufficient(
                        "positional %r requires %s but %d %s left" % (
                            positional.name,
                            "a value" if positional.nargs == 1 else "exactly %d values" % positional.nargs,
                            left, "was" if left == 1 else "were"
                        ),
                        "pass %d value(s) for %r" % (positional.nargs, positional.name),
                        argument=positional,
                    )
                count = positional.nargs

            namespace[positional.name] = [
                self._convert(positional, token, index) for index, token in remaining[cursor:cursor + count]
            ]
            cursor += count

        if cursor < len(remaining):
            index, token = remaining[cursor]
            warnings.append(UnparsedTokensWarning(
                "%d token(s) from %s position %r were not parsed" % (len(remaining) - cursor, _ordinal(index + 1), token),
                title="unparsed tokens",
                code=FaultCode.UNPARSED_TOKENS,
                hint="remove the extra tokens or declare more positionals",
                tokens=tuple(token for _, token in remaining[cursor:]),
            ))

    def parse(self, tokens=Unset, /):
        """
        Run both passes and return the new ResultStore.

        - tokens: Unset reuses the constructor's token stream; anything else
          replaces it (see _tokenize).

        Raises
        - ParseError: conversion or arity failure; .cause holds the underlying
          fault and .namespace what was recorded before the failure.
        """
        if tokens is not Unset:
            self._tokens = _tokenize(tokens, "parse()")

        namespace = {}
        warnings = []
        try:
            remaining = self._extract(self._tokens, namespace, warnings)
            self._assign(remaining, namespace, warnings)
        except (TypeMismatchError, InsufficientArgumentsError) as exception:
            self._store = ResultStore()
            raise ParseError(
                exception.message,
                title="parse failure",
                code=FaultCode.PARSE_FAILURE,
                hint=exception.options.get("hint"),
                cause=exception,
                namespace=MappingProxyType({name: tuple(values) for name, values in namespace.items()}),
            ) from exception

        self._store = ResultStore(namespace, ParseState.PARSED)
        for warning in warnings:
            trigger(warning, prog=self._prog)
        return self._store

    def get(self, name, /, default=Unset, *, type=Unset):
        return self._store.get(name, default, type=type)

    def getall(self, name, /, default=Unset, *, type=Unset):
        return self._store.getall(name, default, type=type)

    def contains(self, name, /):
        return self._store.contains(name)

    def _styler(self):
        styles = defaultdict(str, {
            "usage-label": "bold #00E6FF",  # cyan signature label
            "prog-name": "bold #FF4D94",  # magenta-pink brand
            "description-section": "italic #A3A3A3",  # neutral gray
            "group-label": "bold #FFFFFF",  # white headers
            "positional-name": "bold #22C55E",  # green positionals
            "option-name": "bold #00E6FF",  # cyan options
            "metavar": "bold #FFD600",  # amber parameters
            "argument-description": "#9CA3AF",  # muted gray
            "status-label": "#737373",  # dim footer gray
        } | getattr(__import__("__main__"), "__styles__", {}))

        def styler(style):
            return styles[style] if self._colorful else ""

        return styler

    def _usage(self, styler):
        """
        Usage line: zero-arity options, fixed options, positionals, variable options.
        """
        ordered = [
            *(option for option in self._options if option.switch),
            *(option for option in self._options if not option.switch and not option.variable),
            *self._positionals,
            *(option for option in self._options if option.variable),
        ]
        return Text(" ").join([Text(self._prog, styler("prog-name")), *(argument.format(styler) for argument in ordered)])

    def _explanation(self, styler):
        lines = []
        for label, arguments in (("Arguments", self._positionals), ("Options", self._options)):
            if arguments:
                lines.extend([Text(""), Text(label, styler("group-label"))])
                lines.extend(argument.explain(styler) for argument in arguments)
        return Text("\n").join(lines)

    @staticmethod
    def _print(file, renderable):
        # brackets in usage fragments must not be read as markup
        _console(file).print(renderable, soft_wrap=True, highlight=False, markup=False)

    def format(self, file=Unset, /):
        """
        Print the usage line.
        """
        self._print(file, self._usage(self._styler()))

    def explain(self, file=Unset, /):
        """
        Print the help blocks of every positional, then of every option.
        """
        self._print(file, self._explanation(self._styler()))

    def show_help(self, file=Unset, /, simple=False):
        """
        Print the description, the usage line and, unless simple, the help blocks.
        """
        styler = self._styler()
        parts = []
        if self._descr:
            parts.extend([Text(self._descr, styler("description-section")), Text("")])
        parts.append(Text.assemble(("usage:", styler("usage-label")), "\n  ", self._usage(styler)))
        if not simple:
            parts.append(self._explanation(styler))
        self._print(file, Text("\n").join(parts))

    def display_status(self, file=Unset, /):
        """
        Debug dump of the input tokens, registered names and parsed values.
        """
        styler = self._styler()
        label = styler("status-label")
        lines = [
            Text.assemble(("# input arguments: ", label), " ".join(self._tokens)),
            Text.assemble(("# defined options: ", label), " ".join(option.name for option in self._options)),
            Text.assemble(("# named arguments: ", label), " ".join(positional.name for positional in self._positionals)),
            Text("# parsed arguments:", label),
        ]
        for name, values in self._store.items():
            lines.append(Text(f"    {name}: " + " ".join(value.display() for value in values)))
        self._print(file, Text("\n").join(lines))

    def __rich_repr__(self):
        yield "prog", self._prog
        yield "options", self.options
        yield "positionals", self.positionals
        yield "state", self._store.state.value

    def __repr__(self):
        return "parser(%s)" % ", ".join("%s=%r" % pair for pair in self.__rich_repr__())


def invoke(parser, /, *, help_on_error=True, show_help_and_exit=True):
    """
    Parse with process-exit conveniences and return the ResultStore.

    - help_on_error: on ParseError, print the full help and exit 0 when help was
      requested; otherwise print the short usage and the fault to stderr and exit 1.
      When disabled the ParseError propagates.
    - show_help_and_exit: after a successful parse that recorded help, print the
      full help and exit 0.
    """
    if not isinstance(parser, Parser):
        raise TypeError("invoke() argument must be a Parser")

    try:
        store = parser.parse()
    except ParseError as error:
        if not help_on_error:
            raise
        if HELP in error.namespace:
            parser.show_help()
            sys.exit(0)
        parser.show_help(Console(stderr=True), simple=True)
        trigger(error, shell=True, status=1, prog=parser.prog, colorful=parser.colorful, fancy=parser.fancy)
        raise

    if show_help_and_exit and store.get(HELP, False):
        parser.show_help()
        sys.exit(0)
    return store


__all__ = (
    "Parser",
    "invoke",
)
