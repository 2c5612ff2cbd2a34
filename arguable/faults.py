"""
Arguable faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for all user-facing issues
  (errors and warnings). Codes are grouped by domain to keep copy consistent
  and make logs/searches predictable.
- ArgumentException / ArgumentWarning: base types that carry message + options and
  know how to render themselves in a friendly, lowercased, and actionable way.
- trigger(): central entry point to surface any fault (respecting shell/fancy/colorful).

Error kinds
- TypeMismatchError (alias ConversionError): a raw token is not convertible to a type.
- InsufficientArgumentsError: the token stream ran out before an arity was satisfied.
- NotFoundError / NotReadyError: read access to a missing name / before a successful parse.
- InvalidSpecError: registration-time violations.
- ParseError: the single typed failure surfaced by Parser.parse(), wrapping its cause.

Integration
- Library code raises these exceptions directly (options default to non-shell mode).
- The invoke() collaborator calls trigger(fault, shell=True, ...) to print the fault
  through rich and terminate the process instead.
"""
import copy
import inspect
import sys
import warnings
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the library (stable identifiers).

    grouping (by high-level domain)
    - conversions (2110x)
      • TYPE_MISMATCH
    - arity (2111x)
      • INSUFFICIENT_ARGUMENTS
    - reads (2112x)
      • NOT_FOUND, NOT_READY
    - registration (2113x)
      • INVALID_SPEC
    - parsing (2114x)
      • PARSE_FAILURE
    - warnings (22xxx)
      • UNPARSED_TOKENS, DUPLICATED_OPTION

    normalize() allows host remapping to custom labels while keeping code-stability.
    """
    # --- conversion errors (21xxx) ---
    TYPE_MISMATCH               = 21101

    # --- arity errors (21xxx) ---
    INSUFFICIENT_ARGUMENTS      = 21111

    # --- read errors (21xxx) ---
    NOT_FOUND                   = 21121
    NOT_READY                   = 21122

    # --- registration errors (21xxx) ---
    INVALID_SPEC                = 21131

    # --- parse errors (21xxx) ---
    PARSE_FAILURE               = 21141

    # --- warnings (22xxx) ---
    UNPARSED_TOKENS             = 22111
    DUPLICATED_OPTION           = 22112

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _render(fault, palette, title):
    main = __import__("__main__")
    options = fault.options
    colorful = options.get("colorful", False)
    fancy = options.get("fancy", False)

    styles = defaultdict(str, palette | getattr(main, "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if not colorful:
            return Text(str(fragment))
        if isinstance(fragment, Text):
            return fragment
        return Text(str(fragment), style)

    prog = text(getattr(main, "__prog__", options.get("prog", "arguable")), styler("prog-name"))
    code = options.get("code")

    header = Text.assemble(
        "[ ",
        prog,
        " — ",
        text(code.normalize() if isinstance(code, FaultCode) else "-", styler("code")),
        " | ",
        text(str(options.get("title", type(fault).__name__)).title(), styler(title)),
        " ]"
    )
    message = text(fault.message, styler(title.replace("title", "message")))
    renders = [message]
    if options.get("hint"):
        renders.append(Text.assemble(text(" → ", styler("hint-arrow")), text(options["hint"], styler("hint"))))

    if fancy:
        width = console.width - 4
        try:
            width = int(width * options["ratio"])
        except KeyError:
            width = None
        return Panel(Group(*renders), title=header, title_align="left", width=width)

    return Group(header, *renders)


class ArgumentException(Exception):
    """
    base of every error raised by the library.

    the message is the human-readable cause (lowercased, position-first);
    options carry the fault code, a short title, a one-line hint and any
    context the reporter may want to show (token, index, argument, ...).
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return str(self.message) if self.message is not Unset else ""

    def __rich__(self):
        return _render(self, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        }, "error-title")

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        sys.exit(self.options.get("status", 1))

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        replaced = type(self)(self.message, **{**self.options, **overrides})
        replaced.__cause__ = self.__cause__
        return replaced


class TypeMismatchError(ArgumentException): ...
class InsufficientArgumentsError(ArgumentException): ...
class NotFoundError(ArgumentException): ...
class NotReadyError(ArgumentException): ...
class InvalidSpecError(ArgumentException): ...


ConversionError = TypeMismatchError


class ParseError(ArgumentException):
    """
    the single failure surfaced by a parse pass.

    options
    - cause: the underlying TypeMismatchError or InsufficientArgumentsError.
    - namespace: read-only snapshot of what the parse had recorded before it
      aborted; collaborators use it to check whether help was requested.
    """

    @property
    def cause(self):
        return self.options.get("cause")

    @property
    def namespace(self):
        return self.options.get("namespace", MappingProxyType({}))


class ArgumentWarning(Warning):
    """
    base of every non-fatal condition reported by the library.

    outside shell mode the warning is emitted through warnings.warn;
    in shell mode it is printed to stderr through rich.
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return str(self.message) if self.message is not Unset else ""

    def __rich__(self):
        return _render(self, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #FFB400",  # amber fault code for warnings
            "warning-title": "bold #FFC2E0",  # softer pinky title for warnings

            # body
            "warning-message": "#D6D6DE",  # slightly lighter gray body
            "hint-arrow": "#B8EFAF dim",  # softer green arrow
            "hint": "italic #B8EFAF",  # softer green hint text
        }, "warning-title")

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            return warnings.warn(self, stacklevel=len(inspect.stack()))
        console.print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class UnparsedTokensWarning(ArgumentWarning): ...
class DuplicatedOptionWarning(ArgumentWarning): ...


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via copy.replace(fault, **options) before triggering.
    - in shell mode, rendering happens via rich console; otherwise, exceptions are raised
      and warnings are emitted.

    typical options
    - prog, shell, fancy, colorful, status, title, code, hint, and any other
      context the reporter may want to show (e.g., token/index/argument).
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


__all__ = (
    "ArgumentException",
    "TypeMismatchError",
    "ConversionError",
    "InsufficientArgumentsError",
    "NotFoundError",
    "NotReadyError",
    "InvalidSpecError",
    "ParseError",
    "ArgumentWarning",
    "UnparsedTokensWarning",
    "DuplicatedOptionWarning",
    "FaultCode",
    "trigger",
)
