"""
Arguable values: typed, eagerly validated scalars backed by a raw string.

Overview
- ValueType: the closed set of element types an argument can declare
  (NULL, BOOL, INTEGER, FLOAT, STRING). NULL is a placeholder marker and is
  never a legal runtime value.
- Value: holds a declared ValueType and the raw token it was built from.
  The raw string is validated against the declared type on construction and
  on every assign(); an invalid Value is never handed out.

Conversion rules
- BOOL: "true"/"false" (case-insensitive), otherwise any integer string
  (non-zero means True).
- INTEGER: int() parsing, limited to the signed 64-bit range.
- FLOAT: float() parsing; finite literals that overflow to infinity are rejected,
  explicit "inf"/"nan" spellings are accepted.
- STRING: identity.

Every failure, whatever its reason (garbage, partial number, overflow), raises
TypeMismatchError.

Quick example:
    >>> value = Value(int, "42")
    >>> value.get()
    42
    >>> value.get(str)
    '42'
"""
import math
import re
from enum import Enum

from rich.text import Text

from .faults import FaultCode, TypeMismatchError
from .utils import Unset, coalesce

INTEGER_MIN = -(1 << 63)
INTEGER_MAX = (1 << 63) - 1


class ValueType(Enum):
    """
    element types recognised by the parser.

    builtins are accepted wherever a ValueType is expected:
    bool → BOOL, int → INTEGER, float → FLOAT, str → STRING.
    """
    NULL = "null"
    BOOL = "bool"
    INTEGER = "integer"
    FLOAT = "float"
    STRING = "string"

    @classmethod
    def of(cls, object, /):
        """
        normalize a ValueType or a builtin scalar type into a ValueType.
        """
        if isinstance(object, ValueType):
            return object
        try:
            return {bool: cls.BOOL, int: cls.INTEGER, float: cls.FLOAT, str: cls.STRING}[object]
        except (KeyError, TypeError):
            raise TypeError(f"value type must be a ValueType or one of bool, int, float, str (got {object!r})") from None

    def describe(self):
        """
        human label used in help output; only INTEGER, FLOAT and STRING have one.
        """
        if self in (ValueType.INTEGER, ValueType.FLOAT, ValueType.STRING):
            return self.value
        raise TypeMismatchError(
            "%s type has no display label" % self.value,
            title="wrong argument type",
            code=FaultCode.TYPE_MISMATCH,
            hint="only integer, float and string types can be described",
        )


def _mismatch(raw, type):
    return TypeMismatchError(
        "value %r is not convertible to %s-type" % (raw, type.value),
        title="type mismatch",
        code=FaultCode.TYPE_MISMATCH,
        hint="use a valid %s value" % type.value,
        token=raw,
        type=type,
    )


def _to_integer(raw):
    try:
        result = int(raw)
    except ValueError:
        raise _mismatch(raw, ValueType.INTEGER) from None
    if not INTEGER_MIN <= result <= INTEGER_MAX:
        raise _mismatch(raw, ValueType.INTEGER)
    return result


def _to_float(raw):
    try:
        result = float(raw)
    except ValueError:
        raise _mismatch(raw, ValueType.FLOAT) from None
    # float() saturates to inf on overflow instead of failing
    if math.isinf(result) and not re.fullmatch(r"\s*[+-]?inf(inity)?\s*", raw, re.IGNORECASE):
        raise _mismatch(raw, ValueType.FLOAT)
    return result


def _to_bool(raw):
    if re.fullmatch("true", raw, re.IGNORECASE):
        return True
    if re.fullmatch("false", raw, re.IGNORECASE):
        return False
    try:
        return _to_integer(raw) != 0
    except TypeMismatchError:
        raise _mismatch(raw, ValueType.BOOL) from None


def _to_string(raw):
    return raw


def _to_null(raw):
    raise TypeMismatchError(
        "argument type is null",
        title="null type",
        code=FaultCode.TYPE_MISMATCH,
        hint="declare a bool, integer, float or string type",
        token=raw,
        type=ValueType.NULL,
    )


_converters = {
    ValueType.NULL: _to_null,
    ValueType.BOOL: _to_bool,
    ValueType.INTEGER: _to_integer,
    ValueType.FLOAT: _to_float,
    ValueType.STRING: _to_string,
}


def convert(raw, type, /):
    """
    convert a raw string into the Python scalar for the given type.

    raises TypeMismatchError when the string does not parse.
    """
    if not isinstance(raw, str):
        raise TypeError("convert() first argument must be a string")
    return _converters[ValueType.of(type)](raw)


class Value:
    """
    A declared ValueType plus the raw string it holds.

    Invariant: the raw string is convertible to the declared type. Both the
    constructor and assign() enforce it, so reading back with the declared
    type never fails.
    """
    __slots__ = ("_type", "_raw")

    def __init__(self, type, raw, /):
        self._type = ValueType.of(type)
        self._raw = Unset
        self.assign(raw)

    @property
    def type(self):
        return self._type

    @property
    def raw(self):
        return self._raw

    def assign(self, raw, /):
        """
        replace the raw string after validating it against the declared type.
        """
        convert(raw, self._type)
        self._raw = raw
        return self

    def get(self, type=Unset, /):
        """
        return the raw string converted to `type` (default: the declared type).

        a type other than the declared one is converted from the raw string with
        the same rules, so an INTEGER "42" reads as STRING "42" while a STRING
        "abc" read as INTEGER raises TypeMismatchError.
        """
        return convert(self._raw, coalesce(type, self._type))

    def describe_type(self):
        return self._type.describe()

    def display(self):
        """
        status-dump form: true/false, integers, %f floats and raw strings.
        """
        match self._type:
            case ValueType.BOOL:
                return "true" if self.get() else "false"
            case ValueType.FLOAT:
                return "%f" % self.get()
            case ValueType.INTEGER:
                return str(self.get())
            case _:
                return self._raw

    def __int__(self):
        return self.get(ValueType.INTEGER)

    def __float__(self):
        return self.get(ValueType.FLOAT)

    def __str__(self):
        return self._raw

    def __eq__(self, other):
        if not isinstance(other, Value):
            return NotImplemented
        return (self._type, self._raw) == (other._type, other._raw)

    def __hash__(self):
        return hash((self._type, self._raw))

    def __repr__(self):
        return f"value({self._type.value}, {self._raw!r})"

    def __rich__(self):
        return Text(self.display(), style="bold" if self._type is not ValueType.STRING else "")


__all__ = (
    "ValueType",
    "Value",
    "convert",
)
