"""
Arguable result store: the name → values mapping produced by a parse.

Overview
- ParseState: two-state latch, UNPARSED → PARSED. Only a successful parse
  produces a PARSED store; every other store is UNPARSED.
- ResultStore: ordered mapping from argument name to the tuple of Values the
  parse consumed for it (consumption order).

Read policy
- get()/getall() require the PARSED state (NotReadyError otherwise) and an entry
  for the name (NotFoundError otherwise). With a default, those two errors are
  replaced by the default; conversion errors always propagate.
- contains() / `in` never look at the state.

Quick example:
    >>> store = ResultStore({"count": [Value(int, "3")]}, ParseState.PARSED)
    >>> store.get("count")
    3
    >>> store.get("missing", 0)
    0
"""
from enum import Enum
from types import MappingProxyType

from .faults import FaultCode, NotFoundError, NotReadyError
from .utils import *
from .values import Value


class ParseState(Enum):
    UNPARSED = "unparsed"
    PARSED = "parsed"


class ResultStore:
    """
    Parsed values keyed by argument name.

    Stores are immutable once built; a parser replaces its store wholesale on
    each parse call.
    """

    def __init__(self, entries=Unset, state=ParseState.UNPARSED, /):
        entries = coalesce(entries, {})
        for name, values in entries.items():
            if not all(isinstance(value, Value) for value in values):
                raise TypeError("ResultStore() entry %r must hold Value instances" % name)
        if not isinstance(state, ParseState):
            raise TypeError("ResultStore() state must be a ParseState")

        self._entries = {name: tuple(values) for name, values in entries.items()}
        self._state = state

    state = mirror("state")

    @property
    def completed(self):
        return self._state is ParseState.PARSED

    def _lookup(self, name, /):
        if self._state is not ParseState.PARSED:
            raise NotReadyError(
                "cannot read %r before the arguments are parsed" % name,
                title="not ready",
                code=FaultCode.NOT_READY,
                hint="call parse() first and check that it succeeded",
                argument=name,
            )
        try:
            return self._entries[name]
        except KeyError:
            raise NotFoundError(
                "argument %r was not parsed" % name,
                title="not found",
                code=FaultCode.NOT_FOUND,
                hint="pass a default or check contains() first",
                argument=name,
            ) from None

    def get(self, name, /, default=Unset, *, type=Unset):
        """
        Return the first value recorded for `name`, converted.

        - type: Unset reads with the declared type; any other type converts the
          raw token with that type's rules (TypeMismatchError on failure).
        - default: returned instead of raising NotReadyError/NotFoundError.
          An entry with no values (a variable option given nothing) counts as
          not found.
        """
        try:
            values = self._lookup(name)
            if not values:
                raise NotFoundError(
                    "argument %r holds no values" % name,
                    title="not found",
                    code=FaultCode.NOT_FOUND,
                    hint="pass a default or use getall()",
                    argument=name,
                )
        except (NotReadyError, NotFoundError):
            if default is Unset:
                raise
            return default
        return values[0].get(type)

    def getall(self, name, /, default=Unset, *, type=Unset):
        """
        Return every value recorded for `name`, converted, in consumption order.

        The default (when given) replaces NotReadyError/NotFoundError and is
        returned unchanged.
        """
        try:
            values = self._lookup(name)
        except (NotReadyError, NotFoundError):
            if default is Unset:
                raise
            return default
        return [value.get(type) for value in values]

    def contains(self, name, /):
        return name in self._entries

    def items(self):
        return MappingProxyType(self._entries).items()

    def __contains__(self, name):
        return self.contains(name)

    def __iter__(self):
        return iter(self._entries)

    def __len__(self):
        return len(self._entries)

    def __rich_repr__(self):
        yield "state", self._state.value
        for name, values in self._entries.items():
            yield name, values

    def __repr__(self):
        return "result-store(%s)" % ", ".join(
            ["state=%r" % self._state.value] + ["%s=%r" % (name, values) for name, values in self._entries.items()]
        )


__all__ = (
    "ParseState",
    "ResultStore",
)
