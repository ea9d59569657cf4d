r"""
Optional values and their factories.

Overview
- OptionalValue
  • Immutable holder of zero-or-one value, in one of two states fixed at
    construction: present (holds a value) or empty.
  • Combinators (map, filter, flat_map, or_else*, if_present*) never mutate;
    they return a new instance or the canonical empty.
  • Every combinator taking a callable has a coroutine twin (suffix _async)
    that awaits the callable's result when it is awaitable.

- EMPTY
  • The canonical empty optional. Every absent result is this very object.

- Factories (admission policies for the two absence markers, None and undefined)
  • of(value):              rejects both          → NullishError
  • of_nullish(value):      admits both as empty
  • of_nullable(value):     admits None,          rejects undefined → UndefinedError
  • of_undefinable(value):  admits undefined,     rejects None      → NullError
  • empty():                the canonical empty
  The same five are grouped on the `Optional` namespace: Optional.of(...), ...

Quick example:
    >>> from better_optional import Optional
    >>> Optional.of("ab").map(len).get()
    2
    >>> Optional.of_nullish(None).or_else(7)
    7
    >>> str(Optional.empty())
    'Optional.empty'
"""
import copy
import datetime
import inspect
import locale
import numbers
from typing import final

from rich.text import Text

from .faults import NotPresentError, NullishError, NullError, UndefinedError
from .sentinels import undefined, isnullish


async def _settle(result, /):
    """
    Await `result` when it is awaitable; otherwise hand it back unchanged.
    """
    if inspect.isawaitable(result):
        return await result
    return result


def _localize(value, /):
    """
    Render `value` according to the current locale (LC_NUMERIC / LC_TIME).
    """
    if callable(getattr(value, "to_locale_string", None)):
        return value.to_locale_string()
    if isinstance(value, bool):
        return str(value)
    if isinstance(value, numbers.Integral):
        return locale.format_string("%d", value, grouping=True)
    if isinstance(value, numbers.Real):
        return locale.format_string("%.12g", value, grouping=True)
    if isinstance(value, datetime.datetime):
        return value.strftime("%c")
    if isinstance(value, datetime.date):
        return value.strftime("%x")
    return str(value)


@final
class OptionalValue:
    """
    A value that may or may not be present.

    Instances are built by the factories (of, of_nullish, of_nullable,
    of_undefinable, empty) and by combinators; calling OptionalValue()
    directly is not allowed. Once built, an instance is read-only.

    The empty state is represented by a single shared instance, EMPTY.
    """
    __slots__ = ("_value", "_present")

    def __new__(cls, *unused, **unused_options):
        raise TypeError(
            "OptionalValue cannot be instantiated directly; "
            "use Optional.of(), Optional.of_nullish() or Optional.empty()"
        )

    def __setattr__(self, name, value, /):
        raise AttributeError("OptionalValue is read-only")

    def __delattr__(self, name, /):
        raise AttributeError("OptionalValue is read-only")

    def __init_subclass__(cls, **options):
        raise TypeError("type 'OptionalValue' is not an acceptable base type")

    # --- queries ---

    def get(self):
        """
        Return the value; raise NotPresentError when empty.
        """
        if self._present:
            return self._value
        raise NotPresentError()

    def is_present(self):
        return self._present

    def is_empty(self):
        return not self._present

    def value_of(self):
        """
        Return the raw held value without checking presence.

        An empty optional answers with a nullish value (undefined for EMPTY).
        """
        return self._value

    # --- fallbacks ---

    def or_(self, other, /):
        """
        Return self when present, otherwise `other` (another OptionalValue).
        """
        if not isinstance(other, OptionalValue):
            raise TypeError("or_() argument must be an optional value")
        return self if self._present else other

    def or_else(self, default, /):
        return self._value if self._present else default

    def or_else_get(self, supplier, /):
        """
        Return the value when present; otherwise call supplier() and return its result.
        """
        return self._value if self._present else supplier()

    async def or_else_get_async(self, supplier, /):
        """
        Coroutine variant of or_else_get(); supplier may return an awaitable.
        """
        if self._present:
            return self._value
        return await _settle(supplier())

    def or_else_raise(self, error=None, /):
        """
        Return the value when present; otherwise raise `error`.

        `error` may be an exception instance or class. When omitted (or
        nullish), NotPresentError is raised.
        """
        if self._present:
            return self._value
        if isnullish(error):
            raise NotPresentError()
        raise error

    # --- side effects ---

    def if_present(self, callback, /):
        if self._present:
            callback(self._value)

    async def if_present_async(self, callback, /):
        if self._present:
            await _settle(callback(self._value))

    def if_present_or_else(self, callback, empty_action, /):
        """
        Call callback(value) when present, otherwise empty_action(). Exactly one runs.
        """
        if self._present:
            callback(self._value)
        else:
            empty_action()

    async def if_present_or_else_async(self, callback, empty_action, /):
        if self._present:
            await _settle(callback(self._value))
        else:
            await _settle(empty_action())

    # --- transformations ---

    def filter(self, predicate, /):
        """
        Keep self when present and predicate(value) is truthy; otherwise EMPTY.

        The predicate is not called on an empty optional.
        """
        if self._present and predicate(self._value):
            return self
        return EMPTY

    async def filter_async(self, predicate, /):
        if self._present and await _settle(predicate(self._value)):
            return self
        return EMPTY

    def map(self, mapper, /):
        """
        Wrap mapper(value) in a new optional; EMPTY when self is empty.

        The result goes through the same presence test as of_nullish(), so a
        mapper returning None or undefined yields EMPTY.
        """
        if not self._present:
            return EMPTY
        return of_nullish(mapper(self._value))

    async def map_async(self, mapper, /):
        if not self._present:
            return EMPTY
        return of_nullish(await _settle(mapper(self._value)))

    def flat_map(self, mapper, /):
        """
        Return mapper(value), which must itself be an optional; EMPTY when self is empty.
        """
        if not self._present:
            return EMPTY
        return _flatten(mapper(self._value))

    async def flat_map_async(self, mapper, /):
        if not self._present:
            return EMPTY
        return _flatten(await _settle(mapper(self._value)))

    # --- rendering ---

    def __str__(self):
        if self._present:
            return f"Optional[{self._value}]"
        return "Optional.empty"

    def to_locale_string(self):
        """
        Like str(), with the held value rendered for the current locale.
        """
        if self._present:
            return f"Optional[{_localize(self._value)}]"
        return "Optional.empty"

    def __format__(self, spec, /):
        if not spec or not self._present:
            return str(self)
        return f"Optional[{format(self._value, spec)}]"

    def __repr__(self):
        if self._present:
            return f"OptionalValue({self._value!r})"
        return "OptionalValue.empty"

    def __rich__(self):
        if self._present:
            return Text.assemble(("Optional", "bold"), "[", str(self._value), "]")
        return Text(str(self), style="dim")

    # --- protocols ---

    def __or__(self, other, /):
        if not isinstance(other, OptionalValue):
            return NotImplemented
        return self.or_(other)

    def __bool__(self):
        return self._present

    def __iter__(self):
        if self._present:
            yield self._value

    def __eq__(self, other, /):
        if not isinstance(other, OptionalValue):
            return NotImplemented
        if self._present and other._present:
            return self._value == other._value
        return self._present is other._present

    def __hash__(self):
        if self._present:
            return hash((OptionalValue, self._value))
        return hash((OptionalValue, None))

    def __copy__(self):
        return self

    def __deepcopy__(self, memo, /):
        if not self._present:
            return self
        return _build(copy.deepcopy(self._value, memo))


def _build(value, /):
    """
    Allocate a present OptionalValue around a value already known to be non-nullish.
    """
    self = object.__new__(OptionalValue)
    object.__setattr__(self, "_value", value)
    object.__setattr__(self, "_present", True)
    return self


def _flatten(result, /):
    if not isinstance(result, OptionalValue):
        raise TypeError("flat_map() mapper must return an optional value, not %s" % type(result).__name__)
    return result


EMPTY = object.__new__(OptionalValue)
object.__setattr__(EMPTY, "_value", undefined)
object.__setattr__(EMPTY, "_present", False)


def of(value, /):
    """
    Wrap a value that must be neither None nor undefined.

    Raises
    - NullishError when value is None or undefined.
    """
    if isnullish(value):
        raise NullishError()
    return _build(value)


def of_nullish(value, /):
    """
    Wrap any value; None and undefined give the empty optional.
    """
    if isnullish(value):
        return EMPTY
    return _build(value)


def of_nullable(value, /):
    """
    Wrap a value that may be None (→ empty) but not undefined.

    Raises
    - UndefinedError when value is undefined.
    """
    if value is undefined:
        raise UndefinedError()
    return of_nullish(value)


def of_undefinable(value=undefined, /):
    """
    Wrap a value that may be undefined (→ empty) but not None.

    Called without argument, the value is undefined and the result is empty.

    Raises
    - NullError when value is None.
    """
    if value is None:
        raise NullError()
    return of_nullish(value)


def empty():
    return EMPTY


Optional = type("Optional", (), {
    "__module__": __name__,
    "__slots__": (),
    "__doc__": "factory namespace for optional values: Optional.of(...), Optional.empty(), ...",
    "__repr__": lambda self: "Optional",
    "of": staticmethod(of),
    "of_nullish": staticmethod(of_nullish),
    "of_nullable": staticmethod(of_nullable),
    "of_undefinable": staticmethod(of_undefinable),
    "empty": staticmethod(empty),
})()


__all__ = (
    # Types
    "OptionalValue",

    # Constants
    "EMPTY",
    "Optional",

    # Factories
    "of",
    "of_nullish",
    "of_nullable",
    "of_undefinable",
    "empty",
)
