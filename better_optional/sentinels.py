"""
The "missing value" sentinel.

Python has a single built-in null object, None. Optional values need a second,
distinct marker for “no value was supplied at all”, so that factories can admit
one and reject the other (see better_optional.core). This module defines that
marker: a process-wide singleton `undefined` and its type `undefinedtype`.

Semantics
  • Falsy: bool(undefined) is False.
  • Stable string form: repr(undefined) == "undefined" (and Rich uses a dim style).
  • Identity: undefinedtype() always returns the same instance per interpreter.
  • Distinct: undefined is never equal to None, False, 0 or "".

Typical usage
    def lookup(key, default=undefined):
        ...
        return Optional.of_undefinable(default)

    value = undefined.nullify(value, default="fallback")
"""
import functools

from rich.text import Text


class undefinedtype:
    """
    Singleton type of the “missing value” marker.

    Notes
    - This type is final; subclassing is blocked to preserve semantics.
    - Calling undefinedtype() repeatedly yields the same object.
    - The instance is falsy and has a stable string/console representation.
    """

    @functools.cache
    def __new__(cls):
        """
        Return the unique instance of undefinedtype (per process).
        """
        return super().__new__(cls)

    def nullify(self, object, default=None, /):
        """
        Replace the sentinel with a concrete default; pass through other objects.

        Parameters
        - object: any
          Value that may be the sentinel instance (self).
        - default: any | None
          Replacement object when `object` is the sentinel. Defaults to None.

        Returns
        - default when `object is self`, otherwise `object` unchanged.
        """
        if object is self:
            return default
        # None is a value here, not a missing one.
        return object

    def __bool__(self):
        return False

    def __rich__(self):
        """
        Rich protocol hook: render a dim 'undefined' token.
        """
        return Text(repr(self), style="dim")

    def __repr__(self):
        return "undefined"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'undefinedtype' is not an acceptable base type")


undefined = undefinedtype()


def isnullish(object, /):
    """
    Return True when `object` is None or the `undefined` sentinel.
    """
    return object is None or object is undefined


__all__ = (
    "undefinedtype",
    "undefined",
    "isnullish",
)
