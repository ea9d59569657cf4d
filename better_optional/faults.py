"""
better-optional faults (errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every failure the
  package can raise. Codes are grouped by domain so logs and searches stay
  predictable.
- OptionalException: base type that carries message + options and knows how to
  render itself in a friendly, actionable way with rich.
- NotPresentError: absence on access (get(), or_else_raise() without an error).
- NullishError / NullError / UndefinedError: construction-policy violations
  raised by the factories.
- creation_message(): the diagnostic formatter for construction failures.
- report(): prints a fault to the stderr console.
- getdoc(): optional description lookup for a code from the host application.

Host hooks (all optional, read from __main__ at render time)
- __styles__: style overrides for the rendering.
- __codes__: FaultCode -> label remapping used by FaultCode.normalize().
- __docs__: FaultCode -> documentation line shown under the hint (see getdoc()).
- __prog__: program name displayed in fault headers.
"""
import copy
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping
    - access (2110x)
      • NOT_PRESENT
    - construction (2111x)
      • NULLISH_VALUE, NULL_VALUE, UNDEFINED_VALUE
    """
    # --- access errors (2110x) ---
    NOT_PRESENT     = 21101

    # --- construction errors (2111x) ---
    NULLISH_VALUE   = 21111
    NULL_VALUE      = 21112
    UNDEFINED_VALUE = 21113

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


NOT_PRESENT_MESSAGE = "Value is not present"

_SUGGESTION = "If you want to do this on purpose use Optional.of_nullish(). "


def creation_message(category, /):
    """
    build the message for a value a factory refused to wrap.

    parameters
    - category: "nullish" | "null" | "undefined"
      the kind of value that was rejected.

    returns
    - str naming the rejected category, with a pointer to of_nullish() for the
      "nullish" case and to empty() in every case.
    """
    if category not in ("nullish", "null", "undefined"):
        raise ValueError("creation_message() argument must be 'nullish', 'null' or 'undefined'")
    return (
        f"Cannot create an optional value from a {category} value. "
        f"{_SUGGESTION if category == 'nullish' else ''}"
        "If you want to create an empty optional, use Optional.empty() instead."
    )


class OptionalException(Exception):
    """
    base class of every fault raised by better-optional.

    class attributes
    - code: FaultCode identifying the fault.
    - title: short lowercase title shown in the rendered header.
    - hint: one-sentence remediation shown under the message.

    options (keyword-only, stored read-only)
    - colorful: bool, style the rendering (default True).
    - fancy: bool, wrap the rendering in a panel (default False).
    - ratio: float, panel width relative to the console when fancy.
    """
    code = FaultCode.NOT_PRESENT
    title = "value not present"
    hint = "check is_present() first, or supply a fallback with or_else() or or_else_get()"

    def __init__(self, message=None, /, **options):
        if message is None:
            message = self.default()
        assert isinstance(message, str)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType({"colorful": True, "fancy": False} | options)

    @classmethod
    def default(cls):
        return NOT_PRESENT_MESSAGE

    def __str__(self):
        return self.message

    def __rich__(self):
        main = __import__("__main__")

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
            "docs": "#6B6F7A",  # muted host documentation footer
        } | getattr(main, "__styles__", {}))

        def styler(style):
            return styles[style] if self.options["colorful"] else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not self.options["colorful"]:
                return Text(str(fragment))
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), style)

        prog = text(getattr(main, "__prog__", "better-optional"), styler("prog-name"))

        header = Text.assemble(
            "[ ",
            prog,
            " — ",
            text(self.code.normalize(), styler("code")),
            " | ",
            text(self.title.title(), styler("error-title")),
            " ]"
        )
        message = text(self.message, styler("error-message"))
        hint = Text.assemble(text(" → ", styler("hint-arrow")), text(self.hint, styler("hint")))
        body = [message, hint]
        if docs := getdoc(self.code):
            body.append(text(docs, styler("docs")))

        if self.options["fancy"]:
            try:
                width = int((console.width - 4) * self.options["ratio"])
            except KeyError:
                width = None
            return Panel(Group(*body), title=header, title_align="left", width=width)

        return Group(header, *body)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class NotPresentError(OptionalException, LookupError):
    """raised when the value of an empty optional is requested."""


class NullishError(OptionalException, ValueError):
    """raised by Optional.of() for None or undefined."""
    code = FaultCode.NULLISH_VALUE
    title = "nullish value"
    hint = "use Optional.of_nullish() to accept None and undefined, or Optional.empty() for an empty optional"
    category = "nullish"

    @classmethod
    def default(cls):
        return creation_message(cls.category)


class NullError(NullishError):
    """raised by Optional.of_undefinable() for None."""
    code = FaultCode.NULL_VALUE
    title = "null value"
    hint = "use Optional.of_nullable() to accept None, or Optional.empty() for an empty optional"
    category = "null"


class UndefinedError(NullishError):
    """raised by Optional.of_nullable() for undefined."""
    code = FaultCode.UNDEFINED_VALUE
    title = "undefined value"
    hint = "use Optional.of_undefinable() to accept undefined, or Optional.empty() for an empty optional"
    category = "undefined"


def report(fault, /, **options):
    """
    print a fault on the stderr console and return it.

    contract
    - fault must be an OptionalException (or subclass) instance.
    - options are merged into the fault via copy.replace() before printing,
      e.g. report(error, fancy=True, ratio=2/3).
    - nothing is raised; callers decide whether to re-raise the returned fault.
    """
    if not isinstance(fault, OptionalException):
        raise TypeError("report() argument must be an optional exception")
    if options:
        fault = copy.replace(fault, **options)
    console.print(fault)
    return fault


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    lookup
    - the host application may expose a __docs__ mapping in __main__ where keys
      are FaultCode instances and values are short documentation strings.
    - when not found, returns None.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "FaultCode",
    "OptionalException",
    "NotPresentError",
    "NullishError",
    "NullError",
    "UndefinedError",
    "creation_message",
    "report",
    "getdoc",
)
