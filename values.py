import math
import re


NUMBER = "number"
STRING = "string"
BOOLEAN = "boolean"
NULL_KIND = "null"
UNSET_KIND = "unset"


class Value:
    """A runtime value tagged with its kind.

    The evaluator checks `kind` before touching `payload`; payload is a float
    for numbers, a str for strings and booleans (their display word), and
    None for null and unset.
    """

    __slots__ = ("kind", "payload")

    def __init__(self, kind, payload=None):
        self.kind = kind
        self.payload = payload

    def __eq__(self, other):
        if not isinstance(other, Value):
            return NotImplemented
        return self.kind == other.kind and self.payload == other.payload

    def __hash__(self):
        return hash((self.kind, self.payload))

    def __repr__(self):
        return f"Value({self.kind}, {self.payload!r})"

    def __str__(self):
        return display(self)


TRUE = Value(BOOLEAN, "истина")
FALSE = Value(BOOLEAN, "ложь")
NULL = Value(NULL_KIND)
# declared but not yet assigned
UNSET = Value(UNSET_KIND)


def number(x):
    return Value(NUMBER, float(x))


def string(s):
    return Value(STRING, s)


def boolean(flag):
    return TRUE if flag else FALSE


def format_number(x):
    if math.isnan(x):
        return "NaN"
    if math.isinf(x):
        return "Infinity" if x > 0 else "-Infinity"
    if x == int(x) and abs(x) < 1e21:
        return str(int(x))
    # "1e-07" -> "1e-7"
    return re.sub(r"e([+-])0*(\d)", r"e\1\2", repr(x))


def display(value):
    if value.kind == NUMBER:
        return format_number(value.payload)
    if value.kind in (STRING, BOOLEAN):
        return value.payload
    if value.kind == NULL_KIND:
        return "ничто"
    if value.kind == UNSET_KIND:
        return "неопределено"
    raise ValueError(f"unknown value kind: {value.kind}")
