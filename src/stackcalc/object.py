# src/stackcalc/object.py
"""Runtime values produced by the evaluator."""

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


class Object:
    def inspect(self):
        raise NotImplementedError("Subclasses must implement this method")

    def type(self):
        raise NotImplementedError("Subclasses must implement this method")


class Integer(Object):
    __slots__ = ("value",)

    def __init__(self, value): self.value = int(value)
    def inspect(self): return str(self.value)
    def type(self): return "INTEGER"

    def promote(self):
        return Float(float(self.value))

    def __eq__(self, other):
        return isinstance(other, Integer) and other.value == self.value

    def __hash__(self): return hash(("INTEGER", self.value))
    def __repr__(self): return f"Integer({self.value})"


class Float(Object):
    __slots__ = ("value",)

    def __init__(self, value): self.value = float(value)
    def type(self): return "FLOAT"

    def inspect(self, style="repr"):
        if style == "fixed":
            return f"{self.value:f}"
        return repr(self.value)

    def __eq__(self, other):
        if not isinstance(other, Float):
            return False
        if self.value != self.value and other.value != other.value:
            return True  # nan results compare equal to each other
        return other.value == self.value

    def __hash__(self):
        if self.value != self.value:
            return hash(("FLOAT", "nan"))
        return hash(("FLOAT", self.value))

    def __repr__(self): return f"Float({self.value!r})"


NUMERIC_TYPES = (Integer, Float)


def in_int64_range(value):
    return INT64_MIN <= value <= INT64_MAX


def format_value(value, float_format="repr"):
    if isinstance(value, Float):
        return value.inspect(float_format)
    return value.inspect()
