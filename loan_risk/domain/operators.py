"""Typed comparison operators for scoring rules"""

import operator as op
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Callable, Dict, Optional, Union

from loan_risk.domain.exceptions import ComparisonError, LiteralParseError, UnsupportedOperatorError


class ValueKind(str, Enum):
    NUMBER = "number"
    STRING = "string"
    BOOLEAN = "boolean"


class Operator(str, Enum):
    GT = ">"
    LT = "<"
    EQ = "=="
    NE = "!="
    GE = ">="
    LE = "<="


_COMPARATORS: Dict[Operator, Callable[[Any, Any], bool]] = {
    Operator.GT: op.gt,
    Operator.LT: op.lt,
    Operator.EQ: op.eq,
    Operator.NE: op.ne,
    Operator.GE: op.ge,
    Operator.LE: op.le,
}

_TRUE_LITERALS = {"true"}
_FALSE_LITERALS = {"false"}


@dataclass(frozen=True)
class TypedValue:
    """Value tagged with its kind; only values of the same kind are comparable"""

    kind: ValueKind
    value: Any

    @classmethod
    def number(cls, value: Union[int, float, Decimal]) -> "TypedValue":
        if isinstance(value, bool):
            raise TypeError("booleans are not numbers")
        if not isinstance(value, Decimal):
            # floats go through str() so 0.1 becomes Decimal("0.1")
            value = Decimal(str(value)) if isinstance(value, float) else Decimal(value)
        return cls(ValueKind.NUMBER, value)

    @classmethod
    def string(cls, value: str) -> "TypedValue":
        return cls(ValueKind.STRING, str(value))

    @classmethod
    def boolean(cls, value: bool) -> "TypedValue":
        return cls(ValueKind.BOOLEAN, bool(value))

    @classmethod
    def of(cls, kind: ValueKind, value: Any) -> "TypedValue":
        if kind is ValueKind.NUMBER:
            return cls.number(value)
        if kind is ValueKind.BOOLEAN:
            return cls.boolean(value)
        return cls.string(value)


def to_operator(symbol: Union[str, Operator]) -> Operator:
    """Map an operator symbol to Operator, raising UnsupportedOperatorError if unknown"""
    try:
        return Operator(symbol)
    except ValueError:
        raise UnsupportedOperatorError(f"Unknown comparison operator: {symbol!r}") from None


def parse_literal(text: Optional[str], kind: ValueKind) -> TypedValue:
    """
    Interpret a rule's stored value as the given kind.

    - NUMBER: any finite decimal ("60", "2.5", "-10"); surrounding whitespace ignored
    - BOOLEAN: "true" / "false", case-insensitive
    - STRING: taken verbatim

    Raises:
        LiteralParseError: If the text is absent or not a valid literal of that kind
    """
    if text is None:
        raise LiteralParseError("Rule value is missing")

    if kind is ValueKind.NUMBER:
        try:
            number = Decimal(text.strip())
        except InvalidOperation:
            raise LiteralParseError(f"Invalid rule value for numeric comparison: {text!r}") from None
        if not number.is_finite():
            raise LiteralParseError(f"Invalid rule value for numeric comparison: {text!r}")
        return TypedValue.number(number)

    if kind is ValueKind.BOOLEAN:
        lowered = text.strip().lower()
        if lowered in _TRUE_LITERALS:
            return TypedValue.boolean(True)
        if lowered in _FALSE_LITERALS:
            return TypedValue.boolean(False)
        raise LiteralParseError(f"Invalid rule value for boolean comparison: {text!r}")

    return TypedValue.string(text)


def compare(left: Optional[TypedValue], operator: Union[str, Operator], right: Optional[TypedValue]) -> bool:
    """
    Apply a comparison operator to two values of the same kind.

    Numbers use numeric ordering, strings lexical ordering and booleans the
    False < True ordering. Nothing is special-cased per kind.

    Raises:
        UnsupportedOperatorError: Operator is not one of > < == != >= <=
        ComparisonError: Either operand is absent or the kinds differ
    """
    comparator = _COMPARATORS[to_operator(operator)]

    if left is None or right is None:
        raise ComparisonError(f"Attempted to compare null values: left={left}, right={right}")
    if left.kind is not right.kind:
        raise ComparisonError(f"Cannot compare {left.kind.value} with {right.kind.value}")

    return comparator(left.value, right.value)
