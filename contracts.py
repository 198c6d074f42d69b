"""
Algebraic contracts for the bitwise arithmetic unit.

A contract is a named list of properties.  Each property is a predicate
that receives the ALU under test followed by one or more word values
and returns True when the property holds.  Contracts are purely
declarative; ``factory.AluFactory`` is what runs them.

Agreement with native arithmetic is only asserted where the native
result fits in the word.  Outside that range the unit either reports
overflow (checked mode) or wraps (legacy mode), and the closure
property covers both.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable

from bitwise import BitwiseALU, Word
from errors import ErrorKind


# ---------------------------------------------------------------------------
# Core contract primitives
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Property:
    """A single verifiable property of the arithmetic unit."""

    name: str
    description: str
    arity: int
    predicate: Callable[..., bool]

    def check(self, alu: BitwiseALU, *args: int) -> bool:
        return self.predicate(alu, *args)


@dataclass
class Contract:
    """An ordered collection of properties for one operation."""

    name: str
    properties: list[Property] = field(default_factory=list)

    def add(self, prop: Property) -> None:
        self.properties.append(prop)

    def __iter__(self):
        return iter(self.properties)

    def __len__(self):
        return len(self.properties)


# ---------------------------------------------------------------------------
# Helpers used inside the predicates
# ---------------------------------------------------------------------------

def truncdiv(a: int, b: int) -> int:
    """Integer division truncating toward zero (Python's ``//`` floors)."""
    q, r = divmod(a, b)
    if r != 0 and (a < 0) != (b < 0):
        q += 1
    return q


def _closed(result: Any, word: Word) -> bool:
    """A successful result lies in the word; a failure is a known kind."""
    if result.ok:
        return word.contains(result.value)
    return result.error in (ErrorKind.OVERFLOW, ErrorKind.DIVIDE_BY_ZERO)


def _agrees(result: Any, expected: int, word: Word) -> bool:
    if not word.contains(expected):
        return True
    return result.ok and result.value == expected


# ---------------------------------------------------------------------------
# Contract builders
# ---------------------------------------------------------------------------

def addition_contract(word: Word) -> Contract:
    contract = Contract(name="addition")

    contract.add(Property(
        name="closure",
        description="Result stays within the word or is reported",
        arity=2,
        predicate=lambda alu, a, b: _closed(alu.add(a, b), word),
    ))

    contract.add(Property(
        name="native",
        description="a + b matches native addition when it fits",
        arity=2,
        predicate=lambda alu, a, b: _agrees(alu.add(a, b), a + b, word),
    ))

    contract.add(Property(
        name="commutativity",
        description="a + b == b + a",
        arity=2,
        predicate=lambda alu, a, b: alu.add(a, b) == alu.add(b, a),
    ))

    contract.add(Property(
        name="identity",
        description="a + 0 == a",
        arity=1,
        predicate=lambda alu, a: alu.add(a, 0).value == a,
    ))

    return contract


def subtraction_contract(word: Word) -> Contract:
    contract = Contract(name="subtraction")

    contract.add(Property(
        name="closure",
        description="Result stays within the word or is reported",
        arity=2,
        predicate=lambda alu, a, b: _closed(alu.subtract(a, b), word),
    ))

    contract.add(Property(
        name="native",
        description="a - b matches native subtraction when it fits",
        arity=2,
        predicate=lambda alu, a, b: _agrees(alu.subtract(a, b), a - b, word),
    ))

    contract.add(Property(
        name="self_inverse",
        description="a - a == 0",
        arity=1,
        predicate=lambda alu, a: alu.subtract(a, a).value == 0,
    ))

    return contract


def negation_contract(word: Word) -> Contract:
    contract = Contract(name="negation")

    contract.add(Property(
        name="double_negation",
        description="-(-a) == a  (except the most negative value when checked)",
        arity=1,
        predicate=lambda alu, a: (
            (alu.checked and a == word.lo) or
            alu.negate(alu.negate(a).value).value == a
        ),
    ))

    contract.add(Property(
        name="min_overflow",
        description="Negating the most negative value is reported when checked",
        arity=1,
        predicate=lambda alu, a: (
            a != word.lo or not alu.checked or
            alu.negate(a).error == ErrorKind.OVERFLOW
        ),
    ))

    return contract


def multiplication_contract(word: Word) -> Contract:
    contract = Contract(name="multiplication")

    contract.add(Property(
        name="closure",
        description="Result stays within the word or is reported",
        arity=2,
        predicate=lambda alu, a, b: _closed(alu.multiply(a, b), word),
    ))

    contract.add(Property(
        name="native_non_negative",
        description="a * b matches native multiplication for a, b >= 0",
        arity=2,
        predicate=lambda alu, a, b: (
            a < 0 or b < 0 or _agrees(alu.multiply(a, b), a * b, word)
        ),
    ))

    contract.add(Property(
        name="native_signed",
        description="a * b matches native multiplication with sign restoration",
        arity=2,
        predicate=lambda alu, a, b: (
            alu.legacy_sign or _agrees(alu.multiply(a, b), a * b, word)
        ),
    ))

    contract.add(Property(
        name="commutativity",
        description="a * b == b * a",
        arity=2,
        predicate=lambda alu, a, b: alu.multiply(a, b) == alu.multiply(b, a),
    ))

    contract.add(Property(
        name="zero",
        description="a * 0 == 0",
        arity=1,
        predicate=lambda alu, a: alu.multiply(a, 0).value == 0,
    ))

    return contract


def division_contract(word: Word) -> Contract:
    contract = Contract(name="division")

    contract.add(Property(
        name="closure",
        description="Result stays within the word or is reported",
        arity=2,
        predicate=lambda alu, a, b: _closed(alu.divide(a, b), word),
    ))

    contract.add(Property(
        name="divide_by_zero",
        description="a / 0 is always reported as division by zero",
        arity=1,
        predicate=lambda alu, a: alu.divide(a, 0).error == ErrorKind.DIVIDE_BY_ZERO,
    ))

    contract.add(Property(
        name="native_non_negative",
        description="a / b matches floor division for a >= 0, b > 0",
        arity=2,
        predicate=lambda alu, a, b: (
            a < 0 or b <= 0 or _agrees(alu.divide(a, b), a // b, word)
        ),
    ))

    contract.add(Property(
        name="native_signed",
        description="a / b truncates toward zero with sign restoration",
        arity=2,
        predicate=lambda alu, a, b: (
            b == 0 or alu.legacy_sign or
            _agrees(alu.divide(a, b), truncdiv(a, b), word)
        ),
    ))

    contract.add(Property(
        name="identity",
        description="a / 1 == a  (non-negative a only for legacy sign handling)",
        arity=1,
        predicate=lambda alu, a: (
            (alu.legacy_sign and a < 0) or alu.divide(a, 1).value == a
        ),
    ))

    return contract


def alu_contracts(word: Word) -> list[Contract]:
    """Every contract the arithmetic unit must satisfy for a word."""
    return [
        addition_contract(word),
        subtraction_contract(word),
        negation_contract(word),
        multiplication_contract(word),
        division_contract(word),
    ]
