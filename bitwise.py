"""
Fixed-width integer arithmetic built only from XOR, AND, NOT and shifts.

The programmer-mode back-end never uses native ``+``, ``-``, ``*`` or
``/`` on operands.  Addition is a ripple-carry loop, negation is two's
complement, multiplication is shift-and-add and division is repeated
subtraction of the shifted divisor.  Every loop runs at most once per
bit of the word, so each operation finishes in bounded time.

Python integers are unbounded, so all intermediate values are kept as
unsigned bit patterns masked to the word and converted back to signed
integers at the end.

Two behaviours are supported by ``BitwiseALU``:

  checked   sign restoration for multiply/divide (division truncates
            toward zero) and real overflow detection
  legacy    results wrap inside the word and multiply/divide return the
            value computed on absolute values without the combined sign
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from errors import ErrorKind, Result
from ops import BinaryOp


class OverflowMode(str, Enum):
    """What to do when a result does not fit in the word."""

    CHECKED = "checked"  # report ErrorKind.OVERFLOW
    WRAP = "wrap"        # keep the low bits, like two's-complement hardware


@dataclass(frozen=True)
class Word:
    """A signed two's-complement integer word of ``bits`` bits."""

    bits: int

    def __post_init__(self):
        if self.bits < 2:
            raise ValueError(f"word width must be at least 2 bits, got {self.bits}")

    @property
    def mask(self) -> int:
        return (1 << self.bits) - 1

    @property
    def sign_bit(self) -> int:
        return 1 << (self.bits - 1)

    @property
    def lo(self) -> int:
        return ~(self.mask >> 1)

    @property
    def hi(self) -> int:
        return self.mask >> 1

    def contains(self, value: int) -> bool:
        return self.lo <= value <= self.hi

    def to_unsigned(self, value: int) -> int:
        return value & self.mask

    def to_signed(self, pattern: int) -> int:
        pattern &= self.mask
        if pattern & self.sign_bit:
            return pattern | ~self.mask
        return pattern


# ---------------------------------------------------------------------------
# Common words
# ---------------------------------------------------------------------------

INT8 = Word(8)
INT32 = Word(32)
INT64 = Word(64)

SUPPORTED_WIDTHS = (8, 16, 32, 64)


# ---------------------------------------------------------------------------
# Unsigned building blocks
# ---------------------------------------------------------------------------

def _ripple_add(a: int, b: int, mask: int) -> int:
    total = (a ^ b) & mask
    carry = ((a & b) << 1) & mask
    while carry:
        previous = total
        total = total ^ carry
        carry = ((previous & carry) << 1) & mask
    return total


def _ripple_sub(a: int, b: int, mask: int) -> int:
    return _ripple_add(a, _ripple_add(~b & mask, 1, mask), mask)


def _shift_add_multiply(x: int, y: int, mask: int) -> int:
    """Multiply two unsigned magnitudes: add ``x`` for every set bit of ``y``."""
    result = 0
    while y:
        if y & 1:
            result = _ripple_add(result, x, mask)
        x = (x << 1) & mask
        y >>= 1
    return result


def _shift_subtract_divide(x: int, y: int, bits: int, mask: int) -> int:
    """Divide two unsigned magnitudes by repeated subtraction.

    At each bit position the shifted divisor is subtracted while it
    still fits, accumulating the matching power of two into the
    quotient.  ``y`` must be non-zero.
    """
    quotient = 0
    remainder = x
    for shift in range(bits - 1, -1, -1):
        if (remainder >> shift) >= y:
            remainder = _ripple_sub(remainder, y << shift, mask)
            quotient = _ripple_add(quotient, 1 << shift, mask)
    return quotient


# ---------------------------------------------------------------------------
# Signed primitives (always wrap inside the word)
# ---------------------------------------------------------------------------

def bitwise_add(a: int, b: int, word: Word = INT32) -> int:
    return word.to_signed(
        _ripple_add(word.to_unsigned(a), word.to_unsigned(b), word.mask)
    )


def negate(n: int, word: Word = INT32) -> int:
    return bitwise_add(~n, 1, word)


def subtract(a: int, b: int, word: Word = INT32) -> int:
    return bitwise_add(a, negate(b, word), word)


def sign(n: int, word: Word = INT32) -> int:
    """-1 for negative values, 0 otherwise (arithmetic shift of the sign bit)."""
    return word.to_signed(n) >> (word.bits - 1)


def absolute(n: int, word: Word = INT32) -> int:
    return negate(n, word) if sign(n, word) else word.to_signed(n)


def magnitude(n: int, word: Word = INT32) -> int:
    """Unsigned absolute value; exact even for the most negative value."""
    return word.to_unsigned(absolute(n, word))


# ---------------------------------------------------------------------------
# The arithmetic unit
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class BitwiseALU:
    """
    Programmer-mode arithmetic over one word width.

    Every operation returns a ``Result``; division by zero and (in
    checked mode) overflow are reported, never returned as numbers.
    """

    word: Word = INT32
    overflow: OverflowMode = OverflowMode.CHECKED
    legacy_sign: bool = False

    @property
    def checked(self) -> bool:
        return self.overflow == OverflowMode.CHECKED

    # -- helpers ------------------------------------------------------------

    def _validate(self, *values: int) -> None:
        for v in values:
            if not self.word.contains(v):
                raise ValueError(
                    f"{v} is outside the {self.word.bits}-bit range "
                    f"[{self.word.lo}, {self.word.hi}]"
                )

    def _overflowed(self) -> Result:
        return Result.failure(ErrorKind.OVERFLOW)

    # -- operations ---------------------------------------------------------

    def add(self, a: int, b: int) -> Result:
        self._validate(a, b)
        result = bitwise_add(a, b, self.word)
        same_sign = sign(a, self.word) == sign(b, self.word)
        if self.checked and same_sign and sign(result, self.word) != sign(a, self.word):
            return self._overflowed()
        return Result.success(result)

    def negate(self, a: int) -> Result:
        self._validate(a)
        result = negate(a, self.word)
        # only the most negative value is its own negation besides zero
        if self.checked and result and sign(result, self.word) == sign(a, self.word):
            return self._overflowed()
        return Result.success(result)

    def subtract(self, a: int, b: int) -> Result:
        self._validate(a, b)
        result = subtract(a, b, self.word)
        differ = sign(a, self.word) != sign(b, self.word)
        if self.checked and differ and sign(result, self.word) != sign(a, self.word):
            return self._overflowed()
        return Result.success(result)

    def multiply(self, a: int, b: int) -> Result:
        self._validate(a, b)
        wide = (1 << (self.word.bits * 2)) - 1
        product = _shift_add_multiply(magnitude(a, self.word), magnitude(b, self.word), wide)

        if self.legacy_sign:
            if self.checked and product > self.word.hi:
                return self._overflowed()
            return Result.success(self.word.to_signed(product))

        negative = sign(a, self.word) != sign(b, self.word) and product != 0
        limit = self.word.sign_bit if negative else self.word.hi
        if self.checked and product > limit:
            return self._overflowed()

        result = self.word.to_signed(product)
        if negative:
            result = negate(result, self.word)
        return Result.success(result)

    def divide(self, a: int, b: int) -> Result:
        self._validate(a, b)
        if b == 0:
            return Result.failure(ErrorKind.DIVIDE_BY_ZERO)

        quotient = _shift_subtract_divide(
            magnitude(a, self.word), magnitude(b, self.word), self.word.bits, self.word.mask
        )

        if self.legacy_sign:
            if self.checked and quotient > self.word.hi:
                return self._overflowed()
            return Result.success(self.word.to_signed(quotient))

        negative = sign(a, self.word) != sign(b, self.word) and quotient != 0
        if self.checked and not negative and quotient > self.word.hi:
            return self._overflowed()

        result = self.word.to_signed(quotient)
        if negative:
            result = negate(result, self.word)
        return Result.success(result)

    def apply(self, left: int, right: int, op: BinaryOp) -> Result:
        """Dispatch a binary operator; POWER has no integer form."""
        if op == BinaryOp.ADD:
            return self.add(left, right)
        if op == BinaryOp.SUBTRACT:
            return self.subtract(left, right)
        if op == BinaryOp.MULTIPLY:
            return self.multiply(left, right)
        if op == BinaryOp.DIVIDE:
            return self.divide(left, right)
        return Result.failure(ErrorKind.INVALID_INPUT)
