"""
Verified construction of the bitwise arithmetic unit.

The factory does not just construct a ``BitwiseALU``: it runs the
unit against every contract in ``contracts.py`` and only hands it out
when all of them hold.

Flow:
  1. Caller requests a unit for a word width and overflow behaviour.
  2. Factory builds the unit.
  3. Small words (at most 8 bits) are checked exhaustively, larger
     words with edge values plus random samples.
  4. Pass -> return the unit.  Fail -> raise ``VerificationError``.
"""

from __future__ import annotations

import itertools
import logging
import random
from dataclasses import dataclass, field

from bitwise import BitwiseALU, OverflowMode, Word
from contracts import Contract, Property, alu_contracts

logger = logging.getLogger(__name__)


@dataclass
class VerificationResult:
    """Outcome of verifying one property."""

    property_name: str
    passed: bool
    counterexample: tuple | None = None
    tests_run: int = 0

    def __repr__(self) -> str:
        status = "PASS" if self.passed else "FAIL"
        ce = f"  counterexample={self.counterexample}" if self.counterexample else ""
        return f"[{status}] {self.property_name} ({self.tests_run} tests){ce}"


@dataclass
class VerificationReport:
    """Aggregate result of verifying one contract."""

    contract_name: str
    results: list[VerificationResult] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return all(r.passed for r in self.results)

    def summary(self) -> str:
        lines = [f"--- {self.contract_name} ---"]
        for r in self.results:
            lines.append(f"  {r}")
        status = "ALL PASSED" if self.passed else "FAILED"
        lines.append(f"  => {status}")
        return "\n".join(lines)


class VerificationError(Exception):
    """Raised when an arithmetic unit fails its contract."""

    def __init__(self, report: VerificationReport):
        self.report = report
        super().__init__(f"Verification failed:\n{report.summary()}")


class AluFactory:
    """Produces ``BitwiseALU`` instances that have passed their contracts."""

    EXHAUSTIVE_MAX_BITS = 8
    SAMPLE_COUNT = 1_000

    @classmethod
    def create(
        cls,
        word: Word,
        overflow: OverflowMode = OverflowMode.CHECKED,
        legacy_sign: bool = False,
        seed: int | None = 0,
    ) -> BitwiseALU:
        """Build, verify, and return a ``BitwiseALU``."""
        alu = BitwiseALU(word=word, overflow=overflow, legacy_sign=legacy_sign)
        cls.verify(alu, seed=seed)
        logger.debug(
            "verified %d-bit ALU (overflow=%s, legacy_sign=%s)",
            word.bits, overflow.value, legacy_sign,
        )
        return alu

    @classmethod
    def verify(cls, alu: BitwiseALU, seed: int | None = 0) -> None:
        rng = random.Random(seed)
        for contract in alu_contracts(alu.word):
            report = cls._verify_contract(contract, alu, rng)
            if not report.passed:
                logger.error("ALU verification failed\n%s", report.summary())
                raise VerificationError(report)

    # -- internal ---------------------------------------------------------

    @classmethod
    def _verify_contract(
        cls, contract: Contract, alu: BitwiseALU, rng: random.Random
    ) -> VerificationReport:
        report = VerificationReport(contract_name=contract.name)
        for prop in contract:
            report.results.append(cls._verify_property(prop, alu, rng))
        return report

    @classmethod
    def _verify_property(
        cls, prop: Property, alu: BitwiseALU, rng: random.Random
    ) -> VerificationResult:
        word = alu.word
        if word.bits <= cls.EXHAUSTIVE_MAX_BITS:
            domain = range(word.lo, word.hi + 1)
            combos = itertools.product(domain, repeat=prop.arity)
        else:
            combos = _generate_samples(word, prop.arity, cls.SAMPLE_COUNT, rng)

        tests_run = 0
        for combo in combos:
            tests_run += 1
            if not prop.check(alu, *combo):
                return VerificationResult(
                    property_name=prop.name,
                    passed=False,
                    counterexample=combo,
                    tests_run=tests_run,
                )

        return VerificationResult(
            property_name=prop.name,
            passed=True,
            tests_run=tests_run,
        )


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _generate_samples(
    word: Word, arity: int, count: int, rng: random.Random
) -> list[tuple[int, ...]]:
    """Edge-value combinations followed by uniform random fill."""
    edge_values = [word.lo, word.lo + 1, -2, -1, 0, 1, 2, word.hi - 1, word.hi]

    samples: list[tuple[int, ...]] = list(itertools.product(edge_values, repeat=arity))

    while len(samples) < count:
        samples.append(tuple(rng.randint(word.lo, word.hi) for _ in range(arity)))

    return samples
