"""Randomized numerical equivalence checking of two expressions.

Both expressions are evaluated under the same random variable
assignments for a number of trials and compared within a tolerance.
Agreement on every trial is evidence of equivalence, not a proof.

Usage:
    checker = EquivalenceChecker(CheckerConfig(seed=7))
    checker.check(parse("(a+b)**2"), parse("a**2+2*a*b+b**2"))  # True
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import numpy as np

from complexcalc.core.ast_nodes import Expr
from complexcalc.core.complex_number import Complex
from complexcalc.core.errors import EvaluationError, InconclusiveEquivalenceError
from complexcalc.core.evaluator import evaluate

log = logging.getLogger(__name__)


@dataclass
class CheckerConfig:
    """Configuration for the equivalence checker."""

    trials: int = 6
    tolerance: float = 1e-7
    sample_low: float = -5.0
    sample_high: float = 5.0
    # Discarded trials allowed per check; <= 0 lets the first
    # evaluation error propagate unchanged.
    max_retries: int = 1000
    seed: int | None = None


@dataclass
class EquivalenceReport:
    """Outcome of one equivalence check."""

    equivalent: bool
    variables: list[str]
    trials_run: int = 0
    retries: int = 0
    counterexample: dict[str, Complex] | None = None
    left_value: Complex | None = None
    right_value: Complex | None = None
    samples: list[tuple[dict[str, Complex], Complex, Complex]] = field(default_factory=list)


class EquivalenceChecker:
    """Compare two ASTs on random complex environments."""

    def __init__(self, config: CheckerConfig | None = None):
        self.config = config or CheckerConfig()
        self._rng = np.random.default_rng(self.config.seed)

    def sample_environment(self, names: list[str]) -> dict[str, Complex]:
        """Draw an independent uniform re/im pair for every variable."""
        low, high = self.config.sample_low, self.config.sample_high
        values = self._rng.uniform(low, high, size=(len(names), 2))
        return {
            name: Complex(float(re), float(im))
            for name, (re, im) in zip(names, values)
        }

    def compare(self, a: Expr, b: Expr) -> EquivalenceReport:
        """Run the trials and return a full report.

        Stops at the first mismatching trial. A trial whose evaluation
        raises EvaluationError is discarded and resampled; once more than
        `max_retries` trials have been discarded the check fails with
        InconclusiveEquivalenceError. A non-positive `trials` runs no
        trials and reports the expressions as equivalent.
        """
        names = sorted(a.variables() | b.variables())
        report = EquivalenceReport(equivalent=True, variables=names)

        while report.trials_run < self.config.trials:
            env = self.sample_environment(names)
            try:
                left = evaluate(a, env)
                right = evaluate(b, env)
            except EvaluationError as e:
                if self.config.max_retries <= 0:
                    raise
                report.retries += 1
                log.debug("Discarding trial (%d retries so far): %s", report.retries, e)
                if report.retries > self.config.max_retries:
                    raise InconclusiveEquivalenceError(report.retries, e) from e
                continue

            report.trials_run += 1
            report.samples.append((env, left, right))
            log.debug("Trial %d: %s vs %s", report.trials_run, left, right)

            if not left.approx_equals(right, self.config.tolerance):
                report.equivalent = False
                report.counterexample = env
                report.left_value = left
                report.right_value = right
                log.debug("Mismatch at %s", env)
                return report

        return report

    def check(self, a: Expr, b: Expr) -> bool:
        return self.compare(a, b).equivalent


def check_equivalence(
    a: Expr,
    b: Expr,
    trials: int = 6,
    tolerance: float = 1e-7,
    seed: int | None = None,
    max_retries: int = 1000,
) -> bool:
    """True iff `a` and `b` agree within `tolerance` on `trials` random environments."""
    config = CheckerConfig(trials=trials, tolerance=tolerance, seed=seed, max_retries=max_retries)
    return EquivalenceChecker(config).check(a, b)
