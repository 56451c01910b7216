"""Tests for the randomized equivalence checker."""

import pytest
from complexcalc.checking.equivalence import (
    CheckerConfig, EquivalenceChecker, check_equivalence,
)
from complexcalc.core.complex_number import Complex
from complexcalc.core.errors import DivisionByZeroError, InconclusiveEquivalenceError
from complexcalc.core.parser import parse


def checker(**kwargs):
    return EquivalenceChecker(CheckerConfig(**kwargs))


class TestEquivalent:
    @pytest.mark.parametrize("seed", [0, 1, 2, 3, 4])
    def test_binomial_square(self, seed):
        assert check_equivalence(parse("(a+b)**2"), parse("a**2+2*a*b+b**2"), seed=seed)

    def test_unseeded_runs(self):
        for _ in range(5):
            assert check_equivalence(parse("(a+b)**2"), parse("a**2+2*a*b+b**2"))

    @pytest.mark.parametrize("first, second", [
        ("conj(conj(a))", "a"),
        ("sqrt(a)^2", "a"),
        ("root(a, 3)**3", "a"),
        ("a*conj(a)", "(a - conj(a))*0 + a*conj(a)"),
        ("(a-b)/(c)", "a/c - b/c"),
        ("1+1", "2"),
        ("2i*2i", "-4"),
    ])
    def test_identities(self, first, second):
        assert checker(seed=11).check(parse(first), parse(second))


class TestNotEquivalent:
    def test_sum_vs_difference(self):
        assert not check_equivalence(parse("a+b"), parse("a-b"), seed=1)

    def test_constants(self):
        assert not check_equivalence(parse("1"), parse("2"))

    def test_sqrt_is_not_square_inverse(self):
        # principal branch: sqrt(a^2) == a only for half the plane
        assert not checker(seed=5, trials=20).check(parse("sqrt(a^2)"), parse("a"))

    def test_short_circuits_on_first_mismatch(self):
        report = checker(seed=1).compare(parse("a+b"), parse("a-b"))
        assert not report.equivalent
        assert report.trials_run == 1
        assert set(report.counterexample) == {"a", "b"}
        assert not report.left_value.approx_equals(report.right_value)


class TestReport:
    def test_report_fields(self):
        report = checker(seed=3, trials=4).compare(parse("x*y"), parse("y*x"))
        assert report.equivalent
        assert report.variables == ["x", "y"]
        assert report.trials_run == 4
        assert report.retries == 0
        assert report.counterexample is None
        assert len(report.samples) == 4

    def test_variables_are_union(self):
        report = checker(seed=3).compare(parse("a + 0*c"), parse("a + 0*b"))
        assert report.variables == ["a", "b", "c"]

    def test_seed_is_reproducible(self):
        first = checker(seed=42).compare(parse("a/b"), parse("b/a"))
        second = checker(seed=42).compare(parse("a/b"), parse("b/a"))
        assert first.samples == second.samples

    def test_samples_in_range(self):
        c = checker(seed=9)
        for _ in range(50):
            env = c.sample_environment(["p", "q"])
            for value in env.values():
                assert -5.0 <= value.re <= 5.0
                assert -5.0 <= value.im <= 5.0


class TestRetries:
    def test_error_trials_are_resampled(self):
        class ZeroFirst(EquivalenceChecker):
            calls = 0

            def sample_environment(self, names):
                self.calls += 1
                if self.calls == 1:
                    return {name: Complex(0, 0) for name in names}
                return super().sample_environment(names)

        report = ZeroFirst(CheckerConfig(seed=0)).compare(parse("1/a"), parse("conj(1/conj(a))"))
        assert report.equivalent
        assert report.retries == 1
        assert report.trials_run == 6

    def test_degenerate_expression_is_inconclusive(self):
        with pytest.raises(InconclusiveEquivalenceError) as exc_info:
            checker(seed=0, max_retries=10).check(parse("1/(a-a)"), parse("0"))
        assert exc_info.value.retries == 11
        assert isinstance(exc_info.value.__cause__, DivisionByZeroError)

    def test_no_retry_budget_propagates_error(self):
        with pytest.raises(DivisionByZeroError):
            checker(seed=0, max_retries=0).check(parse("1/(a-a)"), parse("0"))

    @pytest.mark.parametrize("trials", [0, -3])
    def test_no_trials_is_vacuously_equivalent(self, trials):
        report = checker(trials=trials).compare(parse("a"), parse("a+1"))
        assert report.equivalent
        assert report.trials_run == 0
        assert report.samples == []
        assert check_equivalence(parse("a"), parse("a+1"), trials=trials)
