from complexcalc.checking.equivalence import (
    CheckerConfig, EquivalenceChecker, EquivalenceReport, check_equivalence,
)

__all__ = ["CheckerConfig", "EquivalenceChecker", "EquivalenceReport", "check_equivalence"]
