"""Policy constants shared by the projection engine."""

MONTHS_PER_YEAR: int = 12

# 4% rule: the nest egg target is 25x annual spending.
BENCHMARK_WITHDRAWAL_RATE: float = 0.04

# Projection always runs through this age, inclusive.
MAX_AGE: int = 100

# Required contributions at or above this are flagged as not possible.
FEASIBILITY_CEILING: float = 2_000_000

BREAKDOWN_FIELDS = ("savingsCash", "savingsStock", "savingsBonds", "savingsOther")
