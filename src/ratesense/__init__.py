"""RateSense: loan amortization, payoff and rate-stress calculators."""

__version__ = "0.1.0"
