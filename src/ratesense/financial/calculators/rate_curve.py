"""Per-month APR paths for fixed and variable-rate loans.

A rate policy describes how the APR evolves; ``build_rate_curve`` turns a
policy and a starting APR into a concrete ``RateCurve`` that amortization
and stress runs query month by month:

- ``FlatPolicy``: the starting APR forever.
- ``StepShockPolicy``: fixed-size bumps on a schedule, optionally capped.
- ``ARMResetPolicy``: fixed period, then index + margin resets bounded by
  periodic cap, lifetime cap and floor.

Optional bounds are ``None`` when absent. NaN/inf passed for a bound means
"no constraint in that direction" and is normalised to ``None``.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass, field

from loguru import logger

from ratesense.core.exceptions import InvalidInputError
from ratesense.financial.models import MAX_LOAN_MONTHS, RatePoint


def _bound(value: float | None) -> float | None:
    if value is None or not math.isfinite(value):
        return None
    return float(value)


# ── Index sources for ARM resets ──────────────────────────────────────


@dataclass(frozen=True)
class ConstantIndex:
    """Same index value at every reset."""

    value: float

    def value_for_reset(self, reset_number: int, start_apr: float) -> float:
        return self.value


@dataclass(frozen=True)
class ManualIndex:
    """User-supplied index path, one value per reset.

    The last value holds once the sequence is exhausted.
    """

    values: Sequence[float]

    def __post_init__(self):
        object.__setattr__(self, "values", tuple(float(v) for v in self.values))
        if not self.values:
            raise InvalidInputError("Manual index schedule needs at least one value.")

    def value_for_reset(self, reset_number: int, start_apr: float) -> float:
        return self.values[min(reset_number, len(self.values) - 1)]


@dataclass(frozen=True)
class FeedIndex:
    """Index value fetched from an external source before the run.

    ``latest`` is None when the fetch failed; the run then degrades to
    ``fallback``, or to the loan's starting APR when no fallback is set.
    """

    latest: float | None = None
    fallback: float | None = None
    source: str = "external feed"

    @property
    def available(self) -> bool:
        return _bound(self.latest) is not None

    def value_for_reset(self, reset_number: int, start_apr: float) -> float:
        if self.available:
            return float(self.latest)
        fallback = _bound(self.fallback)
        return start_apr if fallback is None else fallback


IndexSource = ConstantIndex | ManualIndex | FeedIndex


# ── Policies ──────────────────────────────────────────────────────────


@dataclass(frozen=True)
class FlatPolicy:
    """Constant APR for the life of the loan."""


@dataclass(frozen=True)
class StepShockPolicy:
    """Raise the APR by ``step_size`` every ``every_months`` months.

    Bumps land on months ``every_months+1``, ``2*every_months+1``, ... up to
    ``duration_months``; month 1 is never bumped. After each bump the rate
    is clamped to ``cap_apr`` when set. ``every_months <= 0`` means no bumps.
    """

    step_size: float
    every_months: int
    duration_months: int
    cap_apr: float | None = None

    def __post_init__(self):
        object.__setattr__(self, "cap_apr", _bound(self.cap_apr))
        object.__setattr__(self, "every_months", int(self.every_months))
        object.__setattr__(self, "duration_months", int(self.duration_months))

    def is_bump_month(self, month: int) -> bool:
        if self.every_months <= 0 or month <= 1 or month > self.duration_months:
            return False
        return (month - 1) % self.every_months == 0


@dataclass(frozen=True)
class ARMResetPolicy:
    """Adjustable-rate loan: fixed period, then index + margin resets.

    Attributes:
        fixed_years: Years at the starting APR (5 for a 5/1 ARM).
        adjust_every_months: Months between resets. ``<= 0`` means the rate
            never resets after the fixed period.
        index: Where the index value comes from on each reset.
        margin: Percentage points added to the index.
        periodic_cap: Max move per reset, up or down.
        lifetime_cap_above_start: Max rate above the starting APR.
        floor_apr: Minimum rate.
    """

    fixed_years: float
    adjust_every_months: int
    index: IndexSource
    margin: float = 0.0
    periodic_cap: float | None = None
    lifetime_cap_above_start: float | None = None
    floor_apr: float | None = None

    def __post_init__(self):
        for name in ("periodic_cap", "lifetime_cap_above_start", "floor_apr"):
            object.__setattr__(self, name, _bound(getattr(self, name)))
        object.__setattr__(self, "adjust_every_months", int(round(self.adjust_every_months)))

    @property
    def fixed_months(self) -> int:
        return max(0, round(self.fixed_years * 12))

    def is_reset_month(self, month: int) -> bool:
        if self.adjust_every_months <= 0 or month <= self.fixed_months:
            return False
        return (month - self.fixed_months - 1) % self.adjust_every_months == 0

    def next_rate(self, target: float, last_rate: float, start_apr: float) -> float:
        """Apply periodic cap, lifetime cap, then floor to a reset target."""
        rate = target
        if self.periodic_cap is not None:
            rate = min(max(rate, last_rate - self.periodic_cap), last_rate + self.periodic_cap)
        if self.lifetime_cap_above_start is not None:
            rate = min(rate, start_apr + self.lifetime_cap_above_start)
        if self.floor_apr is not None:
            rate = max(rate, self.floor_apr)
        return rate


RatePolicy = FlatPolicy | StepShockPolicy | ARMResetPolicy


# ── Curve ─────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class RateCurve:
    """Total mapping month -> APR.

    ``points`` covers months 1..len(points); later months carry the last
    rate forward. A curve with no points is flat at ``start_apr``.
    """

    start_apr: float
    points: tuple[RatePoint, ...] = ()
    policy: RatePolicy = field(default_factory=FlatPolicy)

    def rate_at(self, month: int) -> float:
        if not self.points:
            return self.start_apr
        idx = min(max(month, 1), len(self.points)) - 1
        return self.points[idx].apr_percent

    @property
    def is_flat(self) -> bool:
        return all(p.apr_percent == self.start_apr for p in self.points)

    @property
    def peak(self) -> RatePoint:
        """First point holding the highest rate."""
        if not self.points:
            return RatePoint(1, self.start_apr)
        return max(self.points, key=lambda p: p.apr_percent)


def flat_curve(apr: float) -> RateCurve:
    """Curve that holds ``apr`` for every month."""
    return RateCurve(start_apr=float(apr))


def _step_shock_rates(start_apr: float, policy: StepShockPolicy, horizon: int) -> list[float]:
    rates = []
    apr = start_apr
    for month in range(1, horizon + 1):
        if policy.is_bump_month(month):
            apr += policy.step_size
            if policy.cap_apr is not None:
                apr = min(apr, policy.cap_apr)
        rates.append(apr)
    return rates


def _arm_rates(start_apr: float, policy: ARMResetPolicy, horizon: int) -> list[float]:
    index = policy.index
    if isinstance(index, FeedIndex) and not index.available:
        fallback = index.value_for_reset(0, start_apr)
        logger.warning(f"{index.source} unavailable, using fallback index {fallback:.3f}%")

    rates = []
    apr = start_apr
    resets = 0
    for month in range(1, horizon + 1):
        if month <= policy.fixed_months:
            apr = start_apr
        elif policy.is_reset_month(month):
            target = index.value_for_reset(resets, start_apr) + policy.margin
            apr = policy.next_rate(target, apr, start_apr)
            resets += 1
        rates.append(apr)

    logger.debug(f"ARM curve: {resets} resets over {horizon} months, peak {max(rates, default=start_apr):.3f}%")
    return rates


def build_rate_curve(start_apr: float, policy: RatePolicy | None = None, horizon: int = MAX_LOAN_MONTHS) -> RateCurve:
    """Realise ``policy`` starting from ``start_apr`` for months 1..horizon.

    Args:
        start_apr: APR in effect in month 1 (percent).
        policy: Rate path policy. None or ``FlatPolicy`` gives a flat curve.
        horizon: Months to generate; later months hold the last rate.
    """
    start_apr = float(start_apr)
    if policy is None or isinstance(policy, FlatPolicy):
        return flat_curve(start_apr)

    if isinstance(policy, StepShockPolicy):
        rates = _step_shock_rates(start_apr, policy, horizon)
    elif isinstance(policy, ARMResetPolicy):
        rates = _arm_rates(start_apr, policy, horizon)
    else:
        raise TypeError(f"Unknown rate policy: {type(policy).__name__}")

    points = tuple(RatePoint(month=m, apr_percent=r) for m, r in enumerate(rates, start=1))
    return RateCurve(start_apr=start_apr, points=points, policy=policy)
