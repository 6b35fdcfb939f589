"""Monthly operating cost, revenue and profitability projections."""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass

HOURS_PER_MONTH = 173
WEEKS_PER_MONTH = 4.345

FIXED_COST_FIELDS = (
    "utilities",
    "insurance",
    "property_tax",
    "maintenance",
    "marketing",
    "software",
    "janitorial",
    "other",
)


def _num(data: dict, key: str) -> float:
    return float(data.get(key) or 0)


@dataclass(frozen=True)
class OpexProjection:
    staffing_monthly: float
    fixed_opex_monthly: float
    lease_monthly: float
    debt_service_monthly: float

    @property
    def total(self) -> float:
        return (
            self.staffing_monthly
            + self.fixed_opex_monthly
            + self.lease_monthly
            + self.debt_service_monthly
        )

    def to_dict(self) -> dict:
        return {**asdict(self), "total": self.total}


def monthly_loan_payment(principal: float, annual_rate_pct: float, term_years: float) -> float:
    """Fixed payment that amortizes `principal` over the term."""
    monthly_rate = annual_rate_pct / 100 / 12
    payments = term_years * 12
    growth = (1 + monthly_rate) ** payments
    return principal * (monthly_rate * growth) / (growth - 1)


def calculate_opex(gross_sf: float, inputs: dict) -> OpexProjection:
    """Monthly operating costs for a facility of `gross_sf` square feet.

    Staffing is FTEs times loaded hourly wage at 173 hours a month. Lease
    payments apply only when base rent, NNN and CAM are all given, and debt
    service only when loan amount, rate and term are all given.
    """
    staffing = sum(
        _num(staff, "ftes") * _num(staff, "loaded_wage_per_hr") * HOURS_PER_MONTH
        for staff in inputs.get("staffing") or []
    )
    fixed = sum(_num(inputs, key) for key in FIXED_COST_FIELDS)

    base_rent = _num(inputs, "base_rent_per_sf_year")
    nnn = _num(inputs, "nnn_per_sf_year")
    cam = _num(inputs, "cam_per_sf_year")
    lease = (base_rent + nnn + cam) / 12 * gross_sf if base_rent and nnn and cam else 0.0

    loan = _num(inputs, "loan_amount")
    rate = _num(inputs, "interest_rate")
    term = _num(inputs, "term_years")
    debt_service = monthly_loan_payment(loan, rate, term) if loan and rate and term else 0.0

    return OpexProjection(
        staffing_monthly=staffing,
        fixed_opex_monthly=fixed,
        lease_monthly=lease,
        debt_service_monthly=debt_service,
    )


@dataclass(frozen=True)
class RevenueProjection:
    membership_mrr: float
    rentals: float
    lessons: float
    camps_clinics: float
    leagues_tournaments: float
    parties_events: float
    merchandise: float
    concessions: float
    sponsorships: float

    @property
    def total(self) -> float:
        return sum(asdict(self).values())

    def to_dict(self) -> dict:
        return {**asdict(self), "total": self.total}


def calculate_revenue(inputs: dict) -> RevenueProjection:
    """Monthly revenue by stream.

    Weekly figures convert at 4.345 weeks a month; annual figures are
    divided by twelve.
    """
    memberships = sum(
        _num(m, "price_month") * _num(m, "members") for m in inputs.get("memberships") or []
    )
    rentals = sum(
        _num(r, "rate_per_hr") * _num(r, "util_hours_per_week") * WEEKS_PER_MONTH
        for r in inputs.get("rentals") or []
    )
    lessons = sum(
        _num(lesson, "coach_count")
        * _num(lesson, "hours_per_coach_week")
        * WEEKS_PER_MONTH
        * _num(lesson, "avg_rate_per_hr")
        * _num(lesson, "utilization_pct")
        / 100
        for lesson in inputs.get("lessons") or []
    )
    camps = (
        sum(
            _num(c, "sessions_per_year")
            * _num(c, "avg_price")
            * _num(c, "capacity")
            * _num(c, "fill_rate_pct")
            / 100
            for c in inputs.get("camps_clinics") or []
        )
        / 12
    )
    leagues = (
        sum(
            _num(league, "events_per_year")
            * _num(league, "teams_per_event")
            * _num(league, "avg_team_fee")
            * _num(league, "net_margin_pct")
            / 100
            for league in inputs.get("leagues_tournaments") or []
        )
        / 12
    )
    return RevenueProjection(
        membership_mrr=memberships,
        rentals=rentals,
        lessons=lessons,
        camps_clinics=camps,
        leagues_tournaments=leagues,
        parties_events=_num(inputs, "parties_events_annual") / 12,
        merchandise=_num(inputs, "merchandise_annual") / 12,
        concessions=_num(inputs, "concessions_annual") / 12,
        sponsorships=_num(inputs, "sponsorships_annual") / 12,
    )


@dataclass(frozen=True)
class Profitability:
    ebitda_monthly: float
    net_income_monthly: float
    break_even_months: int | str
    roi_year_one: float
    payback_months: float

    def to_dict(self) -> dict:
        return asdict(self)


def calculate_profitability(
    capex_total: float,
    revenue_monthly: float,
    opex_monthly: float,
    debt_service_monthly: float,
) -> Profitability:
    """Headline returns for a capital outlay and monthly run rate.

    EBITDA adds debt service back to operating costs. Break-even is "n/a"
    when there is no revenue; otherwise EBITDA is floored at 1 so a loss
    yields a very long break-even rather than a negative one.
    """
    ebitda = revenue_monthly - (opex_monthly - debt_service_monthly)
    net_income = revenue_monthly - opex_monthly
    break_even: int | str = (
        math.ceil(capex_total / max(ebitda, 1)) if revenue_monthly > 0 else "n/a"
    )
    roi = net_income * 12 / capex_total * 100 if capex_total > 0 else 0.0
    payback = capex_total / ebitda if ebitda > 0 else 0.0
    return Profitability(
        ebitda_monthly=ebitda,
        net_income_monthly=net_income,
        break_even_months=break_even,
        roi_year_one=roi,
        payback_months=payback,
    )
