"""Unit tests for field resolution and derived values"""

import pytest
from datetime import date
from decimal import Decimal
from loan_risk.domain.exceptions import FieldResolutionError, MissingFieldValueError
from loan_risk.domain.fields import FieldRegistry, build_context, default_registry
from loan_risk.domain.operators import TypedValue, ValueKind
from loan_risk.utils.date_utils import age_in_years


@pytest.mark.parametrize(
    "born,today,expected",
    [
        (date(1990, 6, 15), date(2024, 6, 15), 34),  # birthday today
        (date(1990, 6, 16), date(2024, 6, 15), 33),  # birthday tomorrow
        (date(1990, 12, 31), date(2024, 1, 1), 33),
        (date(2000, 2, 29), date(2023, 2, 28), 22),  # leap-day birthday in a non-leap year
        (date(2000, 2, 29), date(2023, 3, 1), 23),
    ],
)
def test_age_in_years(born, today, expected):
    assert age_in_years(born, today) == expected


def test_default_fields_resolve(make_customer, loan_request, today):
    customer = make_customer(
        42,
        credit_score=710,
        annual_income=Decimal("80000"),
        existing_debt=Decimal("20000"),
        employment_status="employed",
        dependents=2,
    )
    context = build_context(customer, loan_request, today)

    assert default_registry.resolve("customer.age", context) == TypedValue.number(42)
    assert default_registry.resolve("customer.creditScore", context) == TypedValue.number(710)
    assert default_registry.resolve("customer.dependents", context) == TypedValue.number(2)
    assert default_registry.resolve("customer.employmentStatus", context) == TypedValue.string("employed")
    assert default_registry.resolve("customer.address", context) == TypedValue.string("123 Main St")
    assert default_registry.resolve("customer.debtToIncomeRatio", context).value == Decimal("0.25")
    assert default_registry.resolve("loan.amount", context) == TypedValue.number(25000)
    assert default_registry.resolve("loan.termMonths", context) == TypedValue.number(36)
    assert default_registry.resolve("loan.loanToIncomeRatio", context).value == Decimal("0.3125")


def test_unknown_field(make_customer, loan_request, today):
    context = build_context(make_customer(30), loan_request, today)

    with pytest.raises(FieldResolutionError) as exc_info:
        default_registry.resolve("customer.shoeSize", context)
    assert exc_info.value.reason == "unknown_field"


def test_absent_value_is_not_resolved(make_customer, loan_request, today):
    context = build_context(make_customer(30), loan_request, today)

    with pytest.raises(MissingFieldValueError):
        default_registry.resolve("customer.creditScore", context)


def test_ratio_without_income_is_absent(make_customer, loan_request, today):
    context = build_context(make_customer(30, annual_income=Decimal("0"), existing_debt=Decimal("100")), loan_request, today)

    with pytest.raises(MissingFieldValueError):
        default_registry.resolve("customer.debtToIncomeRatio", context)


def test_context_age_fixed_at_build_time(make_customer, loan_request):
    context = build_context(make_customer(0, date_of_birth=date(1980, 1, 1)), loan_request, date(2024, 12, 31))
    assert context.age == 44


def test_registering_field_does_not_touch_default_registry(make_customer, loan_request, today):
    registry = default_registry.copy()

    @registry.register("loan.isShortTerm", ValueKind.BOOLEAN)
    def _short_term(ctx):
        return ctx.loan.term_months <= 12

    context = build_context(make_customer(30), loan_request, today)

    assert registry.resolve("loan.isShortTerm", context) == TypedValue.boolean(False)
    assert "loan.isShortTerm" not in default_registry
    assert registry.kind_of("loan.isShortTerm") is ValueKind.BOOLEAN


def test_extractor_type_error_becomes_resolution_error(make_customer, loan_request, today):
    registry = FieldRegistry()

    @registry.register("customer.broken", ValueKind.NUMBER)
    def _broken(ctx):
        return ctx.customer.first_name + 1

    context = build_context(make_customer(30), loan_request, today)

    with pytest.raises(FieldResolutionError):
        registry.resolve("customer.broken", context)


@pytest.mark.parametrize("raw", ["n/a", True, object()])
def test_uncoercible_extracted_value_becomes_resolution_error(make_customer, loan_request, today, raw):
    """A NUMBER field whose extractor hands back a non-number fails resolution"""
    registry = FieldRegistry()

    @registry.register("customer.riskBand", ValueKind.NUMBER)
    def _risk_band(ctx):
        return raw

    context = build_context(make_customer(30), loan_request, today)

    with pytest.raises(FieldResolutionError) as exc_info:
        registry.resolve("customer.riskBand", context)
    assert exc_info.value.reason == "unknown_field"
