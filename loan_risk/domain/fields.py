"""Field resolution - maps rule field paths to typed values from the evaluation context"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any, Callable, Dict, List, Optional, Tuple

from loan_risk.domain.exceptions import FieldResolutionError, MissingFieldValueError
from loan_risk.domain.models import Customer, LoanRequest
from loan_risk.domain.operators import TypedValue, ValueKind
from loan_risk.utils.date_utils import age_in_years


@dataclass(frozen=True)
class EvaluationContext:
    """
    Everything a rule can look at during one scoring pass.

    Derived quantities (age) are computed once when the context is built, so
    every rule in the pass sees the same value even if the pass crosses midnight.
    """

    customer: Customer
    loan: LoanRequest
    today: date
    age: int = field(init=False)

    def __post_init__(self):
        object.__setattr__(self, "age", age_in_years(self.customer.date_of_birth, self.today))


def build_context(customer: Customer, loan: LoanRequest, today: Optional[date] = None) -> EvaluationContext:
    return EvaluationContext(customer=customer, loan=loan, today=today or date.today())


Extractor = Callable[[EvaluationContext], Any]


class FieldRegistry:
    """
    Registry of resolvable field paths.

    Each entry maps a path such as ``customer.age`` to the kind of value it
    produces and a function extracting that value from an EvaluationContext.
    Extractors return None when the value is absent.

    Example:
        registry = FieldRegistry()

        @registry.register("customer.age", ValueKind.NUMBER)
        def _age(ctx):
            return ctx.age
    """

    def __init__(self):
        self._fields: Dict[str, Tuple[ValueKind, Extractor]] = {}

    def register(self, path: str, kind: ValueKind) -> Callable[[Extractor], Extractor]:
        def decorator(extractor: Extractor) -> Extractor:
            self._fields[path] = (kind, extractor)
            return extractor

        return decorator

    def copy(self) -> "FieldRegistry":
        clone = FieldRegistry()
        clone._fields = dict(self._fields)
        return clone

    def __contains__(self, path: str) -> bool:
        return path in self._fields

    @property
    def paths(self) -> List[str]:
        return sorted(self._fields)

    def kind_of(self, path: str) -> ValueKind:
        try:
            return self._fields[path][0]
        except KeyError:
            raise FieldResolutionError(f"Unknown rule field: {path}") from None

    def resolve(self, path: str, context: EvaluationContext) -> TypedValue:
        """
        Resolve a field path to a typed value.

        Raises:
            FieldResolutionError: Path is not registered, its extractor failed or the
                value cannot be coerced to the registered kind
            MissingFieldValueError: Path is registered but the value is absent
        """
        if path not in self._fields:
            raise FieldResolutionError(f"Unknown rule field: {path}")

        kind, extractor = self._fields[path]
        try:
            raw = extractor(context)
        except (ArithmeticError, AttributeError, TypeError, ValueError) as e:
            raise FieldResolutionError(f"Could not resolve {path}: {e}") from e

        if raw is None:
            raise MissingFieldValueError(f"No value for field {path}")

        try:
            return TypedValue.of(kind, raw)
        except (ArithmeticError, TypeError, ValueError) as e:
            # decimal.InvalidOperation is an ArithmeticError
            raise FieldResolutionError(f"Value of {path} is not a valid {kind.value}: {raw!r}") from e


def _ratio(numerator: Optional[Decimal], denominator: Optional[Decimal]) -> Optional[Decimal]:
    if numerator is None or not denominator:
        return None
    return Decimal(numerator) / Decimal(denominator)


default_registry = FieldRegistry()


@default_registry.register("customer.age", ValueKind.NUMBER)
def _customer_age(ctx: EvaluationContext) -> int:
    return ctx.age


@default_registry.register("customer.creditScore", ValueKind.NUMBER)
def _customer_credit_score(ctx: EvaluationContext) -> Optional[int]:
    return ctx.customer.credit_score


@default_registry.register("customer.annualIncome", ValueKind.NUMBER)
def _customer_annual_income(ctx: EvaluationContext) -> Optional[Decimal]:
    return ctx.customer.annual_income


@default_registry.register("customer.existingDebt", ValueKind.NUMBER)
def _customer_existing_debt(ctx: EvaluationContext) -> Optional[Decimal]:
    return ctx.customer.existing_debt


@default_registry.register("customer.dependents", ValueKind.NUMBER)
def _customer_dependents(ctx: EvaluationContext) -> Optional[int]:
    return ctx.customer.dependents


@default_registry.register("customer.employmentStatus", ValueKind.STRING)
def _customer_employment_status(ctx: EvaluationContext) -> Optional[str]:
    return ctx.customer.employment_status


@default_registry.register("customer.maritalStatus", ValueKind.STRING)
def _customer_marital_status(ctx: EvaluationContext) -> Optional[str]:
    return ctx.customer.marital_status


@default_registry.register("customer.address", ValueKind.STRING)
def _customer_address(ctx: EvaluationContext) -> Optional[str]:
    return ctx.customer.address


@default_registry.register("customer.debtToIncomeRatio", ValueKind.NUMBER)
def _customer_debt_to_income(ctx: EvaluationContext) -> Optional[Decimal]:
    return _ratio(ctx.customer.existing_debt, ctx.customer.annual_income)


@default_registry.register("loan.amount", ValueKind.NUMBER)
def _loan_amount(ctx: EvaluationContext) -> Decimal:
    return ctx.loan.amount


@default_registry.register("loan.termMonths", ValueKind.NUMBER)
def _loan_term_months(ctx: EvaluationContext) -> int:
    return ctx.loan.term_months


@default_registry.register("loan.loanToIncomeRatio", ValueKind.NUMBER)
def _loan_to_income(ctx: EvaluationContext) -> Optional[Decimal]:
    return _ratio(ctx.loan.amount, ctx.customer.annual_income)
