"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class CustomerNotFoundError(DomainException):
    """No customer exists with the requested ID"""

    def __init__(self, customer_id: int):
        super().__init__(f"Customer not found with ID: {customer_id}")
        self.customer_id = customer_id


class LoanApplicationNotFoundError(DomainException):
    """No loan application exists with the requested ID"""

    def __init__(self, loan_id):
        super().__init__(f"Loan application not found with ID: {loan_id}")
        self.loan_id = loan_id


class DuplicateCustomerError(DomainException):
    """A customer with the same email is already registered"""

    def __init__(self, email: str):
        super().__init__(f"Email address already exists: {email}")
        self.email = email


class RuleNotFoundError(DomainException):
    """No scoring rule exists with the requested ID"""

    def __init__(self, rule_id: int):
        super().__init__(f"Scoring rule not found with ID: {rule_id}")
        self.rule_id = rule_id


class RuleEvaluationError(DomainException):
    """
    A single rule could not be evaluated.

    Never escapes the scoring engine: the rule is treated as not triggered and
    `reason` is recorded against it.
    """

    reason = "error"


class FieldResolutionError(RuleEvaluationError):
    """Field path is unknown or its underlying value is absent"""

    reason = "unknown_field"


class MissingFieldValueError(FieldResolutionError):
    """Field path is known but the customer/loan has no value for it"""

    reason = "missing_value"


class LiteralParseError(RuleEvaluationError):
    """Rule's stored value cannot be read as the resolved field's type"""

    reason = "invalid_literal"


class ComparisonError(RuleEvaluationError):
    """Operands cannot be compared (absent or of different kinds)"""

    reason = "type_mismatch"


class UnsupportedOperatorError(ComparisonError):
    """Operator string is not one of > < == != >= <="""

    reason = "unsupported_operator"
