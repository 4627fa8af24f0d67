"""Decision policy - maps a total risk score to a risk level and decision"""

from typing import Tuple

from loan_risk.domain.models import Decision, RiskLevel

MEDIUM_RISK_THRESHOLD = 30
HIGH_RISK_THRESHOLD = 60


def classify(total_score: float) -> Tuple[RiskLevel, Decision]:
    """
    Map a risk score to (risk level, decision).

    Bands (boundary values belong to the upper band):
    - score < 30:        Low / Approved
    - 30 <= score < 60:  Medium / Manual Review
    - score >= 60:       High / Rejected
    """
    if total_score < MEDIUM_RISK_THRESHOLD:
        return RiskLevel.LOW, Decision.APPROVED
    elif total_score < HIGH_RISK_THRESHOLD:
        return RiskLevel.MEDIUM, Decision.MANUAL_REVIEW
    else:
        return RiskLevel.HIGH, Decision.REJECTED
