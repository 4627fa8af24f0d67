"""Scoring rule endpoints: list, create, update and delete rules"""

import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response
from sqlalchemy.orm import Session

from loan_risk.api.v1.schemas import CreateRuleRequest, RuleResponse, UpdateRuleRequest
from loan_risk.api.dependencies import get_request_id
from loan_risk.infrastructure.database.session import get_db
from loan_risk.infrastructure.database.repositories import ScoringRuleRepository
from loan_risk.domain.exceptions import RuleNotFoundError
from loan_risk.domain.models import ScoringRule

router = APIRouter()


@router.get("/rules", response_model=List[RuleResponse])
def list_rules(
    include_disabled: bool = Query(False, description="Also return disabled rules"),
    db: Session = Depends(get_db),
):
    """
    List scoring rules in evaluation order.

    Returns:
        Enabled rules ordered by priority (all rules if include_disabled)
    """
    repo = ScoringRuleRepository(db)
    rules = repo.get_all_rules() if include_disabled else repo.get_enabled_rules()
    return [RuleResponse.model_validate(rule) for rule in rules]


@router.post("/rules", response_model=RuleResponse, status_code=201)
def create_rule(
    request_body: CreateRuleRequest,
    request: Request,
    db: Session = Depends(get_db),
):
    """Add a rule; it takes part in the next scoring pass"""
    rule = ScoringRuleRepository(db).create_rule(ScoringRule(id=None, **request_body.model_dump()))
    db.commit()
    logging.info(
        "Scoring rule created",
        extra={"request_id": get_request_id(request), "rule_id": rule.id, "rule_name": rule.name},
    )
    return RuleResponse.model_validate(rule)


@router.patch("/rules/{rule_id}", response_model=RuleResponse)
def update_rule(
    rule_id: int,
    request_body: UpdateRuleRequest,
    request: Request,
    db: Session = Depends(get_db),
):
    """Change any subset of a rule's attributes, including enabling or disabling it"""
    try:
        rule = ScoringRuleRepository(db).update_rule(rule_id, request_body.model_dump(exclude_unset=True, exclude_none=True))
    except RuleNotFoundError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail=str(e))

    db.commit()
    logging.info(
        "Scoring rule updated",
        extra={"request_id": get_request_id(request), "rule_id": rule_id, "enabled": rule.enabled},
    )
    return RuleResponse.model_validate(rule)


@router.delete("/rules/{rule_id}", status_code=204)
def delete_rule(
    rule_id: int,
    request: Request,
    db: Session = Depends(get_db),
):
    try:
        ScoringRuleRepository(db).delete_rule(rule_id)
    except RuleNotFoundError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail=str(e))

    db.commit()
    logging.info("Scoring rule deleted", extra={"request_id": get_request_id(request), "rule_id": rule_id})
    return Response(status_code=204)
