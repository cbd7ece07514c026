"""Recommendations, risk survey, investment profile and green portfolio endpoints"""

import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from ecofinance.api.v1.schemas import (
    CashbackInvestRequest,
    GreenInvestmentCreateRequest,
    GreenInvestmentSchema,
    InvestmentCreateRequest,
    InvestmentProfileCreateRequest,
    InvestmentProfileSchema,
    InvestmentProfileUpdateRequest,
    InvestmentSchema,
    InvestmentType,
    RecommendationCreateRequest,
    RecommendationSchema,
    RiskAssessmentRequest,
    RiskAssessmentSchema,
    RiskLevel,
)
from ecofinance.api.dependencies import get_owner_id, get_request_id
from ecofinance.infrastructure.database.session import get_db
from ecofinance.infrastructure.database.models import (
    GreenInvestmentRecord,
    InvestmentProfileRecord,
    InvestmentRecord,
    RecommendationRecord,
    RiskAssessmentRecord,
)
from ecofinance.infrastructure.database.repositories import (
    CashbackRepository,
    GreenInvestmentRepository,
    InvestmentProfileRepository,
    InvestmentRepository,
    RecommendationRepository,
    RiskAssessmentRepository,
)
from ecofinance.domain.investments import portfolio_value, recommend_risk_level
from ecofinance.infrastructure.observability.metrics import record_investment, record_risk_assessment

router = APIRouter()


def _recommendation_schema(rec: RecommendationRecord) -> RecommendationSchema:
    return RecommendationSchema(
        id=rec.id,
        owner_id=rec.owner_id,
        title=rec.title,
        description=rec.description,
        icon=rec.icon,
        potential_impact=rec.potential_impact,
        category=rec.category,
    )


def _assessment_schema(assessment: RiskAssessmentRecord) -> RiskAssessmentSchema:
    return RiskAssessmentSchema(
        id=assessment.id,
        owner_id=assessment.owner_id,
        age_group=assessment.age_group,
        investment_timeframe=assessment.investment_timeframe,
        risk_tolerance=assessment.risk_tolerance,
        financial_goals=assessment.financial_goals,
        existing_investments=assessment.existing_investments,
        income_level=assessment.income_level,
        savings_percentage=assessment.savings_percentage,
        environmental_priority=assessment.environmental_priority,
        recommended_risk_level=assessment.recommended_risk_level,
        date=assessment.date,
    )


def _profile_schema(profile: InvestmentProfileRecord) -> InvestmentProfileSchema:
    return InvestmentProfileSchema(
        id=profile.id,
        owner_id=profile.owner_id,
        risk_level=profile.risk_level,
        initial_investment=profile.initial_investment,
        current_value=profile.current_value,
        created_at=profile.created_at,
        updated_at=profile.updated_at,
    )


def _green_schema(item: GreenInvestmentRecord) -> GreenInvestmentSchema:
    return GreenInvestmentSchema(
        id=item.id,
        name=item.name,
        type=item.type,
        description=item.description,
        min_investment=item.min_investment,
        projected_return=item.projected_return,
        risk_level=item.risk_level,
        esg_rating=item.esg_rating,
        company=item.company,
        sector=item.sector,
        logo_url=item.logo_url,
        performance_history=item.performance_history,
    )


def _investment_schema(investment: InvestmentRecord) -> InvestmentSchema:
    return InvestmentSchema(
        id=investment.id,
        owner_id=investment.owner_id,
        profile_id=investment.profile_id,
        name=investment.name,
        type=investment.type,
        amount=investment.amount,
        purchase_value=investment.purchase_value,
        current_value=investment.current_value,
        esg_rating=investment.esg_rating,
        description=investment.description,
        performance_data=investment.performance_data,
        purchase_date=investment.purchase_date,
        last_updated=investment.last_updated,
    )


def _require_profile(db: Session, owner_id: int) -> InvestmentProfileRecord:
    profile = InvestmentProfileRepository(db).get(owner_id)
    if not profile:
        raise HTTPException(status_code=400, detail="Investment profile required before investing")
    return profile


def _refresh_portfolio_value(db: Session, owner_id: int, profile: InvestmentProfileRecord) -> None:
    """Set the profile's current value to the total of its positions"""
    positions = InvestmentRepository(db).list_by_owner(owner_id)
    InvestmentProfileRepository(db).update(
        profile, current_value=portfolio_value(p.current_value for p in positions)
    )


@router.get("/recommendations", response_model=List[RecommendationSchema])
def list_recommendations(
    db: Session = Depends(get_db),
    owner_id: int = Depends(get_owner_id),
):
    return [_recommendation_schema(r) for r in RecommendationRepository(db).list_by_owner(owner_id)]


@router.post("/recommendations", response_model=RecommendationSchema, status_code=201)
def create_recommendation(
    request_body: RecommendationCreateRequest,
    db: Session = Depends(get_db),
    owner_id: int = Depends(get_owner_id),
):
    recommendation = RecommendationRepository(db).create(owner_id, **request_body.model_dump())
    db.commit()
    return _recommendation_schema(recommendation)


@router.post("/risk-assessment", response_model=RiskAssessmentSchema, status_code=201)
def submit_risk_assessment(
    request_body: RiskAssessmentRequest,
    request: Request,
    db: Session = Depends(get_db),
    owner_id: int = Depends(get_owner_id),
):
    """
    Score the risk survey and store it with the recommended risk level.

    Resubmitting replaces the owner's previous answers.
    """
    risk_level = recommend_risk_level(
        request_body.risk_tolerance,
        request_body.environmental_priority,
        request_body.investment_timeframe,
    )
    assessment = RiskAssessmentRepository(db).save(owner_id, risk_level, request_body.model_dump())
    db.commit()
    db.refresh(assessment)

    record_risk_assessment(risk_level)
    logging.info(
        "Risk assessment scored",
        extra={
            "request_id": get_request_id(request),
            "owner_id": owner_id,
            "step": "risk_assessment",
            "recommended_risk_level": risk_level,
        },
    )

    return _assessment_schema(assessment)


@router.get("/risk-assessment", response_model=RiskAssessmentSchema)
def get_risk_assessment(
    db: Session = Depends(get_db),
    owner_id: int = Depends(get_owner_id),
):
    assessment = RiskAssessmentRepository(db).get(owner_id)
    if not assessment:
        raise HTTPException(status_code=404, detail="No risk assessment found")
    return _assessment_schema(assessment)


@router.post("/investment-profile", response_model=InvestmentProfileSchema, status_code=201)
def create_investment_profile(
    request_body: InvestmentProfileCreateRequest,
    db: Session = Depends(get_db),
    owner_id: int = Depends(get_owner_id),
):
    repo = InvestmentProfileRepository(db)
    if repo.get(owner_id):
        raise HTTPException(status_code=400, detail="Investment profile already exists")

    profile = repo.create(
        owner_id,
        request_body.risk_level,
        request_body.initial_investment,
        request_body.current_value,
    )
    db.commit()
    db.refresh(profile)
    return _profile_schema(profile)


@router.get("/investment-profile", response_model=InvestmentProfileSchema)
def get_investment_profile(
    db: Session = Depends(get_db),
    owner_id: int = Depends(get_owner_id),
):
    profile = InvestmentProfileRepository(db).get(owner_id)
    if not profile:
        raise HTTPException(status_code=404, detail="No investment profile found")
    return _profile_schema(profile)


@router.patch("/investment-profile", response_model=InvestmentProfileSchema)
def update_investment_profile(
    request_body: InvestmentProfileUpdateRequest,
    db: Session = Depends(get_db),
    owner_id: int = Depends(get_owner_id),
):
    repo = InvestmentProfileRepository(db)
    profile = repo.get(owner_id)
    if not profile:
        raise HTTPException(status_code=404, detail="No investment profile found")

    repo.update(profile, **request_body.model_dump(exclude_unset=True, exclude_none=True))
    db.commit()
    db.refresh(profile)
    return _profile_schema(profile)


@router.get("/green-investments", response_model=List[GreenInvestmentSchema])
def list_green_investments(
    risk_level: Optional[RiskLevel] = None,
    db: Session = Depends(get_db),
    owner_id: int = Depends(get_owner_id),
):
    """Green investment catalog, optionally narrowed to one risk level"""
    return [_green_schema(g) for g in GreenInvestmentRepository(db).list_catalog(risk_level)]


@router.post("/green-investments", response_model=GreenInvestmentSchema, status_code=201)
def create_green_investment(
    request_body: GreenInvestmentCreateRequest,
    db: Session = Depends(get_db),
    owner_id: int = Depends(get_owner_id),
):
    item = GreenInvestmentRepository(db).create(**request_body.model_dump())
    db.commit()
    return _green_schema(item)


@router.post("/investments", response_model=InvestmentSchema, status_code=201)
def create_investment(
    request_body: InvestmentCreateRequest,
    request: Request,
    db: Session = Depends(get_db),
    owner_id: int = Depends(get_owner_id),
):
    """
    Record a position and roll the profile's current value forward.

    Requires an investment profile (400 otherwise).
    """
    profile = _require_profile(db, owner_id)

    fields = request_body.model_dump(exclude_none=True)
    investment = InvestmentRepository(db).create(owner_id, profile.id, **fields)
    _refresh_portfolio_value(db, owner_id, profile)
    db.commit()
    db.refresh(investment)

    record_investment(investment.type)
    logging.info(
        "Investment recorded",
        extra={
            "request_id": get_request_id(request),
            "owner_id": owner_id,
            "step": "investment_recorded",
            "investment_type": investment.type,
            "amount": float(request_body.amount),
        },
    )

    return _investment_schema(investment)


@router.get("/investments", response_model=List[InvestmentSchema])
def list_investments(
    investment_type: Optional[InvestmentType] = Query(None, alias="type"),
    db: Session = Depends(get_db),
    owner_id: int = Depends(get_owner_id),
):
    repo = InvestmentRepository(db)
    if investment_type:
        investments = repo.list_by_type(owner_id, investment_type)
    else:
        investments = repo.list_by_owner(owner_id)
    return [_investment_schema(i) for i in investments]


@router.post("/invest-cashback/{reward_id}", response_model=InvestmentSchema, status_code=201)
def invest_cashback(
    reward_id: int,
    request_body: CashbackInvestRequest,
    request: Request,
    db: Session = Depends(get_db),
    owner_id: int = Depends(get_owner_id),
):
    """
    Put an unspent cashback reward into a catalog green investment.

    The whole reward becomes the position's amount and purchase value, and
    the reward is flagged invested so it can no longer be redeemed.
    """
    profile = _require_profile(db, owner_id)

    cashback_repo = CashbackRepository(db)
    reward = cashback_repo.get_by_id(owner_id, reward_id)
    if not reward:
        raise HTTPException(status_code=404, detail="Cashback reward not found")
    if reward.redeemed:
        raise HTTPException(status_code=400, detail="Cashback reward already redeemed")
    if reward.invested:
        raise HTTPException(status_code=400, detail="Cashback reward already invested")

    target = GreenInvestmentRepository(db).get_by_id(request_body.green_investment_id)
    if not target:
        raise HTTPException(status_code=404, detail="Green investment not found")

    investment = InvestmentRepository(db).create(
        owner_id,
        profile.id,
        name=target.name,
        type=target.type,
        amount=reward.amount,
        purchase_value=reward.amount,
        current_value=reward.amount,
        esg_rating=target.esg_rating,
        description=target.description,
    )
    cashback_repo.mark_invested(reward)
    _refresh_portfolio_value(db, owner_id, profile)
    db.commit()
    db.refresh(investment)

    record_investment(investment.type, funding="cashback")
    logging.info(
        "Cashback invested",
        extra={
            "request_id": get_request_id(request),
            "owner_id": owner_id,
            "step": "cashback_invested",
            "reward_id": reward_id,
            "green_investment_id": target.id,
        },
    )

    return _investment_schema(investment)
