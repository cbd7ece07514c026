"""Cashback reward endpoints driven by the latest sustainability score"""

import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from ecofinance.api.v1.schemas import CashbackCalculateRequest, CashbackRewardSchema, CashbackTotalResponse
from ecofinance.api.dependencies import get_owner_id, get_request_id
from ecofinance.infrastructure.database.session import get_db
from ecofinance.infrastructure.database.models import CashbackRewardRecord
from ecofinance.infrastructure.database.repositories import CashbackRepository, ScoreRepository
from ecofinance.domain.cashback import calculate_cashback_amount
from ecofinance.infrastructure.observability.metrics import record_cashback
from ecofinance.config import settings

router = APIRouter()


def _to_schema(reward: CashbackRewardRecord) -> CashbackRewardSchema:
    return CashbackRewardSchema(
        id=reward.id,
        owner_id=reward.owner_id,
        month=reward.month,
        year=reward.year,
        eco_score=reward.eco_score,
        amount=reward.amount,
        redeemed=reward.redeemed,
        invested=reward.invested,
        date=reward.date,
    )


@router.get("/cashback-rewards", response_model=List[CashbackRewardSchema])
def list_cashback_rewards(
    db: Session = Depends(get_db),
    owner_id: int = Depends(get_owner_id),
):
    return [_to_schema(r) for r in CashbackRepository(db).list_by_owner(owner_id)]


@router.post("/calculate-cashback", response_model=CashbackRewardSchema, status_code=201)
def calculate_cashback(
    request_body: CashbackCalculateRequest,
    request: Request,
    db: Session = Depends(get_db),
    owner_id: int = Depends(get_owner_id),
):
    """
    Issue the cashback reward for a month.

    Returns the existing reward (200) when the month was already calculated,
    otherwise sizes a new one (201) from the latest overall eco-score.
    """
    repo = CashbackRepository(db)

    existing = repo.get_for_month(owner_id, request_body.month, request_body.year)
    if existing:
        return JSONResponse(status_code=200, content=_to_schema(existing).model_dump(mode="json"))

    score = ScoreRepository(db).get_latest(owner_id)
    if not score:
        raise HTTPException(status_code=404, detail="No sustainability score found")

    amount = calculate_cashback_amount(score.overall_score, settings.cashback_base_amount)
    reward = repo.create_reward(owner_id, request_body.month, request_body.year, score.overall_score, amount)
    db.commit()
    db.refresh(reward)

    record_cashback(score.overall_score)
    logging.info(
        "Cashback issued",
        extra={
            "request_id": get_request_id(request),
            "owner_id": owner_id,
            "step": "cashback_issued",
            "overall_score": score.overall_score,
            "amount": float(amount),
        },
    )

    return _to_schema(reward)


@router.post("/redeem-cashback/{reward_id}", response_model=CashbackRewardSchema)
def redeem_cashback(
    reward_id: int,
    db: Session = Depends(get_db),
    owner_id: int = Depends(get_owner_id),
):
    repo = CashbackRepository(db)
    reward = repo.get_by_id(owner_id, reward_id)

    if not reward:
        raise HTTPException(status_code=404, detail="Cashback reward not found")
    if reward.redeemed:
        raise HTTPException(status_code=400, detail="Cashback reward already redeemed")
    if reward.invested:
        raise HTTPException(status_code=400, detail="Cashback reward already invested")

    repo.mark_redeemed(reward)
    db.commit()

    return _to_schema(reward)


@router.get("/cashback-total", response_model=CashbackTotalResponse)
def get_cashback_total(
    db: Session = Depends(get_db),
    owner_id: int = Depends(get_owner_id),
):
    """Sum of cashback neither redeemed nor invested"""
    return CashbackTotalResponse(total=CashbackRepository(db).unredeemed_total(owner_id))
