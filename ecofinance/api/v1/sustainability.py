"""Read endpoints for scored transactions, summaries and category breakdowns"""

from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from ecofinance.api.v1.schemas import CategoryBreakdownSchema, SustainabilityScoreSchema, TransactionSchema
from ecofinance.api.dependencies import get_owner_id
from ecofinance.infrastructure.database.session import get_db
from ecofinance.infrastructure.database.repositories import (
    BreakdownRepository,
    ScoreRepository,
    TransactionRepository,
)

router = APIRouter()


@router.get("/sustainability-score", response_model=SustainabilityScoreSchema)
def get_sustainability_score(
    db: Session = Depends(get_db),
    owner_id: int = Depends(get_owner_id),
):
    """Latest sustainability summary for the owner"""
    score = ScoreRepository(db).get_latest(owner_id)

    if not score:
        raise HTTPException(status_code=404, detail="No sustainability score found")

    return SustainabilityScoreSchema(
        id=score.id,
        owner_id=score.owner_id,
        overall_score=score.overall_score,
        carbon_footprint=score.carbon_footprint,
        sustainable_purchases=score.sustainable_purchases,
        water_usage=score.water_usage,
        date=score.date,
    )


@router.get("/transactions", response_model=List[TransactionSchema])
def list_transactions(
    category: Optional[str] = Query(None, description="Exact category as uploaded"),
    min_score: Optional[int] = Query(None, ge=0, le=100),
    max_score: Optional[int] = Query(None, ge=0, le=100),
    db: Session = Depends(get_db),
    owner_id: int = Depends(get_owner_id),
):
    """
    List scored transactions.

    Filters (category wins over the score range; the range needs both bounds):
    - category: exact match
    - min_score + max_score: inclusive eco-score range
    """
    repo = TransactionRepository(db)
    if category:
        transactions = repo.list_by_category(owner_id, category)
    elif min_score is not None and max_score is not None:
        transactions = repo.list_by_eco_score(owner_id, min_score, max_score)
    else:
        transactions = repo.list_by_owner(owner_id)

    return [
        TransactionSchema(
            id=t.id,
            owner_id=t.owner_id,
            date=t.date,
            merchant=t.merchant,
            category=t.category,
            amount=t.amount,
            eco_score=t.eco_score,
            has_alternatives=t.has_alternatives,
        )
        for t in transactions
    ]


@router.get("/category-breakdowns", response_model=List[CategoryBreakdownSchema])
def list_category_breakdowns(
    db: Session = Depends(get_db),
    owner_id: int = Depends(get_owner_id),
):
    breakdowns = BreakdownRepository(db).list_by_owner(owner_id)

    return [
        CategoryBreakdownSchema(
            id=b.id,
            owner_id=b.owner_id,
            category=b.category,
            amount=b.amount,
            eco_score=b.eco_score,
        )
        for b in breakdowns
    ]
