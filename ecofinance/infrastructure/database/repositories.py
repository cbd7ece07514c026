"""Data access layer for scored transactions, summaries, rewards and investments"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict, List, Optional
from sqlalchemy import func
from sqlalchemy.orm import Session
from ecofinance.infrastructure.database.models import (
    CashbackRewardRecord,
    CategoryBreakdownRecord,
    GreenInvestmentRecord,
    InvestmentProfileRecord,
    InvestmentRecord,
    RecommendationRecord,
    RiskAssessmentRecord,
    SustainabilityScoreRecord,
    TransactionRecord,
)
from ecofinance.domain.models import ProcessedBatch


class BatchRepository:
    """Persists the three outputs of one scoring run together"""

    def __init__(self, db: Session):
        self.db = db

    def save_batch(self, batch: ProcessedBatch) -> tuple[List[TransactionRecord], SustainabilityScoreRecord, List[CategoryBreakdownRecord]]:
        """Add transactions, summary and breakdowns; flush to assign ids, caller commits"""
        transactions = [
            TransactionRecord(
                owner_id=txn.owner_id,
                date=txn.date,
                merchant=txn.merchant,
                category=txn.category,
                amount=txn.amount,
                eco_score=txn.eco_score,
                has_alternatives=txn.has_alternatives,
            )
            for txn in batch.transactions
        ]
        summary = batch.summary
        score = SustainabilityScoreRecord(
            owner_id=summary.owner_id,
            overall_score=summary.overall_score,
            carbon_footprint=summary.carbon_footprint,
            sustainable_purchases=summary.sustainable_purchases,
            water_usage=summary.water_usage,
            date=summary.date,
        )
        breakdowns = [
            CategoryBreakdownRecord(
                owner_id=b.owner_id,
                category=b.category,
                amount=b.amount,
                eco_score=b.eco_score,
            )
            for b in batch.breakdowns
        ]

        self.db.add_all(transactions)
        self.db.add(score)
        self.db.add_all(breakdowns)
        self.db.flush()  # Get IDs without committing
        return transactions, score, breakdowns


class TransactionRepository:
    """Repository for scored transactions"""

    def __init__(self, db: Session):
        self.db = db

    def _for_owner(self, owner_id: int):
        return self.db.query(TransactionRecord).filter(TransactionRecord.owner_id == owner_id)

    def list_by_owner(self, owner_id: int) -> List[TransactionRecord]:
        return self._for_owner(owner_id).order_by(TransactionRecord.id).all()

    def list_by_category(self, owner_id: int, category: str) -> List[TransactionRecord]:
        """Exact, case-sensitive category match"""
        return (
            self._for_owner(owner_id)
            .filter(TransactionRecord.category == category)
            .order_by(TransactionRecord.id)
            .all()
        )

    def list_by_eco_score(self, owner_id: int, min_score: int, max_score: int) -> List[TransactionRecord]:
        """Transactions with min_score <= eco_score <= max_score"""
        return (
            self._for_owner(owner_id)
            .filter(TransactionRecord.eco_score >= min_score, TransactionRecord.eco_score <= max_score)
            .order_by(TransactionRecord.id)
            .all()
        )


class ScoreRepository:
    """Repository for sustainability summaries"""

    def __init__(self, db: Session):
        self.db = db

    def get_latest(self, owner_id: int) -> Optional[SustainabilityScoreRecord]:
        """Most recent summary by computation date"""
        return (
            self.db.query(SustainabilityScoreRecord)
            .filter(SustainabilityScoreRecord.owner_id == owner_id)
            .order_by(SustainabilityScoreRecord.date.desc(), SustainabilityScoreRecord.id.desc())
            .first()
        )


class BreakdownRepository:
    """Repository for category breakdowns"""

    def __init__(self, db: Session):
        self.db = db

    def list_by_owner(self, owner_id: int) -> List[CategoryBreakdownRecord]:
        return (
            self.db.query(CategoryBreakdownRecord)
            .filter(CategoryBreakdownRecord.owner_id == owner_id)
            .order_by(CategoryBreakdownRecord.id)
            .all()
        )


class CashbackRepository:
    """Repository for monthly cashback rewards"""

    def __init__(self, db: Session):
        self.db = db

    def list_by_owner(self, owner_id: int) -> List[CashbackRewardRecord]:
        return (
            self.db.query(CashbackRewardRecord)
            .filter(CashbackRewardRecord.owner_id == owner_id)
            .order_by(CashbackRewardRecord.id)
            .all()
        )

    def get_for_month(self, owner_id: int, month: str, year: int) -> Optional[CashbackRewardRecord]:
        return (
            self.db.query(CashbackRewardRecord)
            .filter(
                CashbackRewardRecord.owner_id == owner_id,
                CashbackRewardRecord.month == month,
                CashbackRewardRecord.year == year,
            )
            .first()
        )

    def get_by_id(self, owner_id: int, reward_id: int) -> Optional[CashbackRewardRecord]:
        return (
            self.db.query(CashbackRewardRecord)
            .filter(CashbackRewardRecord.owner_id == owner_id, CashbackRewardRecord.id == reward_id)
            .first()
        )

    def create_reward(self, owner_id: int, month: str, year: int, eco_score: int, amount: Decimal) -> CashbackRewardRecord:
        reward = CashbackRewardRecord(
            owner_id=owner_id,
            month=month,
            year=year,
            eco_score=eco_score,
            amount=amount,
            redeemed=False,
            invested=False,
        )
        self.db.add(reward)
        self.db.flush()
        return reward

    def mark_redeemed(self, reward: CashbackRewardRecord) -> CashbackRewardRecord:
        reward.redeemed = True
        self.db.flush()
        return reward

    def mark_invested(self, reward: CashbackRewardRecord) -> CashbackRewardRecord:
        reward.invested = True
        self.db.flush()
        return reward

    def unredeemed_total(self, owner_id: int) -> Decimal:
        """Cashback still available: neither redeemed nor invested"""
        total = (
            self.db.query(func.coalesce(func.sum(CashbackRewardRecord.amount), 0))
            .filter(
                CashbackRewardRecord.owner_id == owner_id,
                CashbackRewardRecord.redeemed.is_(False),
                CashbackRewardRecord.invested.is_(False),
            )
            .scalar()
        )
        return Decimal(str(total))


class RecommendationRepository:
    """Repository for sustainability recommendations"""

    def __init__(self, db: Session):
        self.db = db

    def list_by_owner(self, owner_id: int) -> List[RecommendationRecord]:
        return (
            self.db.query(RecommendationRecord)
            .filter(RecommendationRecord.owner_id == owner_id)
            .order_by(RecommendationRecord.id)
            .all()
        )

    def create(self, owner_id: int, **fields: Any) -> RecommendationRecord:
        recommendation = RecommendationRecord(owner_id=owner_id, **fields)
        self.db.add(recommendation)
        self.db.flush()
        return recommendation


class RiskAssessmentRepository:
    """Repository for risk surveys (one per owner)"""

    def __init__(self, db: Session):
        self.db = db

    def get(self, owner_id: int) -> Optional[RiskAssessmentRecord]:
        return self.db.query(RiskAssessmentRecord).filter(RiskAssessmentRecord.owner_id == owner_id).first()

    def save(self, owner_id: int, recommended_risk_level: str, answers: Dict[str, Any]) -> RiskAssessmentRecord:
        """Insert the owner's survey, or overwrite the previous answers"""
        assessment = self.get(owner_id)
        if assessment is None:
            assessment = RiskAssessmentRecord(owner_id=owner_id)
            self.db.add(assessment)

        for key, value in answers.items():
            setattr(assessment, key, value)
        assessment.recommended_risk_level = recommended_risk_level
        assessment.date = datetime.now(timezone.utc)

        self.db.flush()
        return assessment


class InvestmentProfileRepository:
    """Repository for investment profiles (one per owner)"""

    def __init__(self, db: Session):
        self.db = db

    def get(self, owner_id: int) -> Optional[InvestmentProfileRecord]:
        return self.db.query(InvestmentProfileRecord).filter(InvestmentProfileRecord.owner_id == owner_id).first()

    def create(self, owner_id: int, risk_level: str, initial_investment: Decimal, current_value: Decimal) -> InvestmentProfileRecord:
        profile = InvestmentProfileRecord(
            owner_id=owner_id,
            risk_level=risk_level,
            initial_investment=initial_investment,
            current_value=current_value,
        )
        self.db.add(profile)
        self.db.flush()
        return profile

    def update(self, profile: InvestmentProfileRecord, **updates: Any) -> InvestmentProfileRecord:
        for key, value in updates.items():
            setattr(profile, key, value)
        profile.updated_at = datetime.now(timezone.utc)
        self.db.flush()
        return profile


class InvestmentRepository:
    """Repository for portfolio positions"""

    def __init__(self, db: Session):
        self.db = db

    def _for_owner(self, owner_id: int):
        return self.db.query(InvestmentRecord).filter(InvestmentRecord.owner_id == owner_id)

    def list_by_owner(self, owner_id: int) -> List[InvestmentRecord]:
        return self._for_owner(owner_id).order_by(InvestmentRecord.id).all()

    def list_by_type(self, owner_id: int, investment_type: str) -> List[InvestmentRecord]:
        return self._for_owner(owner_id).filter(InvestmentRecord.type == investment_type).order_by(InvestmentRecord.id).all()

    def create(self, owner_id: int, profile_id: int, **fields: Any) -> InvestmentRecord:
        investment = InvestmentRecord(owner_id=owner_id, profile_id=profile_id, **fields)
        self.db.add(investment)
        self.db.flush()
        return investment


class GreenInvestmentRepository:
    """Repository for the green investment catalog"""

    def __init__(self, db: Session):
        self.db = db

    def list_catalog(self, risk_level: Optional[str] = None) -> List[GreenInvestmentRecord]:
        query = self.db.query(GreenInvestmentRecord)
        if risk_level:
            query = query.filter(GreenInvestmentRecord.risk_level == risk_level)
        return query.order_by(GreenInvestmentRecord.id).all()

    def get_by_id(self, green_investment_id: int) -> Optional[GreenInvestmentRecord]:
        return self.db.query(GreenInvestmentRecord).filter(GreenInvestmentRecord.id == green_investment_id).first()

    def create(self, **fields: Any) -> GreenInvestmentRecord:
        investment = GreenInvestmentRecord(**fields)
        self.db.add(investment)
        self.db.flush()
        return investment
