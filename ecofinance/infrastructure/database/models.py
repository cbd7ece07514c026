"""SQLAlchemy ORM models for scored transactions, summaries, rewards and investments"""

from sqlalchemy import Column, String, Boolean, DateTime, Date, Integer, Numeric, ForeignKey, Text, JSON
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()

# Money is stored as exact decimals
MONEY = Numeric(17, 2)
FOOTPRINT = Numeric(20, 1)


class TransactionRecord(Base):
    """Scored transaction"""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    owner_id = Column(Integer, nullable=False, index=True)
    date = Column(Date, nullable=False)
    merchant = Column(Text, nullable=False)
    category = Column(Text, nullable=False)
    amount = Column(Numeric, nullable=False)  # as uploaded, unrounded
    eco_score = Column(Integer, nullable=False)
    has_alternatives = Column(Boolean, nullable=False, default=False)


class SustainabilityScoreRecord(Base):
    """One batch's sustainability snapshot"""

    __tablename__ = "sustainability_scores"

    id = Column(Integer, primary_key=True, autoincrement=True)
    owner_id = Column(Integer, nullable=False, index=True)
    overall_score = Column(Integer, nullable=False)
    carbon_footprint = Column(FOOTPRINT, nullable=False)
    sustainable_purchases = Column(Integer, nullable=False)
    water_usage = Column(FOOTPRINT, nullable=False)
    date = Column(DateTime(timezone=True), nullable=False)


class CategoryBreakdownRecord(Base):
    """Per-category spend and average eco-score for one batch"""

    __tablename__ = "category_breakdowns"

    id = Column(Integer, primary_key=True, autoincrement=True)
    owner_id = Column(Integer, nullable=False, index=True)
    category = Column(Text, nullable=False)
    amount = Column(MONEY, nullable=False)
    eco_score = Column(Integer, nullable=False)


class CashbackRewardRecord(Base):
    """Monthly cashback earned from the eco-score"""

    __tablename__ = "cashback_rewards"

    id = Column(Integer, primary_key=True, autoincrement=True)
    owner_id = Column(Integer, nullable=False, index=True)
    month = Column(String(16), nullable=False)
    year = Column(Integer, nullable=False)
    eco_score = Column(Integer, nullable=False)
    amount = Column(MONEY, nullable=False)
    redeemed = Column(Boolean, nullable=False, default=False)
    invested = Column(Boolean, nullable=False, default=False)
    date = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


class RecommendationRecord(Base):
    """Sustainability tip shown to an owner"""

    __tablename__ = "recommendations"

    id = Column(Integer, primary_key=True, autoincrement=True)
    owner_id = Column(Integer, nullable=False, index=True)
    title = Column(Text, nullable=False)
    description = Column(Text, nullable=False)
    icon = Column(Text, nullable=False)
    potential_impact = Column(Text, nullable=False)
    category = Column(Text, nullable=False)


class RiskAssessmentRecord(Base):
    """Answers to the investor risk survey, one per owner"""

    __tablename__ = "risk_assessments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    owner_id = Column(Integer, nullable=False, unique=True)
    age_group = Column(Text, nullable=False)
    investment_timeframe = Column(Text, nullable=False)
    risk_tolerance = Column(Integer, nullable=False)  # 1-10
    financial_goals = Column(Text, nullable=False)
    existing_investments = Column(Boolean, nullable=False)
    income_level = Column(Text, nullable=False)
    savings_percentage = Column(Integer, nullable=False)
    environmental_priority = Column(Integer, nullable=False)  # 1-10
    recommended_risk_level = Column(Text, nullable=False)
    date = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


class InvestmentProfileRecord(Base):
    """Owner's portfolio header: chosen risk level and running value"""

    __tablename__ = "investment_profiles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    owner_id = Column(Integer, nullable=False, unique=True)
    risk_level = Column(Text, nullable=False)
    initial_investment = Column(MONEY, nullable=False, default=0)
    current_value = Column(MONEY, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())


class InvestmentRecord(Base):
    """Position held in an owner's portfolio"""

    __tablename__ = "investments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    owner_id = Column(Integer, nullable=False, index=True)
    profile_id = Column(Integer, ForeignKey("investment_profiles.id", ondelete="CASCADE"), nullable=False)
    name = Column(Text, nullable=False)
    type = Column(Text, nullable=False)
    amount = Column(MONEY, nullable=False)
    purchase_value = Column(MONEY, nullable=False)
    current_value = Column(MONEY, nullable=False)
    esg_rating = Column(Text, nullable=False)
    description = Column(Text, nullable=False)
    performance_data = Column(JSON, nullable=True)
    purchase_date = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    last_updated = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())


class GreenInvestmentRecord(Base):
    """Catalog entry for a green bond, eco stock or sustainable fund"""

    __tablename__ = "green_investments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False)
    type = Column(Text, nullable=False)
    description = Column(Text, nullable=False)
    min_investment = Column(MONEY, nullable=False)
    projected_return = Column(Numeric(6, 2), nullable=False)  # annual percent
    risk_level = Column(Text, nullable=False, index=True)
    esg_rating = Column(Text, nullable=False)
    company = Column(Text, nullable=False)
    sector = Column(Text, nullable=False)
    logo_url = Column(Text, nullable=True)
    performance_history = Column(JSON, nullable=True)
