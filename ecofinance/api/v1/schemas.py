"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, Field
from datetime import date, datetime
from decimal import Decimal
from typing import List, Literal, Optional


class CSVUploadRequest(BaseModel):
    """Request body for POST /v1/upload-csv"""

    csv_data: str = Field(..., description="CSV text with a date,merchant,category,amount header")


class SustainabilityScoreSchema(BaseModel):
    """Persisted sustainability summary"""

    id: int
    owner_id: int
    overall_score: int
    carbon_footprint: float
    sustainable_purchases: int
    water_usage: float
    date: datetime


class UploadResponse(BaseModel):
    """Response for POST /v1/upload-csv and POST /v1/bank/sync"""

    message: str
    transactions_count: int
    sustainability_score: SustainabilityScoreSchema


class ParseErrorResponse(BaseModel):
    """Error body for rejected uploads"""

    detail: str
    line_number: Optional[int] = None


class TransactionSchema(BaseModel):
    """Single scored transaction"""

    id: int
    owner_id: int
    date: date
    merchant: str
    category: str
    amount: float
    eco_score: int
    has_alternatives: bool


class CategoryBreakdownSchema(BaseModel):
    """Spend and average eco-score for one category"""

    id: int
    owner_id: int
    category: str
    amount: float
    eco_score: int


class BankSyncRequest(BaseModel):
    """Request body for POST /v1/bank/sync"""

    access_token: str = Field(..., min_length=1, description="Aggregator access token for the linked item")
    days: int = Field(30, gt=0, le=730, description="How many days of history to pull")


class CashbackCalculateRequest(BaseModel):
    """Request body for POST /v1/calculate-cashback"""

    month: str = Field(..., min_length=1, description="Month name or number")
    year: int = Field(..., ge=2000, le=2100)


class CashbackRewardSchema(BaseModel):
    """Monthly cashback reward"""

    id: int
    owner_id: int
    month: str
    year: int
    eco_score: int
    amount: float
    redeemed: bool
    invested: bool
    date: datetime


class CashbackTotalResponse(BaseModel):
    """Response for GET /v1/cashback-total"""

    total: float


RiskLevel = Literal["low", "medium", "high"]
InvestmentType = Literal["green_bond", "eco_stock", "sustainable_fund"]


class RecommendationCreateRequest(BaseModel):
    """Request body for POST /v1/recommendations"""

    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    icon: str = Field(..., min_length=1)
    potential_impact: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)


class RecommendationSchema(RecommendationCreateRequest):
    id: int
    owner_id: int


class RiskAssessmentRequest(BaseModel):
    """Risk survey answers for POST /v1/risk-assessment"""

    age_group: str = Field(..., min_length=1)
    investment_timeframe: Literal["short_term", "medium_term", "long_term"]
    risk_tolerance: int = Field(..., ge=1, le=10)
    financial_goals: str = Field(..., min_length=1)
    existing_investments: bool
    income_level: str = Field(..., min_length=1)
    savings_percentage: int = Field(..., ge=0, le=100)
    environmental_priority: int = Field(..., ge=1, le=10)


class RiskAssessmentSchema(RiskAssessmentRequest):
    id: int
    owner_id: int
    recommended_risk_level: RiskLevel
    date: datetime


class InvestmentProfileCreateRequest(BaseModel):
    """Request body for POST /v1/investment-profile"""

    risk_level: RiskLevel
    initial_investment: Decimal = Field(Decimal("0"), ge=0, max_digits=17, decimal_places=2)
    current_value: Decimal = Field(Decimal("0"), ge=0, max_digits=17, decimal_places=2)


class InvestmentProfileUpdateRequest(BaseModel):
    """Partial update for PATCH /v1/investment-profile; omitted fields are kept"""

    risk_level: Optional[RiskLevel] = None
    initial_investment: Optional[Decimal] = Field(None, ge=0, max_digits=17, decimal_places=2)
    current_value: Optional[Decimal] = Field(None, ge=0, max_digits=17, decimal_places=2)


class InvestmentProfileSchema(BaseModel):
    id: int
    owner_id: int
    risk_level: str
    initial_investment: float
    current_value: float
    created_at: datetime
    updated_at: datetime


class GreenInvestmentCreateRequest(BaseModel):
    """Catalog entry for POST /v1/green-investments"""

    name: str = Field(..., min_length=1)
    type: InvestmentType
    description: str = Field(..., min_length=1)
    min_investment: Decimal = Field(..., ge=0, max_digits=17, decimal_places=2)
    projected_return: Decimal = Field(..., ge=-100, le=1000, decimal_places=2, description="Annual percent")
    risk_level: RiskLevel
    esg_rating: str = Field(..., min_length=1)
    company: str = Field(..., min_length=1)
    sector: str = Field(..., min_length=1)
    logo_url: Optional[str] = None
    performance_history: Optional[List[float]] = None


class GreenInvestmentSchema(BaseModel):
    id: int
    name: str
    type: str
    description: str
    min_investment: float
    projected_return: float
    risk_level: str
    esg_rating: str
    company: str
    sector: str
    logo_url: Optional[str] = None
    performance_history: Optional[List[float]] = None


class InvestmentCreateRequest(BaseModel):
    """Request body for POST /v1/investments"""

    name: str = Field(..., min_length=1)
    type: InvestmentType
    amount: Decimal = Field(..., gt=0, max_digits=17, decimal_places=2)
    purchase_value: Decimal = Field(..., ge=0, max_digits=17, decimal_places=2)
    current_value: Decimal = Field(..., ge=0, max_digits=17, decimal_places=2)
    esg_rating: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    performance_data: Optional[List[float]] = None
    purchase_date: Optional[datetime] = None


class CashbackInvestRequest(BaseModel):
    """Request body for POST /v1/invest-cashback/{reward_id}"""

    green_investment_id: int


class InvestmentSchema(BaseModel):
    id: int
    owner_id: int
    profile_id: int
    name: str
    type: str
    amount: float
    purchase_value: float
    current_value: float
    esg_rating: str
    description: str
    performance_data: Optional[List[float]] = None
    purchase_date: datetime
    last_updated: datetime
