"""Dependency injection for FastAPI endpoints"""

from fastapi import Header, Request
from ecofinance.infrastructure.clients.bank import BankClient


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_owner_id(x_user_id: int = Header(..., description="Account that owns the data")) -> int:
    """Owner of the request; set by the upstream auth layer"""
    return x_user_id


def get_bank_client() -> BankClient:
    """Provide banking aggregator client instance"""
    return BankClient()
