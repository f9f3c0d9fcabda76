"""Dependency injection for FastAPI endpoints"""

from datetime import datetime

from fastapi import Request

from airdrop_estimator.config import settings
from airdrop_estimator.infrastructure.clients.price import PriceFeed
from airdrop_estimator.utils.date_utils import remaining_days


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_price_feed(request: Request) -> PriceFeed:
    """Provide the application's shared price feed"""
    return request.app.state.price_feed


def get_remaining_days() -> int:
    """Days left until the configured settlement date"""
    return remaining_days(settings.settlement_date, datetime.now())
