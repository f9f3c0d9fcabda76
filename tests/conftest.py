"""Pytest fixtures for testing"""

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from airdrop_estimator.api.main import create_app
from airdrop_estimator.domain.models import Tier
from airdrop_estimator.infrastructure.clients.price import PriceClient, PriceFeed, PriceSnapshot


@pytest.fixture
def price_feed() -> PriceFeed:
    """Price feed pre-loaded with a known price, never started"""
    feed = PriceFeed(client=PriceClient(base_url="http://price.test"), interval=60)
    feed.snapshot = PriceSnapshot(price=0.8, fetched_at=datetime(2025, 9, 1, tzinfo=timezone.utc))
    return feed


@pytest.fixture
def client(price_feed: PriceFeed) -> TestClient:
    """FastAPI test client (lifespan not entered, so no background refresh)"""
    app = create_app(price_feed=price_feed)
    return TestClient(app)


@pytest.fixture
def progressive_tiers() -> list[Tier]:
    """0-100 at 1/unit, 100-1000 at 0.5/unit, above at 0.1/unit"""
    return [
        Tier(score_per_unit=1.0, lte=100),
        Tier(score_per_unit=0.5, lte=1000),
        Tier(score_per_unit=0.1),
    ]


@pytest.fixture
def demo_config_data() -> dict:
    """Plain configuration covering every rule type"""
    return {
        "version": "test-1",
        "categories": [
            {"id": "holding", "label": "Holding"},
            {"id": "activity", "label": "Activity"},
            {"id": "bonus", "label": "Bonus"},
        ],
        "rules": [
            {
                "type": "timeWeighted",
                "id": "hold",
                "category": "holding",
                "label": "Held x days",
                "inputKey": "amount",
                "daysKey": "days",
                "rate": 0.05,
                "cap": 300,
            },
            {
                "type": "tiered",
                "id": "lp",
                "category": "activity",
                "label": "LP",
                "inputKey": "lp",
                "tiers": [
                    {"lte": 100, "scorePerUnit": 1},
                    {"lte": 1000, "scorePerUnit": 0.5},
                    {"scorePerUnit": 0.1},
                ],
            },
            {
                "type": "sum",
                "id": "swaps",
                "category": "activity",
                "label": "Swaps",
                "inputKey": "swaps",
                "weight": 2,
            },
            {
                "type": "boolean",
                "id": "early",
                "category": "bonus",
                "label": "Early",
                "inputKey": "early",
                "score": 50,
            },
            {
                "type": "multiplier",
                "id": "boost",
                "category": "bonus",
                "label": "Boost",
                "inputKey": "boost",
                "base": 1,
                "perUnit": 0.1,
                "max": 2,
            },
        ],
    }
