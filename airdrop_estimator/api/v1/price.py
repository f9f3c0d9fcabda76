"""GET /v1/price, POST /v1/price/refresh - cached reward token price"""

from fastapi import APIRouter, Depends

from airdrop_estimator.api.v1.schemas import PriceResponse
from airdrop_estimator.api.dependencies import get_price_feed
from airdrop_estimator.infrastructure.clients.price import PriceFeed, PriceSnapshot

router = APIRouter()


def _to_response(feed: PriceFeed, snapshot: PriceSnapshot) -> PriceResponse:
    return PriceResponse(
        token_id=feed.client.token_id,
        vs_currency=feed.client.vs_currency,
        price=snapshot.price,
        fetched_at=snapshot.fetched_at,
        error=snapshot.error,
    )


@router.get("/price", response_model=PriceResponse)
def get_price(price_feed: PriceFeed = Depends(get_price_feed)):
    """Latest known price; price is null until a fetch has succeeded"""
    return _to_response(price_feed, price_feed.snapshot)


@router.post("/price/refresh", response_model=PriceResponse)
async def refresh_price(price_feed: PriceFeed = Depends(get_price_feed)):
    """
    Fetch a fresh price now.

    A feed failure is reported in `error` with a null price, not as a 5xx.
    """
    snapshot = await price_feed.refresh()
    return _to_response(price_feed, snapshot)
