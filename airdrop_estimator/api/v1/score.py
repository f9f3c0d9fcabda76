"""POST /v1/score - rule-based points score endpoint"""

import logging
import time
from dataclasses import asdict

from fastapi import APIRouter, HTTPException, Request

from airdrop_estimator.api.v1.schemas import RuleDetailSchema, ScoreRequest, ScoreResponse
from airdrop_estimator.api.dependencies import get_request_id
from airdrop_estimator.domain.exceptions import RuleConfigurationError
from airdrop_estimator.domain.scoring import DEFAULT_SCORING_CONFIG, compute_score, load_scoring_config
from airdrop_estimator.infrastructure.observability.metrics import record_score
from airdrop_estimator.infrastructure.observability.logging import log_score

router = APIRouter()

default_config = load_scoring_config(DEFAULT_SCORING_CONFIG)


@router.post("/score", response_model=ScoreResponse)
def create_score(request_body: ScoreRequest, request: Request):
    """
    Evaluate a rule configuration against the submitted inputs.

    Uses the bundled default configuration when none is supplied. A
    malformed configuration is rejected with 422 before any rule runs.
    """
    start_time = time.time()
    request_id = get_request_id(request)

    if request_body.config is None:
        config = default_config
    else:
        try:
            config = load_scoring_config(request_body.config)
        except RuleConfigurationError as e:
            logging.warning(f"Invalid scoring config: {e}", extra={"request_id": request_id})
            raise HTTPException(status_code=422, detail=str(e))

    result = compute_score(config, request_body.inputs)

    duration_ms = (time.time() - start_time) * 1000
    record_score(result.version, result.total)
    log_score(request_id, result.version, result.total, len(config.rules), duration_ms)

    return ScoreResponse(
        version=result.version,
        total=result.total,
        by_category=result.by_category,
        details=[RuleDetailSchema(**asdict(d)) for d in result.details],
        multiplier=result.multiplier,
    )
