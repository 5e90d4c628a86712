import logging

from fastapi import APIRouter, Response

from app.aggregation.fanout import aggregate_all
from app.api.pipelines import ECONOMIC, STOCKS, Pipeline
from app.api.policy import configuration_error, decide, internal_error
from app.config.settings import settings

logger = logging.getLogger(__name__)

router = APIRouter()


async def serve_pipeline(pipeline: Pipeline) -> Response:
    try:
        # 1. The credential is checked before any outbound call
        api_key = settings.providers.finnhub_api_key
        if not api_key:
            logger.error("[api] API_KEY environment variable is not configured")
            return configuration_error().to_response()

        # 2. Fetch every symbol in parallel
        logger.info("[api] %s: fetching %d symbols", pipeline.name, len(pipeline.registry))
        envelope = await aggregate_all(pipeline.registry, api_key)

        # 3. Map the outcome to a status and body
        decision = decide(envelope, pipeline)
        logger.info(
            "[api] %s: fetched %d/%d symbols status=%d",
            pipeline.name,
            len(envelope.successes),
            len(envelope.results),
            decision.status_code,
        )
        return decision.to_response()
    except Exception as exc:
        logger.exception("[api] %s: unexpected error", pipeline.name)
        return internal_error(exc, pipeline).to_response()


@router.get("/health")
def health() -> dict:
    return {"status": "ok"}


@router.get("/stocks")
async def get_stocks() -> Response:
    return await serve_pipeline(STOCKS)


@router.get("/economic")
async def get_economic() -> Response:
    return await serve_pipeline(ECONOMIC)
