from __future__ import annotations

from dataclasses import dataclass

from fastapi import Response, status
from pydantic import BaseModel

from app.api.pipelines import Pipeline
from app.config.settings import settings
from app.schemas.quotes import ResponseEnvelope
from app.schemas.responses import ErrorResponse, QuotesResponse, ServiceUnavailableResponse

CONFIG_ERROR_MESSAGE = "API key not configured. Please set API_KEY environment variable."


@dataclass(frozen=True)
class PolicyDecision:
    status_code: int
    body: BaseModel

    def to_response(self) -> Response:
        # Pydantic renders NaN/inf as null; unset optional keys are left out.
        return Response(
            content=self.body.model_dump_json(by_alias=True, exclude_unset=True),
            status_code=self.status_code,
            media_type="application/json",
        )


def decide(envelope: ResponseEnvelope, pipeline: Pipeline) -> PolicyDecision:
    quote_model = pipeline.quote_model
    data = [quote_model.from_result(result) for result in envelope.results]

    if envelope.all_failed:
        return PolicyDecision(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            body=ServiceUnavailableResponse[quote_model](
                error="Service unavailable",
                message=pipeline.unavailable_message,
                data=data,
            ),
        )

    if pipeline.group_by_category:
        grouped = {
            category: [quote_model.from_result(result) for result in results]
            for category, results in envelope.grouped().items()
        }
        body = QuotesResponse[quote_model](
            success=True, timestamp=envelope.timestamp, data=data, grouped=grouped
        )
    else:
        body = QuotesResponse[quote_model](success=True, timestamp=envelope.timestamp, data=data)
    return PolicyDecision(status_code=status.HTTP_200_OK, body=body)


def configuration_error() -> PolicyDecision:
    return PolicyDecision(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        body=ErrorResponse(error="Configuration error", message=CONFIG_ERROR_MESSAGE),
    )


def internal_error(exc: Exception, pipeline: Pipeline) -> PolicyDecision:
    if settings.is_production:
        body = ErrorResponse(error="Internal server error", message=pipeline.error_message)
    else:
        body = ErrorResponse(
            error="Internal server error", message=pipeline.error_message, details=str(exc)
        )
    return PolicyDecision(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, body=body)
