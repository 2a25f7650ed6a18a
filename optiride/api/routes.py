"""HTTP endpoints."""

from __future__ import annotations

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import JSONResponse

from ..domain.errors import ComparisonError, GeocodingError
from ..ports.geocoding import GeocoderPort
from ..services.comparison import ComparisonService
from ..services.visits import VisitCounter
from .schemas import (
    CompareRequest,
    CompareResponse,
    ErrorResponse,
    ReverseResponse,
    VisitsResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def get_comparison_service(request: Request) -> ComparisonService:
    return request.app.state.container.resolve(ComparisonService)


def get_geocoder(request: Request) -> GeocoderPort:
    return request.app.state.container.resolve(GeocoderPort)


def get_visit_counter(request: Request) -> VisitCounter:
    return request.app.state.visits


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@router.post(
    "/api/compare",
    response_model=CompareResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def compare(
    body: CompareRequest,
    service: Annotated[ComparisonService, Depends(get_comparison_service)],
):
    """Quote every provider for a trip, cheapest first by default."""
    try:
        result = service.compare(body.to_domain())
    except ComparisonError as e:
        logger.info("Comparison rejected", extra={"error": e.message})
        return _error(status.HTTP_400_BAD_REQUEST, e.message)
    except Exception:
        logger.exception("Unexpected error in comparison")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Unexpected server error")

    return CompareResponse.from_domain(result)


@router.get(
    "/api/reverse",
    response_model=ReverseResponse,
    responses={
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
)
def reverse(
    geocoder: Annotated[GeocoderPort, Depends(get_geocoder)],
    lat: Annotated[Optional[float], Query(ge=-90, le=90)] = None,
    lon: Annotated[Optional[float], Query(ge=-180, le=180)] = None,
):
    """Turn the browser's coordinates into an address label."""
    if lat is None or lon is None:
        return _error(status.HTTP_400_BAD_REQUEST, "lat and lon required")

    try:
        address = geocoder.reverse(lat, lon)
    except GeocodingError as e:
        if e.is_transport_error:
            return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "reverse error")
        return _error(status.HTTP_502_BAD_GATEWAY, "lookup failed")
    except Exception:
        logger.exception("Unexpected error in reverse geocoding")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "reverse error")

    return ReverseResponse(address=address or f"{lat},{lon}")


@router.get("/api/visits", response_model=VisitsResponse)
def read_visits(counter: Annotated[VisitCounter, Depends(get_visit_counter)]):
    """Current visit total; does not count as a visit."""
    return VisitsResponse(visits=counter.count)


@router.post("/api/visits", response_model=VisitsResponse)
def record_visit(counter: Annotated[VisitCounter, Depends(get_visit_counter)]):
    return VisitsResponse(visits=counter.increment())


@router.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
