"""Request and response models of the HTTP API.

JSON field names are camelCase; Python attributes stay snake_case.
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..domain.models import (
    ComparisonRequest,
    ComparisonResult,
    CoordinateInput,
    FareQuote,
    ResolvedPoint,
    SortOrder,
)


class Coordinate(BaseModel):
    """A latitude/longitude pair sent by the client."""

    lat: float = Field(ge=-90, le=90, allow_inf_nan=False)
    lon: float = Field(ge=-180, le=180, allow_inf_nan=False)

    def to_domain(self) -> CoordinateInput:
        return CoordinateInput(latitude=self.lat, longitude=self.lon)


class CompareRequest(BaseModel):
    """Body of ``POST /api/compare``."""

    model_config = ConfigDict(populate_by_name=True)

    from_: Optional[str] = Field(default=None, alias="from")
    to: Optional[str] = None
    from_coord: Optional[Coordinate] = Field(default=None, alias="fromCoord")
    to_coord: Optional[Coordinate] = Field(default=None, alias="toCoord")
    sort_by: Literal["price", "eta"] = Field(default="price", alias="sortBy")

    def to_domain(self) -> ComparisonRequest:
        return ComparisonRequest(
            pickup_text=self.from_,
            dropoff_text=self.to,
            pickup_coordinates=self.from_coord.to_domain() if self.from_coord else None,
            dropoff_coordinates=self.to_coord.to_domain() if self.to_coord else None,
            sort_order=SortOrder(self.sort_by),
        )


class PointOut(BaseModel):
    latitude: float
    longitude: float
    label: str

    @classmethod
    def from_domain(cls, point: ResolvedPoint) -> PointOut:
        return cls(latitude=point.latitude, longitude=point.longitude, label=point.label)


class QuoteOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    provider: str
    estimate_usd: float = Field(alias="estimateUsd")
    eta_minutes: int = Field(alias="etaMinutes")
    deep_link: str = Field(alias="deepLink")
    web_link: str = Field(alias="webLink")

    @classmethod
    def from_domain(cls, quote: FareQuote) -> QuoteOut:
        return cls(
            provider=quote.provider,
            estimate_usd=quote.estimate_usd,
            eta_minutes=quote.eta_minutes,
            deep_link=quote.deep_link,
            web_link=quote.web_link,
        )


class CompareResponse(BaseModel):
    """Body of a successful ``POST /api/compare``."""

    model_config = ConfigDict(populate_by_name=True)

    from_: PointOut = Field(alias="from")
    to: PointOut
    distance_km: float = Field(alias="distanceKm")
    currency: str
    results: list[QuoteOut]

    @classmethod
    def from_domain(cls, result: ComparisonResult) -> CompareResponse:
        return cls(
            from_=PointOut.from_domain(result.origin),
            to=PointOut.from_domain(result.destination),
            distance_km=result.distance_km,
            currency=result.currency,
            results=[QuoteOut.from_domain(q) for q in result.results],
        )


class ReverseResponse(BaseModel):
    address: str


class VisitsResponse(BaseModel):
    visits: int


class ErrorResponse(BaseModel):
    error: str
