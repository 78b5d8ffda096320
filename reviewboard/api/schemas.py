"""Response schemas for the dashboard API."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class TrendPointOut(BaseModel):
    date: str = Field(..., description="Month key (YYYY-MM)")
    ratingAvg: Optional[float] = None


class ListingBundleOut(BaseModel):
    listingId: str = Field(..., description="Slug of the listing name")
    listingName: str
    ratingAvg: Optional[float] = Field(None, description="Average rating (1-5)")
    categoryAverages: Dict[str, float] = Field(default_factory=dict)
    channelStats: Dict[str, int] = Field(default_factory=dict)
    reviews: List[Dict[str, Any]] = Field(default_factory=list)
    trend: List[TrendPointOut] = Field(default_factory=list)


class TotalsOut(BaseModel):
    reviewCount: int
    listingCount: int


class ListingsResponse(BaseModel):
    listings: List[ListingBundleOut] = Field(default_factory=list)
    totals: TotalsOut
    filters: Dict[str, Any] = Field(default_factory=dict, description="Filters that were applied")


class ApprovalResponse(BaseModel):
    success: bool
    approved: bool


class DeleteResponse(BaseModel):
    success: bool

