"""
API Request and Response Models.

Pydantic models for validating API requests and serializing responses.
JSON keys are camelCase (productId, cooldownEnd, ...); conflicting sales are
returned the way they are stored (snake_case).
"""

from datetime import date
from typing import Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from domain.sale import SaleStatus


# ============================================================================
# Validation Request Models
# ============================================================================

class SaleValidationRequest(BaseModel):
    """Request to validate a proposed sale."""
    product_id: UUID = Field(..., alias="productId")
    platform_id: UUID = Field(..., alias="platformId")
    start_date: str = Field(
        ...,
        alias="startDate",
        description="YYYY-MM-DD; any time suffix is ignored"
    )
    end_date: str = Field(
        ...,
        alias="endDate",
        description="YYYY-MM-DD, inclusive; any time suffix is ignored"
    )
    sale_type: Optional[str] = Field(None, alias="saleType")
    exclude_sale_id: Optional[UUID] = Field(
        None,
        alias="excludeSaleId",
        description="Sale being edited, excluded from the conflict check"
    )

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "productId": "123e4567-e89b-12d3-a456-426614174000",
                "platformId": "123e4567-e89b-12d3-a456-426614174001",
                "startDate": "2026-03-10",
                "endDate": "2026-03-17",
                "saleType": "regular"
            }
        }


class MultiPlatformValidationRequest(SaleValidationRequest):
    """Request to validate the same sale on several platforms."""
    platform_id: Optional[UUID] = Field(None, alias="platformId")
    platform_ids: List[UUID] = Field(
        ...,
        alias="platformIds",
        min_length=1,
        description="Platforms to validate the sale on"
    )

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "productId": "123e4567-e89b-12d3-a456-426614174000",
                "platformIds": [
                    "123e4567-e89b-12d3-a456-426614174001",
                    "123e4567-e89b-12d3-a456-426614174002"
                ],
                "startDate": "2026-03-10",
                "endDate": "2026-03-17"
            }
        }


class SaleEditRequest(BaseModel):
    """Proposed changes to an existing sale. Omitted fields are unchanged."""
    start_date: Optional[str] = Field(None, alias="startDate")
    end_date: Optional[str] = Field(None, alias="endDate")
    sale_type: Optional[str] = Field(None, alias="saleType")
    status: Optional[SaleStatus] = None
    discount_percentage: Optional[int] = Field(None, alias="discountPercentage", ge=0, le=100)
    sale_name: Optional[str] = Field(None, alias="saleName")
    goal_type: Optional[str] = Field(None, alias="goalType")
    notes: Optional[str] = None

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "startDate": "2026-03-12",
                "endDate": "2026-03-19"
            }
        }


# ============================================================================
# Validation Response Models
# ============================================================================

class ConflictingGame(BaseModel):
    name: str


class ConflictingProduct(BaseModel):
    name: str
    game: ConflictingGame


class ConflictingSale(BaseModel):
    """Existing sale that blocks the proposed one."""
    id: UUID
    product_id: UUID
    platform_id: UUID
    start_date: date
    end_date: date
    sale_type: Optional[str] = None
    sale_name: Optional[str] = None
    status: str
    product: Optional[ConflictingProduct] = None


class ConflictGroups(BaseModel):
    direct: List[ConflictingSale]
    cooldown: List[ConflictingSale]


class SaleValidationResponse(BaseModel):
    """Validation verdict for one proposed sale."""
    valid: bool
    conflicts: ConflictGroups
    cooldown_end: date = Field(..., alias="cooldownEnd")
    platform: str
    cooldown_days: int = Field(..., alias="cooldownDays")
    direct_count: int = Field(..., alias="directCount")
    cooldown_count: int = Field(..., alias="cooldownCount")
    message: Optional[str] = None
    sale_days: Optional[int] = Field(None, alias="saleDays")
    warning: Optional[str] = Field(
        None,
        description="Soft notice, e.g. the sale is longer than the platform recommends; never affects valid"
    )

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "valid": False,
                "conflicts": {"direct": [], "cooldown": []},
                "cooldownEnd": "2026-05-15",
                "platform": "Steam",
                "cooldownDays": 14,
                "directCount": 0,
                "cooldownCount": 1,
                "message": "Sale conflicts with 1 existing sale(s) or cooldown period(s)",
                "saleDays": 8,
                "warning": None
            }
        }


class MultiPlatformValidationResponse(BaseModel):
    """Validation verdicts keyed by platform ID."""
    all_valid: bool = Field(..., alias="allValid")
    results: Dict[UUID, SaleValidationResponse]

    class Config:
        populate_by_name = True


# ============================================================================
# Error Models
# ============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str
    detail: Optional[str] = None
    status_code: int

    class Config:
        json_schema_extra = {
            "example": {
                "error": "Invalid request",
                "detail": "End date 2026-03-01 is before start date 2026-03-10",
                "status_code": 400
            }
        }
