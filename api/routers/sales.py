"""
Sales API Endpoints.

Endpoints for validating proposed sales against platform scheduling rules
(date overlap and cooldown).
"""

import logging
from uuid import UUID

from fastapi import APIRouter, HTTPException

from api.models import (
    MultiPlatformValidationRequest,
    MultiPlatformValidationResponse,
    SaleEditRequest,
    SaleValidationRequest,
    SaleValidationResponse,
)
from domain.dates import to_local_date
from domain.errors import InvalidRange, MalformedDate, PlatformNotFound, SaleNotFound
from domain.sale import SalePatch
from services.sale_validation_service import (
    ValidationRequest,
    revalidate_sale_edit,
    validate_on_platforms,
    validate_proposed_sale,
)
from services.verdict_formatter import ValidationSummary

logger = logging.getLogger(__name__)

router = APIRouter()


def _to_response(summary: ValidationSummary) -> SaleValidationResponse:
    return SaleValidationResponse.model_validate(summary.to_payload())


def _to_service_request(request: SaleValidationRequest) -> ValidationRequest:
    return ValidationRequest(
        product_id=request.product_id,
        platform_id=request.platform_id,
        start_date=request.start_date,
        end_date=request.end_date,
        sale_type=request.sale_type,
        exclude_sale_id=request.exclude_sale_id,
    )


@router.post(
    "/sales/validate",
    response_model=SaleValidationResponse,
    summary="Validate Proposed Sale",
    description="Check a proposed sale for date overlaps and platform cooldown violations."
)
def validate_sale_endpoint(request: SaleValidationRequest):
    """
    Validate a proposed sale for a product on a platform.

    **Checks:**
    1. Direct overlap with any existing sale of the same product on the same
       platform (sharing even one day is a conflict)
    2. Starting inside another sale's cooldown, or another sale starting inside
       this sale's cooldown
    3. Seasonal/special sales skip cooldown on platforms that waive it

    Rejected and cancelled sales are ignored. Pass `excludeSaleId` when
    re-validating an edited sale.

    **Example request:**
    ```json
    {
      "productId": "123e4567-e89b-12d3-a456-426614174000",
      "platformId": "123e4567-e89b-12d3-a456-426614174001",
      "startDate": "2026-03-10",
      "endDate": "2026-03-17"
    }
    ```
    """
    try:
        summary = validate_proposed_sale(_to_service_request(request))
        return _to_response(summary)

    except (MalformedDate, InvalidRange) as e:
        raise HTTPException(status_code=400, detail=str(e))
    except PlatformNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Sale validation failed")
        raise HTTPException(
            status_code=500,
            detail=f"Failed to validate sale: {str(e)}"
        )


@router.post(
    "/sales/validate/platforms",
    response_model=MultiPlatformValidationResponse,
    summary="Validate Sale On Multiple Platforms",
    description="Check the same proposed sale on several platforms at once."
)
def validate_sale_on_platforms_endpoint(request: MultiPlatformValidationRequest):
    """
    Validate one sale (same dates and type) on each requested platform.

    Used when duplicating a sale to other storefronts. Each platform is checked
    with its own cooldown rules against the product's sales on that platform.
    """
    try:
        service_request = ValidationRequest(
            product_id=request.product_id,
            platform_id=request.platform_ids[0],
            start_date=request.start_date,
            end_date=request.end_date,
            sale_type=request.sale_type,
            exclude_sale_id=request.exclude_sale_id,
        )
        summaries = validate_on_platforms(service_request, request.platform_ids)

        results = {
            platform_id: _to_response(summary)
            for platform_id, summary in summaries.items()
        }
        return MultiPlatformValidationResponse(
            all_valid=all(summary.valid for summary in summaries.values()),
            results=results,
        )

    except (MalformedDate, InvalidRange) as e:
        raise HTTPException(status_code=400, detail=str(e))
    except PlatformNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Multi-platform sale validation failed")
        raise HTTPException(
            status_code=500,
            detail=f"Failed to validate sale: {str(e)}"
        )


@router.post(
    "/sales/{sale_id}/validate-edit",
    response_model=SaleValidationResponse,
    summary="Validate Sale Edit",
    description="Check an edit to an existing sale before saving it."
)
def validate_sale_edit_endpoint(sale_id: UUID, request: SaleEditRequest):
    """
    Apply the requested changes to the stored sale and validate the result.

    The sale is never reported as conflicting with itself.
    """
    try:
        patch = SalePatch(
            start_date=to_local_date(request.start_date) if request.start_date else None,
            end_date=to_local_date(request.end_date) if request.end_date else None,
            sale_type=request.sale_type,
            status=request.status,
            discount_percentage=request.discount_percentage,
            sale_name=request.sale_name,
            goal_type=request.goal_type,
            notes=request.notes,
        )
        summary = revalidate_sale_edit(sale_id, patch)
        return _to_response(summary)

    except (MalformedDate, InvalidRange) as e:
        raise HTTPException(status_code=400, detail=str(e))
    except (PlatformNotFound, SaleNotFound) as e:
        raise HTTPException(status_code=404, detail=str(e))
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Sale edit validation failed")
        raise HTTPException(
            status_code=500,
            detail=f"Failed to validate sale edit: {str(e)}"
        )
