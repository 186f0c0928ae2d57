"""Lead capture endpoints."""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, status
from fastapi.responses import JSONResponse

from haloride.core.errors import LeadValidationError
from haloride.schemas.lead import LeadCreatedResponse, LeadListResponse
from haloride.services.lead_service import LeadService
from haloride.services.lead_store import LeadStore, get_lead_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/leads", tags=["leads"])


def validation_error_response(errors: dict[str, str]) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": "Validation error", "errors": errors},
    )


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=LeadCreatedResponse,
    response_model_exclude_none=True,
)
async def create_lead(payload: dict[str, Any] = Body(...), store: LeadStore = Depends(get_lead_store)):
    try:
        lead = LeadService(store).submit_lead(payload)
    except LeadValidationError as exc:
        logger.info("Lead rejected: %s", exc.errors)
        return validation_error_response(exc.errors)
    except Exception:
        logger.exception("Failed to create lead")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "An error occurred while creating the lead"},
        )
    logger.info("Lead %s created", lead.id)
    return {"message": "Lead created successfully", "data": lead}


# Unauthenticated and unpaginated; meant for low-volume inspection only.
@router.get("", response_model=LeadListResponse, response_model_exclude_none=True)
async def list_leads(store: LeadStore = Depends(get_lead_store)):
    try:
        leads = LeadService(store).list_leads()
    except Exception:
        logger.exception("Failed to list leads")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "An error occurred while fetching leads"},
        )
    return {"data": leads}
