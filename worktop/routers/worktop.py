"""
Worktop quoting API.

POST /api/worktop/validate       Validate one configuration against its material
POST /api/worktop/quote          Price a list of configurations
POST /api/worktop/configuration  Convert flat form fields into a Configuration
GET  /api/worktop/fees           Default fee schedule from settings

The engine is pure; these handlers only translate between HTTP and it.
"""

import logging

from fastapi import APIRouter, HTTPException

from .. import schemas
from ..config import settings
from ..form_fields import configuration_from_fields
from ..models import Configuration, FeeSchedule, Quote
from ..pricing_engine import compute_quote
from ..validator import is_complete, validate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/worktop", tags=["worktop"])


@router.get("/fees", response_model=FeeSchedule)
def get_default_fees():
    return settings.default_fee_schedule()


@router.post("/validate", response_model=schemas.ValidateResponse)
def validate_configuration(request: schemas.ValidateRequest):
    result = validate(request.configuration, request.material)
    return schemas.ValidateResponse(
        ok=result.ok,
        complete=is_complete(request.configuration, request.material),
        failures=result.failures,
    )


@router.post("/quote", response_model=Quote)
def create_quote(request: schemas.QuoteRequest):
    """
    Price every configuration. All configurations must validate first;
    otherwise nothing is priced and the failures are returned as 422.
    """
    materials = {m.id: m for m in request.materials}

    rejected = []
    for index, configuration in enumerate(request.configurations):
        result = validate(configuration, materials.get(configuration.material_id))
        if not result.ok:
            rejected.append(schemas.ConfigurationFailures(config_index=index, failures=result.failures))
    if rejected:
        logger.info("Quote request rejected: %d invalid configuration(s)", len(rejected))
        raise HTTPException(
            status_code=422,
            detail={
                "message": "One or more configurations are not producible",
                "configurations": [r.model_dump() for r in rejected],
            },
        )

    fee_schedule = request.fee_schedule or settings.default_fee_schedule()
    try:
        return compute_quote(request.configurations, materials, fee_schedule, request.discount_percent)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/configuration", response_model=Configuration)
def parse_configuration(request: schemas.FormFieldsRequest):
    try:
        return configuration_from_fields(request.fields)
    except ValueError as e:
        # pydantic.ValidationError is a ValueError too
        raise HTTPException(status_code=400, detail=str(e))
