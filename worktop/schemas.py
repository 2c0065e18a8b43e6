from pydantic import BaseModel, Field
from typing import Optional, List
from .models import Configuration, FeeSchedule, Material, ValidationFailure


class ValidateRequest(BaseModel):
    configuration: Configuration
    material: Optional[Material] = None


class ValidateResponse(BaseModel):
    ok: bool
    complete: bool
    failures: List[ValidationFailure] = []


class QuoteRequest(BaseModel):
    configurations: List[Configuration]
    materials: List[Material] = []
    fee_schedule: Optional[FeeSchedule] = None  # settings default when omitted
    discount_percent: float = Field(0.0, ge=0, le=100)


class ConfigurationFailures(BaseModel):
    config_index: int
    failures: List[ValidationFailure]


class FormFieldsRequest(BaseModel):
    fields: dict
