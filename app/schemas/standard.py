import uuid
from typing import Optional
from datetime import date, datetime

from pydantic import BaseModel, Field, ConfigDict

from .enums import ValidityStatus


class StandardBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    identification: Optional[str] = Field(None, max_length=100)
    serial_number: Optional[str] = Field(None, max_length=100)
    type: Optional[str] = Field(None, max_length=100)
    calibration_date: Optional[date] = None
    expiration_date: Optional[date] = None
    observations: Optional[str] = None

class StandardCreate(StandardBase):
    pass

class StandardUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    identification: Optional[str] = Field(None, max_length=100)
    serial_number: Optional[str] = Field(None, max_length=100)
    type: Optional[str] = Field(None, max_length=100)
    calibration_date: Optional[date] = None
    expiration_date: Optional[date] = None
    observations: Optional[str] = None

class Standard(StandardBase):
    id: uuid.UUID
    status: ValidityStatus
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
