import uuid
from typing import Optional
from datetime import date, datetime

from pydantic import BaseModel, Field, model_validator, ConfigDict

from .enums import ValidityStatus
from .client import ClientSimple

# --- Schema Base ---
class CertificateBase(BaseModel):
    """Campos de um certificado de calibração. O status nunca vem do cliente."""
    certificate_number: str = Field(..., min_length=1, max_length=100)
    client_id: uuid.UUID
    equipment_name: str = Field(..., max_length=255)
    serial_number: Optional[str] = Field(None, max_length=100)
    calibration_date: date
    expiration_date: Optional[date] = None
    technician_id: Optional[uuid.UUID] = None
    temperature: Optional[float] = None
    humidity: Optional[float] = Field(None, ge=0, le=100)
    observations: Optional[str] = None

    @model_validator(mode='after')
    def check_dates(self) -> 'CertificateBase':
        if self.expiration_date is not None and self.expiration_date < self.calibration_date:
            raise ValueError("A data de vencimento não pode ser anterior à data de calibração.")
        return self

class CertificateCreate(CertificateBase):
    pass

class CertificateUpdate(BaseModel):
    certificate_number: Optional[str] = Field(None, min_length=1, max_length=100)
    client_id: Optional[uuid.UUID] = None
    equipment_name: Optional[str] = Field(None, max_length=255)
    serial_number: Optional[str] = Field(None, max_length=100)
    calibration_date: Optional[date] = None
    expiration_date: Optional[date] = None
    technician_id: Optional[uuid.UUID] = None
    temperature: Optional[float] = None
    humidity: Optional[float] = Field(None, ge=0, le=100)
    observations: Optional[str] = None

class Certificate(BaseModel):
    id: uuid.UUID
    certificate_number: str
    client_id: uuid.UUID
    client: Optional[ClientSimple] = None
    equipment_name: str
    serial_number: Optional[str] = None
    calibration_date: date
    expiration_date: Optional[date] = None
    status: ValidityStatus
    technician_id: Optional[uuid.UUID] = None
    temperature: Optional[float] = None
    humidity: Optional[float] = None
    observations: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
