from pydantic import BaseModel, Field
from typing import Optional
from datetime import date

PESEL_EXAMPLE = 99123100000

# --- Driver Schemas ---

class DriverBase(BaseModel):
    name: Optional[str] = Field(None, max_length=100)
    surname: Optional[str] = Field(None, max_length=100)
    birth_date: Optional[date] = None
    phone_number: Optional[str] = Field(None, max_length=20)
    email: Optional[str] = Field(None, max_length=100)
    address: Optional[str] = Field(None, max_length=255)
    license_number: Optional[str] = Field(None, max_length=50)
    license_expiry: Optional[date] = None

class DriverCreate(DriverBase):
    """Schema for creating new Driver. The id is the driver's PESEL number."""
    id: int = Field(..., examples=[PESEL_EXAMPLE])

class DriverUpdate(DriverBase):
    """
    Schema for updating Driver.
    Only the new values need to be given, the rest is kept as stored.
    The id is accepted but never applied.
    """
    id: Optional[int] = Field(None, examples=[PESEL_EXAMPLE])

class DriverRead(DriverBase):
    """Schema for reading Driver data."""
    id: int

    class Config:
        from_attributes = True
