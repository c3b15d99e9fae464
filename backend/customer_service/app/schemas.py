# backend/customer_service/app/schemas.py

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .models import Customer

OPTIONAL_FIELDS = ("phone", "address", "company")


def _blank_to_none(value):
    if isinstance(value, str) and value == "":
        return None
    return value


class CustomerCreate(BaseModel):
    # name/email presence is enforced by the store so a missing field
    # surfaces as a 400 with the API's own message.
    name: Optional[str] = Field(None, description="Full name of the customer.")
    email: Optional[str] = Field(None, description="Unique email address of the customer.")
    phone: Optional[str] = Field(None, description="Customer's phone number.")
    address: Optional[str] = Field(None, description="Customer's postal address.")
    company: Optional[str] = Field(None, description="Company the customer belongs to.")

    normalize_optional = field_validator(*OPTIONAL_FIELDS, mode="before")(_blank_to_none)


# Schema for updating an existing Customer (all fields optional for partial update).
# Keys outside this allow-list (id, createdAt, updatedAt, ...) are dropped.
class CustomerUpdate(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = Field(None, description="Full name of the customer.")
    email: Optional[str] = Field(None, description="Unique email address of the customer.")
    phone: Optional[str] = Field(None, description="Customer's phone number.")
    address: Optional[str] = Field(None, description="Customer's postal address.")
    company: Optional[str] = Field(None, description="Company the customer belongs to.")
    status: Optional[str] = Field(None, description="Free-form lifecycle status.")

    normalize_optional = field_validator(*OPTIONAL_FIELDS, mode="before")(_blank_to_none)


# --- Response envelopes ---
class CustomerDetailResponse(BaseModel):
    success: bool = True
    customer: Customer


class CustomerMutationResponse(BaseModel):
    success: bool = True
    message: str
    customer: Customer


class CustomerListResponse(BaseModel):
    success: bool = True
    count: int
    data: List[Customer]


class CustomerStatusResponse(CustomerListResponse):
    status: str


class CustomerSearchResponse(CustomerListResponse):
    query: str
