# backend/customer_service/app/models.py

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Customer(BaseModel):
    """A stored customer record. Serialized with camelCase timestamp keys."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., description="Server-generated identifier, e.g. CUST-<millis>-<n>.")
    name: str = Field(..., min_length=1, description="Full name of the customer.")
    email: str = Field(..., min_length=1, description="Unique email address of the customer.")
    phone: Optional[str] = Field(None, description="Customer's phone number.")
    address: Optional[str] = Field(None, description="Customer's postal address.")
    company: Optional[str] = Field(None, description="Company the customer belongs to.")
    status: str = Field("active", min_length=1, description="Free-form lifecycle status.")
    created_at: datetime = Field(
        ..., alias="createdAt", description="Timestamp of when the record was created."
    )
    updated_at: datetime = Field(
        ..., alias="updatedAt", description="Timestamp of the last update to the record."
    )

    def __repr__(self):
        return f"<Customer(id={self.id}, email='{self.email}', name='{self.name}', status='{self.status}')>"
