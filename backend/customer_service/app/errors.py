# backend/customer_service/app/errors.py

from typing import Any, Dict, Optional


class CustomerStoreError(Exception):
    """Base class for failures raised by the customer store."""

    status_code = 500
    message = "Customer store error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.message
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {"success": False, "message": self.message}


class MissingFieldsError(CustomerStoreError):
    status_code = 400
    message = "Missing required fields: name and email"


class DuplicateEmailError(CustomerStoreError):
    status_code = 409
    message = "Customer with this email already exists"

    def __init__(self, existing_id: str, message: Optional[str] = None):
        self.existing_id = existing_id
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        body = super().to_dict()
        body["existingCustomerId"] = self.existing_id
        return body


class CustomerNotFoundError(CustomerStoreError):
    status_code = 404
    message = "Customer not found"

    def __init__(self, customer_id: str):
        self.customer_id = customer_id
        super().__init__()

    def to_dict(self) -> Dict[str, Any]:
        body = super().to_dict()
        body["requestedId"] = self.customer_id
        return body
