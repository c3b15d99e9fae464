# backend/customer_service/app/store.py

import threading
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional

from fastapi import Request

from .errors import CustomerNotFoundError, DuplicateEmailError, MissingFieldsError
from .models import Customer
from .schemas import CustomerCreate, CustomerUpdate

REQUIRED_FIELDS = ("name", "email")
UPDATABLE_FIELDS = ("name", "email", "phone", "address", "company", "status")
NON_BLANK_FIELDS = ("name", "email", "status")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CustomerStore:
    """
    In-memory customer records, keyed by id in insertion order.

    Every public method runs under a single lock so the email uniqueness
    check and the write that follows it are atomic. Records handed back to
    callers are copies; mutating them never touches the store.
    """

    def __init__(
        self,
        id_prefix: str = "CUST",
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.id_prefix = id_prefix
        self._clock = clock or utcnow
        self._lock = threading.Lock()
        self._customers: Dict[str, Customer] = {}
        self._ids_by_email: Dict[str, str] = {}
        self._counter = 1

    def __len__(self) -> int:
        with self._lock:
            return len(self._customers)

    def _next_id(self, now: datetime) -> str:
        millis = int(now.timestamp() * 1000)
        customer_id = f"{self.id_prefix}-{millis}-{self._counter}"
        self._counter += 1
        return customer_id

    def _lookup(self, customer_id: str) -> Customer:
        customer = self._customers.get(customer_id)
        if customer is None:
            raise CustomerNotFoundError(customer_id)
        return customer

    def list_all(self) -> List[Customer]:
        with self._lock:
            return [customer.model_copy() for customer in self._customers.values()]

    def get(self, customer_id: str) -> Customer:
        with self._lock:
            return self._lookup(customer_id).model_copy()

    def create(self, payload: CustomerCreate) -> Customer:
        if any(not getattr(payload, field) for field in REQUIRED_FIELDS):
            raise MissingFieldsError()

        with self._lock:
            existing_id = self._ids_by_email.get(payload.email)
            if existing_id is not None:
                raise DuplicateEmailError(existing_id)

            now = self._clock()
            customer = Customer(
                id=self._next_id(now),
                name=payload.name,
                email=payload.email,
                phone=payload.phone,
                address=payload.address,
                company=payload.company,
                status="active",
                created_at=now,
                updated_at=now,
            )
            self._customers[customer.id] = customer
            self._ids_by_email[customer.email] = customer.id
            return customer.model_copy()

    def update(self, customer_id: str, payload: CustomerUpdate) -> Customer:
        changes = {
            key: value
            for key, value in payload.model_dump(exclude_unset=True).items()
            if key in UPDATABLE_FIELDS
        }

        with self._lock:
            current = self._lookup(customer_id)

            if any(field in changes and not changes[field] for field in NON_BLANK_FIELDS):
                raise MissingFieldsError("Fields name, email and status cannot be empty")

            new_email = changes.get("email")
            if new_email is not None and new_email != current.email:
                existing_id = self._ids_by_email.get(new_email)
                if existing_id is not None and existing_id != customer_id:
                    raise DuplicateEmailError(
                        existing_id, "Another customer with this email already exists"
                    )

            changes["updated_at"] = max(self._clock(), current.updated_at)
            updated = current.model_copy(update=changes)

            # dict assignment to an existing key keeps its insertion position
            self._customers[customer_id] = updated
            if updated.email != current.email:
                del self._ids_by_email[current.email]
                self._ids_by_email[updated.email] = customer_id
            return updated.model_copy()

    def delete(self, customer_id: str) -> Customer:
        with self._lock:
            customer = self._lookup(customer_id)
            del self._customers[customer_id]
            del self._ids_by_email[customer.email]
            return customer

    def list_by_status(self, status: str) -> List[Customer]:
        with self._lock:
            return [
                customer.model_copy()
                for customer in self._customers.values()
                if customer.status == status
            ]

    def search(self, query: str) -> List[Customer]:
        needle = query.lower()
        with self._lock:
            return [
                customer.model_copy()
                for customer in self._customers.values()
                if needle in customer.name.lower()
                or needle in customer.email.lower()
                or (customer.company is not None and needle in customer.company.lower())
            ]

    def clear(self) -> None:
        with self._lock:
            self._customers.clear()
            self._ids_by_email.clear()


def get_store(request: Request) -> CustomerStore:
    return request.app.state.store
