# backend/customer_service/app/main.py

import logging
import sys
from typing import Optional

import uvicorn
from fastapi import APIRouter, Depends, FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import config
from .errors import CustomerStoreError
from .schemas import (
    CustomerCreate,
    CustomerDetailResponse,
    CustomerListResponse,
    CustomerMutationResponse,
    CustomerSearchResponse,
    CustomerStatusResponse,
    CustomerUpdate,
)
from .store import CustomerStore, get_store

# --- Standard Logging Configuration ---
logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)

# Suppress noisy logs from third-party libraries for cleaner output
logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
logging.getLogger("uvicorn.error").setLevel(logging.INFO)

CUSTOMERS_PATH = f"{config.API_PREFIX}/customers"

AVAILABLE_ENDPOINTS = [
    f"GET {CUSTOMERS_PATH}",
    f"GET {CUSTOMERS_PATH}/:id",
    f"POST {CUSTOMERS_PATH}",
    f"PUT {CUSTOMERS_PATH}/:id",
    f"DELETE {CUSTOMERS_PATH}/:id",
    f"GET {CUSTOMERS_PATH}/status/:status",
    f"GET {CUSTOMERS_PATH}/search/:query",
]

# --- FastAPI Application Setup ---
app = FastAPI(
    title="Customer Management API",
    description="In-memory CRUD service for customer records.",
    version="1.0.0",
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    logger.info(f"Customer Service: {request.method} {request.url.path}")
    return await call_next(request)


# --- FastAPI Event Handlers ---
@app.on_event("startup")
async def startup_event():
    app.state.store = CustomerStore(id_prefix=config.CUSTOMER_ID_PREFIX)
    logger.info("Customer Service: In-memory customer store initialized.")
    for endpoint in AVAILABLE_ENDPOINTS:
        logger.info(f"Customer Service: Serving {endpoint}")


@app.on_event("shutdown")
async def shutdown_event():
    store = getattr(app.state, "store", None)
    if store is not None:
        logger.info(
            f"Customer Service: Shutting down, discarding {len(store)} customers."
        )
        store.clear()


# --- Exception Handlers ---
@app.exception_handler(CustomerStoreError)
async def customer_store_error_handler(request: Request, exc: CustomerStoreError):
    logger.warning(
        f"Customer Service: {request.method} {request.url.path} failed: {exc.message}"
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
):
    logger.warning(
        f"Customer Service: Invalid request body for {request.method} {request.url.path}"
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "success": False,
            "message": "Invalid request body",
            "errors": jsonable_encoder(exc.errors()),
        },
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={
                "success": False,
                "message": "Endpoint not found",
                "availableEndpoints": AVAILABLE_ENDPOINTS,
            },
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": str(exc.detail)},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(f"Customer Service: Server error: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "success": False,
            "message": "Internal server error",
            "error": str(exc),
        },
    )


# --- Root Endpoint ---
@app.get("/", status_code=status.HTTP_200_OK, summary="Root endpoint")
async def read_root():
    return {
        "message": "Welcome to Customer Management API",
        "version": app.version,
        "endpoints": {
            f"GET {CUSTOMERS_PATH}": "Get all customers",
            f"GET {CUSTOMERS_PATH}/:id": "Get specific customer",
            f"POST {CUSTOMERS_PATH}": "Create new customer",
            f"PUT {CUSTOMERS_PATH}/:id": "Update customer",
            f"DELETE {CUSTOMERS_PATH}/:id": "Delete customer",
            f"GET {CUSTOMERS_PATH}/status/:status": "Get customers by status",
            f"GET {CUSTOMERS_PATH}/search/:query": "Search customers by name, email or company",
        },
    }


# --- Health Check Endpoint ---
@app.get("/health", status_code=status.HTTP_200_OK, summary="Health check endpoint")
def health_check(store: CustomerStore = Depends(get_store)):
    return {"status": "ok", "service": "customer-service", "customers": len(store)}


# --- CRUD Endpoints for Customers ---
router = APIRouter(prefix=CUSTOMERS_PATH, tags=["customers"])


@router.get(
    "",
    response_model=CustomerListResponse,
    summary="Retrieve a list of all customers",
)
def list_customers(store: CustomerStore = Depends(get_store)):
    customers = store.list_all()
    logger.info(f"Customer Service: Returning all {len(customers)} customers.")
    return CustomerListResponse(count=len(customers), data=customers)


@router.get(
    "/status/{customer_status:path}",
    response_model=CustomerStatusResponse,
    summary="Retrieve customers with an exact status",
)
def list_customers_by_status(
    customer_status: str, store: CustomerStore = Depends(get_store)
):
    customers = store.list_by_status(customer_status)
    logger.info(
        f"Customer Service: Returning {len(customers)} customers with status: {customer_status}"
    )
    return CustomerStatusResponse(
        count=len(customers), status=customer_status, data=customers
    )


@router.get(
    "/search/{query:path}",
    response_model=CustomerSearchResponse,
    summary="Search customers by name, email or company",
)
def search_customers(query: str, store: CustomerStore = Depends(get_store)):
    """
    Case-insensitive substring match against name, email and company.
    """
    customers = store.search(query)
    logger.info(
        f"Customer Service: Search for '{query}' matched {len(customers)} customers."
    )
    return CustomerSearchResponse(count=len(customers), query=query, data=customers)


@router.get(
    "/{customer_id}",
    response_model=CustomerDetailResponse,
    summary="Retrieve a single customer by ID",
)
def get_customer(customer_id: str, store: CustomerStore = Depends(get_store)):
    customer = store.get(customer_id)
    logger.info(f"Customer Service: Customer found: {customer.id}")
    return CustomerDetailResponse(customer=customer)


@router.post(
    "",
    response_model=CustomerMutationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new customer",
)
def create_customer(
    payload: Optional[CustomerCreate] = None,
    store: CustomerStore = Depends(get_store),
):
    customer = store.create(payload or CustomerCreate())
    logger.info(
        f"Customer Service: Customer created: {customer.id} "
        f"(name: {customer.name}, email: {customer.email}, phone: {customer.phone or 'Not provided'})"
    )
    return CustomerMutationResponse(
        message="Customer created successfully", customer=customer
    )


@router.put(
    "/{customer_id}",
    response_model=CustomerMutationResponse,
    summary="Update an existing customer by ID",
)
def update_customer(
    customer_id: str,
    payload: Optional[CustomerUpdate] = None,
    store: CustomerStore = Depends(get_store),
):
    """
    Updates an existing customer's details. Only provided fields will be updated;
    id and timestamps supplied in the body are ignored.
    """
    customer = store.update(customer_id, payload or CustomerUpdate())
    logger.info(
        f"Customer Service: Customer updated: {customer.id} "
        f"(name: {customer.name}, email: {customer.email})"
    )
    return CustomerMutationResponse(
        message="Customer updated successfully", customer=customer
    )


@router.delete(
    "/{customer_id}",
    response_model=CustomerMutationResponse,
    summary="Delete a customer by ID",
)
def delete_customer(customer_id: str, store: CustomerStore = Depends(get_store)):
    customer = store.delete(customer_id)
    logger.info(
        f"Customer Service: Customer deleted: {customer.id} "
        f"(name: {customer.name}, email: {customer.email})"
    )
    return CustomerMutationResponse(
        message="Customer deleted successfully", customer=customer
    )


app.include_router(router)


def run():
    uvicorn.run("app.main:app", host=config.HOST, port=config.PORT)
