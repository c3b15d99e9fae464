# backend/customer_service/app/config.py

import os

PORT = int(os.getenv("PORT", "3001"))
HOST = os.getenv("HOST", "0.0.0.0")

# Set to "/api" to serve the customer routes under /api/customers
API_PREFIX = os.getenv("API_PREFIX", "").rstrip("/")

CUSTOMER_ID_PREFIX = os.getenv("CUSTOMER_ID_PREFIX", "CUST")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "*").split(",")
    if origin.strip()
]
