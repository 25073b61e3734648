"""
V1 API router - aggregates all v1 endpoints.
"""
from fastapi import APIRouter
from txguard.api.v1.endpoints import analyze_tx

api_router = APIRouter()

# Include all v1 endpoints
api_router.include_router(analyze_tx.router, tags=["Transaction Analysis"])
