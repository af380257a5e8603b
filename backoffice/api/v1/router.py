"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from backoffice.api.v1.dependencies.
"""

from fastapi import APIRouter

from backoffice.api.v1.endpoints import accounts, approval_requests, health, records

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(
    approval_requests.router, prefix="/approval-requests", tags=["approval-requests"]
)
api_router.include_router(records.router, prefix="/records", tags=["records"])
api_router.include_router(accounts.router, prefix="/accounts", tags=["accounts"])
