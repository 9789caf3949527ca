"""API v1 Router Aggregator.

Aggregates all v1 API endpoints into a single router.
"""

from fastapi import APIRouter

from formspace.api.v1.endpoints import auth, elements, folders, forms, health, responses, users, workspaces

api_router = APIRouter()

# Mount endpoint routers
api_router.include_router(health.router, prefix="/health", tags=["Health"])
api_router.include_router(auth.router, prefix="/auth", tags=["Auth"])
api_router.include_router(users.router, prefix="/users", tags=["Users"])
api_router.include_router(workspaces.router, prefix="/workspaces", tags=["Workspaces"])
api_router.include_router(folders.router, prefix="/workspaces/{workspace_id}/folders", tags=["Folders"])
api_router.include_router(forms.router, prefix="/workspaces/{workspace_id}/forms", tags=["Forms"])
api_router.include_router(elements.router, prefix="/forms", tags=["Elements"])
api_router.include_router(responses.router, prefix="/forms", tags=["Responses"])
