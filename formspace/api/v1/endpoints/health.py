"""Health check API endpoint."""

from fastapi import APIRouter

from formspace.db.database import check_connection

router = APIRouter(tags=["Health"])


@router.get("")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "database": "ok" if check_connection() else "unavailable"}
