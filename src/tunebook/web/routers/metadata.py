"""Metadata endpoints for exposing system information."""

from fastapi import APIRouter, Depends

from tunebook.web.deps import AppDep, require_user
from tunebook.web.openapi import ErrorResponse

router = APIRouter(tags=["metadata"])


@router.get(
    "/metadata/version",
    summary="Get version information",
    description="Returns the package version, git commit hash and build time.",
    operation_id="getVersion",
    dependencies=[Depends(require_user)],
    responses={
        200: {"description": "Version and build information"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def get_version(app: AppDep) -> dict[str, str]:
    """Get version information."""
    return app.get_version()
