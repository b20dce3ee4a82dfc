"""Public redirect routes."""

from datetime import datetime, timezone

from fastapi import APIRouter, Request, Response, status
from fastapi.responses import JSONResponse, RedirectResponse

from ...lib.errors import InvalidInput
from ..api.schemas import HealthResponse

router = APIRouter()


@router.get("/favicon.ico", include_in_schema=False)
async def favicon():
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/health", response_model=HealthResponse, summary="Health check")
async def health_check(request: Request):
    """Health check endpoint for load balancers and monitoring."""
    registry = request.app.state.registry

    health = await registry.health_check()

    body = HealthResponse(
        status="healthy" if health["overall"] else "unhealthy",
        database="healthy" if health["database"] else "unhealthy",
        cache="healthy" if health["cache"] else "unhealthy",
        timestamp=datetime.now(timezone.utc),
    )
    return JSONResponse(
        content=body.model_dump(mode="json"),
        status_code=status.HTTP_200_OK if health["overall"] else status.HTTP_503_SERVICE_UNAVAILABLE,
    )


@router.get("/", include_in_schema=False)
async def missing_path():
    raise InvalidInput("Path missing")


@router.get("/{path}", include_in_schema=False)
async def redirect_to_url(request: Request, path: str):
    """Resolve a short code and redirect to its URL."""
    registry = request.app.state.registry

    record = await registry.get_by_token(path)

    # 302 so clients keep coming back through the shortener
    return RedirectResponse(url=record.url, status_code=status.HTTP_302_FOUND)
