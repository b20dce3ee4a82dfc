"""Record API routes."""

from typing import List

from fastapi import APIRouter, Request, status
from fastapi.responses import RedirectResponse

from ...lib.errors import InvalidInput
from .schemas import ShortenRequest, UrlRecordResponse, ErrorResponse

router = APIRouter()


@router.get(
    "",
    response_model=List[UrlRecordResponse],
    responses={500: {"model": ErrorResponse, "description": "Store error"}},
    summary="List records",
    description="List every stored record. Not paginated.",
)
async def list_urls(request: Request):
    """List all saved URLs."""
    registry = request.app.state.registry

    records = await registry.list_all()

    return [UrlRecordResponse.from_record(record) for record in records]


@router.post(
    "",
    response_model=UrlRecordResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid request body"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
    summary="Create short URL",
    description="Store a URL under a newly generated short code.",
)
async def shorten_url(request: Request, body: ShortenRequest):
    """Create a short code for a URL."""
    registry = request.app.state.registry

    record = await registry.create(body.url)

    return UrlRecordResponse.from_record(record)


@router.get("/", include_in_schema=False)
async def missing_id():
    raise InvalidInput("ID missing")


@router.get(
    "/{record_id}",
    status_code=status.HTTP_302_FOUND,
    responses={
        302: {"description": "Redirect to the stored URL"},
        404: {"model": ErrorResponse, "description": "Record not found"},
    },
    summary="Redirect by id",
    description="Look up a record by its internal id and redirect to its URL.",
)
async def redirect_by_id(request: Request, record_id: str):
    """Redirect to the URL stored under an internal id."""
    registry = request.app.state.registry

    record = await registry.get_by_id(record_id)

    return RedirectResponse(url=record.url, status_code=status.HTTP_302_FOUND)
