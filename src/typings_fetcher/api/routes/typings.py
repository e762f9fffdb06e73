from __future__ import annotations

import asyncio
import logging
import traceback

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from typings_fetcher.api.dependencies import get_installer, get_settings
from typings_fetcher.api.schemas import ErrorResponse, TypingsResponse
from typings_fetcher.config import Settings
from typings_fetcher.core.extract import download_dependency_typings
from typings_fetcher.core.packaging import drop_files_if_needed
from typings_fetcher.core.ports.installer import PackageInstaller
from typings_fetcher.errors import RequestError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["typings"])

# Error envelopes always carry 422, whatever the failure.
_UNPROCESSABLE = 422
_CORS_HEADERS = {"Access-Control-Allow-Origin": "*"}
# A dependency@version pair is treated as immutable.
_CACHE_HEADERS = {"Cache-Control": "public, max-age=31536000"}


def _dep_query(request: Request) -> str:
    values = request.query_params.getlist("depQuery")
    if len(values) > 1:
        raise RequestError("Dependency should not be an array")
    if not values or not values[0]:
        raise RequestError("Please provide a dependency")
    return values[0]


@router.get(
    "/typings",
    response_model=TypingsResponse,
    responses={_UNPROCESSABLE: {"model": ErrorResponse}},
)
async def typings(
    request: Request,
    installer: PackageInstaller = Depends(get_installer),
    settings: Settings = Depends(get_settings),
) -> JSONResponse:
    """Install ``depQuery`` and return its declaration files and the manifests needed to resolve them."""
    try:
        dep_query = _dep_query(request)
        files = await download_dependency_typings(dep_query, installer, settings.staging_root)
        packaged = await asyncio.to_thread(drop_files_if_needed, files, settings.max_response_bytes)
    except Exception as exc:
        if isinstance(exc, RequestError):
            logger.warning("Rejected typings request: %s", exc)
        else:
            logger.exception("Error fetching typings")
        body = ErrorResponse(error=str(exc), stack=traceback.format_exc())
        return JSONResponse(
            content=body.model_dump(),
            status_code=_UNPROCESSABLE,
            headers=_CORS_HEADERS,
        )

    return JSONResponse(content=packaged.as_envelope(), headers={**_CORS_HEADERS, **_CACHE_HEADERS})
