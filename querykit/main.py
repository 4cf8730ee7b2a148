"""FastAPI integration: error envelopes for query errors."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from querykit.core.exceptions import APIException, QueryKitError, to_api_exception


async def api_exception_handler(request: Request, exc: APIException) -> JSONResponse:
    """Handle APIException and return the standard error format."""
    # exc.detail already contains {"error": {...}}, add data: null for API contract compliance
    response_content = exc.detail.copy()
    response_content["data"] = None
    return JSONResponse(
        status_code=exc.status_code,
        content=response_content,
    )


async def query_exception_handler(request: Request, exc: QueryKitError) -> JSONResponse:
    """Handle errors raised while translating query arguments."""
    return await api_exception_handler(request, to_api_exception(exc))


def register_exception_handlers(app: FastAPI) -> None:
    """Install the query error handlers on an application."""
    app.add_exception_handler(APIException, api_exception_handler)
    app.add_exception_handler(QueryKitError, query_exception_handler)
