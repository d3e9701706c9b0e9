"""ASGI application routing requests to the static and calculate handlers."""
from fastapi import FastAPI, Request
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import PlainTextResponse, Response

from calculator_server.server.calculate import CalculateHandler
from calculator_server.server.static import StaticFileHandler


def create_app(static_handler: StaticFileHandler, calculate_handler: CalculateHandler) -> FastAPI:
    """
    Build the application.

    Routing:
        - POST /calculate goes to the calculate handler.
        - GET on any path goes to the static file handler.
        - Every other method/path pair answers 405 in plain text.

    :param StaticFileHandler static_handler: Handler serving the public root
    :param CalculateHandler calculate_handler: Handler for the calculate endpoint

    :return: Configured application
    :rtype: FastAPI
    """
    # Built-in docs routes would shadow files in the public root
    app = FastAPI(title="Calculator", docs_url=None, redoc_url=None, openapi_url=None)

    @app.exception_handler(StarletteHTTPException)
    async def plain_text_http_error(request: Request, exc: StarletteHTTPException) -> Response:
        return PlainTextResponse(str(exc.detail), status_code=exc.status_code, headers=exc.headers)

    @app.post("/calculate")
    async def calculate(request: Request) -> Response:
        return await calculate_handler.handle(request)

    @app.get("/{path:path}")
    async def serve_static(path: str) -> Response:
        return await static_handler.handle("/" + path)

    return app
