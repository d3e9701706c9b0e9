"""Handle POST /calculate requests."""
from typing import AsyncIterator, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from starlette.requests import Request
from starlette.responses import JSONResponse

from calculator_server.common.calculator import CalculationError, Calculator
from calculator_server.common.logger import logger
from calculator_server.common.operations import CalculateRequest, CalculateResponse

DEFAULT_MAX_BODY_BYTES = 1_000_000

INVALID_PAYLOAD_ERROR = "Invalid request payload."
PAYLOAD_TOO_LARGE_ERROR = "Payload too large."


class PayloadTooLargeError(ValueError):
    """Raised when a request body grows past the configured limit."""


async def read_body(
    chunks: AsyncIterator[bytes], max_bytes: int, declared_length: Optional[str] = None
) -> bytes:
    """
    Read a request body chunk by chunk, enforcing a size limit.

    :param AsyncIterator[bytes] chunks: Body chunks in arrival order
    :param int max_bytes: Maximum accepted body size
    :param Optional[str] declared_length: Value of the Content-Length header, if any

    :return: The full body
    :rtype: bytes
    :raises PayloadTooLargeError: If the body exceeds max_bytes
    """
    if declared_length is not None and declared_length.isdigit() and int(declared_length) > max_bytes:
        raise PayloadTooLargeError(f"Declared body of {declared_length} bytes exceeds {max_bytes}")

    # Note: the body may arrive in several chunks, keep them in order
    received: List[bytes] = []
    size = 0
    async for chunk in chunks:
        size += len(chunk)
        if size > max_bytes:
            raise PayloadTooLargeError(f"Body exceeds {max_bytes} bytes")
        received.append(chunk)
    return b"".join(received)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(CalculateResponse(error=message).to_json(), status_code=status_code)


class CalculateHandler(BaseModel):
    """
    Parse, validate and evaluate calculate requests.

    Outcomes:
        - 200 with {"result": ...} on success.
        - 400 with the calculator's message for bad operands or operations.
        - 400 with a generic message for anything that cannot be parsed.
        - 413 when the body exceeds max_body_bytes.
    """

    model_config = ConfigDict(frozen=True)

    max_body_bytes: int = Field(default=DEFAULT_MAX_BODY_BYTES, gt=0, description="Body size limit in bytes")

    async def handle(self, request: Request) -> JSONResponse:
        """
        Produce the response for a POST /calculate request.

        :param Request request: Incoming request

        :return: JSON response
        :rtype: JSONResponse
        """
        try:
            body = await read_body(request.stream(), self.max_body_bytes, request.headers.get("content-length"))
        except PayloadTooLargeError as exc:
            logger.warning(f"✉️❌ {exc}")
            return _error(413, PAYLOAD_TOO_LARGE_ERROR)

        return self.evaluate(body)

    def evaluate(self, body: bytes) -> JSONResponse:
        """
        Evaluate a raw request body.

        An empty body is treated as an empty JSON object. A top-level array,
        number or string is an invalid payload rather than an object
        without operands.

        :param bytes body: Raw body

        :return: JSON response
        :rtype: JSONResponse
        """
        try:
            calc_request = CalculateRequest.model_validate_json(body or b"{}")
            response = Calculator.evaluate(calc_request)
        except CalculationError as exc:
            return _error(400, exc.message)
        except (ValidationError, ValueError):
            return _error(400, INVALID_PAYLOAD_ERROR)

        return JSONResponse(response.to_json(), status_code=200)
