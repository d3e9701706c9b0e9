"""Serve files from the public root without letting requests escape it."""
from pathlib import Path
import posixpath
import re
from typing import Dict

import anyio
from pydantic import BaseModel, ConfigDict, DirectoryPath, Field
from starlette.responses import PlainTextResponse, Response

from calculator_server.common.logger import logger

INDEX_PATH = "/index.html"

# Leading "../" or "..\" segments, possibly repeated
TRAVERSAL_PREFIX = re.compile(r"^(\.\.[/\\])+")

CONTENT_TYPES: Dict[str, str] = {
    ".html": "text/html; charset=utf-8",
    ".css": "text/css; charset=utf-8",
    ".js": "application/javascript; charset=utf-8",
    ".json": "application/json; charset=utf-8",
}
DEFAULT_CONTENT_TYPE = "text/plain; charset=utf-8"


class OutsideRootError(FileNotFoundError):
    """Raised when a request path resolves outside the public root."""


def content_type_for(file_path: Path) -> str:
    """Pick the Content-Type header from the file extension."""
    return CONTENT_TYPES.get(file_path.suffix.lower(), DEFAULT_CONTENT_TYPE)


def sanitize_path(request_path: str) -> str:
    """
    Turn a request path into a relative path that cannot climb upwards.

    Steps:
        1. "/" (or an empty path) becomes "/index.html".
        2. Backslashes are treated as separators.
        3. The path is normalized as an absolute path, which collapses
           any ".." reaching above "/".
        4. Leading traversal segments are stripped until none remain.

    :param str request_path: Decoded URL path

    :return: Relative path, possibly empty
    :rtype: str
    """
    if request_path in ("", "/"):
        request_path = INDEX_PATH

    normalized = posixpath.normpath("/" + request_path.replace("\\", "/"))
    relative = normalized.lstrip("/")

    while TRAVERSAL_PREFIX.match(relative):
        relative = TRAVERSAL_PREFIX.sub("", relative)

    return "" if relative == "." else relative


class StaticFileHandler(BaseModel):
    """
    Resolve GET paths against the public root and load the files.

    Features:
        - Root-to-index fallback.
        - Traversal segments are stripped, then the resolved path is
          checked to still live under the root.
        - Asynchronous file reads.
    """

    model_config = ConfigDict(frozen=True)

    root: DirectoryPath = Field(..., description="Public root directory")

    def resolve(self, request_path: str) -> Path:
        """
        Map a request path to an absolute file path under the root.

        :param str request_path: Decoded URL path

        :return: Absolute path of the file to serve
        :rtype: Path
        :raises OutsideRootError: If the path resolves outside the root
        """
        root = self.root.resolve()
        try:
            candidate = (root / sanitize_path(request_path)).resolve()
        except ValueError as exc:
            # e.g. embedded null byte
            raise OutsideRootError(request_path) from exc

        if candidate != root and root not in candidate.parents:
            logger.warning(f"🚧 Rejected path outside public root: {request_path!r}")
            raise OutsideRootError(request_path)
        return candidate

    async def handle(self, request_path: str) -> Response:
        """
        Produce the response for a GET request.

        :param str request_path: Decoded URL path

        :return: 200 with the file, 404 if missing, 500 on other I/O errors
        :rtype: Response
        """
        try:
            file_path = self.resolve(request_path)
            data: bytes = await anyio.Path(file_path).read_bytes()
        except FileNotFoundError:
            return PlainTextResponse("Not Found", status_code=404)
        except OSError as exc:
            logger.error(f"📄❌ Could not read {request_path!r}: {exc}")
            return PlainTextResponse("Internal Server Error", status_code=500)

        return Response(content=data, status_code=200, media_type=content_type_for(file_path))
