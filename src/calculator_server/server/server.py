"""HTTP server serving the public root and the calculate endpoint."""
import os
from pathlib import Path

from fastapi import FastAPI
from pydantic import BaseModel, ConfigDict, DirectoryPath, Field, IPvAnyAddress
import uvicorn

from calculator_server.common.logger import logger, setup_uvicorn_loggers
from calculator_server.server.app import create_app
from calculator_server.server.calculate import DEFAULT_MAX_BODY_BYTES, CalculateHandler
from calculator_server.server.static import StaticFileHandler

DEFAULT_PORT = 3000
DEFAULT_PUBLIC_DIR = Path(__file__).resolve().parent.parent / "public"


class CalculatorServer(BaseModel):
    """
    HTTP server exposing static files and a JSON calculate endpoint.

    Features:
        - Serves files from public_dir, "/" falling back to index.html.
        - Adds or subtracts two operands on POST /calculate.
        - Handles each connection on the event loop, no shared state.
    """

    # Make the Pydantic instance immutable (read-only) so the configuration
    # cannot drift once the server is running.
    model_config = ConfigDict(frozen=True)

    host: IPvAnyAddress = Field(default="127.0.0.1", description="Server host address")
    port: int = Field(default=DEFAULT_PORT, ge=1, le=65535, description="Server TCP port")
    public_dir: DirectoryPath = Field(default=DEFAULT_PUBLIC_DIR, description="Directory served for GET requests")
    max_body_bytes: int = Field(default=DEFAULT_MAX_BODY_BYTES, gt=0, description="Calculate body size limit")

    @classmethod
    def from_env(cls, **overrides) -> "CalculatorServer":
        """
        Build a server from HOST, PORT and PUBLIC_DIR, then apply overrides.

        Overrides set to None are ignored.

        :return: Validated server configuration
        :rtype: CalculatorServer
        :raises pydantic.ValidationError: If a value is invalid
        """
        settings = {
            "host": os.getenv("HOST"),
            "port": os.getenv("PORT"),
            "public_dir": os.getenv("PUBLIC_DIR"),
        }
        settings.update(overrides)
        return cls(**{key: value for key, value in settings.items() if value not in (None, "")})

    @property
    def url(self) -> str:
        """Human-facing URL of the server."""
        return f"http://localhost:{self.port}"

    def build_app(self) -> FastAPI:
        """Create the ASGI application for this configuration."""
        return create_app(
            static_handler=StaticFileHandler(root=self.public_dir),
            calculate_handler=CalculateHandler(max_body_bytes=self.max_body_bytes),
        )

    def start(self) -> None:
        """
        Start listening and serve requests until interrupted.

        :return: None
        """
        app = self.build_app()
        logger.info(f"🖥️ Serving {self.public_dir} on {self.host}:{self.port}")
        logger.info(f"🖥️ Calculator app listening on {self.url}")
        # log_config=None keeps uvicorn from replacing the handlers installed here
        setup_uvicorn_loggers()
        uvicorn.run(app, host=str(self.host), port=self.port, log_config=None, access_log=True)
