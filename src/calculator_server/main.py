"""
Main entrypoint of the calculator server.

This script:
- Reads HOST, PORT and PUBLIC_DIR from the environment
- Lets command-line arguments override them
- Starts the HTTP server until interrupted
"""
import argparse
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, DirectoryPath, Field, ValidationError

from calculator_server.common.logger import logger
from calculator_server.server.server import CalculatorServer


class CliArgs(BaseModel):
    """
    Pydantic model used to validate CLI arguments.

    Attributes
    ----------
    host : Optional[str]
        Address to bind, overriding HOST.
    port : Optional[int]
        TCP port, overriding PORT.
    public_dir : Optional[DirectoryPath]
        Directory of static files, overriding PUBLIC_DIR.
    """

    host: Optional[str] = None
    port: Optional[int] = Field(default=None, ge=1, le=65535)
    public_dir: Optional[DirectoryPath] = None


def parse_args(argv: Optional[list] = None) -> CliArgs:
    """
    Parse and validate command-line arguments.

    :param Optional[list] argv: Arguments to parse, defaults to sys.argv

    :return: Validated CLI arguments
    :rtype: CliArgs
    """
    parser = argparse.ArgumentParser(description="Static file and calculator HTTP server")

    parser.add_argument("--host", help="Address to bind (default: $HOST or 127.0.0.1)")
    parser.add_argument("--port", help="Port to listen on (default: $PORT or 3000)")
    parser.add_argument("--public-dir", help="Directory of static files (default: bundled public/)")

    args = parser.parse_args(argv)

    try:
        return CliArgs(host=args.host, port=args.port, public_dir=args.public_dir)
    except ValidationError as exc:
        parser.error(str(exc))


def build_server(cli_args: CliArgs) -> CalculatorServer:
    """
    Combine environment configuration with CLI overrides.

    :param CliArgs cli_args: Validated CLI arguments

    :return: Server configuration
    :rtype: CalculatorServer
    """
    public_dir: Optional[Path] = cli_args.public_dir
    return CalculatorServer.from_env(host=cli_args.host, port=cli_args.port, public_dir=public_dir)


def main(argv: Optional[list] = None) -> None:
    """
    Main function executed by the console script.
    """
    cli_args = parse_args(argv)

    try:
        server = build_server(cli_args)
    except ValidationError as exc:
        logger.error(f"⚙️❌ Invalid configuration: {exc}")
        raise SystemExit(2) from exc

    try:
        server.start()
    except KeyboardInterrupt:
        logger.info("🖥️ Server stopped")


if __name__ == "__main__":
    main()
