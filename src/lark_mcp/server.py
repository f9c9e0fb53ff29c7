import argparse
import atexit
import hmac
import logging
import os
import signal
import sys
import time
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import NamedTuple

from dotenv import load_dotenv
from fastmcp import FastMCP

from .client import ClientGetter, get_client

SERVER_NAME = "lark-mcp"

TRANSPORTS = ("stdio", "http")
AUTH_METHODS = ("none", "bearer")
MIN_TOKEN_LENGTH = 32

STARTUP_ENV_VARS = (
    "LARK_APP_ID",
    "LARK_DOMAIN",
    "MCP_TRANSPORT",
    "MCP_HOST",
    "MCP_PORT",
    "MCP_AUTH_METHOD",
)

# Set in main() once logging is configured
logger: logging.Logger | None = None


class HttpSettings(NamedTuple):
    host: str
    port: int
    path: str
    auth_method: str


def create_server(get_client: ClientGetter = get_client) -> FastMCP:
    """Build the MCP server with every Lark tool registered.

    The client accessor is handed to each module instead of a client instance,
    so credentials are only read when a tool actually runs.
    """
    from .tools import register_all

    mcp = FastMCP(SERVER_NAME)
    register_all(mcp, get_client)
    return mcp


def _parse_arguments() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Lark MCP Server - Give AI assistants access to the Feishu / Lark open platform"
    )
    parser.add_argument(
        "--env-file",
        type=Path,
        default=Path(".env"),
        help="Path to .env file (default: .env)",
    )
    return parser.parse_args()


def _install_signal_handlers() -> None:
    """Exit cleanly on SIGINT and SIGTERM so atexit hooks still run."""

    def stop(signum, frame):
        assert logger is not None
        logger.warning(f"{signal.Signals(signum).name} received, stopping")
        sys.exit(0)

    for signum in (signal.SIGTERM, signal.SIGINT):
        signal.signal(signum, stop)


def _mask(value: str) -> str:
    if len(value) <= 12:
        return "***"
    return f"{value[:8]}...{value[-4:]}"


def _log_startup_info() -> None:
    assert logger is not None
    try:
        pkg_version = version("lark-mcp")
    except PackageNotFoundError:
        pkg_version = "dev"

    logger.info(f"{SERVER_NAME} {pkg_version} starting (pid {os.getpid()})")
    logger.info(f"Python {sys.version.split()[0]}, cwd {os.getcwd()}")
    for key in STARTUP_ENV_VARS:
        value = os.getenv(key)
        if value and key == "LARK_APP_ID":
            value = _mask(value)
        logger.info(f"  {key}={value if value else '<unset>'}")


def _fail(message: str) -> None:
    assert logger is not None
    logger.error(message)
    print(f"Error: {message}", file=sys.stderr)
    sys.exit(1)


def main() -> None:
    args = _parse_arguments()

    # Credentials must be in the environment before the client module reads them
    if args.env_file.exists():
        load_dotenv(dotenv_path=args.env_file)
    else:
        print(f"{args.env_file} not found, using the process environment", file=sys.stderr)

    from .client import get_config
    from .exceptions import ConfigurationError
    from .logging_config import get_logger, setup_logging

    global logger
    logger = get_logger(__name__)

    setup_logging(
        log_dir=os.getenv("MCP_LOG_DIR", "logs"),
        log_level=os.getenv("MCP_LOG_LEVEL", "INFO"),
    )
    _install_signal_handlers()
    atexit.register(lambda: logger.info(f"{SERVER_NAME} stopped"))

    _log_startup_info()

    try:
        config = get_config()
    except ConfigurationError as e:
        _fail(str(e))
        return
    logger.info(f"Lark domain: {config.domain}")

    mcp = create_server()

    transport = os.getenv("MCP_TRANSPORT", "stdio").strip().lower()
    if transport not in TRANSPORTS:
        _fail(f"MCP_TRANSPORT must be one of {', '.join(TRANSPORTS)}, got '{transport}'")
        return

    try:
        if transport == "stdio":
            logger.info("Serving over stdio")
            mcp.run()
        else:
            _serve_http(mcp, _http_settings())
    except Exception as e:
        logger.critical(f"{transport} transport stopped with an error: {e}", exc_info=True)
        raise


def _http_settings() -> HttpSettings:
    return HttpSettings(
        host=os.getenv("MCP_HOST", "127.0.0.1"),
        port=int(os.getenv("MCP_PORT", "8000")),
        path=os.getenv("MCP_PATH", "/mcp"),
        auth_method=os.getenv("MCP_AUTH_METHOD", "none").strip().lower(),
    )


def _serve_http(mcp: FastMCP, settings: HttpSettings) -> None:
    assert logger is not None
    if settings.auth_method not in AUTH_METHODS:
        _fail(
            f"MCP_AUTH_METHOD must be one of {', '.join(AUTH_METHODS)}, "
            f"got '{settings.auth_method}'"
        )
        return

    if settings.host in ("0.0.0.0", "::", ""):
        logger.warning(f"Listening on every interface ({settings.host or 'all'})")

    if settings.auth_method == "none":
        logger.warning("HTTP transport has no authentication")
        if os.getenv("MCP_ALLOW_INSECURE") != "true":
            _fail(
                "HTTP without authentication lets anyone act as this Lark app. "
                "Use MCP_AUTH_METHOD=bearer with MCP_AUTH_TOKEN, "
                "or set MCP_ALLOW_INSECURE=true"
            )
            return

    url = f"http://{settings.host}:{settings.port}{settings.path}"
    logger.info(f"Serving Streamable HTTP at {url} (auth: {settings.auth_method})")
    if settings.auth_method == "bearer":
        _run_http_with_bearer_auth(mcp, settings)
    else:
        mcp.run(transport="http", host=settings.host, port=settings.port, path=settings.path)


def _bearer_token(header: str | None) -> str | None:
    scheme, _, token = (header or "").partition(" ")
    if scheme != "Bearer" or not token:
        return None
    return token


def build_bearer_app(mcp: FastMCP, auth_token: str, path: str = "/mcp"):
    """Wrap the Streamable HTTP app in a FastAPI app that checks a bearer token.

    ``/health`` is left open; every other route requires
    ``Authorization: Bearer <auth_token>``.
    """
    from fastapi import FastAPI, Request
    from fastapi.responses import JSONResponse

    log = logging.getLogger(__name__)
    app = FastAPI()

    @app.middleware("http")
    async def require_bearer(request: Request, call_next):
        if request.url.path == "/health":
            return await call_next(request)

        peer = request.client.host if request.client else "unknown"
        header = request.headers.get("Authorization")
        token = _bearer_token(header)
        if token is None or not hmac.compare_digest(token, auth_token):
            reason = "missing credentials" if header is None else "bad credentials"
            log.warning(f"Rejected {request.method} {request.url.path} from {peer}: {reason}")
            return JSONResponse(
                status_code=401,
                content={"detail": "A valid bearer token is required"},
                headers={"WWW-Authenticate": "Bearer"},
            )

        started = time.perf_counter()
        response = await call_next(request)
        log.info(
            f"{request.method} {request.url.path} from {peer} -> {response.status_code}",
            extra={"duration_ms": round((time.perf_counter() - started) * 1000, 2)},
        )
        return response

    @app.get("/health")
    async def health():
        return {"status": "ok", "server": SERVER_NAME, "auth": "bearer"}

    # http_app() already serves at `path`, so it is mounted at the root
    http_app = mcp.http_app(path=path)
    app.router.lifespan_context = http_app.router.lifespan_context
    app.mount("/", http_app)
    return app


def _run_http_with_bearer_auth(mcp: FastMCP, settings: HttpSettings) -> None:
    import uvicorn

    assert logger is not None
    auth_token = os.getenv("MCP_AUTH_TOKEN")
    if not auth_token:
        _fail("MCP_AUTH_METHOD=bearer needs MCP_AUTH_TOKEN to be set")
        return

    if len(auth_token) < MIN_TOKEN_LENGTH:
        logger.warning(
            f"MCP_AUTH_TOKEN has {len(auth_token)} characters; "
            f"use at least {MIN_TOKEN_LENGTH}"
        )

    app = build_bearer_app(mcp, auth_token, settings.path)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level="info")


if __name__ == "__main__":
    main()
