"""FastAPI application entry point."""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded

from api.routes import game
from config import config

logging.basicConfig(
    level=config.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Initialize rate limiter
limiter = Limiter(
    key_func=get_remote_address,
    enabled=config.rate_limit.enabled,
    default_limits=[f"{config.rate_limit.requests_per_minute}/minute"],
)


def _rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Handle rate limit exceeded errors."""
    logger.warning("Rate limit exceeded for %s", get_remote_address(request))
    return JSONResponse(
        status_code=429,
        content={"detail": f"Rate limit exceeded: {exc.detail}"},
    )


app = FastAPI(
    title="Blackjack",
    description="Single-player blackjack against an automated dealer",
    version="0.1.0",
    debug=config.debug,
)

# Add rate limiter to app state and exception handler
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# CORS middleware with configurable origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors.allowed_origins,
    allow_credentials=config.cors.allow_credentials,
    allow_methods=config.cors.allow_methods,
    allow_headers=config.cors.allow_headers,
)


@app.get("/api/health")
@limiter.limit(f"{config.rate_limit.requests_per_minute}/minute")
async def health_check(request: Request) -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


app.include_router(game.router, prefix="/api/game", tags=["game"])


def run() -> None:
    """Serve the API with uvicorn."""
    import uvicorn

    uvicorn.run("api.main:app", host=config.host, port=config.port, reload=config.debug)
