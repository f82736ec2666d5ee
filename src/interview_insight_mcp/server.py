"""Main FastMCP server — mounts the interview sub-server."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastmcp import FastMCP

from . import tracing
from .client import GeminiClient
from .tools.interview import interview_server

logger = logging.getLogger(__name__)


@asynccontextmanager
async def _lifespan(server: FastMCP):
    """Set up tracing on startup; flush traces and close clients on shutdown."""
    tracing.setup()
    yield {}
    tracing.shutdown()
    closed = await GeminiClient.close_all()
    logger.info("Lifespan shutdown: closed %d client(s)", closed)


app = FastMCP(
    "interview-insight",
    instructions=(
        "Analyzes recorded sealant product-testing interviews with Gemini: "
        "Kano satisfaction per feature, blind-sample sensory scores, marketing "
        "insights and technician classification."
    ),
    lifespan=_lifespan,
)

app.mount(interview_server)


def main() -> None:
    """Entry-point for ``interview-insight-mcp`` console script."""
    app.run()


if __name__ == "__main__":
    main()
