"""Main FastMCP server — mounts the timeline sub-server."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastmcp import FastMCP

from .tools.timeline import timeline_server

logger = logging.getLogger(__name__)


@asynccontextmanager
async def _lifespan(server: FastMCP):
    """Startup/shutdown hook."""
    yield {}
    logger.info("Lifespan shutdown: lesson-timeline")


app = FastMCP(
    "lesson-timeline",
    instructions=(
        "Audio-driven scene timeline for narrated legal-English lesson "
        "videos — frame-accurate scene table, clip offsets, and "
        "speaking-overlay windows from lesson text and clip durations."
    ),
    lifespan=_lifespan,
)

app.mount(timeline_server)


def main() -> None:
    """Entry-point for ``lesson-timeline-mcp`` console script."""
    app.run()


if __name__ == "__main__":
    main()
