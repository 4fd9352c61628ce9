"""FastAPI application serving scraped fights."""

import logging
from pathlib import Path
from urllib.parse import urlparse

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles

from fightdata.config import Settings
from fightdata.scraper import FightParser
from fightdata.util import FetchError, package_version

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings()
    app = FastAPI(title="fightdata", version=package_version())
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    @app.get("/api/health")
    async def health() -> dict:
        return {
            "status": "healthy",
            "message": "fightdata API is running",
            "version": package_version(),
        }

    @app.get("/api/fights")
    def fights() -> JSONResponse:
        base_url = settings.parser.base_url
        logger.info("Received request for fight data from %s", base_url)
        try:
            records = FightParser(base_url, settings.parser).parse_fights()
        except FetchError as e:
            logger.error("Error parsing fights: %s", e)
            return JSONResponse(
                status_code=500,
                content={
                    "error": "Failed to parse fight data",
                    "message": "Unable to retrieve fight information at this time",
                    "details": str(e),
                },
            )

        if not records:
            logger.info("No fight data found, returning empty result")
            return JSONResponse({
                "message": "No fight data available",
                "data": [],
                "count": 0,
            })

        source = urlparse(base_url)
        logger.info("Retrieved %d fights", len(records))
        return JSONResponse({
            "message": f"Fight data retrieved successfully from {source.netloc}",
            "data": [r.to_dict() for r in records],
            "count": len(records),
            "source": f"{source.netloc}{source.path}",
        })

    static_dir = Path(settings.static_dir)
    if static_dir.is_dir():
        app.mount("/static", StaticFiles(directory=static_dir), name="static")
        index = static_dir / "index.html"

        @app.get("/", include_in_schema=False)
        async def root() -> FileResponse:
            return FileResponse(index)
    else:
        logger.warning("Static directory %s not found, web interface disabled", static_dir)

    return app
