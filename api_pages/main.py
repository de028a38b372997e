"""Main FastAPI application entry point."""

from pathlib import Path

from dotenv import load_dotenv
from fastapi.responses import Response

from api_pages.config import get_settings
from api_pages.core.app_factory import create_app
from api_pages.logging_config import setup_logging

# Load environment variables from .env file
load_dotenv(Path(__file__).parent.parent / ".env")

setup_logging(get_settings().log_level)

app = create_app()


@app.get("/favicon.ico", include_in_schema=False)
async def favicon():
    """Return an empty favicon to prevent 404 errors."""
    return Response(content=b"", media_type="image/x-icon")


def run() -> None:
    """Run the page server with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "api_pages.main:app",
        host=settings.api_host,
        port=settings.api_port,
    )


if __name__ == "__main__":
    run()
