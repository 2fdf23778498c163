"""Console entry point serving the API with uvicorn."""

import uvicorn

from fitnutri.config import Settings


def run(settings: Settings | None = None) -> None:
    """Serve ``fitnutri.api.asgi:app`` on the configured host and port."""
    resolved_settings = settings or Settings()
    uvicorn.run(
        "fitnutri.api.asgi:app",
        host=resolved_settings.host,
        port=resolved_settings.port,
        reload=False,
    )
