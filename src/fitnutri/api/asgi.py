"""ASGI entrypoint for the FitNutri API."""

from fitnutri.api.app import create_app
from fitnutri.containers import build_container

app = create_app(build_container())
