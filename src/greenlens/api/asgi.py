"""ASGI entrypoint for the GreenLens history API."""

from greenlens.api.app import create_app
from greenlens.containers import build_container

app = create_app(build_container())
