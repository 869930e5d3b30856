"""ASGI entrypoint for the What's Cookin' API."""

from whats_cookin.api.app import create_app
from whats_cookin.containers import build_container

app = create_app(build_container())
