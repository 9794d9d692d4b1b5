"""ASGI entrypoint for the Bildval API."""

from bildval.api.app import create_app
from bildval.containers import build_container

app = create_app(build_container())
