"""ASGI entrypoint for the BiteQube API."""

from biteqube.api.app import create_app
from biteqube.containers import build_container

app = create_app(build_container())
