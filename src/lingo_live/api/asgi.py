"""ASGI entrypoint for the Lingo Live translator."""

from lingo_live.api.app import create_app
from lingo_live.containers import build_container

app = create_app(build_container())
