"""ASGI entrypoint for the PKU diet API."""

from pku_diet.api.app import create_app
from pku_diet.containers import build_container

app = create_app(build_container())
