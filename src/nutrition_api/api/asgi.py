"""ASGI entrypoint for the nutrition API."""

from nutrition_api.api.app import create_app
from nutrition_api.containers import build_container

app = create_app(build_container())
