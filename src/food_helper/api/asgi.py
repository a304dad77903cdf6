"""ASGI entrypoint for the food helper API."""

from food_helper.api.app import create_app
from food_helper.containers import build_container

app = create_app(build_container())
