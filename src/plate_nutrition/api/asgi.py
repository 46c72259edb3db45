"""ASGI entrypoint for the plate nutrition API."""

from plate_nutrition.api.app import create_app
from plate_nutrition.containers import build_container

app = create_app(build_container())
