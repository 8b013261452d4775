"""ASGI entrypoint."""

from meal_estimator.api.app import create_app
from meal_estimator.containers import build_container

app = create_app(build_container())
