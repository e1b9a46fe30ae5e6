"""ASGI entrypoint for the fitness metrics API."""

from fitness_metrics.api.app import create_app
from fitness_metrics.containers import build_container

app = create_app(build_container())
