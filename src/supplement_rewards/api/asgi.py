"""ASGI entrypoint for the supplement rewards API."""

from supplement_rewards.api.app import create_app
from supplement_rewards.containers import build_container

app = create_app(build_container())
