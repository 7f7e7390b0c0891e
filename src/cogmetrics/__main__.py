"""Allow ``python -m cogmetrics``."""

from .cli import app

app()
