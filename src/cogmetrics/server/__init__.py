"""HTTP service exposing the metrics engine.

Routes:
    POST /analyze        one uploaded source file
    POST /analyze-zip    an uploaded zip archive
    POST /analyze-code   inline ``{"code", "filename"}`` JSON
    GET  /health         liveness probe
"""

from .app import create_app

__all__ = ["create_app"]
