"""Starlette ASGI application for the metrics service."""

from __future__ import annotations

import json
from typing import Optional

from starlette.applications import Starlette
from starlette.concurrency import run_in_threadpool
from starlette.datastructures import UploadFile
from starlette.middleware import Middleware
from starlette.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from .. import __version__
from ..archive import analyze_archive, decode_source
from ..config import AnalysisConfig
from ..exceptions import AnalysisError, CogMetricsError, InvalidArchiveError
from ..logging_config import get_logger
from ..metrics.aggregator import analyze_source
from ..metrics.report import build_code_report
from ..scanning.treesitter_parser import TreeSitterParser
from .serializers import serialize_metrics, serialize_summary

logger = get_logger(__name__)

NO_FILE_ERROR = "No file uploaded"
MISSING_CODE_ERROR = 'Request must include "code" and "filename"'


async def _read_upload(request: Request) -> Optional[UploadFile]:
    """The ``file`` field of a multipart request, or None when absent."""
    # Bodies that are not form-encoded parse to an empty form
    form = await request.form()
    upload = form.get("file")
    if not isinstance(upload, UploadFile):
        return None
    return upload


def create_app(config: Optional[AnalysisConfig] = None) -> Starlette:
    """Build the Starlette application.

    Args:
        config: Analysis and CORS settings (defaults when omitted)
    """
    config = config or AnalysisConfig()
    parser = TreeSitterParser()

    async def analyze(request: Request) -> JSONResponse:
        upload = await _read_upload(request)
        if upload is None:
            return JSONResponse({"error": NO_FILE_ERROR}, status_code=400)

        filename = upload.filename or "upload.js"
        source = decode_source(await upload.read())
        try:
            metrics = await run_in_threadpool(analyze_source, source, filename, parser)
        except AnalysisError as e:
            logger.error(f"Error analyzing {filename}: {e}")
            return JSONResponse({"error": e.short_message}, status_code=500)
        return JSONResponse(serialize_metrics(metrics))

    async def analyze_zip(request: Request) -> JSONResponse:
        upload = await _read_upload(request)
        if upload is None:
            return JSONResponse({"error": NO_FILE_ERROR}, status_code=400)

        data = await upload.read()
        try:
            summary = await run_in_threadpool(analyze_archive, data, config, parser)
        except InvalidArchiveError as e:
            logger.warning(f"Rejected archive {upload.filename}: {e}")
            return JSONResponse({"error": e.message}, status_code=400)
        except CogMetricsError as e:
            logger.error(f"Error processing archive {upload.filename}: {e}")
            return JSONResponse({"error": e.short_message}, status_code=500)

        logger.info(
            f"Archive {upload.filename}: {summary.total_files} file(s), "
            f"{len(summary.failed_files)} failed"
        )
        return JSONResponse(serialize_summary(summary))

    async def analyze_code(request: Request) -> JSONResponse:
        try:
            body = await request.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            return JSONResponse({"error": MISSING_CODE_ERROR}, status_code=400)

        code = body.get("code") if isinstance(body, dict) else None
        filename = body.get("filename") if isinstance(body, dict) else None
        if not isinstance(code, str) or not isinstance(filename, str) or not code or not filename:
            return JSONResponse({"error": MISSING_CODE_ERROR}, status_code=400)

        try:
            metrics = await run_in_threadpool(analyze_source, code, filename, parser)
        except AnalysisError as e:
            logger.error(f"Error analyzing inline code {filename}: {e}")
            return JSONResponse(
                {"error": f"Failed to analyze code: {e.short_message}"}, status_code=500
            )
        return JSONResponse(build_code_report(metrics, filename))

    async def health(request: Request) -> JSONResponse:
        return JSONResponse({"status": "ok", "version": __version__})

    routes = [
        Route("/analyze", analyze, methods=["POST"]),
        Route("/analyze-zip", analyze_zip, methods=["POST"]),
        Route("/analyze-code", analyze_code, methods=["POST"]),
        Route("/health", health, methods=["GET"]),
    ]
    middleware = [
        Middleware(
            CORSMiddleware,
            allow_origins=list(config.cors_origins),
            allow_methods=["GET", "POST", "OPTIONS"],
            allow_headers=["*"],
        )
    ]

    return Starlette(routes=routes, middleware=middleware)
