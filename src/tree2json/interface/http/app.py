from __future__ import annotations

"""
HTTP Service.

Exposes the conversion pipeline as a small FastAPI application. Successful
conversions return the bare nested tree; every failure returns status 500
with an {"error": ...} payload and never a partial tree.
"""

import argparse
import json
import sys
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Query, Request
from fastapi.responses import Response

from tree2json.core.pipeline.engine import run_pipeline
from tree2json.core.processing.serializer import error_payload
from tree2json.domain.config import load_config
from tree2json.domain.constants import APP_VERSION, JSON_MEDIA_TYPE
from tree2json.domain.pipeline_models import PipelineResult
from tree2json.infra.logging import LoggingConfig, configure_logging, get_logger
from tree2json.utils.i18n import i18n

logger = get_logger(__name__)

# -----------------------------------------------------------------------------
# APPLICATION FACTORY
# -----------------------------------------------------------------------------

def create_app(config: Optional[Dict[str, Any]] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        config: Base pipeline configuration. Per-request query parameters
            override it. Defaults to the persisted CLI configuration.

    Returns:
        FastAPI: The configured application.
    """
    base_config: Dict[str, Any] = dict(config) if config is not None else load_config()
    # The service only answers requests; it never writes files
    base_config["output_path"] = ""

    app = FastAPI(title="tree2json", version=APP_VERSION)

    @app.get("/health")
    def health() -> Dict[str, str]:
        return {"status": "ok"}

    @app.get("/tree")
    def convert_url(
            url: Optional[str] = Query(default=None),
            encoding: Optional[str] = Query(default=None),
    ) -> Response:
        """Fetch a remote listing (or the configured source) and return its tree."""
        cfg = dict(base_config)
        if url:
            cfg["source"] = url
        if encoding:
            cfg["encoding"] = encoding
        return _pipeline_response(cfg)

    @app.post("/tree")
    async def convert_body(request: Request) -> Response:
        """Convert a listing posted as the raw request body."""
        body = await request.body()
        cfg = dict(base_config)
        charset = request.headers.get("content-type", "")
        encoding = _charset_from_content_type(charset) or cfg.get("encoding") or "utf-8"
        try:
            text = body.decode(encoding)
        except (LookupError, UnicodeDecodeError) as e:
            return _error_response(f"Request body is not valid {encoding}: {e}")
        return _pipeline_response(cfg, text=text)

    return app

# -----------------------------------------------------------------------------
# RESPONSE HELPERS
# -----------------------------------------------------------------------------

def _pipeline_response(cfg: Dict[str, Any], text: Optional[str] = None) -> Response:
    try:
        result = run_pipeline(cfg, dry_run=True, text=text)
    except Exception as e:
        logger.critical(f"Unhandled conversion failure: {e}", exc_info=True)
        return _error_response(str(e))
    return _result_response(result)


def _result_response(result: PipelineResult) -> Response:
    if not result.ok:
        return _error_response(result.error)
    return Response(content=result.json_text, media_type=JSON_MEDIA_TYPE)


def _error_response(message: str) -> Response:
    body = json.dumps(error_payload(message), ensure_ascii=False)
    return Response(content=body, status_code=500, media_type=JSON_MEDIA_TYPE)


def _charset_from_content_type(content_type: str) -> Optional[str]:
    for part in content_type.split(";")[1:]:
        key, _, value = part.strip().partition("=")
        if key.lower() == "charset" and value:
            return value.strip().strip('"')
    return None

# -----------------------------------------------------------------------------
# SERVER ENTRYPOINT
# -----------------------------------------------------------------------------

def serve(argv: Optional[List[str]] = None) -> int:
    """Run the service under uvicorn."""
    import uvicorn

    p = argparse.ArgumentParser(prog="tree2json-serve", description=i18n.t("app.serve_description"))
    p.add_argument("--host", default="127.0.0.1", help=i18n.t("cli.args.host"))
    p.add_argument("--port", type=int, default=8000, help=i18n.t("cli.args.port"))
    p.add_argument("--debug", action="store_true", help="Elevate logging verbosity to DEBUG.")
    args = p.parse_args(argv)

    configure_logging(LoggingConfig(level="DEBUG" if args.debug else "INFO"))
    uvicorn.run(create_app(), host=args.host, port=args.port)
    return 0


if __name__ == "__main__":
    sys.exit(serve())
