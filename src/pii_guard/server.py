"""HTTP sidecar server for pii-guard.

Runs as a lightweight stdlib HTTP server on localhost.  A host calls
this via HTTP instead of spawning a subprocess per request.

Endpoints:
    POST /filter-rows     — Mask a row set         {"rows": [...]}
    POST /mask-value      — Mask one value         {"value": ..., "column": "..."}
    POST /check-query     — Query safety verdict   {"query": "..."}
    POST /complexity      — Query complexity       {"query": "..."}
    POST /plan-summary    — Showplan XML summary   {"plan_xml": "..."}
    GET  /health          — Health check

All endpoints expect/return JSON.
"""

from __future__ import annotations
import json
import os
from http.server import HTTPServer, BaseHTTPRequestHandler
from typing import Any

import structlog

from .config import configure_logging, create_guard, load_config, load_from_yaml
from .exceptions import PiiGuardError
from .middleware import QueryGuard
from .plan import summarize_plan
from .query_complexity import complexity_warnings, cost_recommendations, evaluate_query_complexity
from .query_safety import evaluate_query_safety

logger = structlog.get_logger()

DEFAULT_PORT = int(os.environ.get("PII_GUARD_PORT", "18792"))
DEFAULT_CONFIG = os.environ.get("PII_GUARD_CONFIG", "")

# Shared, read-only after serve() starts
_guard: QueryGuard | None = None


def _get_guard() -> QueryGuard:
    global _guard
    if _guard is None:
        _guard = create_guard(load_config({}))
    return _guard


class GuardHandler(BaseHTTPRequestHandler):
    """HTTP request handler for the pii-guard sidecar."""

    def _read_json(self) -> dict[str, Any]:
        length = int(self.headers.get("Content-Length", 0))
        body = self.rfile.read(length).decode("utf-8")
        data = json.loads(body) if body else {}
        if not isinstance(data, dict):
            raise PiiGuardError("request body must be a JSON object")
        return data

    def _respond(self, status: int, data: Any) -> None:
        body = json.dumps(data, ensure_ascii=False, default=str).encode("utf-8")
        self.send_response(status)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format: str, *args: Any) -> None:
        logger.debug("http_request", client=self.client_address[0], line=format % args)

    def do_GET(self) -> None:
        if self.path == "/health":
            self._respond(200, {"status": "ok", **_get_guard().stats})
        else:
            self._respond(404, {"error": "not found"})

    def do_POST(self) -> None:
        try:
            body = self._read_json()
            guard = _get_guard()

            if self.path == "/filter-rows":
                rows = body.get("rows", [])
                if not isinstance(rows, list):
                    raise PiiGuardError("rows must be a JSON array of objects")
                if guard.max_rows is not None:
                    rows = rows[:guard.max_rows]
                self._respond(200, guard.redactor.filter_rows(rows).to_dict())

            elif self.path == "/mask-value":
                outcome = guard.redactor.mask_value(body.get("value"), body.get("column"))
                self._respond(200, {
                    "masked": outcome.masked,
                    "was_masked": outcome.was_masked,
                    "rule": outcome.rule,
                })

            elif self.path == "/check-query":
                self._respond(200, evaluate_query_safety(body.get("query")).to_dict())

            elif self.path == "/complexity":
                query = body.get("query")
                complexity = evaluate_query_complexity(query)
                self._respond(200, {
                    **complexity.to_dict(),
                    "warnings": complexity_warnings(complexity),
                    "recommendations": cost_recommendations(query, complexity),
                })

            elif self.path == "/plan-summary":
                self._respond(200, summarize_plan(body.get("plan_xml", "")).to_dict())

            else:
                self._respond(404, {"error": "not found"})

        except (PiiGuardError, ValueError) as e:
            self._respond(400, {"error": str(e)})
        except Exception as e:
            logger.exception("request_failed", path=self.path)
            self._respond(500, {"error": str(e)})


def serve(port: int = DEFAULT_PORT, config_path: str = DEFAULT_CONFIG) -> None:
    """Start the pii-guard HTTP sidecar."""
    global _guard
    _guard = create_guard(load_from_yaml(config_path) if config_path else load_config({}))

    server = HTTPServer(("127.0.0.1", port), GuardHandler)
    logger.info("sidecar_listening", url=f"http://127.0.0.1:{port}", **_guard.stats)
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        logger.info("sidecar_shutdown")
        server.shutdown()


if __name__ == "__main__":
    import argparse
    parser = argparse.ArgumentParser(description="pii-guard HTTP sidecar")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    parser.add_argument("--config", default=DEFAULT_CONFIG)
    parser.add_argument("--log-level", default=os.environ.get("PII_GUARD_LOG_LEVEL", "INFO"))
    args = parser.parse_args()
    configure_logging(args.log_level)
    serve(port=args.port, config_path=args.config)
