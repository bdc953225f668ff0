from __future__ import annotations

import logging
import time
from typing import Callable

from flask import Flask, jsonify, request

from ..core.constants import DEFAULT_NICKNAMES_LIMIT, MAX_NICKNAMES_LIMIT
from ..core.exceptions import StoreUnavailable, ValidationError
from ..container import Container

logger = logging.getLogger(__name__)


def _fail(message: str, status: int, *, field: str | None = None):
    body = {"ok": False, "error": message}
    if field:
        body["field"] = field
    return jsonify(body), status


def _parse_limit(value: str | None) -> int:
    try:
        limit = int(value or DEFAULT_NICKNAMES_LIMIT)
    except ValueError:
        limit = DEFAULT_NICKNAMES_LIMIT
    return min(max(limit or DEFAULT_NICKNAMES_LIMIT, 1), MAX_NICKNAMES_LIMIT)


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    def guarded(tag: str, handler: Callable):
        try:
            return handler()
        except ValidationError as e:
            return _fail(str(e), 400, field=e.field)
        except StoreUnavailable as e:
            logger.error("[%s Error] %s", tag, e)
            return _fail(str(e), 500)

    @app.after_request
    def add_cors_headers(response):
        response.headers["Access-Control-Allow-Origin"] = "*"
        response.headers["Access-Control-Allow-Methods"] = "GET, POST, OPTIONS"
        response.headers["Access-Control-Allow-Headers"] = "Content-Type"
        return response

    @app.errorhandler(405)
    def method_not_allowed(_e):
        return _fail("Method not allowed", 405)

    @app.route("/healthz", methods=["GET"], endpoint="healthz")
    def healthz():
        return jsonify({"status": "ok"})

    @app.route("/attendance", methods=["GET", "POST", "OPTIONS"], endpoint="attendance")
    def attendance():
        if request.method == "OPTIONS":
            return "", 204
        if request.method == "POST":
            return guarded("POST", _post)
        return guarded("GET", _get)

    def _post():
        start = time.perf_counter()
        body = request.get_json(silent=True)
        if not isinstance(body, dict):
            body = request.form.to_dict()

        written, status = service.record_attendance(
            body.get("nickname"),
            body.get("team"),
            body.get("meetingType"),
            body.get("meetingDate"),
        )
        duration_ms = int((time.perf_counter() - start) * 1000)
        logger.info("[POST] %s - %s - %dms", written.nickname_stored, written.meeting_date, duration_ms)
        return jsonify({"ok": True, "written": written.to_dict(), "status": status})

    def _get():
        start = time.perf_counter()
        action = (request.args.get("action") or "status").strip()

        if action == "nicknames":
            result = service.list_nicknames(_parse_limit(request.args.get("limit")))
            summary = f"{result['count']} items"
        elif action == "status":
            result = service.get_status(request.args.get("date"))
            summary = f"{result['date']} - {result['count']} items"
        elif action == "history":
            result = service.get_history(request.args.get("nickname"), request.args.get("month"))
            summary = f"{result['nickname']} - {result['month']} - {result['count']} items"
        else:
            return _fail(f"unknown action: {action}", 400)

        duration_ms = int((time.perf_counter() - start) * 1000)
        logger.info("[GET %s] %s - %dms", action, summary, duration_ms)
        return jsonify({"ok": True, **result})
