from __future__ import annotations

from datetime import date

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    stats = container.statistics_service

    def _today() -> date:
        value = request.args.get("today")
        if not value:
            return date.today()
        try:
            return parse_iso_date(value)
        except ValueError:
            raise ValidationError("today must be YYYY-MM-DD")

    @app.route("/api/sessions/<int:session_id>/stats", methods=["GET"], endpoint="api_session_stats")
    def api_session_stats(session_id: int):
        data = stats.session_stats(session_id).to_dict()
        data["session_id"] = session_id
        return jsonify(data)

    @app.route("/api/participants/<int:participant_id>/stats", methods=["GET"], endpoint="api_participant_stats")
    def api_participant_stats(participant_id: int):
        return jsonify(stats.participant_stats(participant_id).to_dict())

    @app.route("/api/participants/<int:participant_id>/history", methods=["GET"], endpoint="api_participant_history")
    def api_participant_history(participant_id: int):
        history = stats.participant_history(participant_id)
        return jsonify({"participant_id": participant_id, "history": [e.to_dict() for e in history]})

    @app.route("/api/reports/top-performers", methods=["GET"], endpoint="api_top_performers")
    def api_top_performers():
        limit_s = (request.args.get("limit") or "").strip().lower()
        if limit_s == "all":
            rows = stats.ranked_participants()
        elif limit_s:
            if not limit_s.isdigit():
                raise ValidationError("limit must be a non-negative integer or 'all'")
            rows = stats.top_performers(int(limit_s))
        else:
            rows = stats.top_performers()
        return jsonify({"performers": [r.to_dict() for r in rows]})

    @app.route("/api/reports/trend", methods=["GET"], endpoint="api_trend")
    def api_trend():
        return jsonify({"trend": [p.to_dict() for p in stats.attendance_trend()]})

    @app.route("/api/reports/overview", methods=["GET"], endpoint="api_overview")
    def api_overview():
        return jsonify(stats.overview().to_dict())

    @app.route("/api/reports/status-distribution", methods=["GET"], endpoint="api_status_distribution")
    def api_status_distribution():
        return jsonify({status.value: count for status, count in stats.status_distribution().items()})

    @app.route("/api/dashboard", methods=["GET"], endpoint="api_dashboard")
    def api_dashboard():
        return jsonify(stats.dashboard(_today()).to_dict())
