from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container
from ..core.exceptions import ValidationError
from .cycle import next_status


def register(app: Flask, container: Container) -> None:
    def _json_body() -> dict:
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise ValidationError("Request body must be a JSON object")
        return data

    @app.route("/api/status/next", methods=["GET"], endpoint="api_next_status")
    def api_next_status():
        current = request.args.get("current") or None
        return jsonify({"current": current, "next": next_status(current).value})

    @app.route("/api/sessions/<int:session_id>/sheet", methods=["GET"], endpoint="api_session_sheet")
    def api_session_sheet(session_id: int):
        sheet = container.attendance_service.session_sheet(
            session_id,
            status=request.args.get("status"),
            search=request.args.get("search"),
        )
        return jsonify(sheet.to_dict())

    @app.route(
        "/api/sessions/<int:session_id>/participants/<int:participant_id>/cycle",
        methods=["POST"],
        endpoint="api_cycle_status",
    )
    def api_cycle_status(session_id: int, participant_id: int):
        record = container.attendance_service.cycle_status(session_id, participant_id)
        return jsonify({"success": True, "record": record.to_dict()})

    @app.route(
        "/api/sessions/<int:session_id>/participants/<int:participant_id>",
        methods=["PUT"],
        endpoint="api_set_status",
    )
    def api_set_status(session_id: int, participant_id: int):
        data = _json_body()
        record = container.attendance_service.set_status(
            session_id,
            participant_id,
            data.get("status"),
            str(data.get("notes") or ""),
        )
        return jsonify({"success": True, "record": record.to_dict()})

    @app.route("/api/sessions/<int:session_id>/bulk", methods=["POST"], endpoint="api_bulk_status")
    def api_bulk_status(session_id: int):
        data = _json_body()
        participant_ids = data.get("participant_ids")
        if participant_ids is None:
            # no explicit ids: act on the sheet rows left after filtering
            participant_ids = container.attendance_service.session_sheet(
                session_id,
                status=data.get("filter_status"),
                search=data.get("search"),
            ).participant_ids
        if not isinstance(participant_ids, list):
            raise ValidationError("participant_ids must be a list")
        result = container.bulk_coordinator.apply_bulk(session_id, participant_ids, data.get("status"))
        payload = result.to_dict()
        payload["success"] = result.ok
        return jsonify(payload), (200 if result.ok else 207)

    @app.route("/api/attendance/<int:record_id>", methods=["GET"], endpoint="api_get_attendance")
    def api_get_attendance(record_id: int):
        return jsonify(container.ledger.get_by_id(record_id).to_dict())

    @app.route("/api/attendance/<int:record_id>", methods=["DELETE"], endpoint="api_delete_attendance")
    def api_delete_attendance(record_id: int):
        container.ledger.delete(record_id, must_exist=True)
        return jsonify({"success": True, "id": record_id})
