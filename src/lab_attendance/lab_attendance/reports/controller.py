from __future__ import annotations

import logging

from flask import Flask, jsonify, request, send_file

from ..common.datetime_utils import today_local
from ..common.validators import require_date
from ..core.enums import RoomKind
from ..core.exceptions import ValidationError
from ..container import Container
from .workbook import XLSX_MIMETYPE

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def _error(message: str, status: int):
        return jsonify({"success": False, "message": message}), status

    def _selected_date():
        value = request.args.get("date")
        return require_date(value) if value else today_local()

    def _send(workbook):
        return send_file(
            workbook.content,
            mimetype=XLSX_MIMETYPE,
            as_attachment=True,
            download_name=workbook.filename,
        )

    @app.route("/api/dashboard", methods=["GET"], endpoint="dashboard")
    def dashboard():
        try:
            return jsonify(container.report_service.dashboard(_selected_date()))
        except ValidationError as e:
            return _error(str(e), 400)

    @app.route("/api/reports/<any(lab, class):kind>-summary.xlsx", methods=["GET"], endpoint="summary_xlsx")
    def summary_xlsx(kind: str):
        try:
            workbook = container.report_service.summary_workbook(RoomKind(kind), _selected_date())
        except ValidationError as e:
            return _error(str(e), 400)
        container.notifications.success(f"{kind.capitalize()} summary data exported successfully as XLS!")
        return _send(workbook)

    @app.route("/api/reports/attendance-data.xlsx", methods=["GET"], endpoint="records_xlsx")
    def records_xlsx():
        workbook = container.report_service.records_workbook()
        container.notifications.success("Attendance data exported successfully as XLS!")
        return _send(workbook)

    @app.route("/api/reports/import", methods=["POST"], endpoint="records_import")
    def records_import():
        upload = request.files.get("file")
        if upload is None or not upload.filename:
            return _error("No file selected", 400)

        try:
            result = container.report_service.import_workbook(upload.stream)
        except Exception:
            logger.exception("Failed to import workbook %s", upload.filename)
            container.notifications.error("Error importing XLS data. Please check the file format.")
            return _error("Error importing XLS data. Please check the file format.", 400)

        return jsonify({"success": True, "imported": result.imported, "skipped": result.skipped})

    @app.route("/api/notifications", methods=["GET"], endpoint="notifications")
    def notifications():
        return jsonify([n.to_dict() for n in container.notifications.drain()])
