from __future__ import annotations

import logging
from dataclasses import asdict

from flask import Flask, jsonify, request

from ..core.enums import RoomKind
from ..core.exceptions import NotFoundError, ValidationError
from ..container import Container

logger = logging.getLogger(__name__)

ATTENDANCE_COLLECTIONS = {"lab-attendance": RoomKind.LAB, "class-attendance": RoomKind.CLASS}


def register(app: Flask, container: Container) -> None:
    def _error(message: str, status: int):
        return jsonify({"success": False, "message": message}), status

    def _room_id(kind: RoomKind, data: dict):
        key = "labId" if kind == RoomKind.LAB else "classId"
        return data.get(key, data.get("room_id"))

    @app.route(
        '/api/<any("lab-attendance", "class-attendance"):collection>',
        methods=["GET"],
        endpoint="attendance_list",
    )
    def attendance_list(collection: str):
        rows = container.attendance_service.list_attendance(ATTENDANCE_COLLECTIONS[collection])
        return jsonify([asdict(r) for r in rows])

    @app.route(
        '/api/<any("lab-attendance", "class-attendance"):collection>',
        methods=["POST"],
        endpoint="attendance_create",
    )
    def attendance_create(collection: str):
        kind = ATTENDANCE_COLLECTIONS[collection]
        data = request.get_json(silent=True) or {}
        try:
            entry_id = container.attendance_service.add_attendance(
                kind,
                date=data.get("date"),
                room_id=_room_id(kind, data),
                slot=data.get("slot"),
                count=data.get("count"),
            )
            return jsonify({"success": True, "id": entry_id}), 201
        except ValidationError as e:
            return _error(str(e), 400)
        except Exception:
            logger.exception("Failed to add attendance entry")
            return _error("System error while saving attendance", 500)

    @app.route(
        '/api/<any("lab-attendance", "class-attendance"):collection>/<entry_id>',
        methods=["PUT"],
        endpoint="attendance_update",
    )
    def attendance_update(collection: str, entry_id: str):
        kind = ATTENDANCE_COLLECTIONS[collection]
        data = request.get_json(silent=True) or {}
        try:
            container.attendance_service.edit_attendance(
                kind,
                entry_id,
                date=data.get("date"),
                room_id=_room_id(kind, data),
                slot=data.get("slot"),
                count=data.get("count"),
            )
            return jsonify({"success": True})
        except NotFoundError as e:
            return _error(str(e), 404)
        except ValidationError as e:
            return _error(str(e), 400)
        except Exception:
            logger.exception("Failed to update attendance entry %s", entry_id)
            return _error("System error while saving attendance", 500)

    @app.route(
        '/api/<any("lab-attendance", "class-attendance"):collection>/<entry_id>',
        methods=["DELETE"],
        endpoint="attendance_delete",
    )
    def attendance_delete(collection: str, entry_id: str):
        try:
            container.attendance_service.delete_attendance(ATTENDANCE_COLLECTIONS[collection], entry_id)
            return jsonify({"success": True})
        except NotFoundError as e:
            return _error(str(e), 404)
        except Exception:
            logger.exception("Failed to delete attendance entry %s", entry_id)
            return _error("System error while deleting attendance", 500)
