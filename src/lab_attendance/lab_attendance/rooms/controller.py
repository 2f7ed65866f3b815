from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..core.enums import RoomKind
from ..core.exceptions import NotFoundError, ValidationError
from ..container import Container

logger = logging.getLogger(__name__)

ROOM_COLLECTIONS = {"labs": RoomKind.LAB, "classes": RoomKind.CLASS}


def register(app: Flask, container: Container) -> None:
    def _to_json(room) -> dict:
        return {"id": room.id, "name": room.name, "capacity": room.capacity}

    def _error(message: str, status: int):
        return jsonify({"success": False, "message": message}), status

    def _capacity(data: dict):
        # The old dashboard form posted "strength".
        return data.get("capacity", data.get("strength"))

    @app.route("/api/<any(labs, classes):collection>", methods=["GET"], endpoint="rooms_list")
    def rooms_list(collection: str):
        rooms = container.room_service.list_rooms(ROOM_COLLECTIONS[collection])
        return jsonify([_to_json(r) for r in rooms])

    @app.route("/api/<any(labs, classes):collection>/<room_id>", methods=["GET"], endpoint="rooms_get")
    def rooms_get(collection: str, room_id: str):
        room = container.room_service.get_room(ROOM_COLLECTIONS[collection], room_id)
        if room is None:
            return _error(f"{ROOM_COLLECTIONS[collection].value} {room_id} not found", 404)
        return jsonify(_to_json(room))

    @app.route("/api/<any(labs, classes):collection>", methods=["POST"], endpoint="rooms_create")
    def rooms_create(collection: str):
        data = request.get_json(silent=True) or {}
        try:
            room_id = container.room_service.add_room(ROOM_COLLECTIONS[collection], data.get("name"), _capacity(data))
            return jsonify({"success": True, "id": room_id}), 201
        except ValidationError as e:
            return _error(str(e), 400)
        except Exception:
            logger.exception("Failed to create room")
            return _error("System error while saving", 500)

    @app.route("/api/<any(labs, classes):collection>/<room_id>", methods=["PUT"], endpoint="rooms_update")
    def rooms_update(collection: str, room_id: str):
        data = request.get_json(silent=True) or {}
        try:
            container.room_service.edit_room(ROOM_COLLECTIONS[collection], room_id, data.get("name"), _capacity(data))
            return jsonify({"success": True})
        except NotFoundError as e:
            return _error(str(e), 404)
        except ValidationError as e:
            return _error(str(e), 400)
        except Exception:
            logger.exception("Failed to update room %s", room_id)
            return _error("System error while saving", 500)

    @app.route("/api/<any(labs, classes):collection>/<room_id>", methods=["DELETE"], endpoint="rooms_delete")
    def rooms_delete(collection: str, room_id: str):
        try:
            container.room_service.delete_room(ROOM_COLLECTIONS[collection], room_id)
            return jsonify({"success": True})
        except NotFoundError as e:
            return _error(str(e), 404)
        except Exception:
            logger.exception("Failed to delete room %s", room_id)
            return _error("System error while deleting", 500)
