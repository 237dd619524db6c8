from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container
from ..core.exceptions import ValidationError
from ..tasks.model import Task
from .model import NotificationDraft


def register(app: Flask, container: Container) -> None:
    service = container.notification_service

    def _queue_json():
        return jsonify(
            {
                "notifications": [
                    dict(n.to_dict(), relativeTime=service.relative_time(n)) for n in service.notifications
                ],
                "unreadCount": service.unread_count(),
            }
        )

    @app.route("/api/notifications", methods=["GET"], endpoint="notifications_list")
    def notifications_list():
        return _queue_json()

    @app.route("/api/notifications", methods=["POST"], endpoint="notifications_add")
    def notifications_add():
        payload = request.get_json(silent=True)
        if not isinstance(payload, dict):
            return jsonify({"success": False, "message": "Expected a JSON object"}), 400
        try:
            draft = NotificationDraft.from_dict(payload)
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        notification = service.add(draft)
        return jsonify({"success": True, "notification": notification.to_dict()}), 201

    @app.route("/api/notifications/<notification_id>/read", methods=["POST"], endpoint="notifications_mark_read")
    def notifications_mark_read(notification_id: str):
        service.mark_read(notification_id)
        return _queue_json()

    @app.route("/api/notifications/read-all", methods=["POST"], endpoint="notifications_mark_all_read")
    def notifications_mark_all_read():
        service.mark_all_read()
        return _queue_json()

    @app.route("/api/notifications/<notification_id>", methods=["DELETE"], endpoint="notifications_remove")
    def notifications_remove(notification_id: str):
        service.remove(notification_id)
        return _queue_json()

    @app.route("/api/notifications", methods=["DELETE"], endpoint="notifications_clear")
    def notifications_clear():
        service.clear_all()
        return _queue_json()

    @app.route("/api/notifications/sweep", methods=["POST"], endpoint="notifications_sweep")
    def notifications_sweep():
        payload = request.get_json(silent=True)
        if not isinstance(payload, list):
            return jsonify({"success": False, "message": "Expected a JSON list of tasks"}), 400
        try:
            tasks = [Task.from_dict(item) for item in payload]
        except (ValidationError, AttributeError) as e:
            return jsonify({"success": False, "message": str(e) or "Invalid task"}), 400
        added = service.run_sweep(tasks)
        return jsonify({"success": True, "added": [n.to_dict() for n in added]})
