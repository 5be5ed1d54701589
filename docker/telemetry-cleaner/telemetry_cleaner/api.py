from __future__ import annotations

from datetime import datetime, timezone

from flask import Blueprint, jsonify

from .cleaning import InvalidArgumentError
from .config import CleanerSettings
from .files import TelemetryFileManager
from .formatting import format_bytes, format_count, format_uptime
from .scheduler import CleanupScheduler


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def create_api_blueprint(
    *,
    settings: CleanerSettings,
    file_manager: TelemetryFileManager,
    scheduler: CleanupScheduler,
    started_at: datetime | None = None,
) -> Blueprint:
    blueprint = Blueprint("telemetry_cleaner_api", __name__)
    started = started_at or _utc_now()

    @blueprint.post("/clear")
    def clear() -> tuple:
        try:
            result = file_manager.clear_all_files(settings.output_directory)
        except InvalidArgumentError as exc:
            return jsonify({"success": False, "error": str(exc)}), 400

        payload = result.to_dict()
        payload.update(
            {
                "success": True,
                "space_freed": format_bytes(result.space_freed_bytes),
                "message": f"Successfully deleted {result.files_deleted} telemetry file(s)",
                "timestamp": _utc_now().isoformat(),
            }
        )
        return jsonify(payload), 200

    @blueprint.get("/status")
    def status() -> tuple:
        stats = file_manager.get_statistics(settings.output_directory)
        uptime = _utc_now() - started
        last_result = scheduler.last_result

        return (
            jsonify(
                {
                    "status": "ok",
                    "output_directory": settings.output_directory,
                    "uptime": format_uptime(uptime),
                    "uptime_seconds": int(uptime.total_seconds()),
                    "files": {
                        "count": stats.count,
                        "count_display": format_count(stats.count),
                        "total_size_bytes": stats.total_size_bytes,
                        "total_size": format_bytes(stats.total_size_bytes),
                    },
                    "scheduler_running": scheduler.is_running,
                    "last_scheduled_clear": last_result.to_dict() if last_result is not None else None,
                }
            ),
            200,
        )

    @blueprint.get("/health")
    def health() -> tuple:
        return (
            jsonify(
                {
                    "status": "ok",
                    "scheduler_running": scheduler.is_running,
                }
            ),
            200,
        )

    return blueprint
