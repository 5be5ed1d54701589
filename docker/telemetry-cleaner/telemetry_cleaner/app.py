import logging
import os

from flask import Flask

from .api import create_api_blueprint
from .config import load_settings
from .files import TelemetryFileManager
from .scheduler import CleanupScheduler


def create_app() -> Flask:
    app = Flask(__name__)

    settings = load_settings(env_file=os.getenv("TC_ENV_FILE", ".env"))
    logging.basicConfig(level=getattr(logging, settings.log_level, logging.INFO))

    file_manager = TelemetryFileManager(retry_policy=settings.retry_policy())
    scheduler = CleanupScheduler(
        file_manager=file_manager,
        output_directory=settings.output_directory,
        interval_seconds=settings.clear_interval_seconds,
    )
    scheduler.start()

    app.register_blueprint(
        create_api_blueprint(settings=settings, file_manager=file_manager, scheduler=scheduler),
        url_prefix="/api",
    )
    app.extensions["telemetry_cleaner_scheduler"] = scheduler
    app.extensions["telemetry_cleaner_settings"] = settings

    return app


def main() -> None:
    app = create_app()
    api_port = int(app.extensions["telemetry_cleaner_settings"].api_port)
    app.run(host="0.0.0.0", port=api_port)


if __name__ == "__main__":
    main()
