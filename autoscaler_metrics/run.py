"""Exposition server entry point."""

import logging

from paste.translogger import TransLogger  # type: ignore[import-untyped]
from waitress import serve

from autoscaler_metrics import create_app
from autoscaler_metrics.config import Settings


def main() -> None:
    settings = Settings.load()

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    app = create_app(settings)

    if settings.debug:
        app.logger.info("Running in debug mode")
        app.run(
            host=settings.metrics_host,
            port=settings.metrics_port,
            debug=True,
            use_reloader=False,
        )
        return

    wsgi = TransLogger(app, setup_console_handler=False)
    wsgi.logger.info(
        f"Using Waitress WSGI server with {settings.waitress_threads} threads"
    )
    serve(
        wsgi,
        host=settings.metrics_host,
        port=settings.metrics_port,
        threads=settings.waitress_threads,
    )


if __name__ == "__main__":
    main()
