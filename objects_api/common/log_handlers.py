"""
Log Handlers

Bridges the Flask app logger to an existing logger (gunicorn when served by it)
"""
import logging


def init_logging(app, logger_name: str):
    """Set up logging for production"""
    app.logger.propagate = False
    upstream = logging.getLogger(logger_name)
    if upstream.handlers:
        app.logger.handlers = upstream.handlers
        app.logger.setLevel(upstream.level)
    else:
        app.logger.setLevel(app.config.get("LOGGING_LEVEL", logging.INFO))
    # Make all log formats consistent
    formatter = logging.Formatter(
        "[%(asctime)s] [%(levelname)s] [%(module)s] %(message)s", "%Y-%m-%d %H:%M:%S %z"
    )
    for handler in app.logger.handlers:
        handler.setFormatter(formatter)
    app.logger.info("Logging handler established")
