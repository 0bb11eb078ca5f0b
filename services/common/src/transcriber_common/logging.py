import logging
import os
import sys

from pythonjsonlogger import jsonlogger

SERVICE_NAME = "audio-transcription-api"


def setup_logging(level: str | None = None):
    """
    Configures structured JSON logging on stdout for the transcription service.

    Every record carries timestamp, level, logger name, message, trace/span ids
    and a static ``service`` field. The root logger and the Uvicorn loggers
    share one stream handler, so access logs and pipeline logs are emitted in
    the same format. Calling it again replaces the handlers instead of
    stacking them.

    Args:
        level: Log level name. Defaults to the LOG_LEVEL environment
            variable, then INFO.

    Returns:
        logging.Logger: The configured root logger instance.
    """
    level_name = (level or os.getenv("LOG_LEVEL", "INFO")).upper()

    formatter = jsonlogger.JsonFormatter(
        "%(asctime)s %(levelname)s %(name)s %(message)s %(trace_id)s %(span_id)s",
        static_fields={"service": SERVICE_NAME},
    )
    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(level_name)
    root_logger.handlers = [stream_handler]

    for logger_name in ["uvicorn", "uvicorn.access", "uvicorn.error"]:
        u_logger = logging.getLogger(logger_name)
        u_logger.setLevel(level_name)
        u_logger.handlers = [stream_handler]
        u_logger.propagate = False

    return root_logger
