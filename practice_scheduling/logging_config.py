"""
Structured logging configuration.

The engine is a library: it never writes to stdout or stderr on its own.
Engine loggers are structlog loggers wrapped around standard library loggers,
so an unconfigured host gets the stdlib defaults (WARNING and above, debug
verdicts dropped). Hosts that want JSON lines call setup_structured_logging()
once from their entry point; nothing here runs at import time.
"""

import logging
import sys

import structlog


def setup_structured_logging(log_level: str = "INFO") -> None:
	"""
	Configura structlog (salida JSON) y el logging de la librería estándar.

	Args:
		log_level: nivel de logging (DEBUG, INFO, WARNING, ERROR)
	"""
	structlog.configure(
		processors=[
			structlog.stdlib.add_log_level,
			structlog.stdlib.add_logger_name,
			structlog.processors.TimeStamper(fmt="iso"),
			structlog.processors.StackInfoRenderer(),
			structlog.processors.format_exc_info,
			structlog.processors.JSONRenderer()
		],
		wrapper_class=structlog.stdlib.BoundLogger,
		context_class=dict,
		logger_factory=structlog.stdlib.LoggerFactory(),
	)

	logging.basicConfig(
		format="%(message)s",
		stream=sys.stdout,
		level=getattr(logging, log_level.upper())
	)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
	"""
	Logger estructurado respaldado por logging.getLogger(name).

	El nivel y los handlers los decide el host vía la librería estándar.
	"""
	return structlog.wrap_logger(
		logging.getLogger(name),
		wrapper_class=structlog.stdlib.BoundLogger
	)
