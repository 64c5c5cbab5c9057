# Logging estruturado (uma linha JSON por registro) para o serviço

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional, TextIO

_LOGGER_PREFIX = "turning_back"

_LEVELS: Dict[str, int] = {
	"debug": logging.DEBUG,
	"info": logging.INFO,
	"warn": logging.WARNING,
	"warning": logging.WARNING,
	"error": logging.ERROR,
	"fatal": logging.CRITICAL,
}

# Chaves internas do LogRecord que não devem vazar para o payload
_STDLIB_KEYS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None)).keys()) | {"message", "taskName"}


def _extra_fields(record: logging.LogRecord) -> Dict[str, Any]:
	return {k: v for k, v in vars(record).items() if k not in _STDLIB_KEYS}


class StructuredFormatter(logging.Formatter):
	def format(self, record: logging.LogRecord) -> str:
		payload: Dict[str, Any] = {
			"timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
			"level": record.levelname.lower(),
			"logger": record.name,
			"caller": f"{record.module}:{record.lineno}",
			"message": record.getMessage(),
		}
		for key, val in _extra_fields(record).items():
			payload.setdefault(key, val)
		if record.exc_info and record.exc_info[1] is not None:
			payload["error_type"] = type(record.exc_info[1]).__name__
			payload["stacktrace"] = self.formatException(record.exc_info)
		return json.dumps(payload, ensure_ascii=False, default=str)


class ConsoleFormatter(logging.Formatter):
	def __init__(self) -> None:
		super().__init__("%(asctime)s %(levelname)-8s %(name)s %(message)s")

	def format(self, record: logging.LogRecord) -> str:
		line = super().format(record)
		fields = _extra_fields(record)
		if fields:
			line += " " + " ".join(f"{k}={v!r}" for k, v in fields.items())
		return line


def parse_level(level: str) -> int:
	return _LEVELS.get((level or "").lower(), logging.INFO)


def configure_logging(level: str = "info", fmt: str = "json", stream: Optional[TextIO] = None) -> logging.Logger:
	root = logging.getLogger(_LOGGER_PREFIX)
	root.setLevel(parse_level(level))
	root.propagate = False
	for old in list(root.handlers):
		root.removeHandler(old)

	handler = logging.StreamHandler(stream or sys.stdout)
	handler.setFormatter(StructuredFormatter() if fmt == "json" else ConsoleFormatter())
	root.addHandler(handler)
	return root


def get_logger(name: str) -> logging.Logger:
	return logging.getLogger(f"{_LOGGER_PREFIX}.{name}")
