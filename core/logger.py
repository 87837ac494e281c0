"""Structured logging for Switchboard.

Every module takes the same logger from :meth:`SwitchboardLogger.get_logger`.
Records are written as one JSON object per line to stdout and to a rotating
``switchboard.log``, so a single interaction can be followed through the
gateway, the gates and the reply helpers by its ``interaction_id``.

Environment:

* ``SWITCHBOARD_LOG_DIR``: directory for ``switchboard.log`` (default ``logs``).
* ``SWITCHBOARD_LOG_LEVEL``: level name such as ``DEBUG`` (default ``INFO``).
  ``DEBUG`` shows ignored non-command interactions and each defer.
"""

import json
import logging
import os
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from typing import Optional


def _level_from_env(default: int = logging.INFO) -> int:
    name = os.environ.get("SWITCHBOARD_LOG_LEVEL", "").strip().upper()
    level = logging.getLevelName(name) if name else default
    return level if isinstance(level, int) else default


class _JsonFormatter(logging.Formatter):
    """One JSON object per record.

    ``timestamp``, ``level``, ``logger``, ``message``, ``module`` and
    ``func_name`` are always present.  Keys passed through ``extra=`` are
    merged in; the dispatcher passes :meth:`InteractionEvent.log_context`, so
    a rejected invocation logs as::

        {"timestamp": "…", "level": "WARNING", "message": "Interaction rejected by gate",
         …, "interaction_id": 9001, "command": "settings", "sub_command": "reset",
         "gate": "UnauthorizedRoleError", …}

    ``logger.exception`` adds the formatted traceback under ``exc_info``.
    """

    _BUILTIN_ATTRS: frozenset[str] = frozenset(vars(logging.LogRecord(
        name="", level=0, pathname="", lineno=0, msg="", args=(), exc_info=None,
    )))

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "func_name": record.funcName,
        }

        for key, value in record.__dict__.items():
            if key not in self._BUILTIN_ATTRS and key not in log_entry:
                log_entry[key] = value

        if record.exc_info:
            log_entry["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, ensure_ascii=False, default=str)


class SwitchboardLogger:
    """Process-wide owner of the ``switchboard`` logger and its two handlers.

    Modules hold the returned :class:`logging.Logger` at import time::

        logger = SwitchboardLogger.get_logger()
        logger.info("Guild commands synced", extra={"guild_id": 1000, "count": 6})
    """

    _instance: Optional["SwitchboardLogger"] = None
    _logger: Optional[logging.Logger] = None

    _LOG_DIR: str = os.environ.get("SWITCHBOARD_LOG_DIR", "logs")
    _LOG_FILE: str = "switchboard.log"
    _MAX_BYTES: int = 5 * 1024 * 1024  # 5 MB
    _BACKUP_COUNT: int = 5

    def __new__(cls, level: Optional[int] = None) -> "SwitchboardLogger":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._init_logger(_level_from_env() if level is None else level)
        return cls._instance

    # ------------------------------------------------------------------
    # Initialisation helpers
    # ------------------------------------------------------------------

    def _init_logger(self, level: int) -> None:
        self._logger = logging.getLogger("switchboard")
        self._logger.setLevel(level)

        # Reloaded module: handlers are already attached.
        if self._logger.handlers:
            return

        formatter = _JsonFormatter()

        stream_handler = logging.StreamHandler()
        stream_handler.setLevel(level)
        stream_handler.setFormatter(formatter)
        self._logger.addHandler(stream_handler)

        os.makedirs(self._LOG_DIR, exist_ok=True)
        file_handler = RotatingFileHandler(
            os.path.join(self._LOG_DIR, self._LOG_FILE),
            maxBytes=self._MAX_BYTES,
            backupCount=self._BACKUP_COUNT,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        self._logger.addHandler(file_handler)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @staticmethod
    def get_logger(level: Optional[int] = None) -> logging.Logger:
        """Return the shared ``switchboard`` logger.

        The level is fixed by the first call: *level* if given, otherwise
        ``SWITCHBOARD_LOG_LEVEL``.
        """
        instance = SwitchboardLogger(level)
        assert instance._logger is not None
        return instance._logger

    def cleanup(self) -> None:
        """Flush and detach both handlers; ``main`` calls this on shutdown."""
        if self._logger is None:
            return
        for handler in list(self._logger.handlers):
            handler.flush()
            handler.close()
            self._logger.removeHandler(handler)
