"""Filtres de logs du démon, instanciés depuis config/logging.yaml (clé ``()``)."""
import logging
import os
from typing import Union

Level = Union[int, str]


def _as_level(level: Level) -> int:
    if isinstance(level, int):
        return level
    value = logging.getLevelName(level.upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level: {level}")
    return value


class LogModeFilter(logging.Filter):
    """En mode silencieux (LOG_MODE=perf par défaut), ne garde que ``min_level`` et au-dessus.

    Le mode est relu à chaque record : changer LOG_MODE prend effet sans reconfigurer.
    """

    def __init__(self, quiet_mode: str = "perf", min_level: Level = logging.WARNING, env_var: str = "LOG_MODE"):
        super().__init__()
        self.quiet_mode = quiet_mode.lower()
        self.min_level = _as_level(min_level)
        self.env_var = env_var

    def filter(self, record: logging.LogRecord) -> bool:
        if os.getenv(self.env_var, "").lower() != self.quiet_mode:
            return True
        return record.levelno >= self.min_level


class BelowLevelFilter(logging.Filter):
    """Garde les records strictement sous ``level`` (error.log reste l'unique puits des erreurs)."""

    def __init__(self, level: Level = logging.ERROR):
        super().__init__()
        self.level = _as_level(level)

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < self.level


class LoggerNameFilter(logging.Filter):
    """Ne laisse passer que le logger ``name`` et ses enfants (ex: "quitwait.kpi")."""

    def __init__(self, name: str = ""):
        super().__init__(name)

    def filter(self, record: logging.LogRecord) -> bool:
        return bool(self.name) and super().filter(record)
