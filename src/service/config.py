"""
service.config
--------------

Configuration du démon, lue une seule fois au démarrage.
- lecture YAML sûre et validée,
- typage strict des champs,
- conversion objet -> dict,
- valeurs par défaut si le fichier est absent ou invalide (décision de l'appelant).
"""

from __future__ import annotations

import yaml
import os
import math
from dataclasses import dataclass
from typing import Any, Dict, TypedDict, Final, Optional
import logging

from lifecycle.monitoring.kpi import emit_kpi

LOG = logging.getLogger("quitwait.config")


class DaemonConfigDict(TypedDict):
    """Structure exacte du fichier YAML de configuration."""
    name: str
    monitor_interval_s: float
    quit_timeout_s: Optional[float]


@dataclass(slots=True)
class DaemonConfig:
    """
    Conteneur typé pour la configuration du démon.

    Champs :
      - name : nom du service (apparaît dans les logs et KPI)
      - monitor_interval_s : période des KPI de vie ("alive")
      - quit_timeout_s : durée maximale d'attente d'un signal d'arrêt
        (None = attente illimitée)
    """

    name: str
    monitor_interval_s: float = 2.0
    quit_timeout_s: Optional[float] = None

    @classmethod
    def from_yaml(cls, path: str) -> DaemonConfig:
        """
        Charge et valide la configuration depuis un fichier YAML.

        Args:
            path : chemin du fichier YAML (ex: 'src/config/daemon.yaml')

        Exceptions :
            - FileNotFoundError si le fichier n'existe pas
            - ValueError si une clé essentielle manque ou si une valeur est invalide
        """
        if not os.path.exists(path):
            raise FileNotFoundError(f"Daemon config file not found: {path}")

        with open(path, "r", encoding="utf-8") as f:
            data: Dict[str, Any] = yaml.safe_load(f) or {}

        required_keys: Final = ("name",)
        missing = [k for k in required_keys if k not in data]
        if missing:
            raise ValueError(f"Missing required keys in config: {', '.join(missing)}")

        timeout = data.get("quit_timeout_s")
        cfg = cls(
            name=str(data["name"]),
            monitor_interval_s=float(data.get("monitor_interval_s", 2.0)),
            quit_timeout_s=None if timeout is None else float(timeout),
        )

        if not cfg.name:
            raise ValueError("Invalid name: empty")
        if not math.isfinite(cfg.monitor_interval_s) or cfg.monitor_interval_s <= 0:
            raise ValueError(f"Invalid monitor_interval_s: {cfg.monitor_interval_s}")
        if cfg.quit_timeout_s is not None and (not math.isfinite(cfg.quit_timeout_s) or cfg.quit_timeout_s <= 0):
            raise ValueError(f"Invalid quit_timeout_s: {cfg.quit_timeout_s}")

        return cfg

    def to_dict(self) -> DaemonConfigDict:
        return DaemonConfigDict(
            name=self.name,
            monitor_interval_s=self.monitor_interval_s,
            quit_timeout_s=self.quit_timeout_s,
        )

    @classmethod
    def default(cls) -> DaemonConfig:
        """Renvoie une configuration par défaut (utile pour tests)."""
        return cls("quitwait", 2.0, None)

    def summary(self) -> str:
        """Renvoie une chaîne lisible résumant la configuration (sans log)."""
        timeout = "none" if self.quit_timeout_s is None else f"{self.quit_timeout_s:.1f}s"
        return (
            f"[DaemonConfig] name={self.name}, "
            f"monitor_interval={self.monitor_interval_s:.1f}s, quit_timeout={timeout}"
        )

    def log_summary(self) -> None:
        """Publie la configuration courante dans les logs et le flux KPI."""
        LOG.info(self.summary())
        emit_kpi("config_loaded", name=self.name)
