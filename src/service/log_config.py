"""
service.log_config
------------------

Chargement de ``config/logging.yaml`` et application via ``logging.config.dictConfig``.

LOG_MODE=dev -> console INFO, LOG_MODE=perf (défaut) -> console WARNING.
Les chemins de fichiers ``logs/...`` sont réécrits vers ``log_dir`` (absolu).
"""

import os
import yaml
import logging
import logging.config
from typing import Any, Dict, Optional


def load_logging_yaml(cfg_path: str, log_dir: str, log_mode: Optional[str] = None) -> Dict[str, Any]:
    """Lit la config YAML et l'ajuste (chemins absolus, niveau console) sans l'appliquer."""
    with open(cfg_path, "r", encoding="utf-8") as f:
        cfg = yaml.safe_load(f) or {}

    log_dir = os.path.abspath(log_dir)
    for handler_config in cfg.get("handlers", {}).values():
        filename = handler_config.get("filename")
        if filename and filename.startswith("logs/"):
            handler_config["filename"] = os.path.join(log_dir, filename[len("logs/"):])

    if log_mode is None:
        log_mode = os.environ.get("LOG_MODE", "perf")
    log_mode = log_mode.lower()
    if "console" in cfg.get("handlers", {}):
        cfg["handlers"]["console"]["level"] = "INFO" if log_mode == "dev" else "WARNING"
    return cfg


def configure_logging(cfg_path: str, log_dir: str, log_mode: Optional[str] = None) -> Dict[str, Any]:
    """Configure le logging du démon et retourne le dict appliqué."""
    os.makedirs(log_dir, exist_ok=True)  # idempotent
    cfg = load_logging_yaml(cfg_path, log_dir, log_mode)
    logging.config.dictConfig(cfg)
    return cfg
