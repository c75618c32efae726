"""
service.daemon
--------------

Point d'entrée du démon : démarrage, attente d'un signal d'arrêt, arrêt propre.

    python src/main.py --config src/config/daemon.yaml
    LOG_MODE=dev quitwait-daemon
"""

import os
import time
import logging
import argparse
import threading
from typing import Optional, Sequence

from lifecycle.quit import QuitWaiter
from lifecycle.monitoring.kpi import emit_kpi
from service.config import DaemonConfig
from service.log_config import configure_logging
from service.monitor import start_monitor_thread

LOG = logging.getLogger("quitwait.service")

SRC_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
DEFAULT_CONFIG = os.path.join(SRC_DIR, "config", "daemon.yaml")
DEFAULT_LOG_CONFIG = os.path.join(SRC_DIR, "config", "logging.yaml")
DEFAULT_LOG_DIR = os.path.abspath(os.path.join(SRC_DIR, "..", "logs"))


def run(config: DaemonConfig, waiter: Optional[QuitWaiter] = None) -> int:
    """Démarre le service, bloque jusqu'à SIGINT/SIGTERM (ou timeout), puis s'arrête.

    Args:
        config: configuration validée du démon.
        waiter: attente à utiliser (une nouvelle ``QuitWaiter`` par défaut).

    Returns:
        Code de sortie du processus (0).
    """
    boot = time.monotonic()
    waiter = (waiter or QuitWaiter()).register()  # avant tout démarrage : aucun signal perdu
    config.log_summary()

    stop_event = threading.Event()
    monitor = start_monitor_thread(stop_event, config.monitor_interval_s, config.name)
    LOG.info("%s started, waiting for SIGINT/SIGTERM", config.name)

    started = time.monotonic()
    received = waiter.wait(timeout=config.quit_timeout_s)
    waited_s = time.monotonic() - started
    if received:
        LOG.info("Shutdown requested")
        emit_kpi("quit_received", waited_s=waited_s)
    elif config.quit_timeout_s is not None and waited_s >= config.quit_timeout_s:
        LOG.warning("No quit signal after %.1fs, shutting down", waited_s)
        emit_kpi("quit_timeout", waited_s=waited_s)
    else:
        LOG.info("Wait cancelled, shutting down")
        emit_kpi("quit_cancelled", waited_s=waited_s)

    stop_event.set()
    monitor.join(timeout=max(1.0, config.monitor_interval_s))
    emit_kpi("service_stopped", name=config.name, uptime_s=time.monotonic() - boot)
    LOG.info("Service stopped.")
    return 0


def load_config(path: str) -> DaemonConfig:
    """Charge la config du démon ; en cas d'échec, log et valeurs par défaut."""
    try:
        return DaemonConfig.from_yaml(path)
    except Exception:
        LOG.exception("Failed to load daemon config; using defaults")
        return DaemonConfig.default()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Daemon parked until SIGINT/SIGTERM")
    parser.add_argument("--config", default=DEFAULT_CONFIG, help="YAML daemon config")
    parser.add_argument("--log-config", default=DEFAULT_LOG_CONFIG, help="YAML logging config")
    parser.add_argument("--log-dir", default=DEFAULT_LOG_DIR, help="Directory for log files")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        configure_logging(args.log_config, args.log_dir)
    except Exception:
        logging.basicConfig(level=logging.INFO)  # sortie minimale pour le message d'erreur
        LOG.exception("Failed to configure logging from %s", args.log_config)
        return 1
    try:
        return run(load_config(args.config))
    except Exception as e:
        LOG.exception(f"Unexpected error: {e}")
        return 1
