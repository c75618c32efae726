"""
lifecycle.monitoring.kpi
------------------------

Lignes KPI du cycle de vie du démon, écrites sur le logger ``quitwait.kpi``.

Format (une ligne par événement) :
    ts=<epoch, 6 décimales> event=<événement> [champ=valeur ...]

Événements connus : config_loaded, alive, quit_received, quit_timeout,
quit_cancelled, service_stopped. KPI_LOGGING=0 désactive l'émission.
"""
import os
import json
import time
import logging
from typing import Any, Dict, Final, Optional

KPI_LOGGER: Final = "quitwait.kpi"
KPI_EVENTS: Final = frozenset({
    "config_loaded",    # config validée (name)
    "alive",            # tick du thread de surveillance (name, uptime_s)
    "quit_received",    # SIGINT/SIGTERM consommé (waited_s)
    "quit_timeout",     # quit_timeout_s écoulé sans signal (waited_s)
    "quit_cancelled",   # QuitWaiter.cancel() avant tout signal (waited_s)
    "service_stopped",  # arrêt terminé (name, uptime_s)
})

LOG_KPI = logging.getLogger(KPI_LOGGER)
LOG = logging.getLogger("quitwait.monitor")


def kpi_enabled() -> bool:
    return os.getenv("KPI_LOGGING", "1") not in ("0", "false", "False")


def _field(value: Any) -> str:
    if isinstance(value, float):
        return f"{value:.3f}"
    # une valeur = un seul jeton séparé par des espaces
    return "_".join(str(value).split()) or "-"


def format_kpi(event: str, ts: Optional[float] = None, **fields: Any) -> str:
    """Construit la ligne KPI d'un événement du cycle de vie.

    ``ts`` vaut maintenant s'il est absent ; les flottants sont écrits avec
    3 décimales. Lève ValueError pour un événement inconnu ou un champ réservé.
    """
    if event not in KPI_EVENTS:
        raise ValueError(f"Unknown KPI event: {event}")
    if "event" in fields:
        raise ValueError("'event' is a reserved KPI field")
    parts = [f"ts={time.time() if ts is None else ts:.6f}", f"event={event}"]
    parts.extend(f"{k}={_field(v)}" for k, v in fields.items())
    return " ".join(parts)


def parse_kpi_line(line: str) -> Dict[str, object]:
    """Inverse de format_kpi ; accepte le préfixe "kpi " ajouté par le formatter texte.

    ``ts`` est converti en float, les autres valeurs restent des chaînes.
    Lève ValueError si la ligne n'a pas de champ ``event``.
    """
    out: Dict[str, object] = {}
    for token in line.split():
        if "=" not in token:
            continue
        k, v = token.split("=", 1)
        out[k] = float(v) if k == "ts" else v
    if "event" not in out:
        raise ValueError(f"Not a KPI line: {line!r}")
    return out


def emit_kpi(event: str, **fields: Any) -> None:
    """Publie un événement KPI ; un échec d'écriture n'interrompt jamais l'appelant."""
    if not kpi_enabled():
        return
    msg = format_kpi(event, **fields)
    try:
        LOG_KPI.info(msg)
    except Exception:
        LOG.debug("Failed to write KPI: %s", msg)


class KpiJsonFormatter(logging.Formatter):
    """Rend une ligne KPI en JSON (une ligne par événement, pour kpi.jsonl)."""

    def format(self, record: logging.LogRecord) -> str:
        msg = record.getMessage()
        try:
            data = parse_kpi_line(msg)
        except ValueError:
            data = {"msg": msg}
        data.setdefault("logger", record.name)
        data.setdefault("level", record.levelname)
        return json.dumps(data, ensure_ascii=False)
