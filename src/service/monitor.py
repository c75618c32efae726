"""Thread de surveillance : émet périodiquement un KPI ``event=alive`` tant que le démon tourne."""
import time
import logging
import threading

from lifecycle.monitoring.kpi import emit_kpi

LOG = logging.getLogger("quitwait.monitor")


def start_monitor_thread(stop_event: threading.Event, interval_s: float = 2.0, name: str = "quitwait") -> threading.Thread:
    """Démarre le thread de surveillance (démon) et le retourne.

    Args:
        stop_event: événement positionné par l'appelant lors de l'arrêt.
        interval_s: intervalle entre deux KPI (secondes).
        name: nom du service reporté dans les KPI.
    """
    started = time.time()
    LOG.info("Monitor thread started (interval=%.2fs)", interval_s)

    def _loop():
        # wait() retourne True dès que l'arrêt est demandé
        while not stop_event.wait(interval_s):
            emit_kpi("alive", name=name, uptime_s=time.time() - started)
        LOG.info("Monitor thread stopped")

    thread = threading.Thread(target=_loop, name="MonitorThread", daemon=True)
    thread.start()
    return thread
