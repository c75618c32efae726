import os
import sys
import signal
import logging
import time
import threading
from pathlib import Path

import pytest

# Ensure repository's src/ is on sys.path for tests
ROOT = Path(__file__).resolve().parent.parent
SRC = str(ROOT / "src")
if SRC not in sys.path:
    sys.path.insert(0, SRC)

_SAVED_SIGNALS = [signal.SIGINT, signal.SIGTERM]
if hasattr(signal, "SIGUSR1"):
    _SAVED_SIGNALS.append(signal.SIGUSR1)


@pytest.fixture(autouse=True)
def restore_signal_handlers():
    """La QuitWaiter ne démonte pas ses handlers : on remet ceux de pytest après chaque test."""
    saved = {sig: signal.getsignal(sig) for sig in _SAVED_SIGNALS}
    yield
    for sig, handler in saved.items():
        signal.signal(sig, handler)


class SignalSender(threading.Thread):
    """Envoie une suite de signaux au processus courant depuis un thread secondaire.

    Les handlers Python ne s'exécutent que dans le thread principal : c'est donc
    le test (thread principal) qui attend, et ce thread qui joue l'opérateur.
    """

    def __init__(self, signals, delay: float = 0.05):
        super().__init__(name="SignalSender", daemon=True)
        self.signals = list(signals)
        self.delay = delay
        self.sent_at = []

    def run(self):
        for sig in self.signals:
            time.sleep(self.delay)
            self.sent_at.append(time.monotonic())
            os.kill(os.getpid(), sig)


@pytest.fixture
def send_signals():
    """Fabrique de SignalSender déjà démarrés."""
    senders = []

    def _start(*signals, delay=0.05):
        sender = SignalSender(signals, delay=delay)
        senders.append(sender)
        sender.start()
        return sender

    yield _start
    for sender in senders:
        sender.join(timeout=2.0)


@pytest.fixture
def reset_quitwait_loggers():
    yield
    # dictConfig pose propagate=False et des handlers fichiers : on remet à zéro pour les autres tests
    for name in ("quitwait", "quitwait.kpi"):
        logger = logging.getLogger(name)
        for h in list(logger.handlers):
            logger.removeHandler(h)
            h.close()
        logger.propagate = True
        logger.setLevel(logging.NOTSET)
