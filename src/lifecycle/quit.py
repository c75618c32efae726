"""
lifecycle.quit
--------------

Attente bloquante d'un signal de terminaison (SIGINT / SIGTERM).

Utilisé dans le point d'entrée des démons : une fois le démarrage terminé,
le thread principal se "gare" sur ``wait_for_quit()`` et reprend la main
quand l'opérateur (Ctrl+C) ou le superviseur (SIGTERM) demande l'arrêt.
L'arrêt propre (threads, fichiers, sockets) reste à la charge de l'appelant.

Exemple :
>>> start_everything()
>>> wait_for_quit()   # bloque jusqu'à SIGINT ou SIGTERM
>>> stop_everything()
"""

from __future__ import annotations

import os
import math
import queue
import signal
import time
import threading
import logging
from typing import Final, Optional, Tuple

LOG = logging.getLogger("quitwait.quit")

# Signaux qui terminent l'attente (et uniquement ceux-là)
QUIT_SIGNALS: Final[Tuple[signal.Signals, ...]] = (signal.SIGINT, signal.SIGTERM)

# Nombre de notifications conservées en attente par canal
CHANNEL_CAPACITY: Final = 2

# Windows : l'attente sur un verrou n'est pas interrompue par un signal,
# on se réveille périodiquement pour laisser tourner le handler Python.
_WAKE_INTERVAL_S: Final[Optional[float]] = 0.1 if os.name == "nt" else None

# Plafond d'une attente élémentaire : SimpleQueue.get() refuse les timeouts au-delà de TIMEOUT_MAX
_MAX_STEP_S: Final = min(threading.TIMEOUT_MAX, 86400.0)

_CANCELLED: Final = object()


class QuitWaiter:
    """Attente composable d'un signal de terminaison.

    Chaque instance possède son propre canal de notification (une
    ``queue.SimpleQueue``, réentrante et donc utilisable depuis un handler
    de signal). Le handler se contente d'y déposer une notification : pas de
    log, pas de verrou.

    ``cancel()`` est un second canal de réveil (thread-safe) qui permet de
    composer l'attente avec une échéance ou un arrêt déclenché ailleurs.
    Seules les notifications de signal comptent dans ``CHANNEL_CAPACITY``.
    """

    __slots__ = ("_channel", "_pending", "_registered", "_received")

    def __init__(self) -> None:
        self._channel: queue.SimpleQueue = queue.SimpleQueue()
        self._pending = 0  # signaux déposés et non consommés (thread principal uniquement)
        self._registered = False
        self._received = False

    def _notify(self, signum, frame) -> None:
        # appelé dans le thread principal, entre deux instructions bytecode
        if self._pending < CHANNEL_CAPACITY:
            self._pending += 1
            self._channel.put(signum)

    def register(self) -> "QuitWaiter":
        """Installe le handler pour SIGINT et SIGTERM (idempotent).

        Si l'installation échoue (ex: appel hors du thread principal), on
        journalise un avertissement et le signal garde son comportement par
        défaut (KeyboardInterrupt / termination du processus). Un nouvel
        appel depuis le thread principal retente alors l'installation.
        """
        if self._registered:
            return self
        installed = 0
        for sig in QUIT_SIGNALS:
            try:
                signal.signal(sig, self._notify)
                installed += 1
            except (ValueError, OSError) as e:
                LOG.warning("Cannot register handler for %s, default disposition kept: %s", sig.name, e)
        self._registered = installed > 0
        return self

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Bloque jusqu'au premier signal de terminaison, ``cancel()`` ou timeout.

        Args:
            timeout: délai maximum en secondes (None ou infini = attente illimitée).

        Returns:
            True si un signal de terminaison a été consommé, False sinon.
        """
        self.register()
        if timeout is not None and math.isinf(timeout):
            timeout = None
        deadline = None if timeout is None else time.monotonic() + timeout
        while True:
            step = _WAKE_INTERVAL_S
            if deadline is not None:
                remaining = min(max(0.0, deadline - time.monotonic()), _MAX_STEP_S)
                step = remaining if step is None else min(step, remaining)
            try:
                item = self._channel.get(timeout=step)
            except queue.Empty:
                if deadline is not None and time.monotonic() >= deadline:
                    return False
                continue
            if item is _CANCELLED:
                return False
            self._pending = max(0, self._pending - 1)
            self._received = True
            return True

    def cancel(self) -> None:
        """Réveille l'attente en cours (ou la prochaine) sans signal."""
        self._channel.put(_CANCELLED)

    @property
    def registered(self) -> bool:
        """Au moins un des deux handlers est installé."""
        return self._registered

    @property
    def received(self) -> bool:
        return self._received


def wait_for_quit() -> None:
    """Bloque jusqu'à la réception d'un signal demandant l'arrêt du processus.

    Les handlers sont installés avant de bloquer : un signal reçu entre les
    deux n'est pas perdu. Aucun démontage n'est fait au retour.
    """
    QuitWaiter().register().wait()
