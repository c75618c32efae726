"""Primitives de cycle de vie pour les démons.

Ce package expose l'attente des signaux de terminaison (``quit``) et le
sous-package ``monitoring`` (filtres de logs, KPI).
"""

from lifecycle.quit import QuitWaiter, wait_for_quit, QUIT_SIGNALS

__all__ = [
    "QuitWaiter",
    "wait_for_quit",
    "QUIT_SIGNALS",
    "monitoring",
]
