"""Journalisation du cycle de vie : filtres de logs et lignes KPI."""

from lifecycle.monitoring.filters import LogModeFilter, BelowLevelFilter, LoggerNameFilter
from lifecycle.monitoring.kpi import KPI_EVENTS, format_kpi, parse_kpi_line, emit_kpi, KpiJsonFormatter

__all__ = [
    "LogModeFilter",
    "BelowLevelFilter",
    "LoggerNameFilter",
    "KPI_EVENTS",
    "format_kpi",
    "parse_kpi_line",
    "emit_kpi",
    "KpiJsonFormatter",
]
