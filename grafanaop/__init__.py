"""Helpers for Grafana notification channels, datasource provisioning and dashboard bookkeeping."""

__version__ = "4.0.1"