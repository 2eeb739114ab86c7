"""Work out which dashboards to submit, keep or remove in a namespace."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass


@dataclass
class DashboardRef:
    """A dashboard that has been submitted to Grafana before."""

    name: str
    namespace: str = ""
    uid: str = ""
    hash: str = ""
    folder_id: int | None = None
    folder_name: str = ""


@dataclass
class DashboardItem:
    """A dashboard resource found in a namespace."""

    name: str
    namespace: str = ""
    custom_folder_name: str = ""
    url: str = ""


def _same(a: DashboardRef | DashboardItem, b: DashboardRef | DashboardItem) -> bool:
    return a.name == b.name and a.namespace == b.namespace


def in_namespace(namespace_dashboards: Iterable[DashboardItem], item: DashboardRef) -> bool:
    """Tell whether a known dashboard is still present among the namespace's dashboards."""
    return any(_same(dashboard, item) for dashboard in namespace_dashboards)


def _find(known_dashboards: Iterable[DashboardRef], item: DashboardItem) -> DashboardRef | None:
    return next((ref for ref in known_dashboards if _same(ref, item)), None)


def find_hash(known_dashboards: Iterable[DashboardRef], item: DashboardItem) -> str:
    """Return the known hash of a dashboard, or an empty string."""
    ref = _find(known_dashboards, item)
    return ref.hash if ref is not None else ""


def find_uid(known_dashboards: Iterable[DashboardRef], item: DashboardItem) -> str:
    """Return the known UID of a dashboard, or an empty string."""
    ref = _find(known_dashboards, item)
    return ref.uid if ref is not None else ""


def dashboards_to_delete(
    known_dashboards: Iterable[DashboardRef], namespace_dashboards: Iterable[DashboardItem]
) -> list[DashboardRef]:
    """Return the known dashboards that are no longer found in the namespace."""
    present = list(namespace_dashboards)
    return [ref for ref in known_dashboards if not in_namespace(present, ref)]


def folder_name_for(item: DashboardItem) -> str:
    """Return the Grafana folder a dashboard belongs in: its custom folder or its namespace."""
    return item.custom_folder_name or item.namespace