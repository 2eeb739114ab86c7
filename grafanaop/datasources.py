"""Render data source resources into the shared provisioning config map."""

from __future__ import annotations

import hashlib
from collections.abc import Iterable, Mapping, MutableMapping
from dataclasses import dataclass, field
from typing import Any

import yaml

DATASOURCES_API_VERSION = 1


@dataclass
class DatasourceResource:
    """A data source resource and the status written back after processing."""

    name: str
    namespace: str
    filename: str
    datasources: list[Mapping[str, Any]] = field(default_factory=list)
    failed: bool = False
    status_message: str = ""


def render_datasources(datasources: Iterable[Mapping[str, Any]]) -> str:
    """Render data source definitions as a provisioning YAML document."""
    document = {
        "apiVersion": DATASOURCES_API_VERSION,
        "datasources": [dict(ds) for ds in datasources],
    }
    try:
        return yaml.safe_dump(document, sort_keys=True, default_flow_style=False)
    except yaml.YAMLError as exc:
        raise ValueError(f"error parsing datasource: {exc}") from exc


def datasources_hash(data: Mapping[str, str] | None) -> str:
    """Hash the config map data in key order; empty string without data."""
    if data is None:
        return ""
    digest = hashlib.sha256()
    for key in sorted(data):
        digest.update(key.encode())
        digest.update(data[key].encode())
    return digest.hexdigest()


def stale_datasources(known: Mapping[str, str], cluster_filenames: Iterable[str]) -> list[str]:
    """Return the known entries that no longer have a resource on the cluster."""
    present = set(cluster_filenames)
    return [key for key in known if key not in present]


def reconcile_datasources(
    known: MutableMapping[str, str], resources: Iterable[DatasourceResource]
) -> tuple[str, list[DatasourceResource]]:
    """Bring the config map data in line with the resources on the cluster.

    Stale entries are removed and every resource is rendered into ``known``.
    Resources that fail to render are marked as failed. Returns the new hash
    of the data and the resources that were written.
    """
    resources = list(resources)
    for key in stale_datasources(known, (r.filename for r in resources)):
        del known[key]

    updated = []
    for resource in resources:
        try:
            contents = render_datasources(resource.datasources)
        except ValueError as exc:
            resource.failed = True
            resource.status_message = str(exc)
            continue
        known[resource.filename] = contents
        updated.append(resource)

    return datasources_hash(known), updated