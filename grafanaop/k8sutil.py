"""Helpers for working out where and how the operator runs."""

from __future__ import annotations

import os
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

SERVICE_ACCOUNT_DIR = "/var/run/secrets/kubernetes.io/serviceaccount"
WATCH_NAMESPACE_ENV_VAR = "WATCH_NAMESPACE"

_META_KINDS = frozenset(
    {
        "PatchOptions",
        "GetOptions",
        "DeleteOptions",
        "ExportOptions",
        "APIVersions",
        "APIGroupList",
        "APIResourceList",
        "UpdateOptions",
        "CreateOptions",
        "Status",
        "WatchEvent",
        "ListOptions",
        "APIGroup",
    }
)


class NoNamespaceError(LookupError):
    """No namespace could be found for the current environment."""

    def __init__(self) -> None:
        super().__init__("namespace not found for current environment")


class RunLocalError(RuntimeError):
    """The operator runs locally, so cluster-only information is unavailable."""

    def __init__(self) -> None:
        super().__init__("operator run mode forced to local")


def get_watch_namespace() -> str:
    """Return the namespace to watch; an empty string means cluster scope."""
    try:
        return os.environ[WATCH_NAMESPACE_ENV_VAR]
    except KeyError:
        raise RuntimeError(f"{WATCH_NAMESPACE_ENV_VAR} must be set") from None


def is_run_mode_cluster(service_account_dir: str | os.PathLike = SERVICE_ACCOUNT_DIR) -> bool:
    """Tell whether the service account directory of a pod is present."""
    try:
        os.stat(service_account_dir)
    except FileNotFoundError:
        return False
    except OSError:
        return True
    return True


def get_operator_namespace(service_account_dir: str | os.PathLike = SERVICE_ACCOUNT_DIR) -> str:
    """Return the namespace the operator pod runs in."""
    if not is_run_mode_cluster(service_account_dir):
        raise RunLocalError()
    try:
        content = (Path(service_account_dir) / "namespace").read_text()
    except FileNotFoundError:
        raise NoNamespaceError() from None
    return content.strip()


def is_kube_meta_kind(kind: str) -> bool:
    """Tell whether a kind is one of the generic API machinery meta types."""
    return kind.endswith("List") or kind in _META_KINDS


def own_kinds(kinds: Iterable[tuple[str, str, str]]) -> list[tuple[str, str, str]]:
    """Keep the (group, version, kind) triples that are not meta types."""
    return [gvk for gvk in kinds if not is_kube_meta_kind(gvk[2])]


def resource_exists(
    api_lists: Iterable[Mapping[str, Any]], api_group_version: str, kind: str
) -> bool:
    """Tell whether a kind is served in the given API group version.

    ``api_lists`` holds discovery resource lists, each a mapping with a
    ``groupVersion`` and a ``resources`` list of mappings with a ``kind``.
    """
    return any(
        resource.get("kind") == kind
        for api_list in api_lists
        if api_list.get("groupVersion") == api_group_version
        for resource in api_list.get("resources") or []
    )