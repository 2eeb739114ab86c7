import pytest

from grafanaop.k8sutil import (
    NoNamespaceError,
    RunLocalError,
    get_operator_namespace,
    get_watch_namespace,
    is_kube_meta_kind,
    is_run_mode_cluster,
    own_kinds,
    resource_exists,
)


def test_get_watch_namespace_reads_env(monkeypatch):
    monkeypatch.setenv("WATCH_NAMESPACE", "monitoring")
    assert get_watch_namespace() == "monitoring"


def test_get_watch_namespace_empty_means_cluster_scope(monkeypatch):
    monkeypatch.setenv("WATCH_NAMESPACE", "")
    assert get_watch_namespace() == ""


def test_get_watch_namespace_missing(monkeypatch):
    monkeypatch.delenv("WATCH_NAMESPACE", raising=False)
    with pytest.raises(RuntimeError, match="WATCH_NAMESPACE must be set"):
        get_watch_namespace()


def test_is_run_mode_cluster(tmp_path):
    assert is_run_mode_cluster(tmp_path) is True
    assert is_run_mode_cluster(tmp_path / "missing") is False


def test_get_operator_namespace_trims(tmp_path):
    (tmp_path / "namespace").write_text("  grafana\n")
    assert get_operator_namespace(tmp_path) == "grafana"


def test_get_operator_namespace_local(tmp_path):
    with pytest.raises(RunLocalError):
        get_operator_namespace(tmp_path / "missing")


def test_get_operator_namespace_no_file(tmp_path):
    with pytest.raises(NoNamespaceError):
        get_operator_namespace(tmp_path)


@pytest.mark.parametrize(
    "kind", ["PodList", "Status", "WatchEvent", "APIGroup", "DeleteOptions", "ListOptions"]
)
def test_meta_kinds(kind):
    assert is_kube_meta_kind(kind) is True


@pytest.mark.parametrize("kind", ["Grafana", "GrafanaDashboard", "ConfigMap"])
def test_non_meta_kinds(kind):
    assert is_kube_meta_kind(kind) is False


def test_own_kinds_filters_meta():
    kinds = [
        ("integreatly.org", "v1alpha1", "Grafana"),
        ("integreatly.org", "v1alpha1", "GrafanaList"),
        ("integreatly.org", "v1alpha1", "GetOptions"),
    ]
    assert own_kinds(kinds) == [("integreatly.org", "v1alpha1", "Grafana")]


API_LISTS = [
    {"groupVersion": "v1", "resources": [{"kind": "ConfigMap"}]},
    {"groupVersion": "route.openshift.io/v1", "resources": [{"kind": "Route"}]},
]


def test_resource_exists_found():
    assert resource_exists(API_LISTS, "route.openshift.io/v1", "Route") is True


def test_resource_exists_wrong_group():
    assert resource_exists(API_LISTS, "v1", "Route") is False


def test_resource_exists_empty():
    assert resource_exists([], "v1", "ConfigMap") is False