import pytest
import yaml

from grafanaop.datasources import (
    DatasourceResource,
    datasources_hash,
    reconcile_datasources,
    render_datasources,
    stale_datasources,
)


def test_render_round_trip():
    sources = [{"name": "prom", "type": "prometheus", "url": "http://localhost:9090"}]
    parsed = yaml.safe_load(render_datasources(sources))
    assert parsed == {"apiVersion": 1, "datasources": sources}


def test_render_starts_with_api_version():
    assert render_datasources([]).startswith("apiVersion: 1\n")


def test_render_invalid_raises():
    with pytest.raises(ValueError, match="error parsing datasource"):
        render_datasources([{"name": object()}])


def test_hash_none_is_empty():
    assert datasources_hash(None) == ""


def test_hash_of_empty_data():
    assert datasources_hash({}) == (
        "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
    )


def test_hash_independent_of_order():
    assert datasources_hash({"a": "1", "b": "2"}) == datasources_hash({"b": "2", "a": "1"})


def test_hash_changes_with_content():
    assert datasources_hash({"a": "1"}) != datasources_hash({"a": "2"})


def test_stale_datasources():
    known = {"x.yaml": "", "y.yaml": ""}
    assert stale_datasources(known, ["y.yaml"]) == ["x.yaml"]


def test_reconcile_removes_stale_and_adds_new():
    known = {"old.yaml": "stale"}
    resource = DatasourceResource(
        name="prom", namespace="grafana", filename="new.yaml", datasources=[{"name": "p"}]
    )
    digest, updated = reconcile_datasources(known, [resource])
    assert set(known) == {"new.yaml"}
    assert yaml.safe_load(known["new.yaml"])["datasources"] == [{"name": "p"}]
    assert updated == [resource]
    assert digest == datasources_hash(known)


def test_reconcile_marks_failures():
    known = {}
    good = DatasourceResource(name="a", namespace="ns", filename="a.yaml", datasources=[])
    bad = DatasourceResource(
        name="b", namespace="ns", filename="b.yaml", datasources=[{"x": object()}]
    )
    _, updated = reconcile_datasources(known, [good, bad])
    assert updated == [good]
    assert bad.failed is True
    assert bad.status_message.startswith("error parsing datasource")
    assert "b.yaml" not in known


def test_reconcile_is_stable():
    resource = DatasourceResource(name="a", namespace="ns", filename="a.yaml", datasources=[])
    known = {}
    first, _ = reconcile_datasources(known, [resource])
    second, _ = reconcile_datasources(known, [resource])
    assert first == second