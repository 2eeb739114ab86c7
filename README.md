# grafanaop

Helpers for keeping a Grafana instance in step with declared notification
channels, datasources and dashboards.

## Modules

- `grafanaop.notification_pipeline`: `NotificationChannelPipeline(name, json_text)`
  checks a channel definition against a known hash. `process(known_hash)`
  returns the channel as compact JSON bytes, or `None` when the SHA-256 of the
  definition (see `content_hash`) equals the known hash; `new_hash()` gives the
  hash from the last call. A missing definition or one that is not a JSON object
  raises `PipelineError`.
- `grafanaop.notification_client`: `NotificationChannelClient(url, user, password, timeout, session)`
  talks to Grafana's `/api/alert-notifications` endpoints with basic
  authentication: `create_notification_channel`, `update_notification_channel`,
  `get_notification_channel` and `delete_notification_channel_by_uid`. Each
  returns a `GrafanaResponse`. Any status other than 200, a failed request or a
  body that is not a JSON object raises `GrafanaClientError`.
- `grafanaop.datasources`: `render_datasources` renders datasource definitions
  as provisioning YAML with `apiVersion: 1`, and `datasources_hash` hashes a
  map of file names to contents in key order. `stale_datasources` lists entries
  that have no resource any more. `reconcile_datasources(known, resources)`
  removes those entries, writes each `DatasourceResource` into the map, marks
  resources that fail to render as failed, and returns the new hash together
  with the resources that were written.
- `grafanaop.dashboard_sync`: `DashboardRef` (a dashboard submitted before) and
  `DashboardItem` (a dashboard resource in a namespace), with `find_hash`,
  `find_uid`, `in_namespace`, `dashboards_to_delete` and `folder_name_for`,
  which picks the custom folder name or else the namespace.
- `grafanaop.k8sutil`: `get_watch_namespace` reads `WATCH_NAMESPACE`;
  `get_operator_namespace` and `is_run_mode_cluster` look at the pod's service
  account directory (raising `RunLocalError` or `NoNamespaceError`);
  `is_kube_meta_kind`, `own_kinds` and `resource_exists` work on API kinds and
  discovery lists.
- `grafanaop.cli`: option parsing (`parse_options`, `Options`), environment
  lookups, `sanitize_namespaces` and `dashboard_namespaces`, and the `main`
  entry point.

## Installation

```
pip install .
```

## Command line

```
WATCH_NAMESPACE=monitoring grafanaop --namespaces team-a,team-b
```

The command checks its configuration, logs the operator version and the
namespaces it would scan for dashboards, and exits with status 0. It exits
with status 1 when `WATCH_NAMESPACE` is not set, when `--scan-all` and
`--namespaces` are both given, or when `--namespaces` holds no non-blank
names. The defaults of `--namespaces` and `--scan-all` come from
`DASHBOARD_NAMESPACES` and `DASHBOARD_NAMESPACES_ALL` (the latter counts only
when it is exactly `true`).

Other options: `--grafana-image`, `--grafana-image-tag`,
`--grafana-plugins-init-container-image`, `--grafana-plugins-init-container-tag`,
`--jsonnet-location`, `--metrics-bind-address` (default `:8080`),
`--health-probe-bind-address` (default `:8081`) and `--leader-elect`. Each may
also be written with a single dash.

## Example

```python
from grafanaop.notification_client import NotificationChannelClient

password = "password"
client = NotificationChannelClient("http://localhost:3000", "user", password, 30, None)
channel = client.get_notification_channel("my-channel")
print(channel.name)
```

## What it does not do

The package does not connect to a Kubernetes cluster, watch resources or run
a reconciliation loop; the command only validates options and reports what it
would watch. It does not fetch dashboard JSON or submit dashboards and folders
to Grafana: `grafanaop.dashboard_sync` only decides which dashboards are known,
unchanged or stale.

## Tests

```
pip install .[test]
pytest
```