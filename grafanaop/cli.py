"""Command line entry point: option parsing and watch namespace selection."""

from __future__ import annotations

import argparse
import logging
import os
import platform
import sys
from collections.abc import Sequence
from dataclasses import dataclass

from grafanaop.k8sutil import get_watch_namespace

VERSION = "4.0.1"
OPERATOR_SDK_VERSION = "v1.3.0"
LEADER_ELECTION_ID = "2c0156f0.integreatly.org"

DASHBOARD_NAMESPACES_ENV_VAR = "DASHBOARD_NAMESPACES"
DASHBOARD_NAMESPACES_ALL_ENV_VAR = "DASHBOARD_NAMESPACES_ALL"

_TRUE_WORDS = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_WORDS = frozenset({"0", "f", "F", "FALSE", "false", "False"})

logger = logging.getLogger("setup")


class OptionsError(ValueError):
    """The command line options contradict each other or select nothing."""


@dataclass
class Options:
    """Settings taken from the command line and the environment."""

    grafana_image: str = ""
    grafana_image_tag: str = ""
    plugins_init_container_image: str = ""
    plugins_init_container_tag: str = ""
    namespaces: str = ""
    jsonnet_location: str = ""
    scan_all: bool = False
    metrics_bind_address: str = ":8080"
    health_probe_bind_address: str = ":8081"
    leader_elect: bool = False


def lookup_env_or_string(key: str, default: str) -> str:
    """Return the environment variable if it is set, otherwise the default."""
    return os.environ.get(key, default)


def lookup_env_or_bool(key: str, default: bool) -> bool:
    """Return whether the variable equals ``true`` if set, otherwise the default."""
    if key in os.environ:
        return os.environ[key] == "true"
    return default


def sanitize_namespaces(value: str) -> list[str]:
    """Split a comma separated namespace list, trimming and dropping blanks."""
    return [part.strip() for part in value.split(",") if part.strip()]


def _parse_bool(text: str) -> bool:
    if text in _TRUE_WORDS:
        return True
    if text in _FALSE_WORDS:
        return False
    raise argparse.ArgumentTypeError(f"invalid boolean value {text!r}")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="grafanaop", allow_abbrev=False)

    def string_flag(name: str, dest: str, default: str, help_text: str) -> None:
        parser.add_argument(
            f"-{name}", f"--{name}", dest=dest, default=default, help=help_text
        )

    def bool_flag(name: str, dest: str, default: bool, help_text: str) -> None:
        parser.add_argument(
            f"-{name}",
            f"--{name}",
            dest=dest,
            nargs="?",
            const=True,
            default=default,
            type=_parse_bool,
            help=help_text,
        )

    string_flag("grafana-image", "grafana_image", "", "Overrides the default Grafana image")
    string_flag(
        "grafana-image-tag", "grafana_image_tag", "", "Overrides the default Grafana image tag"
    )
    string_flag(
        "grafana-plugins-init-container-image",
        "plugins_init_container_image",
        "",
        "Overrides the default Grafana Plugins Init Container image",
    )
    string_flag(
        "grafana-plugins-init-container-tag",
        "plugins_init_container_tag",
        "",
        "Overrides the default Grafana Plugins Init Container tag",
    )
    string_flag(
        "namespaces",
        "namespaces",
        lookup_env_or_string(DASHBOARD_NAMESPACES_ENV_VAR, ""),
        "Namespaces to scope the interaction of the Grafana operator. "
        "Mutually exclusive with --scan-all",
    )
    string_flag(
        "jsonnet-location",
        "jsonnet_location",
        "",
        "Overrides the base path of the jsonnet libraries",
    )
    bool_flag(
        "scan-all",
        "scan_all",
        lookup_env_or_bool(DASHBOARD_NAMESPACES_ALL_ENV_VAR, False),
        "Scans all namespaces for dashboards",
    )
    string_flag(
        "metrics-bind-address",
        "metrics_bind_address",
        ":8080",
        "The address the metric endpoint binds to.",
    )
    string_flag(
        "health-probe-bind-address",
        "health_probe_bind_address",
        ":8081",
        "The address the probe endpoint binds to.",
    )
    bool_flag(
        "leader-elect",
        "leader_elect",
        False,
        "Enable leader election for controller manager. "
        "Enabling this will ensure there is only one active controller manager.",
    )
    return parser


def parse_options(argv: Sequence[str] | None = None) -> Options:
    """Parse command line arguments; defaults may come from the environment."""
    namespace = _build_parser().parse_args(argv)
    return Options(**vars(namespace))


def dashboard_namespaces(options: Options, namespace: str) -> list[str]:
    """Return the namespaces to scan for dashboards.

    By default this is the operator's own namespace; ``[""]`` stands for all
    namespaces when scanning everything. An explicit namespace list wins.
    """
    if options.scan_all and options.namespaces:
        raise OptionsError("--scan-all and --namespaces both set. Please provide only one")

    selected = [namespace]
    if options.scan_all:
        selected = [""]
        logger.info("Scanning for dashboards in all namespaces")

    if options.namespaces:
        selected = sanitize_namespaces(options.namespaces)
        if not selected:
            raise OptionsError("--namespaces provided but no valid namespaces in list")
        logger.info(
            "Scanning for dashboards in the following namespaces: [%s]", ",".join(selected)
        )
    return selected


def _log_version() -> None:
    logger.info("Python Version: %s", platform.python_version())
    logger.info("OS/Arch: %s/%s", sys.platform, platform.machine())
    logger.info("operator-sdk Version: %s", OPERATOR_SDK_VERSION)
    logger.info("operator Version: %s", VERSION)


def main(argv: Sequence[str] | None = None) -> int:
    """Validate the configuration and report what the operator would watch."""
    logging.basicConfig(level=logging.INFO)
    _log_version()
    options = parse_options(argv)

    try:
        namespace = get_watch_namespace()
    except RuntimeError as exc:
        logger.error("failed to get watch namespace: %s", exc)
        return 1

    try:
        namespaces = dashboard_namespaces(options, namespace)
    except OptionsError as exc:
        print(exc, file=sys.stderr, end="")
        return 1

    logger.info(
        "starting manager with options watchNamespace=%r dashboardNamespaces=%r "
        "scanAll=%s leaderElection=%s leaderElectionID=%s",
        namespace,
        options.namespaces,
        options.scan_all,
        options.leader_elect,
        LEADER_ELECTION_ID,
    )
    logger.info("dashboard namespaces: %s", namespaces)
    return 0


if __name__ == "__main__":
    sys.exit(main())