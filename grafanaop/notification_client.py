"""HTTP client for the Grafana alert notification channel API."""

from __future__ import annotations

import enum
import json
from dataclasses import dataclass
from typing import Any

import requests

CREATE_NOTIFICATION_CHANNEL_URL = "{}/api/alert-notifications/"
NOTIFICATION_CHANNEL_BY_UID_URL = "{}/api/alert-notifications/uid/{}"

_HEADERS = {
    "Accept": "application/json",
    "Content-Type": "application/json",
    "User-Agent": "grafana-operator",
}


class GrafanaClientError(RuntimeError):
    """A request to the Grafana API failed."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


@dataclass
class GrafanaResponse:
    """The fields of a notification channel response that are used."""

    id: int | None = 0
    uid: str | None = ""
    name: str | None = "(empty)"
    type: str | None = ""
    is_default: bool | None = False
    send_reminder: bool | None = False
    disable_resolve_message: bool | None = False
    created: str | None = ""
    updated: str | None = ""
    message: str | None = "(empty)"

    _FIELDS = {
        "id": "id",
        "uid": "uid",
        "name": "name",
        "type": "type",
        "isDefault": "is_default",
        "sendReminder": "send_reminder",
        "disableResolveMessage": "disable_resolve_message",
        "created": "created",
        "updated": "updated",
        "message": "message",
    }

    @classmethod
    def from_json(cls, document: Any) -> GrafanaResponse:
        """Build a response from a decoded JSON object; absent keys keep defaults."""
        if not isinstance(document, dict):
            raise GrafanaClientError("unexpected response body, expected a JSON object")
        response = cls()
        for key, attribute in cls._FIELDS.items():
            if key in document:
                setattr(response, attribute, document[key])
        return response


class _Operation(enum.Enum):
    CREATE = ("creating", "POST")
    READ = ("reading", "GET")
    UPDATE = ("updating", "PUT")
    DELETE = ("deleting", "DELETE")

    def __init__(self, verb: str, method: str) -> None:
        self.verb = verb
        self.method = method


class NotificationChannelClient:
    """Create, read, update and delete notification channels in Grafana."""

    def __init__(
        self,
        url: str,
        user: str,
        password: str,
        timeout: float = 30.0,
        session: requests.Session | None = None,
    ) -> None:
        self.url = url
        self.user = user
        self.password = password
        self.timeout = timeout
        self.session = session or requests.Session()

    def create_notification_channel(self, channel: bytes | str) -> GrafanaResponse:
        """Submit a new channel definition."""
        return self._request(_Operation.CREATE, channel, "")

    def update_notification_channel(self, channel: bytes | str, uid: str) -> GrafanaResponse:
        """Replace the channel with the given UID."""
        return self._request(_Operation.UPDATE, channel, uid)

    def get_notification_channel(self, uid: str) -> GrafanaResponse:
        """Fetch the channel with the given UID."""
        return self._request(_Operation.READ, None, uid)

    def delete_notification_channel_by_uid(self, uid: str) -> GrafanaResponse:
        """Delete the channel with the given UID."""
        return self._request(_Operation.DELETE, None, uid)

    def _request(
        self, op: _Operation, channel: bytes | str | None, uid: str
    ) -> GrafanaResponse:
        if op is _Operation.CREATE:
            url = CREATE_NOTIFICATION_CHANNEL_URL.format(self.url)
        else:
            url = NOTIFICATION_CHANNEL_BY_UID_URL.format(self.url, uid)

        body = channel.encode() if isinstance(channel, str) else channel
        try:
            resp = self.session.request(
                op.method,
                url,
                data=body,
                headers=_HEADERS,
                auth=(self.user, self.password),
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise GrafanaClientError(str(exc)) from exc

        with resp:
            if resp.status_code != 200:
                raise GrafanaClientError(
                    f"error {op.verb} notificationChannel, expected status 200 "
                    f"but got {resp.status_code}",
                    resp.status_code,
                )
            try:
                document = json.loads(resp.content)
            except ValueError as exc:
                raise GrafanaClientError(f"invalid response body: {exc}") from exc
        return GrafanaResponse.from_json(document)