import json

import pytest

from grafanaop.notification_pipeline import (
    NotificationChannelPipeline,
    PipelineError,
    content_hash,
)

CHANNEL = '{"uid": "PD-alert-notification", "name": "PD alert notification", "type": "pagerduty"}'


def test_missing_json_raises():
    pipeline = NotificationChannelPipeline("pd", "")
    with pytest.raises(PipelineError, match="does not contain json"):
        pipeline.process("")


def test_unchanged_channel_returns_none():
    known = content_hash(CHANNEL)
    pipeline = NotificationChannelPipeline("pd", CHANNEL)
    assert pipeline.process(known) is None
    assert pipeline.new_hash() == known


def test_changed_channel_round_trips():
    pipeline = NotificationChannelPipeline("pd", CHANNEL)
    processed = pipeline.process("old")
    assert json.loads(processed) == json.loads(CHANNEL)
    assert pipeline.new_hash() == content_hash(CHANNEL)
    assert pipeline.channel["uid"] == "PD-alert-notification"


def test_output_has_sorted_compact_keys():
    pipeline = NotificationChannelPipeline("pd", '{"b": 1, "a": 2}')
    assert pipeline.process("") == b'{"a":2,"b":1}'


def test_html_characters_are_escaped():
    pipeline = NotificationChannelPipeline("pd", '{"a": "<x>"}')
    assert pipeline.process("") == b'{"a":"\\u003cx\\u003e"}'


def test_invalid_json_raises():
    pipeline = NotificationChannelPipeline("pd", "{not json")
    with pytest.raises(PipelineError):
        pipeline.process("")


def test_non_object_json_raises():
    pipeline = NotificationChannelPipeline("pd", "[1, 2]")
    with pytest.raises(PipelineError, match="object"):
        pipeline.process("")


def test_content_hash_properties():
    digest = content_hash(CHANNEL)
    assert len(digest) == 64
    assert set(digest) <= set("0123456789abcdef")
    assert content_hash(CHANNEL + " ") != digest
    assert content_hash("") == "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"