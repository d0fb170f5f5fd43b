"""Tests for math channel sampling and bounded history."""

from __future__ import annotations

import pytest

from mathchan.channels.history import (
    MATH_DEVICE_TYPE,
    MathChannelHistory,
    compute_math_sample,
    resolve_latest_samples,
)
from mathchan.channels.models import MathChannelConfig, MathChannelInput


class _ListSink:
    def __init__(self) -> None:
        self.events: list[dict] = []

    def append(self, event: dict) -> None:
        self.events.append(event)


def _power_channel(alias: str = "Power", expression: str = "a * b") -> MathChannelConfig:
    return MathChannelConfig(
        id="m1",
        alias=alias,
        color="#9b59b6",
        expression=expression,
        inputs=[
            MathChannelInput(channel_id="ch-volt", variable="a"),
            MathChannelInput(channel_id="ch-amp", variable="b"),
        ],
        unit="W",
    )


@pytest.fixture
def measurements(make_sample) -> dict[str, list]:
    return {
        "dmm-1": [make_sample("dmm-1", 1.0, 90.0, "V"), make_sample("dmm-1", 2.0, 100.0, "V")],
        "dmm-2": [make_sample("dmm-2", 3.0, 105.0, "A")],
    }


def test_resolve_latest_samples(device_channels, measurements) -> None:
    latest = resolve_latest_samples(device_channels, measurements)

    assert latest["ch-volt"].value == 2.0
    assert latest["ch-amp"].value == 3.0
    assert latest["ch-temp"] is None


def test_compute_math_sample(device_channels, measurements) -> None:
    by_id = {channel.id: channel for channel in device_channels}
    latest = resolve_latest_samples(device_channels, measurements)
    sink = _ListSink()

    sample = compute_math_sample(_power_channel(), by_id, latest, sink=sink)

    assert sample is not None
    assert sample.value == 6.0
    assert sample.timestamp == 105.0
    assert sample.device_id == "m1"
    assert sample.device_type == MATH_DEVICE_TYPE
    assert sample.device_label == "Power"
    assert sample.unit == "W"
    assert [event["kind"] for event in sink.events] == ["sample"]
    assert sink.events[0]["data"]["value"] == 6.0


def test_compute_math_sample_skips_missing_inputs(device_channels, measurements) -> None:
    by_id = {channel.id: channel for channel in device_channels}
    latest = resolve_latest_samples(device_channels, measurements)
    channel = _power_channel().model_copy(
        update={"inputs": [MathChannelInput(channel_id="ch-temp", variable="a")]}
    )

    assert compute_math_sample(channel, by_id, latest) is None
    assert compute_math_sample(_power_channel(), {}, latest) is None


def test_compute_math_sample_skips_failed_evaluation(device_channels, measurements) -> None:
    by_id = {channel.id: channel for channel in device_channels}
    latest = resolve_latest_samples(device_channels, measurements)
    sink = _ListSink()

    assert compute_math_sample(_power_channel(expression="a / 0"), by_id, latest, sink=sink) is None
    assert sink.events[0]["data"]["value"] is None
    assert sink.events[0]["data"]["reason"]


def test_update_appends_and_ignores_repeated_ticks(device_channels, measurements, make_sample) -> None:
    history = MathChannelHistory()

    assert history.update(device_channels, [_power_channel()], measurements) is True
    assert [s.value for s in history.samples("m1")] == [6.0]

    assert history.update(device_channels, [_power_channel()], measurements) is False

    measurements["dmm-2"].append(make_sample("dmm-2", 4.0, 110.0, "A"))
    assert history.update(device_channels, [_power_channel()], measurements) is True
    assert [(s.value, s.timestamp) for s in history.samples("m1")] == [(6.0, 105.0), (8.0, 110.0)]


def test_update_replaces_sample_with_same_timestamp(device_channels, measurements, make_sample) -> None:
    history = MathChannelHistory()
    history.update(device_channels, [_power_channel()], measurements)

    measurements["dmm-1"][-1] = make_sample("dmm-1", 4.0, 100.0, "V")
    assert history.update(device_channels, [_power_channel()], measurements) is True

    samples = history.samples("m1")
    assert len(samples) == 1
    assert samples[0].value == 12.0


def test_update_trims_to_limit(device_channels, measurements, make_sample) -> None:
    history = MathChannelHistory(limit=2)
    for tick in range(4):
        measurements["dmm-2"].append(make_sample("dmm-2", float(tick), 200.0 + tick, "A"))
        history.update(device_channels, [_power_channel()], measurements)

    assert [s.timestamp for s in history.samples("m1")] == [202.0, 203.0]


def test_update_relabels_when_evaluation_fails(device_channels, measurements) -> None:
    history = MathChannelHistory()
    history.update(device_channels, [_power_channel()], measurements)

    renamed = _power_channel(alias="P", expression="a / 0")
    assert history.update(device_channels, [renamed], measurements) is True
    assert [s.device_label for s in history.samples("m1")] == ["P"]


def test_update_drops_removed_channels(device_channels, measurements) -> None:
    history = MathChannelHistory()
    other = _power_channel().model_copy(update={"id": "m2"})
    history.update(device_channels, [_power_channel(), other], measurements)

    assert history.update(device_channels, [other], measurements) is True
    assert set(history.to_dict()) == {"m2"}

    assert history.update(device_channels, [], measurements) is True
    assert history.to_dict() == {}
    assert history.update(device_channels, [], measurements) is False


def test_compute_math_sample_skips_nan_input(device_channels, measurements, make_sample) -> None:
    by_id = {channel.id: channel for channel in device_channels}
    measurements["dmm-1"].append(make_sample("dmm-1", float("nan"), 120.0, "V"))
    latest = resolve_latest_samples(device_channels, measurements)

    assert compute_math_sample(_power_channel(expression="max(1, a)"), by_id, latest) is None
