"""Per-tick sampling of math channels into bounded histories."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Protocol

from mathchan.channels.models import DeviceChannelConfig, MathChannelConfig, MeasurementSample
from mathchan.expr.evaluate import try_evaluate
from mathchan.trace.event import TraceEventKind, new_event


MATH_HISTORY_LIMIT = 5000
MATH_DEVICE_TYPE = "Math"


class EventSink(Protocol):
    def append(self, event: dict) -> None: ...


def resolve_latest_samples(
    device_channels: Sequence[DeviceChannelConfig],
    measurement_history: Mapping[str, Sequence[MeasurementSample]],
) -> dict[str, MeasurementSample | None]:
    """Map each device channel id to the newest sample of its device."""

    latest: dict[str, MeasurementSample | None] = {}
    for channel in device_channels:
        samples = measurement_history.get(channel.device_id) or ()
        latest[channel.id] = samples[-1] if samples else None
    return latest


def compute_math_sample(
    channel: MathChannelConfig,
    device_channels: Mapping[str, DeviceChannelConfig],
    latest_samples: Mapping[str, MeasurementSample | None],
    *,
    sink: EventSink | None = None,
) -> MeasurementSample | None:
    """Evaluate ``channel`` once against the newest input samples.

    Returns None when an input has no channel or no sample yet, or when the
    expression is not computable. The sample carries the newest input
    timestamp.
    """

    if not channel.inputs:
        return None

    bindings: dict[str, float] = {}
    timestamps: list[float] = []
    for item in channel.inputs:
        source = device_channels.get(item.channel_id)
        if source is None:
            return None
        sample = latest_samples.get(source.id)
        if sample is None:
            return None
        bindings[item.variable] = sample.value
        timestamps.append(sample.timestamp)

    value, reason = try_evaluate(channel.expression, bindings)
    if sink is not None:
        sink.append(
            new_event(
                TraceEventKind.SAMPLE,
                f"{channel.id}: {'ok' if value is not None else 'skipped'}",
                data={
                    "expression": channel.expression,
                    "bindings": bindings,
                    "value": value,
                    "reason": reason,
                },
            )
        )
    if value is None:
        return None

    return MeasurementSample(
        device_id=channel.id,
        device_type=MATH_DEVICE_TYPE,
        device_label=channel.alias,
        value=value,
        unit=channel.unit,
        timestamp=max(timestamps),
    )


def _relabel(sample: MeasurementSample, channel: MathChannelConfig) -> MeasurementSample:
    return sample.model_copy(update={"device_label": channel.alias, "unit": channel.unit})


class MathChannelHistory:
    """Bounded sample history for every configured math channel."""

    def __init__(self, limit: int = MATH_HISTORY_LIMIT) -> None:
        self.limit = limit
        self._history: dict[str, list[MeasurementSample]] = {}

    def samples(self, channel_id: str) -> list[MeasurementSample]:
        return list(self._history.get(channel_id, ()))

    def to_dict(self) -> dict[str, list[MeasurementSample]]:
        return {key: list(value) for key, value in self._history.items()}

    def update(
        self,
        device_channels: Sequence[DeviceChannelConfig],
        math_channels: Sequence[MathChannelConfig],
        measurement_history: Mapping[str, Sequence[MeasurementSample]],
        *,
        sink: EventSink | None = None,
    ) -> bool:
        """Sample every math channel once; return True when history changed."""

        prev = self._history
        if not math_channels:
            self._history = {}
            return bool(prev)

        by_id = {channel.id: channel for channel in device_channels}
        latest = resolve_latest_samples(device_channels, measurement_history)

        mutated = len(math_channels) != len(prev)
        nxt: dict[str, list[MeasurementSample]] = {}
        for channel in math_channels:
            history = prev.get(channel.id, [])
            sample = compute_math_sample(channel, by_id, latest, sink=sink)
            last = history[-1] if history else None

            if sample is None:
                if last is not None and (last.device_label != channel.alias or last.unit != channel.unit):
                    history = [_relabel(item, channel) for item in history]
                    mutated = True
                nxt[channel.id] = history
                continue

            if last is not None and last.timestamp == sample.timestamp:
                if (
                    last.value != sample.value
                    or last.unit != sample.unit
                    or last.device_label != sample.device_label
                ):
                    replaced = last.model_copy(
                        update={
                            "value": sample.value,
                            "unit": sample.unit,
                            "device_label": sample.device_label,
                        }
                    )
                    history = [*history[:-1], replaced]
                    mutated = True
                nxt[channel.id] = history
                continue

            history = [*history, sample]
            if len(history) > self.limit:
                history = history[-self.limit :]
            nxt[channel.id] = history
            mutated = True

        if not mutated:
            mutated = any(channel.id not in prev for channel in math_channels)
        self._history = nxt
        return mutated
