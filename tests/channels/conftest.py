from __future__ import annotations

from typing import Callable

import pytest

from mathchan.channels.models import DeviceChannelConfig, MeasurementSample


@pytest.fixture
def device_channels() -> list[DeviceChannelConfig]:
    return [
        DeviceChannelConfig(id="ch-volt", alias="Voltage", color="#e74c3c", device_id="dmm-1", unit="V"),
        DeviceChannelConfig(id="ch-amp", alias="Current", color="#3498db", device_id="dmm-2", unit="A"),
        DeviceChannelConfig(id="ch-temp", alias="Temp", color="#2ecc71", device_id="probe-1", unit="C"),
    ]


@pytest.fixture
def make_sample() -> Callable[..., MeasurementSample]:
    def _make(device_id: str, value: float, timestamp: float, unit: str = "") -> MeasurementSample:
        return MeasurementSample(
            device_id=device_id,
            device_type="Multimeter",
            device_label=device_id,
            value=value,
            unit=unit,
            timestamp=timestamp,
        )

    return _make
