"""Defaults for newly created math channels."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from mathchan.channels.models import DeviceChannelConfig, MathChannelInput, MeasurementSample
from mathchan.core.allowlist import MATH_VARIABLES


DEFAULT_MATH_ALIAS_PREFIX = "Math"


def build_default_math_alias(existing_count: int, prefix: str = DEFAULT_MATH_ALIAS_PREFIX) -> str:
    return f"{prefix} {existing_count + 1}"


def create_initial_math_inputs(device_channels: Sequence[DeviceChannelConfig]) -> list[MathChannelInput]:
    """Bind the first channels, in order, to ``a``, ``b``, ..."""

    return [
        MathChannelInput(channel_id=channel.id, variable=variable)
        for channel, variable in zip(device_channels, MATH_VARIABLES)
    ]


def build_default_math_expression(inputs: Sequence[MathChannelInput]) -> str:
    if len(inputs) >= 2:
        return f"{inputs[0].variable} + {inputs[1].variable}"
    if len(inputs) == 1:
        return inputs[0].variable
    return ""


def next_math_variable(inputs: Sequence[MathChannelInput]) -> str | None:
    """Return the first alphabet variable not yet bound."""

    used = {item.variable for item in inputs}
    for variable in MATH_VARIABLES:
        if variable not in used:
            return variable
    return None


def _selected_channel_ids(inputs: Sequence[MathChannelInput]) -> set[str]:
    return {item.channel_id for item in inputs if item.channel_id}


def can_add_math_input(
    inputs: Sequence[MathChannelInput],
    device_channels: Sequence[DeviceChannelConfig],
) -> bool:
    if len(inputs) >= len(MATH_VARIABLES):
        return False
    if next_math_variable(inputs) is None:
        return False
    if len(inputs) >= len(device_channels):
        return False
    selected = _selected_channel_ids(inputs)
    return any(channel.id not in selected for channel in device_channels) or len(selected) < len(
        device_channels
    )


def create_next_math_input(
    inputs: Sequence[MathChannelInput],
    device_channels: Sequence[DeviceChannelConfig],
) -> MathChannelInput | None:
    """Propose the next input: a free variable bound to an unselected channel."""

    if not can_add_math_input(inputs, device_channels):
        return None
    variable = next_math_variable(inputs)
    if variable is None:
        return None
    selected = _selected_channel_ids(inputs)
    channel_id = next((channel.id for channel in device_channels if channel.id not in selected), "")
    return MathChannelInput(channel_id=channel_id, variable=variable)


def resolve_default_math_unit(
    inputs: Sequence[MathChannelInput],
    device_channels: Mapping[str, DeviceChannelConfig],
    latest_sample_by_channel: Mapping[str, MeasurementSample | None],
) -> str:
    """Use the unit of the first input's latest sample, if any."""

    if not inputs:
        return ""
    source = device_channels.get(inputs[0].channel_id)
    if source is None:
        return ""
    sample = latest_sample_by_channel.get(source.device_id) or latest_sample_by_channel.get(source.id)
    return sample.unit if sample is not None else ""
