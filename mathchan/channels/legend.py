"""Variable legends and channel color assignment."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from mathchan.channels.models import DeviceChannelConfig, MathChannelInput, MathVariableLegendItem


CHANNEL_COLOR_PALETTE: tuple[str, ...] = (
    "#e74c3c",
    "#3498db",
    "#2ecc71",
    "#9b59b6",
    "#f39c12",
    "#1abc9c",
    "#d35400",
    "#34495e",
    "#8e44ad",
    "#16a085",
)


def build_math_variable_legend(
    inputs: Iterable[MathChannelInput],
    device_channels: Mapping[str, DeviceChannelConfig],
) -> list[MathVariableLegendItem]:
    """Pair each input variable with its source channel's alias and color.

    Inputs whose channel is unknown are skipped; the result is sorted by
    variable name.
    """

    items: list[MathVariableLegendItem] = []
    for item in inputs:
        channel = device_channels.get(item.channel_id)
        if channel is None:
            continue
        items.append(
            MathVariableLegendItem(variable=item.variable, alias=channel.alias, color=channel.color)
        )
    return sorted(items, key=lambda entry: entry.variable)


def to_variable_color_map(legend: Iterable[MathVariableLegendItem]) -> dict[str, str]:
    """Return the ``variable -> color`` mapping consumed by the preview renderer."""

    return {item.variable: item.color for item in legend}


def pick_channel_color(used_colors: set[str], preferred: str | None = None) -> str:
    """Pick an unused palette color and record it in ``used_colors``."""

    if preferred and preferred not in used_colors:
        used_colors.add(preferred)
        return preferred

    for color in CHANNEL_COLOR_PALETTE:
        if color not in used_colors:
            used_colors.add(color)
            return color

    fallback = CHANNEL_COLOR_PALETTE[len(used_colors) % len(CHANNEL_COLOR_PALETTE)]
    used_colors.add(fallback)
    return fallback
