"""Math channel configuration, legends and per-tick sampling."""

from mathchan.channels.defaults import (
    DEFAULT_MATH_ALIAS_PREFIX,
    build_default_math_alias,
    build_default_math_expression,
    can_add_math_input,
    create_initial_math_inputs,
    create_next_math_input,
    next_math_variable,
    resolve_default_math_unit,
)
from mathchan.channels.format import PLACEHOLDER, format_measurement_value
from mathchan.channels.history import (
    MATH_HISTORY_LIMIT,
    MathChannelHistory,
    compute_math_sample,
    resolve_latest_samples,
)
from mathchan.channels.legend import (
    CHANNEL_COLOR_PALETTE,
    build_math_variable_legend,
    pick_channel_color,
    to_variable_color_map,
)
from mathchan.channels.models import (
    DeviceChannelConfig,
    MathChannelConfig,
    MathChannelInput,
    MathVariableLegendItem,
    MeasurementSample,
)

__all__ = [
    "CHANNEL_COLOR_PALETTE",
    "DEFAULT_MATH_ALIAS_PREFIX",
    "MATH_HISTORY_LIMIT",
    "PLACEHOLDER",
    "DeviceChannelConfig",
    "MathChannelConfig",
    "MathChannelHistory",
    "MathChannelInput",
    "MathVariableLegendItem",
    "MeasurementSample",
    "build_default_math_alias",
    "build_default_math_expression",
    "build_math_variable_legend",
    "can_add_math_input",
    "compute_math_sample",
    "create_initial_math_inputs",
    "create_next_math_input",
    "format_measurement_value",
    "next_math_variable",
    "pick_channel_color",
    "resolve_default_math_unit",
    "resolve_latest_samples",
    "to_variable_color_map",
]
