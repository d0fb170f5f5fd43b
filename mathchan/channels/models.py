"""Pydantic models for device channels, math channels and samples."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from mathchan.core.allowlist import MATH_VARIABLES


class ChannelBase(BaseModel):
    """Fields shared by device and math channels."""

    id: str = Field(min_length=1)
    alias: str
    color: str
    enabled: bool = True
    unit: str | None = None
    precision: int | None = None


class DeviceChannelConfig(ChannelBase):
    """Channel backed by a polled measurement device."""

    device_id: str = Field(min_length=1)


class MathChannelInput(BaseModel):
    """Binding of one alphabet variable to a source channel."""

    model_config = ConfigDict(frozen=True)

    channel_id: str
    variable: str

    @field_validator("variable")
    @classmethod
    def _variable_in_alphabet(cls, value: str) -> str:
        if value not in MATH_VARIABLES:
            raise ValueError(f"variable must be one of {', '.join(MATH_VARIABLES)}")
        return value


class MathChannelConfig(ChannelBase):
    """Derived channel computed from an expression over its inputs."""

    expression: str
    inputs: list[MathChannelInput] = Field(default_factory=list)
    unit: str = ""

    @field_validator("inputs")
    @classmethod
    def _unique_variables(cls, value: list[MathChannelInput]) -> list[MathChannelInput]:
        seen: set[str] = set()
        for item in value:
            if item.variable in seen:
                raise ValueError(f"variable {item.variable} is bound more than once")
            seen.add(item.variable)
        return value


class MathVariableLegendItem(BaseModel):
    """Variable with the alias and color of its source channel."""

    model_config = ConfigDict(frozen=True)

    variable: str
    alias: str
    color: str


class MeasurementSample(BaseModel):
    """Single measurement value at a timestamp (milliseconds)."""

    model_config = ConfigDict(frozen=True)

    device_id: str
    device_type: str
    device_label: str
    value: float
    unit: str = ""
    state: str | None = None
    attribute: str | None = None
    timestamp: float
