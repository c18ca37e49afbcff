"""Normalized forecast returned by every provider."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class Forecast(BaseModel):
    """Temperature in Celsius and a textual condition."""

    model_config = ConfigDict(frozen=True)

    temperature: float
    condition: str

    def render(self) -> str:
        return f"Temperature: {self.temperature}\nCondition: {self.condition}\n"

    def __str__(self) -> str:
        return self.render()
