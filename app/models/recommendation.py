from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


def _coerce_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    return None


class WateringPlan(BaseModel):
    """Irrigation advice as returned by the model."""

    model_config = ConfigDict(extra="allow")

    schedule: Optional[str] = Field(default=None, description="Detailed schedule")
    description: Optional[str] = Field(default=None, description="Brief explanation")
    image_prompt: Optional[str] = Field(
        default=None,
        alias="imagePrompt",
        description="Description for visualization",
    )

    @field_validator("schedule", "description", "image_prompt", mode="before")
    @classmethod
    def _text_fields(cls, value):
        return _coerce_text(value)


class FertilizerApplication(BaseModel):
    """One fertilization entry, amounts usually embedded in `schedule`."""

    model_config = ConfigDict(extra="allow")

    type: str = Field(default="", description="Fertilizer name")
    schedule: Optional[str] = Field(default=None, description="Timing and amounts")
    description: Optional[str] = Field(default=None, description="Brief explanation")
    image_prompt: Optional[str] = Field(default=None, alias="imagePrompt")

    @field_validator("type", mode="before")
    @classmethod
    def _type_text(cls, value):
        return _coerce_text(value) or ""

    @field_validator("schedule", "description", "image_prompt", mode="before")
    @classmethod
    def _text_fields(cls, value):
        return _coerce_text(value)


class Predictions(BaseModel):
    model_config = ConfigDict(extra="allow")

    peak_green_mass: Optional[str] = Field(default=None, alias="peakGreenMass")
    yield_estimate: Optional[str] = Field(
        default=None,
        alias="yieldEstimate",
        description="Free text, leading number read as tons/hectare",
    )
    confidence: Optional[str] = None

    @field_validator("peak_green_mass", "yield_estimate", "confidence", mode="before")
    @classmethod
    def _text_fields(cls, value):
        return _coerce_text(value)


class Recommendation(BaseModel):
    """
    Irrigation and fertilization advice produced by the LLM.

    Nothing in here is guaranteed: sections may be missing or shaped
    differently. Sections that cannot be read are dropped instead of failing
    validation, so the calculator can price what is there.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    watering: Optional[Union[str, WateringPlan]] = None
    fertilization: List[FertilizerApplication] = Field(default_factory=list)
    predictions: Optional[Predictions] = None

    @model_validator(mode="before")
    @classmethod
    def _drop_unreadable_sections(cls, values):
        if not isinstance(values, dict):
            return values
        values = dict(values)

        watering = values.get("watering")
        if watering is not None and not isinstance(watering, (str, dict)):
            values["watering"] = None

        fertilization = values.get("fertilization")
        if not isinstance(fertilization, list):
            values["fertilization"] = []
        else:
            values["fertilization"] = [
                entry for entry in fertilization if isinstance(entry, dict)
            ]

        if not isinstance(values.get("predictions"), dict):
            values["predictions"] = None

        return values
