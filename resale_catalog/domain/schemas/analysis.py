"""Structured output of the vision model for one product."""

from typing import Literal, Optional

from pydantic import BaseModel, PrivateAttr, field_validator

from resale_catalog.domain.schemas.product import MeasurementType

FALLBACK_LEVEL = "B"


def _as_text(value) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    return ""


class AnalysisResult(BaseModel):
    title: list[str]
    category: str
    level: Literal["A", "B"]
    measurement: str = ""
    measurement_type: Optional[MeasurementType] = None
    condition: str = ""
    shop1: str = ""
    shop2: str = ""
    shop3: str = ""

    _is_fallback: bool = PrivateAttr(default=False)

    @property
    def is_fallback(self) -> bool:
        return self._is_fallback

    @field_validator("title", mode="before")
    @classmethod
    def _title_as_list(cls, value):
        if isinstance(value, str):
            value = [value]
        return value

    @field_validator("title")
    @classmethod
    def _title_not_empty(cls, value: list[str]) -> list[str]:
        titles = [t.strip() for t in value if t and t.strip()]
        if not titles:
            raise ValueError("title must contain at least one candidate")
        return titles

    @field_validator("category")
    @classmethod
    def _category_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("category must not be blank")
        return value.strip()

    # Optional fields never reject a reply; odd values degrade to blank
    @field_validator("measurement", "condition", "shop1", "shop2", "shop3", mode="before")
    @classmethod
    def _none_as_blank(cls, value):
        return _as_text(value)

    @field_validator("measurement_type", mode="before")
    @classmethod
    def _loose_measurement_type(cls, value):
        if isinstance(value, MeasurementType):
            return value
        if not isinstance(value, dict):
            return None
        return {key: _as_text(value.get(key)) for key in ("foreign", "japanese")}

    @classmethod
    def fallback(cls) -> "AnalysisResult":
        """Degraded result written when the model call fails in any way."""
        result = cls.model_construct(
            title=[],
            category="",
            level=FALLBACK_LEVEL,
            measurement="",
            measurement_type=None,
            condition="",
            shop1="",
            shop2="",
            shop3="",
        )
        result._is_fallback = True
        return result
