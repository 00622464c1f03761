"""Pydantic models for API request payloads."""

from uuid import UUID

from pydantic import AliasChoices, BaseModel, Field


class LogFoodRequest(BaseModel):
    """Body of a food log request; camelCase keys are accepted too.

    Numbers are strict so JSON booleans and numeric strings are rejected.
    """

    fdc_id: int = Field(
        gt=0, strict=True, validation_alias=AliasChoices("fdc_id", "fdcId")
    )
    meal_id: UUID = Field(validation_alias=AliasChoices("meal_id", "mealId"))
    quantity: float = Field(gt=0, strict=True, allow_inf_nan=False)
