"""Pydantic models for tracker request payloads."""

from pydantic import BaseModel


class AddEntryRequest(BaseModel):
    """Payload for logging a food entry.

    Field values are checked by the entry ledger so that every input error is
    reported with the same message shape.
    """

    food_name: str | None = None
    protein_grams: float | str | None = None
    meal_time: str = "snack"
