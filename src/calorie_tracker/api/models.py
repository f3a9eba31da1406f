"""Pydantic models for food log request payloads."""

from pydantic import BaseModel, ConfigDict, Field

from calorie_tracker.domain.food import Food, LoggedFoodEntry, Measure, NutrientProfile


class NutrientsPayload(BaseModel):
    """Per-100g nutrients using the catalog's nutrient codes."""

    model_config = ConfigDict(allow_inf_nan=False)

    energy_kcal: float | None = Field(default=None, alias="ENERC_KCAL", ge=0)
    protein_g: float | None = Field(default=None, alias="PROCNT", ge=0)
    fat_g: float | None = Field(default=None, alias="FAT", ge=0)
    carbs_g: float | None = Field(default=None, alias="CHOCDF", ge=0)


class FoodPayload(BaseModel):
    """Catalog food payload."""

    food_id: str = Field(alias="foodId", min_length=1)
    label: str = Field(min_length=1)
    known_as: str | None = Field(default=None, alias="knownAs")
    image: str | None = None
    nutrients: NutrientsPayload = Field(default_factory=NutrientsPayload)


class MeasurePayload(BaseModel):
    """Serving weight in grams."""

    model_config = ConfigDict(allow_inf_nan=False)

    weight: float = Field(ge=0)


class FoodEntryPayload(BaseModel):
    """A catalog candidate the user picked for logging."""

    food: FoodPayload
    measures: list[MeasurePayload] = Field(default_factory=list)

    def to_entry(self) -> LoggedFoodEntry:
        """Convert to the domain entry."""
        return LoggedFoodEntry(
            food=Food(
                food_id=self.food.food_id,
                label=self.food.label,
                known_as=self.food.known_as,
                image=self.food.image,
                nutrients=NutrientProfile(
                    energy_kcal=self.food.nutrients.energy_kcal,
                    protein_g=self.food.nutrients.protein_g,
                    fat_g=self.food.nutrients.fat_g,
                    carbs_g=self.food.nutrients.carbs_g,
                ),
            ),
            measures=tuple(Measure(weight=m.weight) for m in self.measures),
        )


class LiveSearchMessage(BaseModel):
    """Keystroke message sent over the live search socket."""

    query: str = ""
