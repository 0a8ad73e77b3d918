"""Models for generative analysis results."""

from pydantic import BaseModel, ConfigDict, Field


class ImageRecognition(BaseModel):
    """Dish identity recognised in a meal photo."""

    name: str


class Macronutrients(BaseModel):
    """Macronutrient amounts in grams."""

    carbohydrates: float
    proteins: float
    fats: float


class Micronutrients(BaseModel):
    """Vitamins and minerals keyed by nutrient name."""

    vitamins: dict[str, float] = Field(default_factory=dict)
    minerals: dict[str, float] = Field(default_factory=dict)


class NutritionalInformation(BaseModel):
    """Numeric nutrition figures for a meal."""

    calories: float
    macronutrients: Macronutrients
    micronutrients: Micronutrients = Field(default_factory=Micronutrients)


class CaloricBreakdown(BaseModel):
    """Calories contributed by each macronutrient."""

    carbohydrates: float
    proteins: float
    fats: float


class MealAnalysisResult(BaseModel):
    """Structured output of a meal image analysis."""

    image_recognition: ImageRecognition
    ingredient_extraction: list[str] = Field(default_factory=list)
    ingredient_categorization: dict[str, list[str] | dict[str, list[str]]] = Field(
        default_factory=dict
    )
    nutritional_information: NutritionalInformation
    caloric_breakdown: CaloricBreakdown
    description: str = ""


NutritionalReport = MealAnalysisResult


class StoolCharacteristics(BaseModel):
    """Visual classification of a bowel movement."""

    color: str
    consistency: str
    shape: str
    size: str
    presence_of_blood: bool
    presence_of_mucus: bool
    bristol_stool_scale: int = Field(ge=1, le=7)


class DigestionAnalysisResult(BaseModel):
    """Structured output of a digestion image analysis."""

    analysis: StoolCharacteristics
    concerns: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
    summary: str = ""


class DigestionInsightsResult(BaseModel):
    """Concerns and recommendations for manually entered characteristics.

    The characteristics themselves came from the user, so any classification
    the model echoes back is ignored.
    """

    concerns: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
    summary: str = ""


class CorrelationAnalysisResult(BaseModel):
    """Narrative correlations between hydration, diet and digestion."""

    model_config = ConfigDict(populate_by_name=True)

    water_and_digestion: list[str] = Field(alias="waterAndDigestion")
    diet_and_digestion: list[str] = Field(alias="dietAndDigestion")


CORRELATION_FALLBACK_MESSAGE = "Unable to generate correlations due to analysis error"


def correlation_fallback() -> CorrelationAnalysisResult:
    """Return the degraded result used when correlation analysis fails."""
    return CorrelationAnalysisResult(
        water_and_digestion=[CORRELATION_FALLBACK_MESSAGE],
        diet_and_digestion=[CORRELATION_FALLBACK_MESSAGE],
    )
