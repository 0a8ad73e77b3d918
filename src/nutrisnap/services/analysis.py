"""Generative analysis of meal photos, digestion records and weekly data."""

import base64
import json
import logging
import re
from dataclasses import dataclass
from typing import Protocol, TypeVar

from pydantic import BaseModel, ValidationError

from nutrisnap.domain.analysis import (
    CorrelationAnalysisResult,
    DigestionAnalysisResult,
    DigestionInsightsResult,
    MealAnalysisResult,
    correlation_fallback,
)
from nutrisnap.domain.records import (
    DigestionAnalysis,
    DigestionRecord,
    MealRecord,
    WaterIntakeRecord,
)
from nutrisnap.services import prompts

_JSON_BLOCK = re.compile(r"```json\s*\n(.*?)\n\s*```", re.DOTALL)

_logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class AnalysisParseError(ValueError):
    """Raised when a model response has no usable ```json block."""

    def __init__(self, message: str, response_text: str) -> None:
        super().__init__(message)
        self.response_text = response_text


class GenerativeClient(Protocol):
    """Interface for a text/vision generative model."""

    async def generate(
        self,
        *,
        model: str,
        prompt: str,
        image_data_url: str | None = None,
    ) -> str:
        """Return the raw text response for a prompt and optional image."""


@dataclass
class AnalysisService:
    """Builds prompts, calls the model and parses its fenced JSON output."""

    client: GenerativeClient
    model: str

    async def analyze_meal_image(self, image_bytes: bytes) -> MealAnalysisResult:
        """Identify a dish and estimate its nutrition from a photo."""
        return await self._analyze(
            prompts.meal_image_prompt(),
            MealAnalysisResult,
            image_data_url=_to_data_url(image_bytes),
        )

    async def analyze_digestion_image(
        self, image_bytes: bytes
    ) -> DigestionAnalysisResult:
        """Classify a stool photo on the Bristol scale."""
        return await self._analyze(
            prompts.digestion_image_prompt(),
            DigestionAnalysisResult,
            image_data_url=_to_data_url(image_bytes),
        )

    async def analyze_digestion_data(
        self, analysis: DigestionAnalysis
    ) -> DigestionInsightsResult:
        """Assess manually entered stool characteristics."""
        prompt = prompts.digestion_data_prompt(
            bristol_scale=analysis.bristol_scale,
            color=analysis.color,
            consistency=analysis.consistency,
            shape=analysis.shape,
            size=analysis.size,
            has_blood=analysis.has_blood,
            has_mucus=analysis.has_mucus,
        )
        return await self._analyze(prompt, DigestionInsightsResult)

    async def generate_correlations(
        self,
        water_records: list[WaterIntakeRecord],
        meal_records: list[MealRecord],
        digestion_records: list[DigestionRecord],
    ) -> CorrelationAnalysisResult:
        """Relate a week of records; degrade to a fixed message on any failure."""
        prompt = prompts.correlation_prompt(
            _correlation_payload(water_records, meal_records, digestion_records)
        )
        try:
            return await self._analyze(prompt, CorrelationAnalysisResult)
        except Exception:
            _logger.exception("Failed to generate correlations")
            return correlation_fallback()

    async def _analyze(
        self,
        prompt: str,
        result_type: type[ModelT],
        *,
        image_data_url: str | None = None,
    ) -> ModelT:
        response_text = await self.client.generate(
            model=self.model,
            prompt=prompt,
            image_data_url=image_data_url,
        )
        payload = extract_json_block(response_text)
        try:
            return result_type.model_validate(payload)
        except ValidationError as exc:
            raise AnalysisParseError(
                f"Response does not match {result_type.__name__}: {exc}",
                response_text,
            ) from exc


def extract_json_block(response_text: str) -> object:
    """Return the parsed content of the first ```json fenced block."""
    match = _JSON_BLOCK.search(response_text)
    if match is None:
        raise AnalysisParseError(
            "Could not find JSON content in response", response_text
        )
    try:
        return json.loads(match.group(1))
    except json.JSONDecodeError as exc:
        raise AnalysisParseError(
            f"Invalid JSON content in response: {exc}", response_text
        ) from exc


def _correlation_payload(
    water_records: list[WaterIntakeRecord],
    meal_records: list[MealRecord],
    digestion_records: list[DigestionRecord],
) -> dict[str, object]:
    """Serialize timestamps and salient fields for the correlation prompt."""
    meals: list[dict[str, object]] = []
    for record in meal_records:
        report = record.nutritional_report
        meals.append(
            {
                "timestamp": record.created_at.isoformat(),
                "dish": report.image_recognition.name if report else None,
                "ingredients": report.ingredient_extraction if report else [],
                "calories": (
                    report.nutritional_information.calories if report else None
                ),
                "macronutrients": (
                    report.nutritional_information.macronutrients.model_dump()
                    if report
                    else None
                ),
            }
        )
    return {
        "water_intake": [
            {"amount": record.amount, "timestamp": record.created_at.isoformat()}
            for record in water_records
        ],
        "meals": meals,
        "digestion": [
            {
                "bristol_scale": record.analysis.bristol_scale,
                "timestamp": record.created_at.isoformat(),
                "characteristics": {
                    "color": record.analysis.color,
                    "consistency": record.analysis.consistency,
                    "has_blood": record.analysis.has_blood,
                    "has_mucus": record.analysis.has_mucus,
                },
            }
            for record in digestion_records
        ],
    }


def _to_data_url(image_bytes: bytes) -> str:
    """Convert bytes to a base64 data URL for image input."""
    mime_type = _detect_mime_type(image_bytes)
    encoded = base64.b64encode(image_bytes).decode("utf-8")
    return f"data:{mime_type};base64,{encoded}"


def _detect_mime_type(image_bytes: bytes) -> str:
    """Infer a basic image MIME type from file signatures."""
    if image_bytes.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    return "image/jpeg"
