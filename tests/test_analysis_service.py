"""Tests for the generative analysis service."""

import asyncio
from datetime import UTC, datetime
from uuid import uuid4

import pytest

from nutrisnap.domain.analysis import CORRELATION_FALLBACK_MESSAGE
from nutrisnap.domain.records import DigestionAnalysis, DigestionSource
from nutrisnap.services.analysis import (
    AnalysisParseError,
    AnalysisService,
    _detect_mime_type,
    extract_json_block,
)
from tests.conftest import (
    JPEG_BYTES,
    FakeGenerativeClient,
    correlation_payload,
    digestion_payload,
    digestion_record,
    fenced,
    meal_payload,
    processed_meal,
    water_record,
)


def test_extract_json_block_ignores_surrounding_text() -> None:
    text = 'Sure!\n```json\n{"a": 1}\n```\nAnything else?'
    assert extract_json_block(text) == {"a": 1}


def test_extract_json_block_requires_fence() -> None:
    with pytest.raises(AnalysisParseError) as exc_info:
        extract_json_block('{"a": 1}')

    assert exc_info.value.response_text == '{"a": 1}'


def test_extract_json_block_rejects_invalid_json() -> None:
    with pytest.raises(AnalysisParseError):
        extract_json_block("```json\n{not json}\n```")


def test_analyze_meal_image_parses_report(
    analysis_service: AnalysisService, generative_client: FakeGenerativeClient
) -> None:
    generative_client.responses.append(fenced(meal_payload(calories=640)))

    report = asyncio.run(analysis_service.analyze_meal_image(JPEG_BYTES))

    assert report.image_recognition.name == "Chicken salad"
    assert report.nutritional_information.calories == 640
    assert report.ingredient_categorization["fruits and vegetables"] == {
        "vegetables": ["lettuce"]
    }
    call = generative_client.calls[0]
    assert call["model"] == "test-model"
    assert str(call["image_data_url"]).startswith("data:image/jpeg;base64,")


def test_analyze_meal_image_rejects_non_numeric_figures(
    analysis_service: AnalysisService, generative_client: FakeGenerativeClient
) -> None:
    payload = meal_payload()
    payload["nutritional_information"]["calories"] = "a lot"  # type: ignore[index]
    generative_client.responses.append(fenced(payload))

    with pytest.raises(AnalysisParseError) as exc_info:
        asyncio.run(analysis_service.analyze_meal_image(JPEG_BYTES))

    assert "a lot" in exc_info.value.response_text


def test_analyze_digestion_image_validates_bristol_range(
    analysis_service: AnalysisService, generative_client: FakeGenerativeClient
) -> None:
    generative_client.responses.append(fenced(digestion_payload(bristol=9)))

    with pytest.raises(AnalysisParseError):
        asyncio.run(analysis_service.analyze_digestion_image(JPEG_BYTES))


def test_analyze_digestion_data_sends_manual_fields_without_image(
    analysis_service: AnalysisService, generative_client: FakeGenerativeClient
) -> None:
    generative_client.responses.append(fenced(digestion_payload(bristol=3)))
    analysis = DigestionAnalysis(
        source=DigestionSource.MANUAL,
        bristol_scale="3",
        color="dark brown",
        consistency="firm",
        has_blood=True,
    )

    result = asyncio.run(analysis_service.analyze_digestion_data(analysis))

    assert result.recommendations == ["Keep hydrated"]
    call = generative_client.calls[0]
    assert call["image_data_url"] is None
    assert "dark brown" in str(call["prompt"])


def test_analyze_digestion_data_ignores_echoed_template_scale(
    analysis_service: AnalysisService, generative_client: FakeGenerativeClient
) -> None:
    generative_client.responses.append(fenced(digestion_payload(bristol=0)))
    analysis = DigestionAnalysis(source=DigestionSource.MANUAL, bristol_scale="4")

    result = asyncio.run(analysis_service.analyze_digestion_data(analysis))

    assert result.concerns == ["None noted"]
    assert result.recommendations == ["Keep hydrated"]


def test_generate_correlations_parses_camel_case_keys(
    analysis_service: AnalysisService, generative_client: FakeGenerativeClient
) -> None:
    user_id = uuid4()
    moment = datetime(2024, 6, 3, 12, 0, tzinfo=UTC)
    generative_client.responses.append(fenced(correlation_payload()))

    result = asyncio.run(
        analysis_service.generate_correlations(
            [water_record(user_id, moment, 500)],
            [processed_meal(user_id, moment)],
            [digestion_record(user_id, moment, "4")],
        )
    )

    assert result.water_and_digestion == ["More water, softer stool"]
    assert result.diet_and_digestion == ["Fibre helped regularity"]
    assert "2024-06-03T12:00:00+00:00" in str(generative_client.calls[0]["prompt"])


def test_generate_correlations_falls_back_on_model_error(
    analysis_service: AnalysisService, generative_client: FakeGenerativeClient
) -> None:
    generative_client.error = RuntimeError("model unavailable")

    result = asyncio.run(analysis_service.generate_correlations([], [], []))

    assert result.water_and_digestion == [CORRELATION_FALLBACK_MESSAGE]
    assert result.diet_and_digestion == [CORRELATION_FALLBACK_MESSAGE]


def test_generate_correlations_falls_back_on_unfenced_response(
    analysis_service: AnalysisService, generative_client: FakeGenerativeClient
) -> None:
    generative_client.responses.append("I could not find any patterns.")

    result = asyncio.run(analysis_service.generate_correlations([], [], []))

    assert result.water_and_digestion == [CORRELATION_FALLBACK_MESSAGE]


def test_detect_mime_type_from_signature() -> None:
    assert _detect_mime_type(b"\x89PNG\r\n\x1a\nrest") == "image/png"
    assert _detect_mime_type(b"RIFF\x00\x00\x00\x00WEBPVP8 ") == "image/webp"
    assert _detect_mime_type(JPEG_BYTES) == "image/jpeg"
    assert _detect_mime_type(b"unknown") == "image/jpeg"
