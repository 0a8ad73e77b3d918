"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from nutrisnap.adapters.openai_generative_client import OpenAIGenerativeClient
from nutrisnap.adapters.supabase_digestion_record_repository import (
    SupabaseDigestionRecordRepository,
)
from nutrisnap.adapters.supabase_goals_repository import SupabaseGoalsRepository
from nutrisnap.adapters.supabase_meal_record_repository import (
    SupabaseMealRecordRepository,
)
from nutrisnap.adapters.supabase_object_storage import SupabaseObjectStorage
from nutrisnap.adapters.supabase_summary_repository import SupabaseSummaryRepository
from nutrisnap.adapters.supabase_user_directory import SupabaseUserDirectory
from nutrisnap.adapters.supabase_water_record_repository import (
    SupabaseWaterRecordRepository,
)
from nutrisnap.config import Settings
from nutrisnap.services.analysis import AnalysisService
from nutrisnap.services.analyzers import DayPolicy
from nutrisnap.services.goals import GoalsService
from nutrisnap.services.processing import RecordProcessor
from nutrisnap.services.scheduler import WeeklySummaryJob
from nutrisnap.services.summaries import WeeklySummaryService
from nutrisnap.services.uploads import UploadIntakeService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    analysis_service: AnalysisService
    upload_intake: UploadIntakeService
    record_processor: RecordProcessor
    summary_service: WeeklySummaryService
    weekly_job: WeeklySummaryJob
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    meal_repository = SupabaseMealRecordRepository(supabase_client)
    digestion_repository = SupabaseDigestionRecordRepository(supabase_client)
    water_repository = SupabaseWaterRecordRepository(supabase_client)
    goals_repository = SupabaseGoalsRepository(supabase_client)
    summary_repository = SupabaseSummaryRepository(supabase_client)
    storage = SupabaseObjectStorage(supabase_client, resolved_settings.storage_bucket)
    user_directory = SupabaseUserDirectory(supabase_client)

    generative_client = OpenAIGenerativeClient.create(
        api_key=resolved_settings.openai_api_key,
        timeout_seconds=resolved_settings.openai_timeout_seconds,
    )
    analysis_service = AnalysisService(
        client=generative_client, model=resolved_settings.openai_model
    )
    upload_intake = UploadIntakeService(meal_repository, digestion_repository)
    record_processor = RecordProcessor(
        meal_repository=meal_repository,
        digestion_repository=digestion_repository,
        storage=storage,
        analysis_service=analysis_service,
    )
    summary_service = WeeklySummaryService(
        goals_service=GoalsService(goals_repository),
        water_repository=water_repository,
        meal_repository=meal_repository,
        digestion_repository=digestion_repository,
        summary_repository=summary_repository,
        analysis_service=analysis_service,
        day_policy=DayPolicy(resolved_settings.summary_timezone),
        calories_source=resolved_settings.calories_source,
    )
    weekly_job = WeeklySummaryJob(user_directory, summary_service)

    async def close_resources() -> None:
        await generative_client.client.close()

    return AppContainer(
        settings=resolved_settings,
        analysis_service=analysis_service,
        upload_intake=upload_intake,
        record_processor=record_processor,
        summary_service=summary_service,
        weekly_job=weekly_job,
        close_resources=close_resources,
    )
