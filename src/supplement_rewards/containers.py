"""Dependency container wiring for the application."""

import random
from dataclasses import dataclass

from supabase import create_client

from supplement_rewards.adapters.bundled_data import load_questions, load_supplements
from supplement_rewards.adapters.memory_reminder_scheduler import (
    InMemoryReminderScheduler,
)
from supplement_rewards.adapters.memory_store import InMemoryEntityStore
from supplement_rewards.adapters.sqlite_store import SqliteEntityStore
from supplement_rewards.adapters.supabase_entity_store import SupabaseEntityStore
from supplement_rewards.config import Settings
from supplement_rewards.domain.dates import Clock, make_clock
from supplement_rewards.services.catalog import SupplementCatalog
from supplement_rewards.services.daily_records import DailyRecordService
from supplement_rewards.services.favorites import FavoritesService
from supplement_rewards.services.quiz import QuestionBank, QuizSession
from supplement_rewards.services.reminders import ReminderService
from supplement_rewards.services.rewards import RewardsLedger
from supplement_rewards.services.store import EntityStore
from supplement_rewards.services.users import UserService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    store: EntityStore
    catalog: SupplementCatalog
    user_service: UserService
    daily_record_service: DailyRecordService
    rewards_ledger: RewardsLedger
    favorites_service: FavoritesService
    quiz_session: QuizSession
    reminder_service: ReminderService


def build_store(settings: Settings) -> EntityStore:
    """Create the entity store selected by settings."""
    if settings.storage_backend == "memory":
        return InMemoryEntityStore()
    if settings.storage_backend == "supabase":
        if not settings.supabase_url or not settings.supabase_service_key:
            raise ValueError(
                "SUPABASE_URL and SUPABASE_SERVICE_KEY are required "
                "for supabase storage"
            )
        client = create_client(settings.supabase_url, settings.supabase_service_key)
        return SupabaseEntityStore(client)
    return SqliteEntityStore(settings.data_file)


def build_container(
    settings: Settings | None = None,
    store: EntityStore | None = None,
    clock: Clock | None = None,
    rng: random.Random | None = None,
) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    resolved_store = store if store is not None else build_store(resolved_settings)
    resolved_clock = clock or make_clock(resolved_settings.timezone)

    catalog = SupplementCatalog(
        load_supplements(resolved_settings.supplement_catalog_path)
    )
    bank = QuestionBank(load_questions(resolved_settings.quiz_bank_path))
    daily_record_service = DailyRecordService(
        resolved_store, user_id=resolved_settings.user_id, clock=resolved_clock
    )
    rewards_ledger = RewardsLedger(
        store=resolved_store,
        daily_records=daily_record_service,
        user_id=resolved_settings.user_id,
        clock=resolved_clock,
    )
    quiz_session = QuizSession(
        bank=bank,
        ledger=rewards_ledger,
        question_count=resolved_settings.quiz_question_count,
        rng=rng or random.Random(),
    )

    return AppContainer(
        settings=resolved_settings,
        store=resolved_store,
        catalog=catalog,
        user_service=UserService(resolved_store, clock=resolved_clock),
        daily_record_service=daily_record_service,
        rewards_ledger=rewards_ledger,
        favorites_service=FavoritesService(
            resolved_store, user_id=resolved_settings.user_id, clock=resolved_clock
        ),
        quiz_session=quiz_session,
        reminder_service=ReminderService(InMemoryReminderScheduler()),
    )
