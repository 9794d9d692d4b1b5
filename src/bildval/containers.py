"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import timedelta

from supabase import create_client

from bildval.adapters.json_catalog_source import load_catalog
from bildval.adapters.supabase_score_repository import SupabaseScoreRepository
from bildval.config import Settings
from bildval.domain.catalog import Catalog
from bildval.services.randomness import RandomFactory, random_factory
from bildval.services.rounds import RoundGenerator
from bildval.services.scores import ScoreService
from bildval.services.sessions import SessionService
from bildval.services.words import WordSampler


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    catalog: Catalog
    random_factory: RandomFactory
    round_generator: RoundGenerator
    word_sampler: WordSampler
    score_service: ScoreService
    session_service: SessionService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container.

    The catalog is read from disk here, once per process.
    """
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    catalog = load_catalog(resolved_settings.catalog_dir)
    randoms = random_factory(resolved_settings.random_seed)
    round_generator = RoundGenerator(catalog)
    word_sampler = WordSampler(
        catalog, distinct=resolved_settings.word_sample_distinct
    )
    score_service = ScoreService(SupabaseScoreRepository(supabase_client))
    session_service = SessionService(
        round_generator=round_generator,
        score_store=score_service,
        random_factory=randoms,
        rules=resolved_settings.game_rules(),
        session_ttl=timedelta(seconds=resolved_settings.session_ttl_seconds),
    )

    async def close_resources() -> None:
        session_service.clear()

    return AppContainer(
        settings=resolved_settings,
        catalog=catalog,
        random_factory=randoms,
        round_generator=round_generator,
        word_sampler=word_sampler,
        score_service=score_service,
        session_service=session_service,
        close_resources=close_resources,
    )
