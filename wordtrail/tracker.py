"""Writing tracker service: the analysis pipeline behind every trigger."""

from collections.abc import Callable
from datetime import date

from pydantic import BaseModel

from wordtrail.analysis import AccuracyReport, CountRecord, TextAnalyzer
from wordtrail.config import Settings, get_settings
from wordtrail.exceptions import ContentReadError, PersistenceError
from wordtrail.sources import ContentSource, FileContentSource
from wordtrail.stats import (
    DailyAggregator,
    DailyStats,
    StatsStore,
    StatsSummary,
    StreakTracker,
    build_summary,
)
from wordtrail.storage import (
    InMemoryStatsRepository,
    JsonFileStatsRepository,
    StatsRepository,
)
from wordtrail.utils.dates import to_date_key
from wordtrail.utils.debounce import Debouncer
from wordtrail.utils.logger import preview_text
from wordtrail.utils.mixins import LoggerMixin
from wordtrail.utils.ttl_cache import TTLCache


class AnalysisOutcome(BaseModel):
    """Result of one pipeline run for one document."""

    success: bool
    source_id: str
    reason: str | None = None
    record: CountRecord | None = None
    stats: DailyStats | None = None
    # Memory holds the update but the stored snapshot is behind it.
    needs_persist_retry: bool = False


class WritingTracker(LoggerMixin):
    """Read, strip, classify and aggregate documents into daily statistics."""

    def __init__(
        self,
        settings: Settings | None = None,
        repository: StatsRepository | None = None,
        content_source: ContentSource | None = None,
        today_provider: Callable[[], date] = date.today,
    ):
        self.settings = settings or get_settings()
        self.today_provider = today_provider

        if repository is None:
            if self.settings.is_mock_mode:
                repository = InMemoryStatsRepository()
            else:
                repository = JsonFileStatsRepository(self.settings.data_path)
        self.repository = repository
        self.content_source = content_source or FileContentSource()

        self.store = StatsStore(
            repository,
            retention_days=self.settings.retention_days,
            max_char_changes=self.settings.max_char_changes,
            today_provider=today_provider,
        )
        self.streak_tracker = StreakTracker(self.store)
        self.aggregator = DailyAggregator(
            self.store,
            streak_tracker=self.streak_tracker,
            settings=self.settings,
            today_provider=today_provider,
        )
        self.analyzer = TextAnalyzer(self.settings)
        self.content_cache: TTLCache[str, str] = TTLCache(
            ttl_seconds=self.settings.cache_ttl_seconds,
            max_size=self.settings.cache_max_entries,
        )
        self.debouncer = Debouncer(self.settings.debounce_delay_seconds, self.process)
        self._initialized = False

    @property
    def initialized(self) -> bool:
        return self._initialized

    async def initialize(self) -> None:
        """Load stored statistics. Safe to call more than once."""
        if self._initialized:
            return
        await self.store.load()
        self._initialized = True
        self.logger.info(
            "Writing tracker initialized",
            repository=type(self.repository).__name__,
            mock_mode=self.settings.is_mock_mode,
        )

    def analyze_text(self, raw_text: str) -> CountRecord:
        """Strip and classify ``raw_text`` without touching statistics."""
        return self.analyzer.analyze_text(raw_text)

    def compare_counts(self, raw_text: str) -> AccuracyReport:
        return self.analyzer.compare_counts(raw_text)

    async def read_content(self, source_id: str) -> str:
        """Read a document, through the content cache when it is enabled.

        Entries are keyed by the source's fingerprint, so an edited
        document is never served from a stale entry.
        """
        if not self.settings.enable_cache:
            return await self.content_source.read(source_id)

        fingerprint = await self.content_source.fingerprint(source_id)
        if fingerprint is None:
            return await self.content_source.read(source_id)

        key = f"{source_id}:{fingerprint}"
        cached = self.content_cache.get(key)
        if cached is not None:
            self.logger.debug("Content cache hit", source_id=source_id)
            return cached

        content = await self.content_source.read(source_id)
        self.content_cache.set(key, content)
        return content

    async def process(self, source_id: str) -> AnalysisOutcome:
        """Run the full pipeline for one document.

        Failures come back as an unsuccessful outcome rather than an
        exception. A read failure leaves statistics untouched; a save
        failure leaves memory updated and sets ``needs_persist_retry``.
        Stored statistics that cannot be loaded abort the run unchanged.
        """
        try:
            await self.initialize()
        except PersistenceError as e:
            self.logger.error(
                "Cannot load stored statistics", source_id=source_id, error=str(e)
            )
            return AnalysisOutcome(success=False, source_id=source_id, reason=str(e))

        try:
            content = await self.read_content(source_id)
        except ContentReadError as e:
            self.logger.warning("Skipping document", source_id=source_id, error=str(e))
            return AnalysisOutcome(success=False, source_id=source_id, reason=str(e))

        record = self.analyzer.analyze_text(content)
        self.logger.debug(
            "Document analysed",
            source_id=source_id,
            preview=preview_text(content),
            total=self.analyzer.total(record),
        )

        try:
            stats = await self.aggregator.update(source_id, record)
        except PersistenceError as e:
            self.logger.error(
                "Statistics updated but not saved", source_id=source_id, error=str(e)
            )
            return AnalysisOutcome(
                success=False,
                source_id=source_id,
                reason=str(e),
                record=record,
                stats=self.store.get_day(to_date_key(self.today_provider())),
                needs_persist_retry=True,
            )

        return AnalysisOutcome(success=True, source_id=source_id, record=record, stats=stats)

    def notify_changed(self, source_id: str) -> None:
        """Schedule ``process`` once the document has been quiet for a while."""
        self.debouncer.trigger(source_id)

    async def retry_persist(self) -> bool:
        """Save the in-memory state again; False if it still fails."""
        try:
            await self.store.save()
        except PersistenceError as e:
            self.logger.warning("Retrying save failed", error=str(e))
            return False
        self.logger.info("Statistics saved on retry")
        return True

    def update_settings(self, settings: Settings) -> None:
        """Apply new settings to subsequent analyses.

        Stored counts are never recomputed; only ``completed`` is refreshed.
        """
        self.settings = settings
        self.analyzer = TextAnalyzer(settings)
        self.aggregator.settings = settings
        self.store.max_char_changes = settings.max_char_changes
        self.store.retention_days = settings.retention_days
        self.debouncer.delay = settings.debounce_delay_seconds

        self.content_cache = TTLCache(
            ttl_seconds=settings.cache_ttl_seconds,
            max_size=settings.cache_max_entries,
        )
        self.store.recompute_completed()
        self.logger.info(
            "Settings updated",
            categories=settings.enabled_categories(),
            cache_enabled=settings.enable_cache,
        )

    async def reset_all(self) -> None:
        """Drop pending triggers and cached content, then clear all statistics."""
        await self.initialize()
        await self.debouncer.cancel()
        self.content_cache.clear()
        await self.store.reset_all()

    async def summary(self, days: int = 30) -> StatsSummary:
        await self.initialize()
        return build_summary(
            self.store, self.today_provider(), self.settings.daily_goal, days=days
        )

    async def close(self) -> None:
        """Finish pending debounced work and drop cached content."""
        await self.debouncer.flush()
        removed = self.content_cache.cleanup_expired()
        self.logger.debug(
            "Writing tracker closed",
            expired_entries=removed,
            cache=self.content_cache.get_stats(),
        )
        self.content_cache.clear()
