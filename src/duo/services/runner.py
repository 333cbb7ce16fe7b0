"""End-to-end practice run."""

import asyncio
import logging
import time
from typing import Callable, Optional

import httpx

from duo.auth import extract_subject
from duo.clients.duolingo import DuolingoClient
from duo.config import RunConfig, Settings, get_settings
from duo.services.lessons import Delay, Echo, LessonService, RunTotals

logger = logging.getLogger(__name__)

BANNER = "=" * 32


class PracticeRunner:
    """Service that resolves the user, then runs the configured lessons."""

    def __init__(
        self,
        config: RunConfig,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        delay: Delay = asyncio.sleep,
        clock: Callable[[], float] = time.time,
        echo: Echo = print,
    ):
        self.config = config
        self.settings = settings or get_settings()
        self.client = DuolingoClient(config.token, self.settings, transport=transport)
        self.delay = delay
        self.clock = clock
        self.echo = echo

    async def run(self) -> RunTotals:
        """Run every lesson and print the XP summary."""
        config = self.config
        self.echo(
            f"\n⏳ Starting simulation of {config.lesson_count} lesson(s) "
            f"using API date {config.api_date}..."
        )

        subject = extract_subject(config.token)
        self.echo(f"🔍 User ID (sub) extracted from JWT: {subject}")

        self.echo("🌍 Fetching user languages...")
        languages = await self.client.get_languages(config.api_date, subject)
        self.echo(
            f"✅ Languages set: from {languages.from_language} "
            f"to {languages.learning_language}"
        )

        lessons = LessonService(
            self.client,
            config.api_date,
            languages,
            pause=self.settings.lesson_delay,
            delay=self.delay,
            clock=self.clock,
            echo=self.echo,
        )
        totals = await lessons.run(config.lesson_count)
        logger.info(
            "Completed %s lesson(s) for %s XP", totals.lessons_completed, totals.xp_total
        )

        self.echo(f"\n{BANNER}")
        self.echo(f"🎉 Success! You earned a total of {totals.xp_total} XP")
        self.echo(BANNER)
        return totals
