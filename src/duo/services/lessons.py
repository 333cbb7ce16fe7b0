"""Lesson loop: create a practice session, then report it finished."""

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Awaitable, Callable

from duo.clients.duolingo import DuolingoClient
from duo.schemas.languages import LanguagePair
from duo.schemas.sessions import SessionCompletion, SessionRequest, SessionResult

logger = logging.getLogger(__name__)

Delay = Callable[[float], Awaitable[None]]
Echo = Callable[[str], None]


@dataclass(frozen=True)
class RunTotals:
    """XP gathered so far in a run."""

    xp_total: int = 0
    lessons_completed: int = 0

    def add(self, result: SessionResult) -> "RunTotals":
        return RunTotals(self.xp_total + result.xp_gain, self.lessons_completed + 1)


class LessonService:
    """Runs practice lessons one after another for a fixed language pair."""

    def __init__(
        self,
        client: DuolingoClient,
        api_date: str,
        languages: LanguagePair,
        pause: float = 0.01,
        delay: Delay = asyncio.sleep,
        clock: Callable[[], float] = time.time,
        echo: Echo = print,
    ):
        self.client = client
        self.api_date = api_date
        self.languages = languages
        self.request = SessionRequest.for_languages(languages)
        self.pause = pause
        self.delay = delay
        self.clock = clock
        self.echo = echo

    async def run_lesson(self) -> SessionResult:
        """Create one session and submit it as completed."""
        self.echo("📝 Sending request to create session...")
        session = await self.client.create_session(self.api_date, self.request)
        self.echo(f"✨ Session created! ID: {session.id}")

        await self.delay(self.pause)

        completion = SessionCompletion.ending_at(self.clock())
        self.echo(f"🚀 Finishing session {session.id} as a success...")
        return await self.client.complete_session(self.api_date, session, completion)

    async def run(self, count: int) -> RunTotals:
        """Run ``count`` lessons in sequence; the first error ends the run."""
        totals = RunTotals()
        for index in range(1, count + 1):
            self.echo(f"\n--- Lesson {index} of {count} ---")
            result = await self.run_lesson()
            totals = totals.add(result)
            logger.debug("Lesson %s gave %s XP, %s so far", index, result.xp_gain, totals.xp_total)
            self.echo(f"✅ Lesson {index} done. XP gained in this lesson: {result.xp_gain}")

            await self.delay(self.pause)

        return totals
