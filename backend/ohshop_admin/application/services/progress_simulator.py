"""Stepwise progress reporting for the site-code migration.

The site-code migration has no backing job yet: the run only reports
progress in fixed steps so the dashboard can show its progress bar.
"""

import asyncio
import logging
from collections.abc import AsyncGenerator

from ohshop_admin.domain.entities.migration import ProgressStep

logger = logging.getLogger(__name__)

STEP = 10


class ProgressSimulator:
    def __init__(self, step_delay: float = 0.5):
        self._step_delay = step_delay
        self.log: list[str] = []

    async def run(self, label: str) -> AsyncGenerator[ProgressStep, None]:
        """Yield 0, 10, ... 100 percent, waiting ``step_delay`` before each step."""
        self.log = [f"Starting {label}..."]
        logger.info("Starting %s", label)
        for progress in range(0, 100 + STEP, STEP):
            await asyncio.sleep(self._step_delay)
            message = f"Processing {label}... {progress}% complete"
            self.log.append(message)
            yield ProgressStep(label=label, progress=progress, status="running", message=message)

        message = f"{label} completed"
        self.log.append(message)
        logger.info("%s completed", label)
        yield ProgressStep(label=label, progress=100, status="completed", message=message)
