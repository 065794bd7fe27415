"""
Sniper Service
==============

Wires the sniper together and runs it.

Startup (any failure here is fatal):
1. Fetch course metadata once and resolve a label for every watched index
2. Seed the suppression table
3. Send the ready message (failure is only logged)

Then the poll cycle runs until the process is stopped.
"""

import asyncio
import logging
from typing import List, Optional

from ..alerts import AlertConfig, WebhookAlerts
from ..api import SOCClient
from ..config import Config
from ..core import PollCycle, SuppressionTable, resolve_labels
from ..settings import POLL_INTERVAL_SECONDS

logger = logging.getLogger(__name__)


class SniperService:
    """
    Section sniper service.

    Polls open sections every interval and alerts the webhook when a
    watched index opens.
    """

    def __init__(
        self,
        config: Config,
        poll_interval_seconds: float = POLL_INTERVAL_SECONDS,
        dry_run: bool = False,
        client: Optional[SOCClient] = None,
        alerts: Optional[WebhookAlerts] = None,
    ):
        """
        Initialize the sniper service.

        Args:
            config: Parsed config.json
            poll_interval_seconds: Time between open sections polls
            dry_run: If True, log alerts instead of posting to Discord
            client: SOC client to use (default: new SOCClient)
            alerts: Alert sender to use (default: built from config)
        """
        self.config = config
        self.poll_interval = poll_interval_seconds
        self.dry_run = dry_run

        self.client = client or SOCClient()
        self.alerts = alerts or WebhookAlerts(AlertConfig(
            webhook_url=config.webhook,
            mention=config.mention,
            dry_run=dry_run,
        ))

        self.table: Optional[SuppressionTable] = None
        self.poll_cycle: Optional[PollCycle] = None

    async def _fetch_open_sections(self) -> List[str]:
        return await self.client.get_open_sections(self.config.params)

    async def _send_alert(self, index: str, label: str) -> bool:
        # requests is blocking; keep the event loop free while it posts
        return await asyncio.to_thread(
            self.alerts.send_open_alert,
            label,
            index,
            self.config.term,
            self.config.year,
        )

    async def start(self) -> SuppressionTable:
        """
        Fetch metadata, build labels and seed the suppression table.

        Raises:
            SOCAPIError: If course metadata can't be fetched or parsed
        """
        courses = await self.client.get_courses(self.config.params)
        logger.info(f"Parsed metadata ({len(courses)} courses)")
        logger.debug(f"Sample of metadata: {courses[:5]}")

        labels = resolve_labels(self.config.indexes, courses)
        self.table = SuppressionTable(labels, self.config.repeat_timeout)

        self.poll_cycle = PollCycle(
            table=self.table,
            fetch_open_sections=self._fetch_open_sections,
            send_alert=self._send_alert,
            interval_sec=self.poll_interval,
        )

        if not await asyncio.to_thread(self.alerts.send_ready):
            logger.warning("Ready message was not delivered; continuing anyway")

        return self.table

    async def run(self):
        """
        Main entry point - start up, then poll until stopped.

        Raises:
            SOCAPIError: If startup fails
        """
        logger.info("=" * 60)
        logger.info("SNIPECORD STARTING")
        logger.info("=" * 60)
        logger.info(f"Term: {self.config.term}{self.config.year} {self.config.campus}/{self.config.level}")
        logger.info(f"Indexes: {', '.join(self.config.indexes)}")
        logger.info(f"Dry run: {self.dry_run}")

        try:
            await self.start()
            await self.poll_cycle.run()
        finally:
            await self.client.close()
            logger.info("SNIPECORD STOPPED")
