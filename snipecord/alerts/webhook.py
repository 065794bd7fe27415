"""
Discord Webhook Alerts
======================

Discord notification system for the section sniper.

Alert types:
- Ready message: Sent once at startup
- Open alerts: Sent when a watched section opens (and again every
  repeat_timeout ticks while it stays open)

Delivery is best effort: failures are logged and reported through the
return value, never raised.
"""

import logging
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlencode

import requests

from ..settings import (
    DISCORD_MAX_MESSAGE_LENGTH,
    READY_MESSAGE,
    WEBHOOK_AVATAR_URL,
    WEBHOOK_TIMEOUT_SECONDS,
    WEBHOOK_USERNAME,
    WEBREG_URL,
)

logger = logging.getLogger(__name__)


def registration_url(term: str, year: str, index: str) -> str:
    """WebReg link that pre-fills the index for the given semester."""
    query = urlencode({
        "login": "cas",
        "semesterSelection": f"{term}{year}",
        "indexList": index,
    })
    return f"{WEBREG_URL}?{query}"


def format_open_alert(label: str, index: str, term: str, year: str) -> str:
    """Alert text without the mention prefix."""
    return f"{label} is open!!! Register with {registration_url(term, year, index)}"


@dataclass
class AlertConfig:
    """Configuration for alert sending."""
    webhook_url: str
    mention: Optional[str] = None
    username: str = WEBHOOK_USERNAME
    avatar_url: str = WEBHOOK_AVATAR_URL
    dry_run: bool = False
    timeout_sec: float = WEBHOOK_TIMEOUT_SECONDS
    max_message_length: int = DISCORD_MAX_MESSAGE_LENGTH


class WebhookAlerts:
    """
    Discord webhook sender for open-section alerts.

    Every message goes out under a fixed username and avatar.
    """

    def __init__(self, config: AlertConfig, session: Optional[requests.Session] = None):
        """
        Initialize webhook alerts.

        Args:
            config: AlertConfig with webhook URL and settings
            session: requests session to reuse (default: new session)
        """
        self.config = config
        self._validate()
        self._session = session or requests.Session()

    def _validate(self):
        """Validate configuration."""
        if not self.config.dry_run and not self.config.webhook_url:
            raise ValueError("Discord webhook URL is required (or use --dry-run)")

    def _truncate_message(self, text: str) -> str:
        """Truncate message to Discord's character limit."""
        if len(text) > self.config.max_message_length:
            return text[:self.config.max_message_length - 16] + "\n...(truncated)"
        return text

    def send_message(self, content: str) -> bool:
        """
        Post a message to the webhook.

        Args:
            content: Message body

        Returns:
            True if delivered (or dry run), False otherwise
        """
        content = self._truncate_message(content)

        if self.config.dry_run:
            logger.info(f"[DRY RUN] Would send webhook message:\n{content}")
            return True

        payload = {
            "username": self.config.username,
            "avatar_url": self.config.avatar_url,
            "content": content,
        }

        try:
            response = self._session.post(
                self.config.webhook_url,
                json=payload,
                timeout=self.config.timeout_sec,
            )
            response.raise_for_status()
            logger.debug("Webhook message sent")
            return True

        except requests.exceptions.Timeout:
            logger.error("Failed to send message through webhook: request timed out")
            return False
        except requests.exceptions.HTTPError as e:
            # Don't log the URL, it contains the webhook token
            status_code = e.response.status_code if e.response is not None else "unknown"
            logger.error(f"Failed to send message through webhook: HTTP {status_code}")
            if status_code == 429:
                logger.warning("Discord rate limit hit (429)")
            return False
        except requests.exceptions.ConnectionError:
            logger.error("Failed to send message through webhook: connection error")
            return False
        except requests.exceptions.RequestException as e:
            logger.error(f"Failed to send message through webhook: {type(e).__name__}")
            return False

    def send_ready(self) -> bool:
        """Send the startup message."""
        return self.send_message(READY_MESSAGE)

    def send_open_alert(self, label: str, index: str, term: str, year: str) -> bool:
        """
        Send an alert that a watched section is open.

        Body is "<mention>\\n<label> is open!!! Register with <url>"; the
        mention is empty when none is configured.

        Returns:
            True if delivered, False otherwise
        """
        text = format_open_alert(label, index, term, year)
        # Also in the log, in case the webhook is down
        logger.info(text)
        mention = self.config.mention or ""
        return self.send_message(f"{mention}\n{text}")


def send_test_alert(webhook_url: str, mention: Optional[str] = None, dry_run: bool = False) -> bool:
    """
    Send a test message to verify the webhook configuration.

    Returns:
        True if successful
    """
    alerts = WebhookAlerts(AlertConfig(webhook_url=webhook_url, mention=mention, dry_run=dry_run))
    text = "Test alert - SnipeCord webhook configuration verified."
    return alerts.send_message(f"{mention}\n{text}" if mention else text)
