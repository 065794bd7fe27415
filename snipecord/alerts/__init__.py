"""
Alerts Package
==============

Outbound notifications.

Components:
- webhook.py: WebhookAlerts (Discord webhook sender)
"""

from .webhook import (
    AlertConfig,
    WebhookAlerts,
    format_open_alert,
    registration_url,
    send_test_alert,
)

__all__ = [
    "AlertConfig",
    "WebhookAlerts",
    "format_open_alert",
    "registration_url",
    "send_test_alert",
]
