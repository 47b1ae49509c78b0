"""Run report sender adapter implementations."""

from .base import BaseReportSender
from .slack import SlackConfig, SlackReportSender
from .webhook import WebhookConfig, WebhookReportSender

__all__ = [
    "BaseReportSender",
    "SlackConfig",
    "SlackReportSender",
    "WebhookConfig",
    "WebhookReportSender",
]
