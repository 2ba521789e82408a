"""
SMS notifications.

- ``gateway``: where messages go (a logging gateway or an HTTP provider).
- ``messages``: the wording of automated messages.
- ``dispatch``: recording a message and handing it to the gateway.
- ``automation``: the rules that decide which riders get which message.
"""

from .automation import run_automation
from .dispatch import send_sms, sms_stats
from .gateway import HttpSmsGateway, LoggingSmsGateway, SmsGateway, build_gateway

__all__ = [
    "HttpSmsGateway",
    "LoggingSmsGateway",
    "SmsGateway",
    "build_gateway",
    "run_automation",
    "send_sms",
    "sms_stats",
]
