"""
Reply Module

Asynchronous assistant replies for the conversation store.

Usage:
    from hexchat.replies import ReplySimulator
    from hexchat.config import get_settings

    simulator = ReplySimulator.from_settings(get_settings().reply)
"""

from hexchat.replies.base import BaseReplyGenerator
from hexchat.replies.echo import REPLY_TEMPLATE, EchoReplyGenerator
from hexchat.replies.simulator import DEFAULT_DELAY_SECONDS, ReplySimulator

__all__ = [
    "BaseReplyGenerator",
    "DEFAULT_DELAY_SECONDS",
    "EchoReplyGenerator",
    "REPLY_TEMPLATE",
    "ReplySimulator",
]
