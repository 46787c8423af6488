"""Email channel registry.

One adapter instance per process, selected by MAIL_ADAPTER. Only the
in-memory "fake" adapter ships; a delivering adapter implements EmailPort
and registers here.
"""

import os

from marketplace.notifications.channel.email_port import EmailPort

_instances: dict[str, EmailPort] = {}


def get_email_channel() -> EmailPort:
    adapter = os.getenv("MAIL_ADAPTER", "fake").lower()
    if adapter not in _instances:
        if adapter == "fake":
            from marketplace.notifications.channel.fake_email import FakeEmailAdapter

            _instances[adapter] = FakeEmailAdapter()
        else:
            raise ValueError(f"Unknown mail adapter: {adapter}")

    return _instances[adapter]


def reset_channels():
    _instances.clear()
