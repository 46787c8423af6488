"""Protean Engine runner for the marketplace domain.

Only needed under the production overlay, where `event_processing = "async"`:
the engine relays the outbox to Redis Streams and feeds the event handlers
(coupon redemption, restocking, email notifications).

Usage:
    python src/server.py
"""

import asyncio

from protean.server.engine import Engine

from marketplace.utils.bootstrap import domain_handle


async def run():
    engine = Engine(domain_handle.get())
    await engine.run()


def main():
    asyncio.run(run())


if __name__ == "__main__":
    main()
