"""Single-flight domain initialization.

`DomainHandle` wraps the expensive one-time setup (importing every element,
building providers and brokers) so that concurrent first callers share one
initialization. A failed attempt leaves the handle empty; the next caller
retries from scratch.
"""

import threading
from collections.abc import Callable

import structlog
from protean.domain import Domain

logger = structlog.get_logger(__name__)


def _load_marketplace() -> Domain:
    from marketplace.domain import marketplace

    marketplace.init()
    return marketplace


class DomainHandle:
    def __init__(self, loader: Callable[[], Domain] = _load_marketplace):
        self._loader = loader
        self._domain: Domain | None = None
        self._lock = threading.Lock()

    @property
    def initialized(self) -> bool:
        return self._domain is not None

    def get(self) -> Domain:
        """Return the initialized domain, initializing it on first use."""
        domain = self._domain
        if domain is not None:
            return domain

        with self._lock:
            if self._domain is None:
                logger.info("Initializing domain")
                try:
                    self._domain = self._loader()
                except Exception:
                    logger.exception("Domain initialization failed")
                    raise
                logger.info("Domain ready", domain=self._domain.name)
            return self._domain

    def reset(self) -> None:
        with self._lock:
            self._domain = None


domain_handle = DomainHandle()
