"""Synchronous command dispatch with per-key serialization.

Handlers run inside a Protean unit of work; taking the keyed lock around the
whole ``process`` call keeps the read-validate-write sequence and its commit
in one critical section.
"""

import structlog
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from marketplace.errors import MarketplaceError, StorageFailure
from marketplace.utils.locking import KeyedLocks

logger = structlog.get_logger(__name__)


def _process(command):
    try:
        return current_domain.process(command, asynchronous=False)
    except (MarketplaceError, ValidationError, ObjectNotFoundError):
        raise
    except Exception as exc:
        logger.exception("Command failed in the store", command=command.__class__.__name__)
        raise StorageFailure({"store": ["The request could not be completed"]}) from exc


def dispatch(command, locks: KeyedLocks | None = None, key=None):
    """Process ``command`` and return the handler's result.

    When ``locks`` is given, the command runs while holding ``locks`` for ``key``.
    """
    if locks is None:
        return _process(command)

    with locks.hold(key):
        return _process(command)
