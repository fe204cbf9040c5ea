import logging
from django.dispatch import Signal, receiver

from .records import REVISIONS_KEY

logger = logging.getLogger(__name__)

# Sent by RecordStore.save with ``key``, ``collection`` and ``backend``.
collection_saved = Signal()


@receiver(collection_saved)
def bump_revision(sender, key, collection, backend, **kwargs):
    """
    Record that ``key`` changed so other tabs polling /sync/ reload it.
    Reassign the dict so session backends notice the modification.
    """
    revisions = dict(backend.get(REVISIONS_KEY) or {})
    revisions[key] = int(revisions.get(key, 0)) + 1
    backend[REVISIONS_KEY] = revisions
    logger.debug("Revision for %s is now %d (%d records)", key, revisions[key], len(collection))
