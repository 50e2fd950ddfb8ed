"""
Reconciliation Engine for bucketsync.

Compares a remote store snapshot against the local metadata cache:
1. Looks up every remote record in the repository
2. Detects checksum / modification-time conflicts
3. Resolves them with the configured conflict policy
4. Persists the outcome in a single transactional write

Files with no cache entry are absorbed by re-asserting the whole remote
batch as canonical. ``unresolved_files`` audits the cache against a fresh
listing without writing anything.
"""

import logging
from typing import List, Optional

from bucketsync.core.conflict_resolver import (
    ConflictPolicy,
    LastWriterWinsPolicy,
    classify_resolution,
    is_conflict,
)
from bucketsync.core.validation import ValidationLayer
from bucketsync.models import ConflictResolution, FileRecord, ReconciliationResult
from bucketsync.storage.repository import MetadataRepository
from bucketsync.sync.adapter import RemoteStore

logger = logging.getLogger(__name__)


class ReconciliationEngine:
    """
    Reconciles remote object metadata with the local metadata cache.

    The conflicted and unresolved lists are rebuilt by every ``sync_files``
    call and never carried across calls.
    """

    def __init__(
        self,
        repository: MetadataRepository,
        remote_store: RemoteStore,
        policy: Optional[ConflictPolicy] = None,
    ):
        self.repository = repository
        self.remote_store = remote_store
        self.policy = policy or LastWriterWinsPolicy()
        self._conflicted: List[FileRecord] = []
        self._unresolved: List[FileRecord] = []

    def sync_files(self, remote_records: List[FileRecord]) -> ReconciliationResult:
        """
        Run one reconciliation pass over a remote snapshot.

        Args:
            remote_records: Full remote listing to reconcile

        Returns:
            ReconciliationResult naming the conflicted and absorbed files

        Raises:
            ValidationError: If a record has an empty or repeated name
            RepositoryError: If the cache cannot be read or written
        """
        self._conflicted.clear()
        self._unresolved.clear()

        ValidationLayer.validate_batch(remote_records)

        pending: List[FileRecord] = []
        for remote in remote_records:
            local = self.repository.find_by_name(remote.name)

            if local is None:
                logger.debug(f"{remote.name}: not cached yet")
                self._unresolved.append(remote)
                continue

            if not is_conflict(local, remote):
                continue

            resolved = self.resolve_conflict(local, remote)
            outcome = classify_resolution(local, remote, resolved)
            logger.debug(f"{remote.name}: conflict resolved as {outcome.value}")

            if outcome == ConflictResolution.UNRESOLVED:
                self._unresolved.append(remote)
                continue

            self._conflicted.append(remote)
            if outcome == ConflictResolution.REMOTE_WINS:
                pending.append(resolved)

        result = ReconciliationResult(
            conflicted=[r.name for r in self._conflicted],
            unresolved=[r.name for r in self._unresolved],
        )

        if self._unresolved:
            # Catch-up write: the whole remote batch becomes canonical
            logger.info(
                f"Absorbing {len(self._unresolved)} unresolved file(s); "
                f"saving full batch of {len(remote_records)}"
            )
            pending = list(remote_records)
            self._unresolved.clear()

        if pending:
            self.repository.save_or_update_files(pending)
        result.written = len(pending)

        logger.info(
            f"Reconciliation pass complete: {len(remote_records)} remote, "
            f"{len(self._conflicted)} conflicted, {result.written} written"
        )
        return result

    def resolve_conflict(self, local: FileRecord, remote: FileRecord) -> Optional[FileRecord]:
        """Pick the record to keep for a conflicting pair, or None to leave it unresolved."""
        return self.policy.resolve(local, remote)

    def get_conflicted_files(self) -> List[FileRecord]:
        """Files whose conflicts were resolved by the most recent pass."""
        return list(self._conflicted)

    def unresolved_files(self) -> List[FileRecord]:
        """
        Audit a fresh remote listing against the cache.

        Returns remote files with no cache entry or a conflicting one. Files
        only present in the cache are not reported.

        Raises:
            StoreError: If the remote listing fails
        """
        unresolved: List[FileRecord] = []
        for remote in self.remote_store.load_all():
            local = self.repository.find_by_name(remote.name)
            if local is None or is_conflict(local, remote):
                unresolved.append(remote)

        logger.info(f"{len(unresolved)} remote file(s) need attention")
        return unresolved
