"""Daily sweep for expired live streams."""
from datetime import datetime, timezone
from typing import List, Optional

from google.cloud import firestore

from .config import CHILD_DELETE_BATCH_SIZE
from .logging_setup import logger
from .models import CleanupSummary, StreamRecord
from .purger import purge_stream
from .schema import (
    COLLECTION_LIVE_STREAMS,
    FIELD_AUTO_DELETE,
    FIELD_DELETE_AT,
    FIELD_STATUS,
    StreamStatus,
)


def find_expired_streams(db, now: datetime) -> List[StreamRecord]:
    """Ended streams with auto-delete on whose deleteAt is at or before ``now``."""
    q = (
        db.collection(COLLECTION_LIVE_STREAMS)
        .where(filter=firestore.FieldFilter(FIELD_AUTO_DELETE, '==', True))
        .where(filter=firestore.FieldFilter(FIELD_DELETE_AT, '<=', now))
        .where(filter=firestore.FieldFilter(FIELD_STATUS, '==', StreamStatus.ENDED.value))
    )
    # Materialize before purging so updates don't disturb the open query
    return [StreamRecord.from_snapshot(d) for d in q.stream()]


def cleanup_expired_streams(
    db,
    bucket,
    now: Optional[datetime] = None,
    dry_run: bool = False,
    batch_size: int = CHILD_DELETE_BATCH_SIZE,
) -> CleanupSummary:
    """Purge every expired stream, one at a time.

    A failing stream is logged and counted and the sweep moves on; its
    document is left as it was so the next run retries it.
    """
    now = now or datetime.now(timezone.utc)
    logger.info(f"Starting expired streams cleanup (now={now.isoformat()}, dry_run={dry_run})")

    expired = find_expired_streams(db, now)
    logger.info(f"Found {len(expired)} expired streams")

    summary = CleanupSummary(matched_count=len(expired), dry_run=dry_run)
    for record in expired:
        if dry_run:
            logger.info(f"[dry-run] would purge stream {record.id} (deleteAt={record.delete_at})")
            continue
        try:
            purge_stream(db, bucket, record, batch_size=batch_size)
            summary.deleted_count += 1
        except Exception:
            logger.exception(f"Error deleting stream {record.id}")
            summary.error_count += 1

    logger.info(f"Cleanup completed: {summary.deleted_count} deleted, {summary.error_count} errors")
    return summary
