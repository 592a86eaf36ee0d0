"""Purge a single expired live stream.

A purge is not transactional: the video blob, each child batch and the final
tombstone update are separate writes. Every step is safe to repeat, so a purge
that fails halfway is simply run again on the next schedule.
"""
from typing import Dict

from google.cloud import firestore

from .config import CHILD_DELETE_BATCH_SIZE, MAX_BATCH_SIZE
from .logging_setup import logger
from .media import delete_recorded_video
from .models import PurgeResult, StreamRecord
from .schema import (
    COLLECTION_LIVE_STREAMS,
    FIELD_DELETED_AT,
    FIELD_RECORDED_VIDEO_URL,
    FIELD_STATUS,
    STREAM_SUBCOLLECTIONS,
    StreamStatus,
)


def delete_subcollection(db, stream_id: str, name: str, batch_size: int = CHILD_DELETE_BATCH_SIZE) -> int:
    """Delete every document in live_streams/{stream_id}/{name}.

    Fetches at most ``batch_size`` documents, deletes them in one write batch
    and repeats until a fetch comes back empty. Returns the number deleted.
    """
    batch_size = max(1, min(batch_size, MAX_BATCH_SIZE))
    coll = db.collection(COLLECTION_LIVE_STREAMS).document(stream_id).collection(name)
    deleted = 0
    while True:
        docs = list(coll.limit(batch_size).stream())
        if not docs:
            break
        batch = db.batch()
        for d in docs:
            batch.delete(d.reference)
        batch.commit()
        deleted += len(docs)
        logger.debug(f"Deleted {len(docs)} docs from {COLLECTION_LIVE_STREAMS}/{stream_id}/{name}")
    return deleted


def purge_stream(db, bucket, record: StreamRecord, batch_size: int = CHILD_DELETE_BATCH_SIZE) -> PurgeResult:
    """Remove a stream's video and children, then tombstone the stream document.

    Blob deletion is best-effort. Errors from the Firestore steps propagate.
    """
    blob = delete_recorded_video(bucket, record.recorded_video_url)
    if blob.attempted and not blob.deleted:
        logger.warning(f"Stream {record.id}: {blob.describe()}")
    else:
        logger.info(f"Stream {record.id}: {blob.describe()}")

    deleted_children: Dict[str, int] = {}
    for name in STREAM_SUBCOLLECTIONS:
        deleted_children[name] = delete_subcollection(db, record.id, name, batch_size=batch_size)

    db.collection(COLLECTION_LIVE_STREAMS).document(record.id).update({
        FIELD_STATUS: StreamStatus.DELETED.value,
        FIELD_RECORDED_VIDEO_URL: firestore.DELETE_FIELD,
        FIELD_DELETED_AT: firestore.SERVER_TIMESTAMP,
    })

    result = PurgeResult(stream_id=record.id, blob=blob, deleted_children=deleted_children)
    logger.info(f"Stream {record.id} purged: {result.total_children} child docs removed {deleted_children}")
    return result
