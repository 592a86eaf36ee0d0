"""Daily measurement of recorded-video storage usage."""
from .config import STORAGE_MONITOR_PREFIX, STORAGE_WARN_THRESHOLD_BYTES
from .logging_setup import logger
from .models import BYTES_PER_GB, StorageReport, StorageSnapshot
from .schema import COLLECTION_STORAGE_STATS


def measure_prefix(bucket, prefix: str = STORAGE_MONITOR_PREFIX):
    """Return (total_bytes, file_count) for every blob under ``prefix``."""
    total_size = 0
    file_count = 0
    for blob in bucket.list_blobs(prefix=prefix):
        total_size += int(blob.size or 0)
        file_count += 1
    return total_size, file_count


def monitor_storage_size(
    db,
    bucket,
    prefix: str = STORAGE_MONITOR_PREFIX,
    warn_threshold_bytes: float = STORAGE_WARN_THRESHOLD_BYTES,
) -> StorageReport:
    """Record a storage_stats snapshot for ``prefix`` and warn when it grows too large.

    Any failure is logged and re-raised; the snapshot is written last so a
    failed run leaves nothing behind.
    """
    logger.info(f"Monitoring storage size under {prefix!r}...")
    try:
        total_size, file_count = measure_prefix(bucket, prefix)
        snapshot = StorageSnapshot(total_size_bytes=total_size, file_count=file_count)

        logger.info(f"Total live streams storage: {snapshot.total_size_gb:.2f} GB in {file_count} files")
        if total_size > warn_threshold_bytes:
            logger.warning(
                f"WARNING: Storage usage over {warn_threshold_bytes / BYTES_PER_GB:g}GB! "
                f"({snapshot.total_size_gb:.2f} GB)"
            )

        db.collection(COLLECTION_STORAGE_STATS).add(snapshot.to_firestore())

        return StorageReport(
            total_size_gb=snapshot.total_size_gb,
            total_size_bytes=total_size,
            file_count=file_count,
        )
    except Exception:
        logger.exception("Error monitoring storage")
        raise
