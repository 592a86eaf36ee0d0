"""Recorded-video blob helpers.

Stream documents keep the Firebase download URL of the recording, e.g.
``https://firebasestorage.googleapis.com/v0/b/<bucket>/o/live_streams%2Fs1.mp4?alt=media&token=...``.
The object path is the URL-encoded segment between ``/o/`` and the query string.
"""
from typing import Optional
from urllib.parse import unquote

from google.api_core import exceptions as gcs_exceptions

from .logging_setup import logger
from .models import BlobDeletion

_OBJECT_MARKER = '/o/'


def object_path_from_url(url: Optional[str]) -> Optional[str]:
    """Return the decoded storage object path for a download URL, or None."""
    if not url or _OBJECT_MARKER not in url:
        return None
    encoded = url.split(_OBJECT_MARKER, 1)[1].split('?', 1)[0]
    if not encoded:
        return None
    return unquote(encoded)


def delete_recorded_video(bucket, url: Optional[str]) -> BlobDeletion:
    """Try to delete the blob behind ``url``; never raises."""
    path = object_path_from_url(url)
    if path is None:
        if url:
            logger.warning(f"Could not derive a storage path from recordedVideoUrl={url!r}")
        return BlobDeletion(path=None)
    try:
        bucket.blob(path).delete()
        return BlobDeletion(path=path, deleted=True)
    except gcs_exceptions.NotFound:
        return BlobDeletion(path=path, error='not found')
    except Exception as e:
        return BlobDeletion(path=path, error=str(e))
