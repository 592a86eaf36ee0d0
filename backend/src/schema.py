"""Firestore collection names and stream document fields.

Firestore has no DDL; these constants are the schema other clients (the
mobile app, the admin console) already rely on, so the strings must not
change.
"""
from enum import Enum

COLLECTION_LIVE_STREAMS = "live_streams"
COLLECTION_STORAGE_STATS = "storage_stats"

# Subcollections under live_streams/{streamId} drained when a stream is purged
SUBCOLLECTION_COMMENTS = "comments"
SUBCOLLECTION_VIEWERS = "viewers"
SUBCOLLECTION_LIKES = "likes"
STREAM_SUBCOLLECTIONS = (SUBCOLLECTION_COMMENTS, SUBCOLLECTION_VIEWERS, SUBCOLLECTION_LIKES)

# Cloud Storage prefix holding recorded stream videos
LIVE_STREAMS_BLOB_PREFIX = "live_streams/"

# live_streams document fields
FIELD_STATUS = "status"
FIELD_AUTO_DELETE = "autoDeleteEnabled"
FIELD_DELETE_AT = "deleteAt"
FIELD_RECORDED_VIDEO_URL = "recordedVideoUrl"
FIELD_CREATED_AT = "createdAt"
FIELD_APPROVED_AT = "approvedAt"
FIELD_DELETED_AT = "deletedAt"


class StreamStatus(str, Enum):
    ACTIVE = "active"
    ENDED = "ended"
    ARCHIVED = "archived"
    DELETED = "deleted"
