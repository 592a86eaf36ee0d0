"""Typed views over the Firestore documents and job results.

Stream documents are written by the app, so they are read leniently into a
dataclass; job results and snapshots are pydantic models because they are
returned over HTTP and written back to Firestore with camelCase keys.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional

from google.cloud import firestore
from pydantic import BaseModel, ConfigDict, Field, computed_field

from .schema import (
    FIELD_APPROVED_AT,
    FIELD_AUTO_DELETE,
    FIELD_CREATED_AT,
    FIELD_DELETE_AT,
    FIELD_DELETED_AT,
    FIELD_RECORDED_VIDEO_URL,
    FIELD_STATUS,
)

BYTES_PER_GB = 1024 ** 3


@dataclass
class StreamRecord:
    """Snapshot of one live_streams document."""
    id: str
    status: Optional[str] = None
    auto_delete_enabled: bool = False
    delete_at: Optional[datetime] = None
    recorded_video_url: Optional[str] = None
    created_at: Optional[datetime] = None
    approved_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None

    @classmethod
    def from_dict(cls, stream_id: str, data: Optional[Dict[str, Any]]) -> "StreamRecord":
        data = data or {}
        return cls(
            id=stream_id,
            status=data.get(FIELD_STATUS),
            auto_delete_enabled=bool(data.get(FIELD_AUTO_DELETE, False)),
            delete_at=data.get(FIELD_DELETE_AT),
            recorded_video_url=data.get(FIELD_RECORDED_VIDEO_URL) or None,
            created_at=data.get(FIELD_CREATED_AT),
            approved_at=data.get(FIELD_APPROVED_AT),
            deleted_at=data.get(FIELD_DELETED_AT),
        )

    @classmethod
    def from_snapshot(cls, snapshot) -> "StreamRecord":
        return cls.from_dict(snapshot.id, snapshot.to_dict())


@dataclass
class BlobDeletion:
    """Outcome of the best-effort video blob removal.

    Only ever logged; a failed deletion does not stop a purge.
    """
    path: Optional[str]
    deleted: bool = False
    error: Optional[str] = None

    @property
    def attempted(self) -> bool:
        return self.path is not None

    def describe(self) -> str:
        if not self.attempted:
            return "no recorded video"
        if self.deleted:
            return f"deleted {self.path}"
        return f"could not delete {self.path}: {self.error}"


@dataclass
class PurgeResult:
    stream_id: str
    blob: BlobDeletion
    deleted_children: Dict[str, int] = field(default_factory=dict)

    @property
    def total_children(self) -> int:
        return sum(self.deleted_children.values())


class CleanupSummary(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    matched_count: int = Field(0, alias="matchedCount")
    deleted_count: int = Field(0, alias="deletedCount")
    error_count: int = Field(0, alias="errorCount")
    dry_run: bool = Field(False, alias="dryRun")


class StorageSnapshot(BaseModel):
    """One storage_stats entry. totalSizeGB is always derived from the byte count."""
    model_config = ConfigDict(populate_by_name=True)

    total_size_bytes: int = Field(alias="totalSizeBytes")
    file_count: int = Field(alias="fileCount")

    @computed_field(alias="totalSizeGB")
    @property
    def total_size_gb(self) -> float:
        return round(self.total_size_bytes / BYTES_PER_GB, 2)

    def to_firestore(self) -> Dict[str, Any]:
        record = self.model_dump(by_alias=True)
        record["timestamp"] = firestore.SERVER_TIMESTAMP
        return record


class StorageReport(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    total_size_gb: float = Field(alias="totalSizeGB")
    total_size_bytes: int = Field(alias="totalSizeBytes")
    file_count: int = Field(alias="fileCount")
