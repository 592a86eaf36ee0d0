"""Lazily created Google Cloud client handles.

Job functions take ``db`` and ``bucket`` as arguments; these helpers are only
the production wiring (FastAPI dependencies and the admin CLI).
"""
from functools import lru_cache

from google.cloud import firestore
from google.cloud import storage as gcs_lib

from .config import GOOGLE_CLOUD_PROJECT, STORAGE_BUCKET
from .logging_setup import logger


@lru_cache(maxsize=1)
def get_firestore_client() -> firestore.Client:
    if GOOGLE_CLOUD_PROJECT:
        client = firestore.Client(project=GOOGLE_CLOUD_PROJECT)
    else:
        client = firestore.Client()
    logger.info(f"Firestore client initialized (project={client.project})")
    return client


@lru_cache(maxsize=1)
def get_storage_bucket() -> gcs_lib.Bucket:
    if not STORAGE_BUCKET:
        raise RuntimeError('STORAGE_BUCKET is not configured')
    if GOOGLE_CLOUD_PROJECT:
        client = gcs_lib.Client(project=GOOGLE_CLOUD_PROJECT)
    else:
        client = gcs_lib.Client()
    logger.info(f"Storage bucket handle created for {STORAGE_BUCKET}")
    return client.bucket(STORAGE_BUCKET)
