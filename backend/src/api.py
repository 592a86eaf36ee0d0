from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, HTTPException
from fastapi.responses import PlainTextResponse

from .clients import get_firestore_client, get_storage_bucket
from .logging_setup import logger, start_logging, stop_logging
from .models import CleanupSummary, StorageReport
from .scanner import cleanup_expired_streams
from .storage_monitor import monitor_storage_size

STORAGE_CORS_HEADERS = {
    'Access-Control-Allow-Origin': '*',
    'Access-Control-Allow-Methods': 'GET, POST, PUT, DELETE, HEAD, OPTIONS',
    'Access-Control-Allow-Headers': 'Content-Type, Authorization, X-Goog-Upload-Protocol',
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    start_logging()
    yield
    stop_logging()


app = FastAPI(title='live-stream-cleanup', lifespan=lifespan)


def get_db():
    try:
        return get_firestore_client()
    except Exception as e:
        logger.error(f"Firestore client initialization failed: {e}")
        raise HTTPException(status_code=500, detail=f'Firestore unavailable: {e}')


def get_bucket():
    try:
        return get_storage_bucket()
    except Exception as e:
        logger.error(f"Storage bucket initialization failed: {e}")
        raise HTTPException(status_code=500, detail=f'Storage unavailable: {e}')


@app.get('/healthz')
def healthz():
    return {'status': 'ok'}


@app.post('/tasks/cleanup-expired-streams', response_model=CleanupSummary)
def cleanup_task(dry_run: bool = False, db=Depends(get_db), bucket=Depends(get_bucket)):
    # Per-stream failures are counted in the summary; only a failed query lands here
    try:
        return cleanup_expired_streams(db, bucket, dry_run=dry_run)
    except Exception as e:
        logger.exception('Expired streams cleanup failed')
        raise HTTPException(status_code=500, detail=str(e))


@app.post('/tasks/monitor-storage-size', response_model=StorageReport)
def monitor_task(db=Depends(get_db), bucket=Depends(get_bucket)):
    try:
        return monitor_storage_size(db, bucket)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@app.api_route('/storage-cors', methods=['GET', 'POST', 'PUT', 'DELETE', 'HEAD', 'OPTIONS'])
def storage_cors():
    return PlainTextResponse('CORS enabled', status_code=200, headers=STORAGE_CORS_HEADERS)
