"""Cloud Scheduler job table for the task endpoints."""
from dataclasses import dataclass
from typing import List

from .config import CLEANUP_SCHEDULE, SCHEDULE_TIME_ZONE, STORAGE_MONITOR_SCHEDULE


@dataclass(frozen=True)
class JobSchedule:
    name: str
    cron: str
    path: str
    time_zone: str = SCHEDULE_TIME_ZONE
    description: str = ''


JOB_SCHEDULES: List[JobSchedule] = [
    JobSchedule(
        name='cleanup-expired-streams',
        cron=CLEANUP_SCHEDULE,
        path='/tasks/cleanup-expired-streams',
        description='Purge ended live streams past their deleteAt',
    ),
    JobSchedule(
        name='monitor-storage-size',
        cron=STORAGE_MONITOR_SCHEDULE,
        path='/tasks/monitor-storage-size',
        description='Record live_streams/ storage usage in storage_stats',
    ),
]


def gcloud_create_command(job: JobSchedule, service_url: str, service_account: str = '') -> str:
    """Render the ``gcloud scheduler jobs create http`` command for a job."""
    parts = [
        f"gcloud scheduler jobs create http {job.name}",
        f"--schedule='{job.cron}'",
        f"--time-zone='{job.time_zone}'",
        f"--uri='{service_url.rstrip('/')}{job.path}'",
        "--http-method=POST",
    ]
    if job.description:
        parts.append(f"--description='{job.description}'")
    if service_account:
        parts.append(f"--oidc-service-account-email='{service_account}'")
    return ' \\\n    '.join(parts)
