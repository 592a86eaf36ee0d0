#!/usr/bin/env python3
"""
Admin CLI to run the scheduled jobs by hand, outside Cloud Scheduler.

Usage examples:
  # See which streams the next cleanup would purge (nothing is deleted)
  PYTHONPATH=. python tools/run_job.py cleanup --dry-run

  # Purge expired streams now
  PYTHONPATH=. python tools/run_job.py cleanup

  # Record a storage_stats snapshot now
  PYTHONPATH=. python tools/run_job.py monitor

  # Print the gcloud commands that create the Cloud Scheduler jobs
  PYTHONPATH=. python tools/run_job.py schedules --service-url https://cleanup-xyz.a.run.app

Notes:
  - Requires valid Google credentials (e.g. `GOOGLE_APPLICATION_CREDENTIALS`)
    and STORAGE_BUCKET / GOOGLE_CLOUD_PROJECT in the environment or .env.
"""
import argparse
import json
import sys

from backend.src.clients import get_firestore_client, get_storage_bucket
from backend.src.scanner import cleanup_expired_streams
from backend.src.schedules import JOB_SCHEDULES, gcloud_create_command
from backend.src.storage_monitor import monitor_storage_size


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Run live stream maintenance jobs")
    sub = parser.add_subparsers(dest="command", required=True)

    cleanup = sub.add_parser("cleanup", help="Purge expired live streams")
    cleanup.add_argument("--dry-run", action="store_true", help="List expired streams without deleting anything")
    cleanup.add_argument("--batch-size", type=int, default=None, help="Child documents deleted per write batch (max 500)")

    sub.add_parser("monitor", help="Measure live_streams/ storage and record a snapshot")

    schedules = sub.add_parser("schedules", help="Print Cloud Scheduler job definitions")
    schedules.add_argument("--service-url", default="https://<cloud-run-service-url>", help="Base URL of the deployed service")
    schedules.add_argument("--service-account", default="", help="Service account used for OIDC auth")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)

    if args.command == "schedules":
        for job in JOB_SCHEDULES:
            print(gcloud_create_command(job, args.service_url, args.service_account))
            print()
        return 0

    db = get_firestore_client()
    bucket = get_storage_bucket()

    if args.command == "cleanup":
        kwargs = {"dry_run": args.dry_run}
        if args.batch_size:
            kwargs["batch_size"] = args.batch_size
        result = cleanup_expired_streams(db, bucket, **kwargs)
    else:
        result = monitor_storage_size(db, bucket)

    print(json.dumps(result.model_dump(by_alias=True), indent=2))
    return 0 if result.success else 1


if __name__ == "__main__":
    sys.exit(main())
