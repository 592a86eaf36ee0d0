from backend.src.api import app
from backend.src.schedules import JOB_SCHEDULES, gcloud_create_command


def test_jobs_run_daily_in_bangkok_time():
    crons = {job.name: (job.cron, job.time_zone) for job in JOB_SCHEDULES}
    assert crons == {
        'cleanup-expired-streams': ('0 3 * * *', 'Asia/Bangkok'),
        'monitor-storage-size': ('0 0 * * *', 'Asia/Bangkok'),
    }


def test_every_job_targets_a_registered_post_route():
    routes = {(r.path, m) for r in app.routes for m in getattr(r, 'methods', ())}
    for job in JOB_SCHEDULES:
        assert (job.path, 'POST') in routes


def test_gcloud_command():
    cmd = gcloud_create_command(JOB_SCHEDULES[0], 'https://svc.run.app/', 'sched@demo.iam.gserviceaccount.com')
    assert cmd.startswith('gcloud scheduler jobs create http cleanup-expired-streams')
    assert "--uri='https://svc.run.app/tasks/cleanup-expired-streams'" in cmd
    assert "--time-zone='Asia/Bangkok'" in cmd
    assert "--oidc-service-account-email='sched@demo.iam.gserviceaccount.com'" in cmd
