"""
Gunicorn Configuration for the net worth tracker API
Run with: gunicorn -c deployment/gunicorn_config.py "app:create_app('production')"
"""
import multiprocessing
import os

# Server Socket (nginx terminates TLS in front of this)
bind = os.environ.get('GUNICORN_BIND', '127.0.0.1:8000')
backlog = 512

# Worker Processes
# With RATELIMIT_STORAGE_URI=memory:// login limits are counted per worker
workers = int(os.environ.get('GUNICORN_WORKERS', multiprocessing.cpu_count() * 2 + 1))
worker_class = 'sync'
max_requests = 1000
max_requests_jitter = 50
timeout = 30
keepalive = 5

# Logging
log_dir = os.environ.get('NETWORTH_LOG_DIR', '/home/networth/app/logs')
accesslog = os.path.join(log_dir, 'gunicorn_access.log')
errorlog = os.path.join(log_dir, 'gunicorn_error.log')
loglevel = os.environ.get('GUNICORN_LOG_LEVEL', 'info')
access_log_format = '%(h)s %(u)s %(t)s "%(r)s" %(s)s %(b)s %(D)s'

# Process Naming
proc_name = 'networth-tracker'

# Server Mechanics
daemon = False
pidfile = os.environ.get('GUNICORN_PIDFILE', '/home/networth/app/gunicorn.pid')
umask = 0o007

# Security
limit_request_line = 4094
limit_request_fields = 100
limit_request_field_size = 8190


def when_ready(server):
    """Called when the server is ready"""
    server.log.info("networth-tracker ready with %s workers", workers)


def post_fork(server, worker):
    """Called after a worker has been forked"""
    server.log.info("Worker spawned (pid: %s)", worker.pid)


def worker_abort(worker):
    """Called when a worker fails to boot or times out"""
    worker.log.warning("worker %s aborted (timeout %ss)", worker.pid, timeout)
