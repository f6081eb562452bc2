from app.core.config import settings

# Server socket
bind = f"{settings.host}:{settings.port}"
backlog = 512

# Worker processes; each worker runs parsing on its own thread pool
workers = settings.workers if settings.is_production else 1
worker_class = "uvicorn.workers.UvicornWorker"
max_requests = 500
max_requests_jitter = 50

# A worker stuck on a pathological upload is killed after this many seconds
timeout = settings.timeout
keepalive = settings.keepalive
graceful_timeout = 30

# Logging
loglevel = settings.log_level.lower()
accesslog = "-"  # stdout
errorlog = "-"   # stderr

proc_name = 'hrv_analyzer_backend'
daemon = False


def when_ready(server):
    server.log.info("HRV Analyzer Backend is ready to serve requests (uploads in %s)", settings.upload_dir)


def worker_abort(worker):
    """Called when a worker timed out; its in-flight upload files are orphaned"""
    worker.log.warning("Worker %s aborted, check %s for leftover uploads", worker.pid, settings.upload_dir)
