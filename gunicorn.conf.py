"""
Gunicorn configuration for the Goaltrack API.

Run with:  gunicorn goaltrack.main:app -c gunicorn.conf.py
Env vars that override defaults:
  PORT       — TCP port to bind (default: 8000)
  WORKERS    — number of worker processes (default: 2)
  LOG_LEVEL  — gunicorn log level (default: info)
"""
import os

bind = f"0.0.0.0:{os.environ.get('PORT', '8000')}"

# Workers share nothing; per-user ordering is enforced by the
# streak row lock inside each request's transaction.
workers = int(os.environ.get("WORKERS", "2"))

worker_class = "uvicorn.workers.UvicornWorker"

keepalive = 5

timeout = 120

# stdout only; the app's own logging goes to the same stream.
loglevel = os.environ.get("LOG_LEVEL", "info").lower()
accesslog = "-"
errorlog = "-"
access_log_format = '%(h)s "%(r)s" %(s)s %(b)sB %(D)sµs'

graceful_timeout = 30
