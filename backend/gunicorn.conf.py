import os

# Application
wsgi_app = "wsgi:app"

# Bind & workers
bind = os.getenv("GUNICORN_BIND", "0.0.0.0:8000")
workers = int(os.getenv("GUNICORN_WORKERS", "2"))
threads = 1
timeout = 60
graceful_timeout = 30
keepalive = 5

# Logs to stdout/stderr (collected by the container runtime)
accesslog = "-"
errorlog = "-"
loglevel = os.getenv("LOG_LEVEL", "info").lower()

# Trust proxy headers; ProxyFix in the app handles X-Forwarded-*
forwarded_allow_ips = "*"
proxy_protocol = False
