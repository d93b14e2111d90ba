# gunicorn.conf.py

# Network
bind = "0.0.0.0:8000"   # nginx will reverse-proxy to this
proxy_protocol = False
forwarded_allow_ips = "*"

# Workers
# The listing store lives in process memory, so there must be exactly one
# worker; concurrency comes from threads, which the store serializes.
workers = 1
threads = 4
worker_class = "gthread"
timeout = 60
graceful_timeout = 30
keepalive = 5

# Logging
accesslog = "-"          # stdout (docker-friendly)
errorlog  = "-"          # stderr
loglevel  = "info"

# App
wsgi_app = "garment_market_project.wsgi:application"
