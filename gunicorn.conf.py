import os

# Catalog, offers and orders live in process memory: a single worker keeps
# one consistent state.
workers = 1
wsgi_app = "shopfront.wsgi:application"
bind = os.getenv("BIND", f"0.0.0.0:{os.getenv('PORT', '3000')}")

# Threads per worker; engine operations are serialized by the store lock
worker_class = "gthread"
threads = int(os.getenv("GTHREADS", "4"))

# Timeouts
timeout = int(os.getenv("GUNI_TIMEOUT", "60"))
graceful_timeout = int(os.getenv("GUNI_GRACEFUL_TIMEOUT", "30"))
keepalive = int(os.getenv("GUNI_KEEPALIVE", "5"))

# Application logs go through the JSON logger configured in settings
accesslog = None
errorlog = "-"
loglevel = os.getenv("GUNI_LOGLEVEL", "info")
