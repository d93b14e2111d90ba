from .settings import *  # noqa: F401,F403

SECRET_KEY = "django-insecure-testkey"
DEBUG = False
ALLOWED_HOSTS = ["testserver"]

# Tests build their own stores
MARKET_SEED_DEMO_DATA = False

LOGGING["loggers"]["market_app"]["level"] = "WARNING"  # noqa: F405
