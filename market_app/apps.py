import logging

from django.apps import AppConfig
from django.conf import settings

logger = logging.getLogger(__name__)


class MarketAppConfig(AppConfig):
    name = "market_app"
    verbose_name = "Garment Market"

    store = None

    def ready(self):
        self.reset_store(seed=getattr(settings, "MARKET_SEED_DEMO_DATA", False))

    def reset_store(self, seed=False):
        """
        Replace the process-wide store with an empty one (optionally seeded).
        """
        from .seed import seed_store
        from .store import ListingStore

        self.store = ListingStore()
        if seed:
            seed_store(self.store)
            logger.info(f"Seeded store with {len(self.store)} demo listings")
        return self.store
