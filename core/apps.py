import logging

from django.apps import AppConfig
from django.conf import settings

logger = logging.getLogger("ovento")


class CoreConfig(AppConfig):
    name = "core"
    verbose_name = "Ovento core"

    storage = None

    def ready(self):
        # Explicit startup phase: build the store once and seed it before
        # the first request is served.
        from core.config import log_config_status
        from core.seed import seed_demo_data
        from core.storage import MemoryStorage

        log_config_status()

        self.storage = MemoryStorage()
        if settings.OVENTO["SEED_DEMO_DATA"]:
            seed_demo_data(self.storage, seed=settings.OVENTO["SEED"])
