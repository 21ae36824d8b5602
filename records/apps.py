import atexit

from django.apps import AppConfig
from django.conf import settings


class RecordsConfig(AppConfig):
    name = 'records'
    default_auto_field = 'django.db.models.BigAutoField'
    response_cache = None

    def ready(self) -> None:
        from django.core.cache import caches
        from records.cache import ResponseCache

        conf = getattr(settings, 'RESPONSE_CACHE', {})
        if not conf.get('ENABLED', True):
            return
        self.response_cache = ResponseCache(
            caches[conf.get('BACKEND', 'default')],
            default_ttl=conf.get('TTL', 300),
            sweep_interval=conf.get('SWEEP_SECONDS', 600),
        )
        if self.response_cache.sweep_interval > 0:
            self.response_cache.start_sweeper()
            atexit.register(self.response_cache.stop_sweeper, 1)
