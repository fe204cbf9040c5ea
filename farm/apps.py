from django.apps import AppConfig


class FarmConfig(AppConfig):
    name = "farm"
    verbose_name = "AgroGestión"

    def ready(self):
        # import signals to register them
        from . import signals  # noqa: F401
