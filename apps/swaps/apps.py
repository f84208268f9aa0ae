from django.apps import AppConfig


class SwapsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.swaps"
    label = "swaps"

    def ready(self) -> None:
        from . import handlers

        handlers.register()
