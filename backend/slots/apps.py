from django.apps import AppConfig


class SlotsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "slots"
    verbose_name = "Pickup Slots"

    def ready(self):
        import slots.config  # noqa: F401
