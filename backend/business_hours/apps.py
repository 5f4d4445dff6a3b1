from django.apps import AppConfig


class BusinessHoursConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "business_hours"
    verbose_name = "Business Hours"

    def ready(self):
        import business_hours.signals  # noqa: F401
