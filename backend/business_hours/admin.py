from django.contrib import admin

from .models import BusinessHoursProfile


@admin.register(BusinessHoursProfile)
class BusinessHoursProfileAdmin(admin.ModelAdmin):
    list_display = ["name", "timezone", "opening_time", "closing_time", "is_active", "is_default"]
    list_filter = ["is_active", "is_default", "timezone"]
    search_fields = ["name"]
