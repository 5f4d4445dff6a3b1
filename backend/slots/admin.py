from django.contrib import admin

from .models import SlotCounter


@admin.register(SlotCounter)
class SlotCounterAdmin(admin.ModelAdmin):
    list_display = ["pickup_date", "label", "pickup_start_minute", "count", "updated_at"]
    list_filter = ["pickup_date"]
    ordering = ["-pickup_date", "pickup_start_minute"]
    readonly_fields = ["pickup_date", "pickup_start_minute", "label", "count", "updated_at"]

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
