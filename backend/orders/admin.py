from django.contrib import admin

from .models import Order, OrderItem, PublicCapacityEntry, PublicOrderStatus


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    fields = ["display_name", "price", "product_id", "custom"]
    readonly_fields = fields
    can_delete = False


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ["code", "pickup_date", "pickup_time_label", "status", "total", "created_at"]
    list_filter = ["status", "pickup_date"]
    search_fields = ["code"]
    ordering = ["-pickup_date", "pickup_start_minute"]
    readonly_fields = ["id", "code", "status", "pickup_date", "pickup_start_minute", "pickup_time_label", "total", "created_at", "updated_at"]
    inlines = [OrderItemInline]


@admin.register(PublicOrderStatus)
class PublicOrderStatusAdmin(admin.ModelAdmin):
    list_display = ["code", "status", "pickup_date", "pickup_time_label", "updated_at"]
    list_filter = ["status", "pickup_date"]
    search_fields = ["code"]


@admin.register(PublicCapacityEntry)
class PublicCapacityEntryAdmin(admin.ModelAdmin):
    list_display = ["order_id", "pickup_date", "pickup_time_label", "created_at"]
    list_filter = ["pickup_date"]
