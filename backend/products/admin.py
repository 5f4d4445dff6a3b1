from django.contrib import admin

from .models import Category, Product, ProductOption, SaladConfig


class SaladConfigInline(admin.StackedInline):
    model = SaladConfig
    extra = 0


class ProductOptionInline(admin.TabularInline):
    model = ProductOption
    extra = 0


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ("name", "price", "category", "is_active", "created_at")
    list_filter = ("is_active", "category")
    search_fields = ("name",)
    inlines = [SaladConfigInline, ProductOptionInline]


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ("name", "order", "is_active")
    ordering = ("order", "name")
