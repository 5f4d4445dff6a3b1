from django.shortcuts import get_object_or_404
from rest_framework import permissions, status
from rest_framework.decorators import action
from rest_framework.response import Response

from core_backend.base.viewsets import BaseViewSet
from users.authorization import AuthorizationContext
from users.permissions import IsAdminMember, ReadOnlyForStaff
from .filters import ProductFilter
from .models import Category, Product
from .pricing import ProductSnapshot, resolve_line
from .serializers import (
    CategorySerializer,
    PriceUpdateSerializer,
    ProductSerializer,
    ResolveLineSerializer,
    ResolvedLineSerializer,
)
from .services import ProductService


class CategoryViewSet(BaseViewSet):
    queryset = Category.objects.all()
    serializer_class = CategorySerializer
    pagination_class = None
    ordering = ["order", "name"]

    def get_permissions(self):
        if self.action in ("list", "retrieve"):
            return [permissions.AllowAny()]
        return [IsAdminMember()]


class ProductViewSet(BaseViewSet):
    """
    Menu for customers (active products only) and catalog management for the counter.

    Staff see every product read-only; admins may create, edit, toggle and delete.
    """

    queryset = Product.objects.all()
    serializer_class = ProductSerializer
    filterset_class = ProductFilter
    search_fields = ["name"]
    ordering_fields = ["name", "price", "created_at"]
    ordering = ["-created_at"]

    def get_permissions(self):
        if self.action in ("list", "retrieve", "resolve"):
            return [permissions.AllowAny()]
        if self.action == "toggle_active":
            return [IsAdminMember()]
        return [ReadOnlyForStaff()]

    def get_queryset(self):
        queryset = (
            Product.objects.all()
            .select_related("category", "salad_config")
            .prefetch_related("options")
        )
        user = self.request.user
        if not (user and user.is_authenticated and user.is_counter_staff):
            queryset = queryset.filter(is_active=True)
        return queryset

    def perform_create(self, serializer):
        data = dict(serializer.validated_data)
        serializer.instance = ProductService.create_product(
            AuthorizationContext.from_request(self.request),
            name=data.get("name"),
            price=data.get("price"),
            category=data.get("category"),
            description=data.get("description", ""),
            salads=data.get("salad_config"),
            options=data.get("options"),
        )

    def perform_update(self, serializer):
        data = dict(serializer.validated_data)
        if "salad_config" in data:
            data["salads"] = data.pop("salad_config") or {"enabled": False}
        serializer.instance = ProductService.update_product(
            AuthorizationContext.from_request(self.request), serializer.instance, **data
        )

    def perform_destroy(self, instance):
        ProductService.delete_product(AuthorizationContext.from_request(self.request), instance)

    @action(detail=True, methods=["post"], url_path="toggle-active")
    def toggle_active(self, request, pk=None):
        product = get_object_or_404(Product, pk=pk)
        product = ProductService.toggle_active(AuthorizationContext.from_request(request), product)
        return Response(self.get_serializer(product).data)

    @action(detail=True, methods=["post"], url_path="price")
    def update_price(self, request, pk=None):
        product = self.get_object()
        serializer = PriceUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            product = ProductService.update_price(
                AuthorizationContext.from_request(request), product, serializer.validated_data["price"]
            )
        except ValueError as e:
            return Response({"error": {"code": "invalid_price", "message": str(e)}}, status=status.HTTP_400_BAD_REQUEST)
        return Response(self.get_serializer(product).data)

    @action(detail=True, methods=["post"], url_path="resolve")
    def resolve(self, request, pk=None):
        """
        Preview the price and display name of one configured line.

        Lets the menu disable "add to cart" until every required choice is made,
        without any order being created.
        """
        product = self.get_object()
        serializer = ResolveLineSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        line = resolve_line(
            ProductSnapshot.from_product(product),
            serializer.validated_data["salads"],
            serializer.validated_data["selections"],
        )
        return Response(ResolvedLineSerializer(line).data)
