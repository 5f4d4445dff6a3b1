"""
Shared test fixtures for all backend tests.

This module provides reusable pytest fixtures for common test objects
like users, products, opening hours and placed orders.
"""
import pytest
from datetime import datetime, time
from decimal import Decimal

import pytz
from django.conf import settings

from business_hours.models import BusinessHoursProfile
from products.models import Category, Product, ProductOption, SaladConfig
from users.authorization import AuthorizationContext
from users.models import User


# ============================================================================
# USER FIXTURES
# ============================================================================

@pytest.fixture
def staff_user(db):
    """Counter staff: can work the order board, cannot edit the catalog"""
    return User.objects.create_user(
        email='staff@counter.test',
        password='password123',
        first_name='Sam',
        role=User.Role.STAFF,
    )


@pytest.fixture
def admin_member(db):
    """Admin: full catalog and report access"""
    return User.objects.create_user(
        email='admin@counter.test',
        password='password123',
        first_name='Alex',
        role=User.Role.ADMIN,
    )


@pytest.fixture
def staff_auth(staff_user):
    return AuthorizationContext.for_user(staff_user)


@pytest.fixture
def admin_auth(admin_member):
    return AuthorizationContext.for_user(admin_member)


@pytest.fixture
def anonymous_auth():
    return AuthorizationContext.anonymous()


# ============================================================================
# PRODUCT FIXTURES
# ============================================================================

@pytest.fixture
def category(db):
    return Category.objects.create(name='Mains', order=1)


@pytest.fixture
def drinks_category(db):
    return Category.objects.create(name='Drinks', order=2)


@pytest.fixture
def product(drinks_category):
    """Plain, non-configurable product"""
    return Product.objects.create(
        name='Lemonade',
        price=Decimal('8.50'),
        category=drinks_category,
    )


@pytest.fixture
def salad_product(category):
    """Two salads included in the price, each extra one costs 0.70"""
    product = Product.objects.create(
        name='Schnitzel',
        price=Decimal('25.00'),
        category=category,
    )
    SaladConfig.objects.create(
        product=product,
        enabled=True,
        included=2,
        extra_price=Decimal('0.70'),
        items=['Cabbage', 'Cucumber', 'Beetroot', 'Carrot', 'Tomato'],
    )
    return product


@pytest.fixture
def option_product(category):
    """One required single choice and one optional multi choice"""
    product = Product.objects.create(
        name='Sandwich',
        price=Decimal('12.00'),
        category=category,
    )
    ProductOption.objects.create(
        product=product,
        key='bread',
        label='Bread',
        selection_type=ProductOption.SelectionType.SINGLE,
        is_required=True,
        items=['White', 'Wholegrain'],
        display_order=0,
    )
    ProductOption.objects.create(
        product=product,
        key='sauces',
        label='Sauces',
        selection_type=ProductOption.SelectionType.MULTI,
        is_required=False,
        items=['Garlic', 'Chili', 'Ketchup'],
        display_order=1,
    )
    return product


@pytest.fixture
def inactive_product(drinks_category):
    return Product.objects.create(
        name='Seasonal Punch',
        price=Decimal('9.00'),
        category=drinks_category,
        is_active=False,
    )


# ============================================================================
# OPENING HOURS FIXTURES
# ============================================================================

@pytest.fixture
def business_hours_profile(db):
    """Default profile open 07:00 - 17:00 every day"""
    return BusinessHoursProfile.objects.create(
        name='Counter',
        timezone=settings.TIME_ZONE,
        opening_time=time(7, 0),
        closing_time=time(17, 0),
        is_active=True,
        is_default=True,
    )


# ============================================================================
# CLOCK AND ORDER FIXTURES
# ============================================================================

def local_datetime(year, month, day, hour, minute):
    """Aware datetime in the configured local timezone."""
    return pytz.timezone(settings.TIME_ZONE).localize(datetime(year, month, day, hour, minute))


@pytest.fixture
def fixed_now():
    """Monday 2 June 2025, 10:07 local time. First slot is 10:30 - 10:45."""
    return local_datetime(2025, 6, 2, 10, 7)


@pytest.fixture
def first_slot():
    return {'label': '10:30 - 10:45', 'start_minute': 630}


@pytest.fixture
def placed_order(product, first_slot, fixed_now):
    """A New order for one Lemonade in the 10:30 slot"""
    from orders.models import Order
    from orders.services import OrderAdmissionService

    result = OrderAdmissionService.place_order(
        cart=[{'product_id': product.id}],
        pickup_slot=first_slot,
        now=fixed_now,
    )
    return Order.objects.get(pk=result.order_id)
