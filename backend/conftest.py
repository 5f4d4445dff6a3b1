"""
Root conftest.py for all backend tests.

This file makes fixtures available to all test files across all apps.
"""
import pytest
from django.core.cache import cache


# ============================================================================
# AUTO-USE FIXTURES (Run automatically for every test)
# ============================================================================

@pytest.fixture(autouse=True)
def clear_cache_after_test():
    """
    Clear cache after each test to prevent cache pollution.

    The default business hours profile and sales reports are cached, so a
    leftover entry would leak one test's data into the next.
    """
    cache.clear()
    yield  # Run the test
    cache.clear()


# ============================================================================
# API CLIENT FIXTURES
# ============================================================================

@pytest.fixture
def api_client():
    """
    Provide DRF API client for API tests.

    Usage:
        def test_my_api(api_client):
            response = api_client.get('/api/products/')
            assert response.status_code == 200
    """
    from rest_framework.test import APIClient
    return APIClient()


@pytest.fixture
def staff_api_client(staff_user):
    """API client authenticated as counter staff."""
    from rest_framework.test import APIClient
    client = APIClient()
    client.force_authenticate(user=staff_user)
    return client


@pytest.fixture
def admin_api_client(admin_member):
    """API client authenticated as an admin."""
    from rest_framework.test import APIClient
    client = APIClient()
    client.force_authenticate(user=admin_member)
    return client


@pytest.fixture
def jwt_client(staff_user):
    """
    API client carrying a real JWT access token in the Authorization header.

    Usage:
        def test_token_auth(jwt_client):
            response = jwt_client.get('/api/orders/')
            assert response.status_code == 200
    """
    from rest_framework.test import APIClient
    from rest_framework_simplejwt.tokens import RefreshToken

    client = APIClient()
    refresh = RefreshToken.for_user(staff_user)
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {refresh.access_token}")
    return client


# ============================================================================
# IMPORT ALL FIXTURES FROM core_backend/tests/fixtures.py
# ============================================================================
from core_backend.tests.fixtures import *  # noqa: E402,F401,F403
