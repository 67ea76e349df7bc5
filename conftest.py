import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from apps.accounts.models import User
from apps.catalog.models import ApprovalStatus, CatalogItem


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def client_for():
    """Return a factory building an API client authenticated as a user."""
    def _client_for(user):
        client = APIClient()
        refresh = RefreshToken.for_user(user)
        client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
        return client
    return _client_for


@pytest.fixture
def seller(db):
    """Create and return a user who uploads cheat sheets."""
    return User.objects.create_user(
        email='seller@student.example.ac.th',
        password='TestPass123!',
        display_name='Sheet Seller',
        email_verified=True,
        is_seller=True,
    )


@pytest.fixture
def buyer(db):
    """Create and return a verified buyer."""
    return User.objects.create_user(
        email='buyer@student.example.ac.th',
        password='TestPass123!',
        display_name='Sheet Buyer',
        email_verified=True,
    )


@pytest.fixture
def other_buyer(db):
    """Create and return another verified buyer."""
    return User.objects.create_user(
        email='other@student.example.ac.th',
        password='TestPass123!',
        display_name='Other Buyer',
        email_verified=True,
    )


@pytest.fixture
def unverified_user(db):
    """Create and return a user whose email domain isn't verified."""
    return User.objects.create_user(
        email='outsider@gmail.example.com',
        password='TestPass123!',
        display_name='Outsider',
        email_verified=False,
    )


@pytest.fixture
def reviewer(db):
    """Create and return a staff payment reviewer."""
    return User.objects.create_user(
        email='reviewer@example.com',
        password='TestPass123!',
        display_name='Payment Reviewer',
        email_verified=True,
        is_staff=True,
    )


@pytest.fixture
def buyer_client(client_for, buyer):
    """Return API client authenticated as buyer."""
    return client_for(buyer)


@pytest.fixture
def reviewer_client(client_for, reviewer):
    """Return API client authenticated as reviewer."""
    return client_for(reviewer)


@pytest.fixture
def make_item(db, seller):
    """Return a factory creating approved, active catalog items."""
    def _make_item(title='Sheet', price_minor=10000, course_code='CSS101', **kwargs):
        kwargs.setdefault('approval_status', ApprovalStatus.APPROVED)
        kwargs.setdefault('created_by', seller)
        return CatalogItem.objects.create(
            title=title,
            price_minor=price_minor,
            course_code=course_code,
            **kwargs,
        )
    return _make_item


@pytest.fixture
def item_a(make_item):
    """100.00 THB cheat sheet."""
    return make_item(title='Calculus Midterm', price_minor=10000, course_code='MAS116')


@pytest.fixture
def item_b(make_item):
    """50.00 THB cheat sheet."""
    return make_item(title='Physics Final', price_minor=5000, course_code='SCS138')


@pytest.fixture
def free_item(make_item):
    """Free cheat sheet."""
    return make_item(title='Study Tips', price_minor=0, course_code='GTS101')
