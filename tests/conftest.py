"""
Pytest configuration and fixtures for shopping list tests.
"""
import pytest
from django.test import Client
from django.utils import timezone

from shopping.models import ListShare, ShareStatus, ShoppingItem, ShoppingList, User


def make_client(user=None):
    client = Client()
    if user is not None:
        client.force_login(user)
    return client


@pytest.fixture
def owner(db):
    """User who owns the test list."""
    return User.objects.create_user(
        username='owner',
        email='owner@example.com',
        password='ownerpass123',
        name='Olive Owner',
    )


@pytest.fixture
def participant(db):
    """User holding an ACTIVE share on the test list (see ``active_share``)."""
    return User.objects.create_user(
        username='participant',
        email='participant@example.com',
        password='participantpass123',
    )


@pytest.fixture
def outsider(db):
    """User with no relation to the test list."""
    return User.objects.create_user(
        username='outsider',
        email='outsider@example.com',
        password='outsiderpass123',
    )


@pytest.fixture
def admin_user(db):
    return User.objects.create_superuser(
        username='admin',
        email='admin@example.com',
        password='adminpass123',
    )


@pytest.fixture
def shopping_list(owner):
    return ShoppingList.objects.create(owner=owner, name='Groceries')


@pytest.fixture
def items(shopping_list):
    return [
        ShoppingItem.objects.create(shopping_list=shopping_list, name='Milk', quantity=2, unit='l'),
        ShoppingItem.objects.create(shopping_list=shopping_list, name='Bread'),
        ShoppingItem.objects.create(shopping_list=shopping_list, name='Eggs', quantity=12),
    ]


@pytest.fixture
def item(items):
    return items[0]


@pytest.fixture
def active_share(shopping_list, owner, participant):
    return ListShare.objects.create(
        shopping_list=shopping_list,
        inviter=owner,
        invitee_email=participant.email,
        invitee_user=participant,
        status=ShareStatus.ACTIVE,
        accepted_at=timezone.now(),
    )


@pytest.fixture
def pending_share(shopping_list, owner):
    """Share addressed to an email nobody has registered yet."""
    return ListShare.objects.create(
        shopping_list=shopping_list,
        inviter=owner,
        invitee_email='newcomer@example.com',
    )


@pytest.fixture
def owner_client(owner):
    return make_client(owner)


@pytest.fixture
def participant_client(participant, active_share):
    return make_client(participant)


@pytest.fixture
def outsider_client(outsider):
    return make_client(outsider)


@pytest.fixture
def anonymous_client(db):
    return make_client()


@pytest.fixture
def admin_client(admin_user):
    return make_client(admin_user)
