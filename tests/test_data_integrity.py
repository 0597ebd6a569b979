"""
Tests for data integrity and validation constraints.
"""
import pytest
from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction

from shopping.models import ListShare, ShareStatus, ShoppingItem, ShoppingList, User


class TestShareConstraints:
    """Database-level guarantees on list shares."""

    def test_one_share_per_list_and_email(self, shopping_list, owner, pending_share):
        """A second row for the same (list, email) is rejected by the database."""
        with pytest.raises(IntegrityError):
            with transaction.atomic():
                ListShare.objects.create(
                    shopping_list=shopping_list,
                    inviter=owner,
                    invitee_email=pending_share.invitee_email,
                )

    def test_active_requires_invitee(self, shopping_list, owner):
        """ACTIVE without an invitee account violates the status check."""
        with pytest.raises(IntegrityError):
            with transaction.atomic():
                ListShare.objects.create(
                    shopping_list=shopping_list,
                    inviter=owner,
                    invitee_email='b@x.com',
                    status=ShareStatus.ACTIVE,
                )

    def test_pending_forbids_invitee(self, shopping_list, owner, participant):
        """PENDING with an invitee account violates the status check."""
        with pytest.raises(IntegrityError):
            with transaction.atomic():
                ListShare.objects.create(
                    shopping_list=shopping_list,
                    inviter=owner,
                    invitee_email=participant.email,
                    invitee_user=participant,
                    status=ShareStatus.PENDING,
                )

    def test_owner_cannot_be_invitee(self, shopping_list, owner):
        share = ListShare(shopping_list=shopping_list, inviter=owner, invitee_email='OWNER@example.com')
        with pytest.raises(ValidationError) as exc_info:
            share.full_clean()
        assert 'invitee_email' in exc_info.value.message_dict

    def test_only_owner_can_invite(self, shopping_list, outsider):
        share = ListShare(shopping_list=shopping_list, inviter=outsider, invitee_email='b@x.com')
        with pytest.raises(ValidationError) as exc_info:
            share.full_clean()
        assert 'inviter' in exc_info.value.message_dict

    def test_clean_normalizes_email(self, shopping_list, owner):
        share = ListShare(shopping_list=shopping_list, inviter=owner, invitee_email=' B@X.com ')
        share.full_clean()
        assert share.invitee_email == 'b@x.com'


class TestShareActivation:
    """Single-share PENDING -> ACTIVE transition."""

    def test_activate_pending(self, pending_share):
        user = User.objects.create_user(username='newcomer', email='newcomer@example.com', password='pass12345')

        assert pending_share.activate(user) is True

        pending_share.refresh_from_db()
        assert pending_share.is_active
        assert pending_share.invitee_user == user
        assert pending_share.accepted_at is not None

    def test_activate_already_active_is_noop(self, active_share, participant):
        accepted_at = active_share.accepted_at
        assert active_share.activate(participant) is False
        active_share.refresh_from_db()
        assert active_share.accepted_at == accepted_at

    def test_activate_wrong_email(self, pending_share, outsider):
        with pytest.raises(ValueError):
            pending_share.activate(outsider)
        pending_share.refresh_from_db()
        assert pending_share.is_pending


class TestCascades:
    """Deleting a parent never leaves orphaned rows."""

    def test_delete_list_removes_items_and_shares(self, shopping_list, items, active_share, pending_share):
        list_id = shopping_list.pk
        shopping_list.delete()

        assert not ShoppingItem.objects.filter(shopping_list_id=list_id).exists()
        assert not ListShare.objects.filter(shopping_list_id=list_id).exists()

    def test_delete_owner_removes_lists(self, owner, shopping_list, items):
        owner.delete()
        assert not ShoppingList.objects.exists()
        assert not ShoppingItem.objects.exists()

    def test_delete_invitee_removes_share(self, participant, active_share):
        participant.delete()
        assert not ListShare.objects.filter(pk=active_share.pk).exists()


class TestUserEmail:
    """Emails are the identity that shares are matched against."""

    def test_email_normalized_on_save(self, db):
        user = User.objects.create_user(username='mixed', email='  Mixed.Case@Example.COM ', password='pass12345')
        user.refresh_from_db()
        assert user.email == 'mixed.case@example.com'

    def test_email_unique_ignoring_case(self, owner):
        with pytest.raises(IntegrityError):
            with transaction.atomic():
                User.objects.create_user(username='copycat', email='OWNER@example.com', password='pass12345')

    def test_display_name_falls_back_to_username(self, owner, participant):
        assert owner.display_name == 'Olive Owner'
        assert participant.display_name == 'participant'


class TestFieldValidation:
    """Model-level validation on lists and items."""

    def test_list_name_too_long(self, owner):
        with pytest.raises(ValidationError) as exc_info:
            ShoppingList.objects.create(owner=owner, name='x' * 121)
        assert 'name' in exc_info.value.message_dict

    def test_list_name_required(self, owner):
        with pytest.raises(ValidationError):
            ShoppingList.objects.create(owner=owner, name='')

    @pytest.mark.parametrize('quantity', [float('nan'), float('inf'), float('-inf')])
    def test_item_quantity_must_be_finite(self, shopping_list, quantity):
        with pytest.raises(ValidationError) as exc_info:
            ShoppingItem.objects.create(shopping_list=shopping_list, name='Flour', quantity=quantity)
        assert 'quantity' in exc_info.value.message_dict

    def test_item_defaults(self, shopping_list):
        item = ShoppingItem.objects.create(shopping_list=shopping_list, name='Flour')
        assert item.checked is False
        assert item.quantity is None
        assert item.unit is None
