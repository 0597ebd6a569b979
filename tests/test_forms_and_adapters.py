"""
Tests for payload forms, the error taxonomy and the allauth adapter.
"""
import pytest
from django.test import RequestFactory, override_settings

from shopping.adapters import AccountAdapter
from shopping.exceptions import (
    Conflict,
    CsrfFailed,
    Forbidden,
    InvalidInput,
    NotFound,
    ShoppingListError,
    Unauthenticated,
)
from shopping.forms import ItemCheckForm, ItemCreateForm, ItemUpdateForm, ListForm
from shopping.utils import sanitize_text


class TestForms:
    """Payload validation."""

    def test_list_form_sanitizes_name(self):
        form = ListForm({'name': ' <script>x</script>Groceries '})
        assert form.is_valid()
        assert form.cleaned_data['name'] == 'xGroceries'

    def test_list_form_rejects_markup_only_name(self):
        form = ListForm({'name': '<i></i>'})
        assert not form.is_valid()
        assert 'name' in form.errors

    def test_item_update_only_reports_sent_fields(self):
        form = ItemUpdateForm({'unit': ' g '})
        assert form.is_valid()
        assert form.changed_fields() == {'unit': 'g'}

    def test_item_update_empty_payload(self):
        form = ItemUpdateForm({})
        assert form.is_valid()
        assert form.changed_fields() == {}

    def test_item_update_rejects_non_finite_quantity(self):
        form = ItemUpdateForm({'quantity': float('inf')})
        assert not form.is_valid()

    @pytest.mark.parametrize('value,valid', [(True, True), (False, True), ('true', False), (0, False)])
    def test_check_form_is_strict(self, value, valid):
        assert ItemCheckForm({'checked': value}).is_valid() is valid

    def test_ampersand_kept_as_sent(self):
        form = ItemCreateForm({'name': 'Salt & Pepper', 'unit': 'g & ml'})
        assert form.is_valid()
        assert form.cleaned_data['name'] == 'Salt & Pepper'
        assert form.cleaned_data['unit'] == 'g & ml'

    def test_max_length_name_with_ampersand(self):
        name = 'a' * 196 + ' & b'
        form = ItemCreateForm({'name': name})
        assert form.is_valid()
        assert form.cleaned_data['name'] == name

    def test_max_length_list_name_with_ampersand(self):
        name = 'a' * 116 + ' & b'
        form = ListForm({'name': name})
        assert form.is_valid()
        assert form.cleaned_data['name'] == name


class TestSanitizeText:
    """Markup is stripped, plain text is left alone."""

    @pytest.mark.parametrize('text,expected', [
        ('Salt & Pepper', 'Salt & Pepper'),
        ('<b>Bold</b> & brave', 'Bold & brave'),
        ('1 < 2', '1 < 2'),
        ('  Fish "fresh"  ', 'Fish "fresh"'),
        ('', ''),
    ])
    def test_sanitize_text(self, text, expected):
        assert sanitize_text(text) == expected


class TestErrorTaxonomy:
    """Each error kind maps to one HTTP status."""

    @pytest.mark.parametrize('error_class,status,code', [
        (Unauthenticated, 401, 'UNAUTHENTICATED'),
        (NotFound, 404, 'NOT_FOUND'),
        (Forbidden, 403, 'FORBIDDEN'),
        (CsrfFailed, 403, 'CSRF_FAILED'),
        (InvalidInput, 400, 'INVALID_INPUT'),
        (Conflict, 409, 'CONFLICT'),
    ])
    def test_status_and_code(self, error_class, status, code):
        error = error_class()
        assert isinstance(error, ShoppingListError)
        assert error.status_code == status
        assert error.code == code
        assert error.message == error_class.default_message

    def test_custom_message(self):
        assert str(NotFound('List not found')) == 'List not found'

    def test_invalid_input_carries_field_errors(self):
        error = InvalidInput(errors={'name': ['This field is required.']})
        assert error.errors == {'name': ['This field is required.']}
        assert InvalidInput().errors == {}


class TestAccountAdapter:
    """Signup switch and email normalization for allauth."""

    def test_signup_open_by_default(self):
        request = RequestFactory().get('/accounts/signup/')
        assert AccountAdapter(request).is_open_for_signup(request) is True

    @override_settings(ALLOW_REGISTRATION=False)
    def test_signup_can_be_closed(self):
        request = RequestFactory().get('/accounts/signup/')
        assert AccountAdapter(request).is_open_for_signup(request) is False

    def test_clean_email_normalizes(self, db):
        adapter = AccountAdapter(RequestFactory().get('/accounts/signup/'))
        assert adapter.clean_email('  New.User@Example.COM ') == 'new.user@example.com'
