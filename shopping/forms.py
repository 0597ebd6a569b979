from django import forms

from .constants import ITEM_NAME_MAX_LENGTH, ITEM_UNIT_MAX_LENGTH, LIST_NAME_MAX_LENGTH
from .utils import sanitize_text


class StrictBooleanField(forms.Field):
    """Accepts JSON true/false only; no "on"/"1"/"yes" coercion."""

    default_error_messages = {
        "invalid": "Must be true or false.",
    }

    def to_python(self, value):
        if value is None:
            return None
        if not isinstance(value, bool):
            raise forms.ValidationError(self.error_messages["invalid"], code="invalid")
        return value


def _clean_text(value, max_length: int) -> str:
    text = sanitize_text(value or "")
    if len(text) > max_length:
        raise forms.ValidationError(
            f"Ensure this value has at most {max_length} characters (it has {len(text)}).",
            code="max_length",
        )
    return text


def _clean_name(value, max_length: int) -> str:
    name = _clean_text(value, max_length)
    if not name:
        raise forms.ValidationError("This field is required.", code="required")
    return name


class ListForm(forms.Form):
    """Create or rename a list."""
    name = forms.CharField(max_length=LIST_NAME_MAX_LENGTH)

    def clean_name(self):
        return _clean_name(self.cleaned_data["name"], LIST_NAME_MAX_LENGTH)


class ItemCreateForm(forms.Form):
    name = forms.CharField(max_length=ITEM_NAME_MAX_LENGTH)
    quantity = forms.FloatField(required=False)
    unit = forms.CharField(max_length=ITEM_UNIT_MAX_LENGTH, required=False)

    def clean_name(self):
        return _clean_name(self.cleaned_data["name"], ITEM_NAME_MAX_LENGTH)

    def clean_unit(self):
        return _clean_text(self.cleaned_data.get("unit"), ITEM_UNIT_MAX_LENGTH) or None


class ItemUpdateForm(forms.Form):
    """
    Partial update. Only keys present in the payload are applied
    (see ``changed_fields``); an explicit null clears quantity/unit.
    """
    name = forms.CharField(max_length=ITEM_NAME_MAX_LENGTH, required=False)
    quantity = forms.FloatField(required=False)
    unit = forms.CharField(max_length=ITEM_UNIT_MAX_LENGTH, required=False)

    def clean_name(self):
        if "name" not in self.data:
            return None
        return _clean_name(self.cleaned_data.get("name"), ITEM_NAME_MAX_LENGTH)

    def clean_unit(self):
        return _clean_text(self.cleaned_data.get("unit"), ITEM_UNIT_MAX_LENGTH) or None

    def changed_fields(self) -> dict:
        return {
            field: self.cleaned_data[field]
            for field in self.fields
            if field in self.data
        }


class ItemCheckForm(forms.Form):
    checked = StrictBooleanField()
