from django import forms

from .exceptions import PriceParseError
from .models import parse_price

MAX_QUANTITY = 1_000_000


class MenuItemForm(forms.Form):
    """
    Form used for adding or editing a menu item.
    """
    name = forms.CharField(max_length=255)
    name_ko = forms.CharField(max_length=255, required=False, label="Name (Korean)")
    description = forms.CharField(widget=forms.Textarea(attrs={"rows": 3}), required=False)
    description_ko = forms.CharField(
        widget=forms.Textarea(attrs={"rows": 3}), required=False, label="Description (Korean)"
    )

    # Free text, parsed in clean_price
    price = forms.CharField(max_length=32)
    category = forms.CharField(max_length=100)
    is_available = forms.BooleanField(required=False, initial=True, label="Available")

    # Optional stock cap, empty means unlimited
    quantity = forms.IntegerField(
        required=False, min_value=0, max_value=MAX_QUANTITY, label="Quantity limit"
    )

    # Optional image upload (stored on S3)
    image = forms.ImageField(required=False)

    # Version token of the row the form was opened from
    version = forms.IntegerField(required=False, widget=forms.HiddenInput)

    def clean_price(self):
        raw = self.cleaned_data["price"]
        try:
            return parse_price(raw)
        except PriceParseError:
            raise forms.ValidationError(f"Invalid price: '{raw}'. Use a number like 12.50")
