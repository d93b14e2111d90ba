from django import forms
from django.core.exceptions import NON_FIELD_ERRORS, ValidationError
from django.utils import timezone

from .models import SIZES, TYPES


class PublishForm(forms.Form):
    title = forms.CharField(max_length=120)
    description = forms.CharField(max_length=1000)
    type = forms.ChoiceField(choices=[(t, t) for t in TYPES])
    size = forms.ChoiceField(choices=[(s, s) for s in SIZES])
    price = forms.FloatField()
    finishing_date = forms.DateField(input_formats=["%Y-%m-%d"])
    image = forms.CharField(max_length=500, required=False)

    def clean_price(self):
        price = self.cleaned_data["price"]
        if price <= 0:
            raise ValidationError("Price must be a positive number.")
        return price

    def clean_finishing_date(self):
        finishing_date = self.cleaned_data["finishing_date"]
        if finishing_date < timezone.localdate():
            raise ValidationError("Finishing date cannot be in the past.")
        return finishing_date


class BidForm(forms.Form):
    name = forms.CharField(max_length=80)
    email = forms.EmailField(max_length=100)
    bid = forms.FloatField()

    def __init__(self, *args, current_price=0, **kwargs):
        super().__init__(*args, **kwargs)
        self.current_price = current_price

    def clean_bid(self):
        bid = self.cleaned_data["bid"]
        if bid <= 0:
            raise ValidationError("Bid must be a positive number.")
        if bid <= self.current_price:
            raise ValidationError(
                f"Bid must be higher than the current price ({self.current_price:.2f})."
            )
        return bid


def form_error_messages(form):
    """
    Flatten a bound form's errors into "<Label>: <message>" strings.
    """
    messages = []
    for name, errors in form.errors.items():
        for error in errors:
            if name == NON_FIELD_ERRORS:
                messages.append(error)
            else:
                messages.append(f"{form[name].label}: {error}")
    return messages


def clean_publish_submission(candidate):
    """
    Validate a publish submission. Returns (cleaned_data, messages); the
    cleaned data is None when there are messages.
    """
    form = PublishForm(data=candidate or {})
    if form.is_valid():
        return form.cleaned_data, []
    return None, form_error_messages(form)


def clean_bid_submission(candidate, current_price):
    form = BidForm(data=candidate or {}, current_price=current_price)
    if form.is_valid():
        return form.cleaned_data, []
    return None, form_error_messages(form)


def validate_publish(candidate):
    return clean_publish_submission(candidate)[1]


def validate_bid(candidate, current_price):
    return clean_bid_submission(candidate, current_price)[1]
