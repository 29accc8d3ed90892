from __future__ import annotations

from django import forms
from django.utils.html import format_html
from django.utils.translation import gettext as _


class ContactDataForm(forms.Form):
    """
    One text input per registered contact field.

    Fields are built from the service's registry; validation is left to the
    normalizer so bad values are corrected with a warning, never rejected.
    """

    id_prefix = "public_contact_data"

    def __init__(self, *args, service, **kwargs):
        self.service = service
        kwargs.setdefault("initial", service.initial_values())
        super().__init__(*args, **kwargs)

        for contact_field in service.fields():
            self.fields[contact_field.key] = forms.CharField(
                label=contact_field.label,
                required=False,
                strip=False,
                help_text=format_html(
                    _("You may use {} in editor fields to get this value."),
                    format_html("<code>{}</code>", service.placeholder_help(contact_field.key)),
                ),
                widget=forms.TextInput(
                    attrs={
                        "id": f"{self.id_prefix}_{contact_field.key}",
                        "class": "regular-text code",
                    }
                ),
            )

    def save(self, *, user=None):
        return self.service.save(self.cleaned_data, user=user)
