"""
Signals exposed by the contact data app.

``collect_contact_fields`` is sent once, when the field registry is first
populated. Receivers get the registry as ``registry`` and may add fields,
relabel them, or hide one by registering it with an empty label::

    @receiver(collect_contact_fields)
    def add_mastodon(sender, registry, **kwargs):
        registry.register("mastodon", _("Mastodon"))
"""

from django.dispatch import Signal

collect_contact_fields = Signal()

# Sent after a settings submission has been normalized and stored.
contact_data_saved = Signal()
