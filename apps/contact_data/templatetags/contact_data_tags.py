from __future__ import annotations

from django import template
from django.utils.safestring import mark_safe

from apps.contact_data.apps import get_service

register = template.Library()


@register.simple_tag
def public_contact(field: str, **options):
    """
    Render a contact field inside a template::

        {% load contact_data_tags %}
        {% public_contact "phone" link=False before="Tel: " %}

    The template engine inserts the output, so ``print`` is always off.
    """
    options["print"] = False
    return get_service().lookup(field, options)


@register.filter
def expand_placeholders(content):
    """
    Expand ``[public_<field>]`` placeholders in trusted authored HTML::

        {{ page.body|expand_placeholders }}

    Like ``|safe``, the result is not escaped again.
    """
    if content is None:
        return ""
    return mark_safe(get_service().expand_placeholders(str(content)))
