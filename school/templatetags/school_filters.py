from datetime import date, datetime

from django import template

from ..models import FORMAT_CHOICES, LEVEL_CHOICES
from ..schedule import WEEKDAY_LABELS

register = template.Library()

LEVEL_LABELS = dict(LEVEL_CHOICES)
FORMAT_LABELS = dict(FORMAT_CHOICES)


@register.filter
def day_label(value):
    return WEEKDAY_LABELS.get(value, value)


@register.filter
def level_label(value):
    return LEVEL_LABELS.get(value, value)


@register.filter
def format_label(value):
    return FORMAT_LABELS.get(value, value)


@register.filter
def bg_date(value):
    """ISO date or timestamp as "dd.mm.yyyy г."; anything unparseable is returned as is."""
    if not value:
        return ''
    if isinstance(value, (date, datetime)):
        parsed = value
    else:
        text = str(value).replace('Z', '+00:00')
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            try:
                parsed = date.fromisoformat(text[:10])
            except ValueError:
                return value
    return f'{parsed:%d.%m.%Y} г.'


@register.filter
def get_item(mapping, key):
    return mapping.get(str(key)) if mapping else None
