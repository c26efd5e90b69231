from django import template
from django.urls import Resolver404, resolve, reverse

from ..admin_views import SECTIONS

register = template.Library()

SECTION_TITLES = {key: title for key, (_, title) in SECTIONS.items()}


@register.simple_tag(takes_context=True)
def admin_breadcrumbs(context):
    request = context['request']
    breadcrumbs = [{'title': 'Админ панел', 'url': reverse('admin_dashboard')}]

    try:
        match = resolve(request.path_info)
    except Resolver404:
        return breadcrumbs

    section = match.kwargs.get('section')
    if section in SECTION_TITLES:
        breadcrumbs.append({
            'title': SECTION_TITLES[section],
            'url': reverse('admin_editor', kwargs={'section': section}),
        })
    if match.url_name == 'admin_delete':
        breadcrumbs.append({'title': 'Изтриване', 'url': ''})
    return breadcrumbs
