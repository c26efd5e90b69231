"""Admin editor pages.

Every section works the same way: the list page shows the rows next to the
draft form, ``?edit=<id>`` fills the form from a saved row, a POST validates
and writes, and a successful write redirects back to the list so the rows
are loaded fresh.  Deletes go through a confirmation page.
"""

from django.contrib import messages
from django.http import Http404
from django.shortcuts import redirect, render

from .decorators import admin_required
from .editors import (
    CalligraphyEditor,
    CourseEditor,
    NewsEditor,
    PricingEditor,
    QuizEditor,
    TeacherEditor,
)

SECTIONS = {
    'courses': (CourseEditor, 'Курсове'),
    'calligraphy': (CalligraphyEditor, 'Калиграфия'),
    'teachers': (TeacherEditor, 'Преподаватели'),
    'news': (NewsEditor, 'Новини'),
    'test': (QuizEditor, 'Тест'),
    'pricing': (PricingEditor, 'Цени'),
}


def get_editor(request, section):
    try:
        editor_class, title = SECTIONS[section]
    except KeyError:
        raise Http404(f'Unknown admin section {section}')
    return editor_class(request.supabase), title


@admin_required
def dashboard(request):
    return render(request, 'school/admin/dashboard.html', {
        'sections': [(key, title) for key, (_, title) in SECTIONS.items()],
    })


@admin_required
def editor_view(request, section):
    editor, title = get_editor(request, section)
    editor.load()
    if editor.error:
        messages.error(request, editor.error)

    if request.method == 'POST':
        form = editor.form(request.POST, request.FILES)
        message = editor.save(form)
        if message is None:
            messages.success(request, 'Записано.')
            return redirect('admin_editor', section=section)
        messages.error(request, message)
    else:
        initial = None
        edit_id = request.GET.get('edit')
        if edit_id:
            row = editor.get(edit_id)
            if row is None:
                messages.error(request, 'Записът не е намерен.')
            else:
                initial = editor.fill_edit(row)
        form = editor.form(initial=initial)

    return render(request, 'school/admin/editor.html', {
        'section': section,
        'title': title,
        'editor': editor,
        'rows': editor.rows,
        'form': form,
        'editing': bool(form['id'].value()),
        'rows_template': f'school/admin/rows/{section}.html',
    })


@admin_required
def delete_view(request, section, row_id):
    editor, title = get_editor(request, section)
    if request.method == 'POST':
        message = editor.remove(row_id)
        if message:
            messages.error(request, message)
        else:
            messages.success(request, 'Изтрито.')
        return redirect('admin_editor', section=section)

    editor.load()
    return render(request, 'school/admin/confirm_delete.html', {
        'section': section,
        'title': title,
        'row': editor.get(row_id),
        'row_id': row_id,
    })
