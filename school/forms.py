from django import forms
from tinymce.widgets import TinyMCE

from .models import DEFAULT_FORMAT, DEFAULT_LEVEL, FORMAT_CHOICES, LEVEL_CHOICES, parse_number
from .quiz import MAX_OPTIONS, MIN_OPTIONS, clean_options
from .schedule import (
    CALLIGRAPHY_TIME_OPTIONS,
    COURSE_TIME_OPTIONS,
    WEEKDAY_LABELS,
    WEEKDAYS,
    WEEKDAYS_BG,
)


def _time_choices(options, current=None):
    choices = [('', 'Избери час')] + [(t, t) for t in options]
    if current and current not in options:
        choices.append((current, current))
    return choices


class EditorForm(forms.Form):
    """Draft of one row.

    Fields are all optional at the Django level; :meth:`validate_draft` runs
    the editor's checks in order and reports only the first one that fails.
    """

    id = forms.CharField(required=False, widget=forms.HiddenInput)

    def validate_draft(self, data):
        return None

    def clean(self):
        data = super().clean()
        if self.errors:
            return data
        message = self.validate_draft(data)
        if message:
            raise forms.ValidationError(message)
        return data

    def first_error(self):
        errors = self.non_field_errors()
        if errors:
            return errors[0]
        for name, field_errors in self.errors.items():
            label = self.fields[name].label if name in self.fields else name
            return f'{label}: {field_errors[0]}'
        return None


class CourseForm(EditorForm):
    title = forms.CharField(label='Име на курса', required=False,
                            widget=forms.TextInput(attrs={'placeholder': 'Japanese N5'}))
    level = forms.ChoiceField(label='Ниво', required=False, choices=LEVEL_CHOICES, initial=DEFAULT_LEVEL)
    start_date = forms.CharField(label='Начална дата', required=False,
                                 widget=forms.DateInput(attrs={'type': 'date'}))
    format = forms.ChoiceField(label='Формат', required=False, choices=FORMAT_CHOICES, initial=DEFAULT_FORMAT)
    total_hours = forms.CharField(label='Часове', required=False, initial=0,
                                  widget=forms.NumberInput(attrs={'min': 1, 'placeholder': '30'}))
    price = forms.CharField(label='Цена (€)', required=False, initial=0,
                            widget=forms.NumberInput(attrs={'min': 0, 'placeholder': '15'}))
    teacher_id = forms.ChoiceField(label='Преподавател', required=False)
    days = forms.MultipleChoiceField(
        label='Дни', required=False,
        choices=[(day, WEEKDAY_LABELS[day]) for day in WEEKDAYS],
        widget=forms.CheckboxSelectMultiple,
    )
    time_start = forms.ChoiceField(label='Начало', required=False)
    time_end = forms.ChoiceField(label='Край', required=False)

    def __init__(self, *args, teachers=(), **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['teacher_id'].choices = [('', 'Избери преподавател')] + [
            (str(t.id), t.name) for t in teachers
        ]
        for name in ('time_start', 'time_end'):
            current = self.data.get(name) if self.is_bound else self.initial.get(name)
            self.fields[name].choices = _time_choices(COURSE_TIME_OPTIONS, current)

    def validate_draft(self, data):
        if not data.get('title', '').strip():
            return 'Моля, въведете име на курса.'
        if not data.get('level'):
            return 'Моля, изберете ниво.'
        if not data.get('start_date'):
            return 'Моля, изберете начална дата.'
        if not data.get('format'):
            return 'Моля, изберете формат.'
        if not data.get('teacher_id'):
            return 'Моля, изберете преподавател.'
        hours = parse_number(data.get('total_hours'))
        if not hours or hours <= 0:
            return 'Часовете трябва да са повече от 0.'
        price = parse_number(data.get('price'))
        if price is None:
            return 'Моля, въведете цена.'
        if price < 0:
            return 'Цената не може да е отрицателна.'
        if not data.get('days'):
            return 'Моля, изберете поне един ден.'
        if not data.get('time_start') or not data.get('time_end'):
            return 'Моля, изберете начален и краен час.'
        if data['time_end'] <= data['time_start']:
            return 'Крайният час трябва да е след началния.'
        return None


class CalligraphyCourseForm(EditorForm):
    title = forms.CharField(label='Заглавие', required=False)
    date = forms.CharField(label='Дата', required=False,
                           widget=forms.DateInput(attrs={'type': 'date'}))
    days = forms.MultipleChoiceField(
        label='Дни', required=False,
        choices=[(day, day) for day in WEEKDAYS_BG],
        widget=forms.CheckboxSelectMultiple,
    )
    start_time = forms.ChoiceField(label='Начален час', required=False)
    end_time = forms.ChoiceField(label='Краен час', required=False)
    price = forms.CharField(label='Цена (€)', required=False, initial=0,
                            widget=forms.NumberInput(attrs={'min': 0}))
    teacher_id = forms.ChoiceField(label='Преподавател', required=False)
    description_text = forms.CharField(
        label='Описание', required=False,
        help_text='Всеки ред става отделен абзац.',
        widget=forms.Textarea(attrs={'rows': 6}),
    )

    def __init__(self, *args, teachers=(), **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['teacher_id'].choices = [('', 'Избери преподавател')] + [
            (str(t.id), t.name) for t in teachers
        ]
        for name in ('start_time', 'end_time'):
            current = self.data.get(name) if self.is_bound else self.initial.get(name)
            self.fields[name].choices = _time_choices(CALLIGRAPHY_TIME_OPTIONS, current)

    def validate_draft(self, data):
        if not data.get('title', '').strip():
            return 'Моля, въведете заглавие.'
        if not data.get('date'):
            return 'Моля, изберете дата.'
        if not data.get('teacher_id'):
            return 'Моля, изберете преподавател.'
        if not data.get('days'):
            return 'Моля, изберете поне един ден.'
        if not data.get('start_time'):
            return 'Моля, изберете начален час.'
        if not data.get('end_time'):
            return 'Моля, изберете краен час.'
        price = parse_number(data.get('price'))
        if price is None or price <= 0:
            return 'Моля, въведете цена (по-голяма от 0).'
        if not data.get('description_text', '').strip():
            return 'Моля, добавете описание (поне 1 абзац).'
        return None


class TeacherForm(EditorForm):
    name = forms.CharField(label='Име', required=False)
    title = forms.CharField(label='Титла', required=False)
    image = forms.CharField(required=False, widget=forms.HiddenInput)
    photo = forms.ImageField(label='Снимка', required=False)
    description = forms.CharField(label='Описание', required=False,
                                  widget=forms.Textarea(attrs={'rows': 4}))

    def validate_draft(self, data):
        if not data.get('name', '').strip():
            return 'Името е задължително.'
        if not data.get('photo') and not data.get('image', '').strip():
            return 'Снимката е задължителна. Качете снимка.'
        return None


class NewsForm(EditorForm):
    title = forms.CharField(label='Заглавие', required=False)
    content = forms.CharField(label='Съдържание', required=False,
                              widget=TinyMCE(attrs={'cols': 80, 'rows': 20}))
    image = forms.CharField(required=False, widget=forms.HiddenInput)
    photo = forms.ImageField(label='Снимка', required=False)
    clear_image = forms.BooleanField(label='Премахни снимката', required=False)

    def validate_draft(self, data):
        if not data.get('title', '').strip():
            return 'Моля, въведете заглавие.'
        if not data.get('content', '').strip():
            return 'Моля, въведете съдържание.'
        return None


class QuizQuestionForm(EditorForm):
    question = forms.CharField(label='Въпрос', required=False,
                               widget=forms.Textarea(attrs={'rows': 3}))
    option_1 = forms.CharField(label='Опция 1', required=False)
    option_2 = forms.CharField(label='Опция 2', required=False)
    option_3 = forms.CharField(label='Опция 3', required=False)
    option_4 = forms.CharField(label='Опция 4', required=False)
    correct_index = forms.TypedChoiceField(
        label='Верен отговор', required=False, coerce=int, empty_value=0, initial=0,
        choices=[(i, f'Опция {i + 1}') for i in range(MAX_OPTIONS)],
    )
    explanation = forms.CharField(label='Обяснение', required=False,
                                  widget=forms.Textarea(attrs={'rows': 2}))
    is_active = forms.BooleanField(label='Активен', required=False, initial=True)
    order_index = forms.IntegerField(label='Order index', required=False, initial=0)

    def options(self, data=None):
        data = self.cleaned_data if data is None else data
        return clean_options([data.get(f'option_{i}') or '' for i in range(1, MAX_OPTIONS + 1)])

    def validate_draft(self, data):
        if len(data.get('question', '').strip()) < 3 or len(self.options(data)) < MIN_OPTIONS:
            return 'Моля, добави въпрос и поне 2 опции.'
        return None


class PricingPlanForm(EditorForm):
    name = forms.CharField(label='Име', required=False)
    price = forms.CharField(label='Цена', required=False)
    description = forms.CharField(label='Описание', required=False,
                                  widget=forms.Textarea(attrs={'rows': 3}))


class LoginForm(forms.Form):
    email = forms.EmailField(label='Имейл')
    password = forms.CharField(label='Парола', widget=forms.PasswordInput)
