import pytest

from school.forms import CalligraphyCourseForm, CourseForm, QuizQuestionForm, TeacherForm
from school.models import Teacher, parse_number

TEACHERS = [Teacher(id='t1', name='Yuki Tanaka')]


def course_data(**overrides):
    data = {
        'title': 'Японски N5', 'level': 'N5', 'start_date': '2026-03-01', 'format': 'On-site',
        'total_hours': '60', 'price': '980', 'teacher_id': 't1',
        'days': ['Monday', 'Wednesday'], 'time_start': '18:00', 'time_end': '20:00',
    }
    data.update(overrides)
    return data


def test_valid_course_form():
    form = CourseForm(course_data(), teachers=TEACHERS)
    assert form.is_valid(), form.errors
    assert form.first_error() is None


def test_course_checks_run_in_order_and_report_only_the_first():
    form = CourseForm(course_data(title=' ', teacher_id='', days=[]), teachers=TEACHERS)
    assert not form.is_valid()
    assert form.first_error() == 'Моля, въведете име на курса.'
    assert len(form.non_field_errors()) == 1


def test_course_hours_must_be_positive():
    form = CourseForm(course_data(total_hours='0'), teachers=TEACHERS)
    form.is_valid()
    assert form.first_error() == 'Часовете трябва да са повече от 0.'


def test_course_price_checks():
    form = CourseForm(course_data(price=''), teachers=TEACHERS)
    form.is_valid()
    assert form.first_error() == 'Моля, въведете цена.'

    form = CourseForm(course_data(price='-5'), teachers=TEACHERS)
    form.is_valid()
    assert form.first_error() == 'Цената не може да е отрицателна.'

    form = CourseForm(course_data(price='0'), teachers=TEACHERS)
    assert form.is_valid()


def test_course_end_must_follow_start():
    form = CourseForm(course_data(time_start='20:00', time_end='18:00'), teachers=TEACHERS)
    form.is_valid()
    assert form.first_error() == 'Крайният час трябва да е след началния.'

    form = CourseForm(course_data(time_end=''), teachers=TEACHERS)
    form.is_valid()
    assert form.first_error() == 'Моля, изберете начален и краен час.'


def test_course_form_keeps_a_saved_time_outside_the_option_list():
    form = CourseForm(initial={'time_start': '18:15'}, teachers=TEACHERS)
    assert ('18:15', '18:15') in form.fields['time_start'].choices


def test_calligraphy_price_must_be_positive():
    data = {
        'title': 'Shodō', 'date': '2026-02-10', 'teacher_id': 't1', 'days': ['Събота'],
        'start_time': '10:00', 'end_time': '12:00', 'price': '0', 'description_text': 'Четка',
    }
    form = CalligraphyCourseForm(data, teachers=TEACHERS)
    form.is_valid()
    assert form.first_error() == 'Моля, въведете цена (по-голяма от 0).'

    data.update(price='45', description_text='  ')
    form = CalligraphyCourseForm(data, teachers=TEACHERS)
    form.is_valid()
    assert form.first_error() == 'Моля, добавете описание (поне 1 абзац).'


def test_teacher_requires_name_then_image():
    form = TeacherForm({'name': ''})
    form.is_valid()
    assert form.first_error() == 'Името е задължително.'

    form = TeacherForm({'name': 'Yuki'})
    form.is_valid()
    assert form.first_error() == 'Снимката е задължителна. Качете снимка.'

    form = TeacherForm({'name': 'Yuki', 'image': 'yuki.png'})
    assert form.is_valid()


def test_quiz_form_requires_question_and_two_options():
    form = QuizQuestionForm({'question': 'Как е „котка“?', 'option_1': 'neko', 'option_2': ' '})
    form.is_valid()
    assert form.first_error() == 'Моля, добави въпрос и поне 2 опции.'

    form = QuizQuestionForm({'question': 'Как е „котка“?', 'option_1': 'neko', 'option_3': 'inu',
                             'correct_index': '1'})
    assert form.is_valid()
    assert form.options() == ['neko', 'inu']


@pytest.mark.parametrize('value, expected', [
    ('30', 30),
    (30.0, 30),
    ('2,5', 2.5),
    (' 99.90 ', 99.9),
    ('', None),
    (None, None),
    ('inf', None),
    ('nan', None),
    ('abc', None),
])
def test_parse_number(value, expected):
    number = parse_number(value)
    assert number == expected
    assert type(number) is type(expected)
