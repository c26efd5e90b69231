import pytest
from django.core.management import call_command
from django.core.management.base import CommandError

from school.admin_views import SECTIONS
from school.templatetags.breadcrumbs import SECTION_TITLES

from .conftest import ADMIN_EMAIL


@pytest.fixture
def site_data(fake_client, teachers):
    fake_client.tables['courses'] = [
        {'id': 'c1', 'title': 'Японски N5', 'level': 'N5', 'start_date': '2099-01-10', 'total_hours': 60,
         'price': 980, 'days': ['Monday'], 'time': '18:00–20:00', 'format': 'On-site', 'teacher_id': 't1'},
        {'id': 'c2', 'title': 'Японски N2', 'level': 'N2', 'start_date': '2099-02-10', 'total_hours': 30,
         'price': 540, 'days': ['Saturday'], 'time': '10:00–13:00', 'format': 'Online', 'teacher_id': 'gone'},
    ]
    fake_client.tables['news'] = [
        {'id': 1, 'slug': 'otkrivane', 'title': 'Откриване', 'content': '<p>Здравейте</p>',
         'created_at': '2026-01-05T10:00:00+00:00', 'image': None},
        {'id': 2, 'slug': 'kaligrafia', 'title': 'Калиграфия', 'content': '<p>Шодо</p>',
         'created_at': '2026-01-03T10:00:00+00:00', 'image': None},
    ]
    return fake_client


def test_home_page(client, site_data):
    response = client.get('/')
    assert response.status_code == 200
    assert [c.id for c in response.context['courses']] == ['c1', 'c2']
    assert [n.slug for n in response.context['news']] == ['otkrivane', 'kaligrafia']
    assert 'Неизвестен' in response.content.decode()


def test_courses_level_filter(client, site_data):
    response = client.get('/courses/', {'level': 'N2'})
    assert [c.id for c in response.context['courses']] == ['c2']
    assert response.context['overview']['heading'] == 'JLPT N2'

    response = client.get('/courses/', {'level': 'bogus'})
    assert response.context['level'] == 'All'
    assert len(response.context['courses']) == 2


def test_courses_page_config_overrides_defaults(client, site_data):
    site_data.tables['page_configs'] = [{'slug': 'courses', 'data': {'pageTitle': 'Курсове 2026'}}]
    response = client.get('/courses/')
    assert response.context['config']['pageTitle'] == 'Курсове 2026'
    assert 'levelOverview' in response.context['config']


def test_courses_error_is_shown_in_page(client, site_data):
    site_data.fail('courses', 'select', 'service unavailable')
    response = client.get('/courses/')
    assert response.status_code == 200
    assert 'service unavailable' in response.content.decode()


def test_news_detail_and_missing_slug(client, site_data):
    response = client.get('/news/otkrivane/')
    assert response.status_code == 200
    assert response.context['item'].title == 'Откриване'
    assert [n.slug for n in response.context['sidebar']] == ['kaligrafia']

    response = client.get('/news/nyama-takava/')
    assert response.status_code == 200
    assert response.context['item'] is None
    assert 'Новината не е намерена' in response.content.decode()


def test_contact_form_posts_to_relay(client, fake_client, settings):
    settings.CONTACT_FORM_ACTION = 'https://formsubmit.co/test@kizuna.bg'
    content = client.get('/contact/').content.decode()
    assert 'action="https://formsubmit.co/test@kizuna.bg"' in content
    assert 'target="hidden_iframe"' in content


def test_contact_form_swaps_to_success_after_iframe_load(client, fake_client):
    content = client.get('/contact/').content.decode()
    assert 'onload="handleIframeLoad()"' in content
    assert 'onsubmit="submitted = true"' in content
    assert '<div id="contact-success" class="contact-success" hidden>' in content
    assert 'Благодарим ти!' in content


def test_quiz_scoring(client, fake_client):
    fake_client.tables['quiz_questions'] = [
        {'id': 'q1', 'question': 'Куче?', 'options': ['inu', 'neko'], 'correct_index': 0,
         'is_active': True, 'order_index': 0},
        {'id': 'q2', 'question': 'Котка?', 'options': ['inu', 'neko'], 'correct_answer': 'neko',
         'is_active': True, 'order_index': 1},
    ]
    response = client.post('/test/', {'q_q1': '0'})
    assert response.context['result'] is None
    assert 'Моля, отговори на всички въпроси.' in response.content.decode()

    response = client.post('/test/', {'q_q1': '0', 'q_q2': '1'})
    result = response.context['result']
    assert (result['score'], result['total']) == (2, 2)
    assert result['title'] == 'Перфектно! 🌸'


def test_login_failure_shows_auth_message(client, fake_client):
    response = client.post('/login/', {'email': ADMIN_EMAIL, 'password': 'wrong'})
    assert response.status_code == 200
    assert 'Invalid login credentials' in response.content.decode()


def test_admin_pages_require_login(client, fake_client):
    response = client.get('/admin/courses/')
    assert response.status_code == 302
    assert response.url == '/login/'


def test_non_admin_is_sent_home(client, fake_client):
    client.post('/login/', {'email': 'visitor@kizuna.bg', 'password': 'visitor-pass'})
    response = client.get('/admin/')
    assert response.status_code == 302
    assert response.url == '/'


def test_admin_dashboard_and_login_redirect(admin_client):
    response = admin_client.get('/admin/')
    assert response.status_code == 200
    assert response.context['sections'][0] == ('courses', 'Курсове')

    response = admin_client.get('/login/')
    assert response.status_code == 302
    assert response.url == '/admin/'


def test_admin_breadcrumbs_follow_section_titles(admin_client, site_data):
    content = admin_client.get('/admin/calligraphy/').content.decode()
    assert '<a href="/admin/calligraphy/">Калиграфия</a>' in content

    content = admin_client.get('/admin/courses/c2/delete/').content.decode()
    assert '<a href="/admin/courses/">Курсове</a>' in content
    assert '<span>Изтриване</span>' in content
    assert SECTION_TITLES == {key: title for key, (_, title) in SECTIONS.items()}


def test_admin_unknown_section_is_404(admin_client):
    assert admin_client.get('/admin/nothing/').status_code == 404


def test_admin_course_editor_flow(admin_client, site_data):
    response = admin_client.get('/admin/courses/')
    assert response.status_code == 200
    assert len(response.context['rows']) == 2

    response = admin_client.get('/admin/courses/', {'edit': 'c1'})
    assert response.context['editing'] is True
    assert response.context['form'].initial['time_start'] == '18:00'

    post = {
        'id': 'c1', 'title': 'Японски N5 – сутрешен', 'level': 'N5', 'start_date': '2099-01-10',
        'format': 'On-site', 'total_hours': '60', 'price': '980', 'teacher_id': 't1',
        'days': ['Monday', 'Friday'], 'time_start': '09:00', 'time_end': '08:00',
    }
    response = admin_client.post('/admin/courses/', post)
    assert response.status_code == 200
    assert 'Крайният час трябва да е след началния.' in response.content.decode()
    assert site_data.writes == []

    post['time_end'] = '11:00'
    response = admin_client.post('/admin/courses/', post, follow=True)
    assert response.redirect_chain[-1][0] == '/admin/courses/'
    saved = next(c for c in response.context['rows'] if c.id == 'c1')
    assert saved.title == 'Японски N5 – сутрешен'
    assert saved.time == '09:00–11:00'


def test_admin_delete_needs_confirmation(admin_client, site_data):
    response = admin_client.get('/admin/courses/c2/delete/')
    assert response.status_code == 200
    assert response.context['row'].title == 'Японски N2'
    assert len(site_data.tables['courses']) == 2

    response = admin_client.post('/admin/courses/c2/delete/')
    assert response.status_code == 302
    assert [c['id'] for c in site_data.tables['courses']] == ['c1']


def test_logout(admin_client, fake_client):
    response = admin_client.post('/logout/')
    assert response.url == '/'
    assert fake_client.auth.signed_out == 1
    assert admin_client.get('/admin/').url == '/login/'


def test_grant_admin_command(fake_client):
    call_command('grant_admin', 'user-2')
    assert 'user-2' in [row['user_id'] for row in fake_client.tables['admins']]

    call_command('grant_admin', 'user-2', '--revoke')
    assert 'user-2' not in [row['user_id'] for row in fake_client.tables['admins']]

    fake_client.fail('admins', message='permission denied')
    with pytest.raises(CommandError):
        call_command('grant_admin', 'user-3')
