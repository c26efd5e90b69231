import logging

from django.conf import settings
from django.contrib import messages
from django.http import JsonResponse
from django.shortcuts import redirect, render
from django.utils import timezone
from django.views.decorators.http import require_GET, require_POST

from . import data
from .backend import BACKEND_ERRORS, error_message, gather
from .defaults import courses_page_config
from .forms import LoginForm
from .models import LEVEL_CHOICES, LEVELS
from .quiz import playable, read_answers, score_answers, score_message

logger = logging.getLogger(__name__)

HOME_NEWS_COUNT = 5
SIDEBAR_NEWS_COUNT = 4


def home(request):
    client = request.supabase
    courses, news, teachers = gather(
        lambda: data.get_home_courses(client),
        lambda: data.get_news(client, limit=HOME_NEWS_COUNT),
        lambda: data.get_teachers(client),
    )
    return render(request, 'school/home.html', {
        'courses': courses.unwrap_or([]),
        'courses_error': None if courses.ok else courses.reason,
        'news': news.unwrap_or([]),
        'teachers': teachers.unwrap_or([]),
    })


def about(request):
    return render(request, 'school/about.html')


def courses(request):
    client = request.supabase
    result, config = gather(
        lambda: data.get_courses(client),
        lambda: data.get_page_config(client, 'courses'),
    )

    level = request.GET.get('level', 'All')
    if level not in LEVELS:
        level = 'All'

    items = result.unwrap_or([])
    if level != 'All':
        items = [c for c in items if c.level == level]

    config = courses_page_config(config.unwrap_or(None))
    books = config.get('booksByLevel', {})
    return render(request, 'school/courses.html', {
        'config': config,
        'courses': items,
        'courses_error': None if result.ok else result.reason,
        'level': level,
        'levels': LEVEL_CHOICES,
        'overview': config.get('levelOverview', {}).get(level),
        'books': books.get(level) or books.get('N5', []),
    })


def calligraphy(request):
    result = data.get_calligraphy_courses(request.supabase)
    return render(request, 'school/calligraphy.html', {
        'courses': result.unwrap_or([]),
        'courses_error': None if result.ok else result.reason,
    })


def teachers(request):
    result = data.get_teachers(request.supabase)
    return render(request, 'school/teachers.html', {
        'teachers': result.unwrap_or([]),
        'teachers_error': None if result.ok else result.reason,
    })


def news_list(request):
    result = data.get_news(request.supabase)
    return render(request, 'school/news_list.html', {
        'news': result.unwrap_or([]),
        'news_error': None if result.ok else result.reason,
    })


def news_detail(request, slug):
    client = request.supabase
    item, more = gather(
        lambda: data.get_news_by_slug(client, slug),
        lambda: data.get_more_news(client, exclude_slug=slug, limit=30),
    )
    more = more.unwrap_or([])
    # a missing post is shown in-page on the normal template
    return render(request, 'school/news_detail.html', {
        'item': item.unwrap_or(None),
        'sidebar': more[:SIDEBAR_NEWS_COUNT],
        'below': more[SIDEBAR_NEWS_COUNT:],
    })


def contact(request):
    return render(request, 'school/contact.html', {
        'form_action': settings.CONTACT_FORM_ACTION,
        'next_url': settings.CONTACT_FORM_NEXT or request.build_absolute_uri(),
        'source': request.GET.get('source', 'contact'),
    })


def pricing(request):
    result = data.get_pricing_plans(request.supabase)
    return render(request, 'school/pricing.html', {
        'plans': result.unwrap_or([]),
        'plans_error': None if result.ok else result.reason,
    })


def quiz_view(request):
    result = data.get_active_quiz_questions(request.supabase)
    questions = playable(result.unwrap_or([]))
    context = {
        'questions': questions,
        'questions_error': None if result.ok else result.reason,
        'answers': {},
        'result': None,
    }

    if request.method == 'POST':
        answers = read_answers(questions, request.POST)
        context['answers'] = answers
        if len(answers) < len(questions):
            messages.error(request, 'Моля, отговори на всички въпроси.')
        else:
            score = score_answers(questions, answers)
            context['result'] = {
                'score': score,
                'total': len(questions),
                **score_message(score, len(questions)),
            }

    return render(request, 'school/quiz.html', context)


def login_view(request):
    context = request.auth_context
    if context.is_authenticated:
        return redirect('admin_dashboard')

    error = None
    if request.method == 'POST':
        form = LoginForm(request.POST)
        if form.is_valid():
            try:
                context.sign_in(form.cleaned_data['email'], form.cleaned_data['password'])
            except BACKEND_ERRORS as e:
                logger.info(f"Login failed for {form.cleaned_data['email']}: {e}")
                error = error_message(e)
            else:
                return redirect('admin_dashboard')
    else:
        form = LoginForm()
    return render(request, 'school/login.html', {'form': form, 'error': error})


@require_POST
def logout_view(request):
    request.auth_context.sign_out()
    return redirect('home')


@require_GET
def keepalive(request):
    result = data.ping(request.supabase)
    if not result.ok:
        return JsonResponse({'ok': False, 'error': result.reason}, status=500)
    return JsonResponse({'ok': True, 'ts': timezone.now().isoformat()})
