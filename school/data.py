"""Read side of the site: one function per entity.

Every function returns :class:`~school.backend.Ok` or
:class:`~school.backend.Err` instead of swallowing failures, so each page
decides for itself what an unavailable list looks like.
"""

import logging
from datetime import date
from functools import wraps

from .backend import BACKEND_ERRORS, Err, Ok, error_message, gather
from .images import sign_images
from .models import CalligraphyCourse, Course, NewsItem, PricingPlan, Teacher
from .quiz import normalize_quiz_row

logger = logging.getLogger(__name__)

TEACHER_COLUMNS = 'id,name,title,image,description'
COURSE_COLUMNS = 'id,title,level,start_date,total_hours,price,days,time,format,href,teacher_id'
CALLIGRAPHY_COLUMNS = (
    'id,title,date,schedule_line,classes_count,price,teacher_id,description,note,href'
)
NEWS_COLUMNS = 'id,slug,title,content,created_at,image'


def backend_call(func):
    """Turn a function returning plain data into one returning a Result."""
    @wraps(func)
    def wrapped(*args, **kwargs):
        try:
            return Ok(func(*args, **kwargs))
        except BACKEND_ERRORS as e:
            logger.error(f"{func.__name__} failed: {e}")
            return Err(error_message(e))
    return wrapped


def _teacher_rows(client):
    res = (
        client.table('teachers')
        .select(TEACHER_COLUMNS)
        .order('created_at', desc=True)
        .execute()
    )
    return res.data or []


def _signed_teachers(client, rows):
    teachers = [Teacher.from_row(row) for row in rows]
    for teacher, url in zip(teachers, sign_images(client, [t.image for t in teachers])):
        teacher.image = url
    return teachers


def _attach_teachers(client, items, teacher_rows):
    """Join teacher rows into ``items`` by ``teacher_id``; dangling ids stay ``None``.

    Each item gets its own copy and its own signed URL, even when several
    courses share a teacher.
    """
    rows_by_id = {row.get('id'): row for row in teacher_rows}
    joined = [item for item in items if item.teacher_id in rows_by_id]
    teachers = _signed_teachers(client, [rows_by_id[item.teacher_id] for item in joined])
    for item, teacher in zip(joined, teachers):
        item.teacher = teacher
    return items


@backend_call
def get_teachers(client):
    return _signed_teachers(client, _teacher_rows(client))


def _course_query(client):
    return client.table('courses').select(COURSE_COLUMNS)


def _courses_with_teachers(client, fetch_courses):
    course_rows, teacher_rows = gather(fetch_courses, lambda: _teacher_rows(client))
    courses = [Course.from_row(row) for row in course_rows]
    return _attach_teachers(client, courses, teacher_rows)


@backend_call
def get_courses(client):
    def fetch():
        return _course_query(client).order('start_date').execute().data or []
    return _courses_with_teachers(client, fetch)


@backend_call
def get_home_courses(client, limit=6, today=None):
    """Upcoming courses; when nothing is upcoming, the most recent ones."""
    today = (today or date.today()).isoformat()

    def fetch():
        res = (
            _course_query(client)
            .gte('start_date', today)
            .order('start_date')
            .limit(limit)
            .execute()
        )
        if res.data:
            return res.data
        res = _course_query(client).order('start_date', desc=True).limit(limit).execute()
        return res.data or []

    return _courses_with_teachers(client, fetch)


@backend_call
def get_calligraphy_courses(client):
    def fetch():
        res = (
            client.table('calligraphy_courses')
            .select(CALLIGRAPHY_COLUMNS)
            .order('date')
            .execute()
        )
        return res.data or []

    course_rows, teacher_rows = gather(fetch, lambda: _teacher_rows(client))
    courses = [CalligraphyCourse.from_row(row) for row in course_rows]
    return _attach_teachers(client, courses, teacher_rows)


@backend_call
def get_news(client, limit=None):
    query = client.table('news').select(NEWS_COLUMNS).order('created_at', desc=True)
    if limit is not None:
        query = query.limit(limit)
    return [NewsItem.from_row(row) for row in query.execute().data or []]


@backend_call
def get_news_by_slug(client, slug):
    res = client.table('news').select(NEWS_COLUMNS).eq('slug', slug).limit(1).execute()
    rows = res.data or []
    return NewsItem.from_row(rows[0]) if rows else None


@backend_call
def get_more_news(client, exclude_slug=None, limit=10):
    query = client.table('news').select(NEWS_COLUMNS).order('created_at', desc=True).limit(limit)
    if exclude_slug:
        query = query.neq('slug', exclude_slug)
    return [NewsItem.from_row(row) for row in query.execute().data or []]


@backend_call
def get_active_quiz_questions(client):
    res = (
        client.table('quiz_questions')
        .select('*')
        .eq('is_active', True)
        .order('order_index')
        .order('created_at')
        .execute()
    )
    return [normalize_quiz_row(row) for row in res.data or []]


@backend_call
def get_all_quiz_questions(client):
    res = (
        client.table('quiz_questions')
        .select('*')
        .order('order_index')
        .order('created_at')
        .execute()
    )
    return [normalize_quiz_row(row) for row in res.data or []]


@backend_call
def get_pricing_plans(client):
    res = client.table('pricing_plans').select('*').execute()
    return [PricingPlan.from_row(row) for row in res.data or []]


@backend_call
def get_page_config(client, slug):
    res = client.table('page_configs').select('data').eq('slug', slug).limit(1).execute()
    rows = res.data or []
    return rows[0].get('data') if rows else None


@backend_call
def ping(client):
    client.table('news').select('id').limit(1).execute()
    return True
