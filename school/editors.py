"""Admin editors: draft form, validation and writes for each entity.

Every editor follows the same cycle: ``load()`` replaces the in-memory list
wholesale, ``fill_edit(row)`` turns a saved row back into a draft,
``save(form)`` validates and then updates (draft has an id) or inserts, and
``remove(id)`` deletes.  Backend failures come back as the raw error message
and the bound form keeps the draft for another try.  The views redirect to
the list after a write, which reloads it.  Concurrent edits are last write
wins.
"""

import logging
import uuid

from django.utils.text import slugify

from .backend import BACKEND_ERRORS, error_message, gather
from .data import TEACHER_COLUMNS
from .forms import (
    CalligraphyCourseForm,
    CourseForm,
    NewsForm,
    PricingPlanForm,
    QuizQuestionForm,
    TeacherForm,
)
from .images import (
    NEWS_BUCKET,
    TEACHERS_BUCKET,
    normalize_object_name,
    public_url,
    sign_images,
    upload_image,
)
from .models import CalligraphyCourse, Course, NewsItem, PricingPlan, Teacher, parse_number
from .quiz import clamp, normalize_quiz_row
from .schedule import (
    WEEKDAYS,
    WEEKDAYS_BG,
    build_schedule_line,
    filter_days,
    join_time_range,
    pad_time,
    parse_schedule_line,
    split_time_range,
)

logger = logging.getLogger(__name__)


class Editor:
    table = None
    columns = '*'
    order = ()  # (column, desc) pairs
    form_class = None
    name = ''

    def __init__(self, client):
        self.client = client
        self.rows = []
        self.error = None

    # -- reading ----------------------------------------------------------

    def query(self):
        query = self.client.table(self.table).select(self.columns)
        for column, desc in self.order:
            query = query.order(column, desc=desc)
        return query

    def fetch(self):
        return self.query().execute().data or []

    def build(self, row):
        return row

    def load(self):
        try:
            self.rows = [self.build(row) for row in self.fetch()]
            self.error = None
        except BACKEND_ERRORS as e:
            logger.error(f"Loading {self.table} failed: {e}")
            self.rows = []
            self.error = error_message(e)
        return self.rows

    def get(self, row_id):
        for row in self.rows:
            if str(row.id) == str(row_id):
                return row
        return None

    # -- drafts -----------------------------------------------------------

    def form_kwargs(self):
        return {}

    def form(self, data=None, files=None, initial=None):
        return self.form_class(data, files, initial=initial, **self.form_kwargs())

    def fill_edit(self, row):
        raise NotImplementedError

    def validate(self, form):
        if form.is_valid():
            return None
        return form.first_error()

    # -- writing ----------------------------------------------------------

    def payload(self, form):
        raise NotImplementedError

    def write(self, payload, row_id):
        table = self.client.table(self.table)
        if row_id:
            table.update(payload).eq('id', row_id).execute()
        else:
            table.insert(payload).execute()

    def save(self, form):
        """Returns ``None`` on success, otherwise the message to show."""
        message = self.validate(form)
        if message:
            return message

        row_id = form.cleaned_data.get('id') or None
        try:
            self.write(self.payload(form), row_id)
        except BACKEND_ERRORS as e:
            logger.error(f"Saving {self.table} {row_id or '(new)'} failed: {e}")
            return error_message(e)
        logger.info(f"Saved {self.table} {row_id or '(new)'}")
        return None

    def remove(self, row_id):
        try:
            self.client.table(self.table).delete().eq('id', row_id).execute()
        except BACKEND_ERRORS as e:
            logger.error(f"Deleting {self.table} {row_id} failed: {e}")
            return error_message(e)
        logger.info(f"Deleted {self.table} {row_id}")
        return None


class TeacherListMixin:
    """Editors whose drafts pick a teacher from a dropdown."""

    def fetch_teachers(self):
        res = (
            self.client.table('teachers')
            .select(TEACHER_COLUMNS)
            .order('created_at', desc=True)
            .execute()
        )
        return [Teacher.from_row(row) for row in res.data or []]

    def load(self):
        try:
            rows, self.teachers = gather(self.fetch, self.fetch_teachers)
            by_id = {t.id: t for t in self.teachers}
            self.rows = [self.build(row) for row in rows]
            for item in self.rows:
                item.teacher = by_id.get(item.teacher_id)
            self.error = None
        except BACKEND_ERRORS as e:
            logger.error(f"Loading {self.table} failed: {e}")
            self.rows = []
            self.teachers = []
            self.error = error_message(e)
        return self.rows

    def form_kwargs(self):
        return {'teachers': getattr(self, 'teachers', [])}


class CourseEditor(TeacherListMixin, Editor):
    table = 'courses'
    columns = 'id,title,level,start_date,total_hours,price,days,time,format,href,teacher_id'
    order = (('start_date', False),)
    form_class = CourseForm
    name = 'курс'

    def build(self, row):
        return Course.from_row(row)

    def fill_edit(self, course):
        start, end = split_time_range(course.time)
        return {
            'id': course.id,
            'title': course.title,
            'level': course.level,
            'start_date': course.start_date,
            'total_hours': course.total_hours,
            'price': course.price,
            'days': filter_days(course.days, WEEKDAYS),
            'time_start': start,
            'time_end': end,
            'format': course.format,
            'teacher_id': course.teacher_id or '',
        }

    def payload(self, form):
        data = form.cleaned_data
        return {
            'title': data['title'].strip(),
            'level': data['level'],
            'start_date': data['start_date'],
            'total_hours': parse_number(data['total_hours']),
            'price': parse_number(data['price']),
            'days': filter_days(data['days'], WEEKDAYS),
            'time': join_time_range(data['time_start'], data['time_end']),
            'format': data['format'],
            'href': '/courses',
            'teacher_id': data['teacher_id'],
        }


class CalligraphyEditor(TeacherListMixin, Editor):
    table = 'calligraphy_courses'
    columns = 'id,title,date,schedule_line,classes_count,teacher_id,description,note,href,price'
    order = (('date', False),)
    form_class = CalligraphyCourseForm
    name = 'курс по калиграфия'

    def build(self, row):
        return CalligraphyCourse.from_row(row)

    def fill_edit(self, course):
        parsed = parse_schedule_line(course.schedule_line, WEEKDAYS_BG)
        return {
            'id': course.id,
            'title': course.title,
            'date': course.date,
            'days': parsed.days,
            'start_time': pad_time(parsed.start),
            'end_time': pad_time(parsed.end),
            'price': course.price or 0,
            'teacher_id': course.teacher_id or '',
            'description_text': '\n\n'.join(course.description),
        }

    def payload(self, form):
        data = form.cleaned_data
        description = [line.strip() for line in data['description_text'].split('\n') if line.strip()]
        return {
            'title': data['title'].strip(),
            'date': data['date'],
            'schedule_line': build_schedule_line(
                [day for day in WEEKDAYS_BG if day in data['days']],
                data['start_time'],
                data['end_time'],
            ),
            'teacher_id': data['teacher_id'],
            'description': description,
            'classes_count': 1,
            'href': '/contact',
            'note': None,
            'price': parse_number(data['price']),
        }


class TeacherEditor(Editor):
    table = 'teachers'
    columns = TEACHER_COLUMNS
    order = (('created_at', True),)
    form_class = TeacherForm
    name = 'преподавател'

    def __init__(self, client):
        super().__init__(client)
        self.previews = {}

    def build(self, row):
        return Teacher.from_row(row)

    def load(self):
        super().load()
        urls = sign_images(self.client, [t.image for t in self.rows])
        self.previews = {str(t.id): url for t, url in zip(self.rows, urls)}
        return self.rows

    def fill_edit(self, teacher):
        return {
            'id': teacher.id,
            'name': teacher.name,
            'title': teacher.title or '',
            'image': teacher.image,
            'description': teacher.description or '',
        }

    def payload(self, form):
        data = form.cleaned_data
        image = data.get('image', '')
        if data.get('photo'):
            image = upload_image(self.client, TEACHERS_BUCKET, data['photo'])
        teacher = Teacher(
            id=data.get('id'),
            name=data['name'],
            title=data['title'],
            image=normalize_object_name(image),
            description=data['description'],
        )
        return teacher.to_payload()


def make_slug(title):
    base = slugify(title, allow_unicode=True)[:60].strip('-') or 'novina'
    return f'{base}-{uuid.uuid4().hex[:6]}'


class NewsEditor(Editor):
    table = 'news'
    columns = 'id,slug,title,content,created_at,image'
    order = (('created_at', True),)
    form_class = NewsForm
    name = 'новина'

    def build(self, row):
        return NewsItem.from_row(row)

    def fill_edit(self, item):
        return {
            'id': item.id,
            'title': item.title,
            'content': item.content,
            'image': item.image or '',
        }

    def payload(self, form):
        data = form.cleaned_data
        image = (data.get('image') or '').strip()
        if data.get('clear_image'):
            image = ''
        if data.get('photo'):
            object_name = upload_image(self.client, NEWS_BUCKET, data['photo'])
            image = public_url(self.client, NEWS_BUCKET, object_name)
        payload = {
            'title': data['title'].strip(),
            'content': data['content'].strip(),
            'image': image or None,
        }
        if not data.get('id'):
            # slug is the public routing key and never changes after insert
            payload['slug'] = make_slug(payload['title'])
        return payload


class QuizEditor(Editor):
    table = 'quiz_questions'
    order = (('order_index', False), ('created_at', False))
    form_class = QuizQuestionForm
    name = 'въпрос'

    def build(self, row):
        return normalize_quiz_row(row)

    def fill_edit(self, question):
        options = (list(question.options) + [''] * 4)[:4]
        initial = {
            'id': question.id,
            'question': question.question,
            'correct_index': question.correct_index or 0,
            'explanation': question.explanation or '',
            'is_active': question.is_active,
            'order_index': question.order_index,
        }
        for i, option in enumerate(options, start=1):
            initial[f'option_{i}'] = option
        return initial

    def payload(self, form):
        data = form.cleaned_data
        options = form.options()
        question = normalize_quiz_row({
            'id': data.get('id') or None,
            'question': data['question'].strip(),
            'options': options,
            'correct_index': clamp(data.get('correct_index') or 0, 0, len(options) - 1),
            'explanation': (data.get('explanation') or '').strip(),
            'is_active': data.get('is_active'),
            'order_index': data.get('order_index') or 0,
        })
        return question.to_payload()

    def write(self, payload, row_id):
        self.client.table(self.table).upsert(payload).execute()


class PricingEditor(Editor):
    table = 'pricing_plans'
    form_class = PricingPlanForm
    name = 'план'

    def build(self, row):
        return PricingPlan.from_row(row)

    def fill_edit(self, plan):
        return {
            'id': plan.id,
            'name': plan.name,
            'price': plan.price,
            'description': plan.description,
        }

    def payload(self, form):
        data = form.cleaned_data
        return {
            'name': data['name'],
            'price': data['price'],
            'description': data['description'],
        }
