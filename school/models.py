import math
from dataclasses import dataclass, field
from typing import List, Optional

from .schedule import build_schedule_line, split_time_range

# Rows live in Supabase; these are the in-memory shapes the pages work with.

LEVEL_CHOICES = [
    ('Basic', 'Основно ниво'),
    ('N5', 'N5'),
    ('N4', 'N4'),
    ('N3', 'N3'),
    ('N2', 'N2'),
    ('N1', 'N1'),
]
DEFAULT_LEVEL = 'N5'

FORMAT_CHOICES = [
    ('On-site', 'Присъствено'),
    ('Online', 'Онлайн'),
    ('Hybrid', 'Хибридно'),
]
DEFAULT_FORMAT = 'On-site'

LEVELS = [value for value, _ in LEVEL_CHOICES]

UNKNOWN_TEACHER = 'Неизвестен'


def _text(value):
    return '' if value is None else str(value)


def parse_number(value):
    """Finite number from a row or form value, or ``None``.

    Whole numbers come back as ``int`` so integer columns accept them.
    """
    try:
        number = float(str(value).strip().replace(',', '.'))
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return int(number) if number.is_integer() else number


def _number(value, default=0):
    number = parse_number(value)
    return default if number is None else number


@dataclass
class Teacher:
    id: str
    name: str
    title: Optional[str] = None
    image: str = ''
    description: Optional[str] = None

    @classmethod
    def from_row(cls, row):
        return cls(
            id=row.get('id'),
            name=_text(row.get('name')),
            title=row.get('title'),
            image=_text(row.get('image')),
            description=row.get('description'),
        )

    def to_payload(self):
        return {
            'name': self.name.strip(),
            'title': (self.title or '').strip() or None,
            'image': self.image,
            'description': (self.description or '').strip() or None,
        }

    @property
    def initials(self):
        parts = self.name.split()
        if not parts:
            return 'T'
        last = parts[-1][0] if len(parts) > 1 else ''
        return (parts[0][0] + last).upper()

    def __str__(self):
        return self.name


@dataclass
class Course:
    id: Optional[str]
    title: str
    level: str = DEFAULT_LEVEL
    start_date: str = ''
    total_hours: float = 0
    price: float = 0
    days: List[str] = field(default_factory=list)
    time: str = ''
    format: str = DEFAULT_FORMAT
    teacher_id: Optional[str] = None
    href: str = '/courses'
    teacher: Optional[Teacher] = None

    @classmethod
    def from_row(cls, row):
        return cls(
            id=row.get('id'),
            title=_text(row.get('title')),
            level=row.get('level') or DEFAULT_LEVEL,
            start_date=_text(row.get('start_date')),
            total_hours=_number(row.get('total_hours')),
            price=_number(row.get('price')),
            days=list(row.get('days') or []),
            time=_text(row.get('time')).strip(),
            format=row.get('format') or DEFAULT_FORMAT,
            teacher_id=row.get('teacher_id'),
            href=row.get('href') or '/courses',
        )

    @property
    def teacher_name(self):
        return self.teacher.name if self.teacher else UNKNOWN_TEACHER

    @property
    def schedule_line(self):
        start, end = split_time_range(self.time)
        return build_schedule_line(self.days, start, end)

    def __str__(self):
        return self.title


@dataclass
class CalligraphyCourse:
    id: Optional[str]
    title: str
    date: str = ''
    schedule_line: str = ''
    classes_count: int = 1
    price: Optional[float] = None
    teacher_id: Optional[str] = None
    description: List[str] = field(default_factory=list)
    note: Optional[str] = None
    href: str = '/contact'
    teacher: Optional[Teacher] = None

    @classmethod
    def from_row(cls, row):
        description = row.get('description') or []
        if isinstance(description, str):
            description = [description]
        price = row.get('price')
        return cls(
            id=row.get('id'),
            title=_text(row.get('title')),
            date=_text(row.get('date')),
            schedule_line=_text(row.get('schedule_line')),
            classes_count=int(_number(row.get('classes_count'), 1)),
            price=None if price is None else _number(price),
            teacher_id=row.get('teacher_id'),
            description=[str(p) for p in description],
            note=row.get('note'),
            href=row.get('href') or '/contact',
        )

    @property
    def teacher_name(self):
        return self.teacher.name if self.teacher else UNKNOWN_TEACHER

    def __str__(self):
        return self.title


@dataclass
class NewsItem:
    id: Optional[str]
    slug: str
    title: str = ''
    content: str = ''
    created_at: Optional[str] = None
    image: Optional[str] = None

    @classmethod
    def from_row(cls, row):
        return cls(
            id=row.get('id'),
            slug=_text(row.get('slug')),
            title=_text(row.get('title')),
            content=_text(row.get('content')),
            created_at=row.get('created_at'),
            image=row.get('image') or None,
        )

    def __str__(self):
        return self.title


@dataclass
class QuizQuestion:
    id: Optional[str]
    question: str
    options: List[str] = field(default_factory=list)
    # None when a legacy row carries no usable answer key
    correct_index: Optional[int] = None
    explanation: Optional[str] = None
    is_active: bool = True
    order_index: int = 0
    created_at: Optional[str] = None

    def to_payload(self):
        payload = {
            'question': self.question,
            'options': list(self.options),
            'correct_index': self.correct_index or 0,
            'explanation': self.explanation or None,
            'is_active': self.is_active,
            'order_index': self.order_index,
        }
        if self.id:
            payload['id'] = self.id
        return payload

    def __str__(self):
        return self.question[:50]


@dataclass
class PricingPlan:
    id: Optional[str]
    name: str = ''
    price: str = ''
    description: str = ''

    @classmethod
    def from_row(cls, row):
        return cls(
            id=row.get('id'),
            name=_text(row.get('name')),
            price=_text(row.get('price')),
            description=_text(row.get('description')),
        )

    def __str__(self):
        return self.name
