"""Quiz question ingestion and scoring for the public /test page.

Older rows stored the answer key under several different names, sometimes
as an index and sometimes as the answer text.  :func:`normalize_quiz_row`
maps every accepted shape onto :class:`~school.models.QuizQuestion` once, at
the data-access boundary; nothing downstream looks at the raw row.
"""

from .models import QuizQuestion

INDEX_KEYS = ('correct_index', 'correctIndex', 'correctOptionIndex', 'correct_option_index')
ANSWER_TEXT_KEYS = ('correctAnswer', 'correct_answer', 'correctOption', 'correct_option', 'answer')

MAX_OPTIONS = 4
MIN_OPTIONS = 2


def _correct_index(row, options):
    for key in INDEX_KEYS:
        value = row.get(key)
        if isinstance(value, bool):
            continue
        if isinstance(value, int):
            return value
        if isinstance(value, float) and value.is_integer():
            return int(value)

    for key in ANSWER_TEXT_KEYS:
        text = row.get(key)
        if isinstance(text, str) and text.strip():
            wanted = text.strip()
            for i, option in enumerate(options):
                if str(option).strip() == wanted:
                    return i
            return None
    return None


def normalize_quiz_row(row):
    options = row.get('options')
    options = [str(o) for o in options] if isinstance(options, list) else []
    order_index = row.get('order_index')
    return QuizQuestion(
        id=row.get('id'),
        question=row.get('question') or '',
        options=options,
        correct_index=_correct_index(row, options),
        explanation=row.get('explanation') or None,
        is_active=bool(row.get('is_active')),
        order_index=order_index if isinstance(order_index, int) else 0,
        created_at=row.get('created_at'),
    )


def clamp(value, low, high):
    return max(low, min(value, high))


def clean_options(options):
    return [o.strip() for o in options if o and o.strip()][:MAX_OPTIONS]


def score_answers(questions, answers):
    """Count answers matching the answer key; ``answers`` maps question id -> option index."""
    score = 0
    for q in questions:
        picked = answers.get(str(q.id))
        if q.correct_index is not None and picked == q.correct_index:
            score += 1
    return score


def playable(questions):
    """Questions the quiz can actually ask: two options or more and a usable answer key."""
    return [
        q for q in questions
        if len(q.options) >= MIN_OPTIONS
        and q.correct_index is not None
        and 0 <= q.correct_index < len(q.options)
    ]


def read_answers(questions, post):
    """Picked option per question id from ``q_<id>`` form fields; unanswered ones are left out."""
    answers = {}
    for q in questions:
        try:
            answers[str(q.id)] = int(post.get(f'q_{q.id}', ''))
        except ValueError:
            continue
    return answers


def score_message(score, total):
    if total <= 0:
        return {'title': 'Готово!', 'text': 'Благодарим ти!'}

    if score >= total:
        return {
            'title': 'Перфектно! 🌸',
            'text': f'{score}/{total} – изглежда вече имаш японския в кръвта! Разгледай курсовете и започвай!',
        }

    if score >= total - 1:
        return {
            'title': 'Супер резултат! ⭐',
            'text': 'Много близо до перфектното! С още малко практика ще си топ.',
        }

    if score >= 3:
        return {
            'title': 'Браво! 🙌',
            'text': 'Имаш добра основа! Ако продължиш – ще напреднеш много бързо.',
        }

    return {
        'title': 'Добър старт 🙂',
        'text': 'Не се притеснявай – всички започват отнякъде. Разгледай курсовете и ще стане лесно!',
    }
