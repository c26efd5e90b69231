# Content of the /courses page when the page_configs row is missing or unreadable.
# A stored config overrides these keys one by one.

COURSES_PAGE = {
    'pageTitle': 'Езикови курсове',
    'whyChoose': {
        'title': 'Защо да изберете Kizuna?',
        'paragraphs': [
            'В Kizuna изучаването на японски език е свързано с общуване, а не със '
            'заучаване наизуст. Уроците ни са създадени така, че да ви помогнат да '
            'общувате естествено и уверено в реални ситуации.',
            'Нашите преподаватели са носители на езика с богат преподавателски опит, '
            'внимателно подбрани заради ясния си стил, търпението и умението да се '
            'адаптират към темпото на всеки ученик.',
            'Независимо дали се подготвяте за JLPT или учите за ежедневието, ние ви '
            'водим стъпка по стъпка.',
        ],
        'buttonText': 'Към курсовете',
        'imageSrc': '/static/school/images/tanuki.png',
        'teachersLinkText': 'преподаватели',
        'teachersHref': '/teachers/',
    },
    'levelOverview': {
        'Basic': {
            'heading': 'Основен японски',
            'intro': [
                'Основното ниво е приятелска начална точка, ако никога не сте учили японски.',
                'Ще научите произношение, поздрави и основите, които са нужни преди '
                'преминаване към JLPT нивата.',
            ],
            'contents': [
                'Хирагана + начална катакана',
                'Основни поздрави и ежедневни фрази',
                'Базови изреченски модели',
                'Упражнения за слушане и говорене',
                'Кратка практика по четене',
            ],
            'eligibility': 'Не се изисква предишен опит. Перфектно за напълно начинаещи.',
        },
        'N5': {
            'heading': 'JLPT N5',
            'intro': [
                'JLPT N5 е първото базово ниво на изпита Japanese Language Proficiency Test.',
                'Ще изградите основи в четене, слушане, речник и базови канджи.',
            ],
            'contents': [
                'Граматика, слушане, канджи, четене, речник',
                'Редовна домашна работа и практическо упражнение',
                'Месечни проверки за устойчив напредък',
                'Задачи в JLPT формат',
                'Пробен тест в края на курса',
            ],
            'eligibility': 'Добре е да се чувствате уверени с хирагана и катакана. '
                           'Ако не, започнете първо с Основно ниво.',
        },
        'N4': {
            'heading': 'JLPT N4',
            'intro': [
                'JLPT N4 затвърждава основната граматика и разширява ежедневния речник.',
                'Ще четете по-естествени изречения и ще изградите увереност в реален разговор.',
            ],
            'contents': [
                'Разширени граматични модели и частици',
                'По-дълги задачи за слушане и четене',
                'Развитие на речника + затвърждаване на канджи',
                'Ролеви упражнения за разговор',
                'Пробен тест и стратегия за JLPT подготовка',
            ],
            'eligibility': 'Препоръчително след завършено N5 или доказани еквивалентни умения.',
        },
        'N3': {
            'heading': 'JLPT N3',
            'intro': [
                'JLPT N3 е мостът към средно ниво японски.',
                'Ще се справяте с по-сложни текстове, по-бързо слушане и по-широк речник.',
            ],
            'contents': [
                'Средно ниво граматика + нюанси',
                'Четене на кратки статии и известия',
                'Слушане: диалози с естествена скорост',
                'Разширяване на канджи и речник',
                'JLPT упражнения + пробни тестове',
            ],
            'eligibility': 'Препоръчително след N4 или еквивалент.',
        },
        'N2': {
            'heading': 'JLPT N2',
            'intro': [
                'JLPT N2 е напреднало-средно ниво и важен етап за цели, свързани с работа или учене.',
                'Ще развивате скорост, разбиране и точност при по-дълги материали.',
            ],
            'contents': [
                'Напреднали граматични структури и синоними',
                'Дълги текстове за четене и обобщения',
                'Практика по слушане с висока скорост',
                'Канджи и речник за новини и формални контексти',
                'Пробни тестове + обучение за управление на времето',
            ],
            'eligibility': 'Препоръчително след N3 или еквивалент.',
        },
        'N1': {
            'heading': 'JLPT N1',
            'intro': [
                'JLPT N1 е най-високото JLPT ниво и се фокусира върху много напреднал японски.',
                'Ще тренирате с плътни текстове, абстрактни теми и слушане с естествена скорост.',
            ],
            'contents': [
                'Високо ниво граматика и изрази',
                'Новини, редакционни текстове и академично четене',
                'Слушане с естествена скорост + извеждане на смисъл',
                'Канджи и речник за сложни теми',
                'Интензивни пробни тестове + преговор',
            ],
            'eligibility': 'Препоръчително след N2 или еквивалент.',
        },
    },
    'booksByLevel': {
        'Basic': [
            {'title': 'Beginner 1: Survival Japanese (Basic)',
             'subtitle': 'Започнете да говорите с прости и полезни фрази.'},
        ],
        'N5': [
            {'title': 'Beginner 1: Japanese Textbook N5',
             'subtitle': 'Разговорен японски за начинаещи'},
        ],
        'N4': [
            {'title': 'JLPT N4 Main Textbook', 'subtitle': 'Граматика + структура за четене'},
        ],
        'N3': [
            {'title': 'JLPT N3 Textbook', 'subtitle': 'Средно ниво граматика + четене'},
        ],
        'N2': [
            {'title': 'JLPT N2 Textbook', 'subtitle': 'Напреднало четене + граматика'},
        ],
        'N1': [
            {'title': 'JLPT N1 Textbook', 'subtitle': 'Почти ниво на носител на езика'},
        ],
    },
}


def courses_page_config(stored=None):
    config = dict(COURSES_PAGE)
    if isinstance(stored, dict):
        config.update({key: value for key, value in stored.items() if value})
    return config
