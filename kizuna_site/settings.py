import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = str(os.getenv('DJANGO_SECRET_KEY') or 'dev-only-insecure-key').strip()
DEBUG = str(os.getenv('DJANGO_DEBUG') or '').strip().lower() in ('1', 'true', 'yes')
ALLOWED_HOSTS = [h.strip() for h in (os.getenv('DJANGO_ALLOWED_HOSTS') or 'localhost,127.0.0.1').split(',') if h.strip()]

# Supabase (rows, storage and password auth)
SUPABASE_URL = str(os.getenv('SUPABASE_URL') or '').strip()
SUPABASE_ANON_KEY = str(os.getenv('SUPABASE_ANON_KEY') or '').strip()
SIGNED_URL_TTL = int(os.getenv('SIGNED_URL_TTL') or 3600)

# Contact form relay
CONTACT_FORM_ACTION = str(os.getenv('CONTACT_FORM_ACTION') or 'https://formsubmit.co/info@kizuna.bg').strip()
CONTACT_FORM_NEXT = str(os.getenv('CONTACT_FORM_NEXT') or '').strip()

LOG_LEVEL = str(os.getenv('LOG_LEVEL') or 'INFO').strip().upper()

INSTALLED_APPS = [
    'django.contrib.staticfiles',
    'django.contrib.messages',
    'django.contrib.sessions',
    'tinymce',
    'school',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
    'school.auth.SupabaseSessionMiddleware',
]

ROOT_URLCONF = 'kizuna_site.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.debug',
                'django.template.context_processors.request',
                'django.contrib.messages.context_processors.messages',
                'school.context_processors.greeting_context',
                'school.context_processors.session_info',
            ],
        },
    },
]

WSGI_APPLICATION = 'kizuna_site.wsgi.application'

# All data lives in Supabase
DATABASES = {}

SESSION_ENGINE = 'django.contrib.sessions.backends.signed_cookies'
SESSION_COOKIE_HTTPONLY = True
MESSAGE_STORAGE = 'django.contrib.messages.storage.cookie.CookieStorage'

LANGUAGE_CODE = 'bg'
TIME_ZONE = 'Europe/Sofia'
USE_I18N = True
USE_TZ = True

STATIC_URL = 'static/'
STATIC_ROOT = BASE_DIR / 'staticfiles'

DATA_UPLOAD_MAX_MEMORY_SIZE = 10 * 1024 * 1024

TINYMCE_DEFAULT_CONFIG = {
    'height': 420,
    'menubar': False,
    'plugins': 'advlist autolink lists link image charmap preview anchor '
               'searchreplace visualblocks code fullscreen insertdatetime media table wordcount',
    'toolbar': 'undo redo | blocks | bold italic underline | alignleft aligncenter alignright | '
               'bullist numlist | link image | removeformat | code',
    'language': 'bg_BG',
}

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'simple': {
            'format': '%(asctime)s %(levelname)s %(name)s: %(message)s',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'simple',
        },
    },
    'loggers': {
        'school': {
            'handlers': ['console'],
            'level': LOG_LEVEL,
        },
        'django': {
            'handlers': ['console'],
            'level': 'WARNING',
        },
    },
}
