import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

BASE_DIR = Path(__file__).resolve().parent.parent


def env_list(name, default):
    raw = os.getenv(name)
    if not raw:
        return list(default)
    return [item.strip() for item in raw.split(',') if item.strip()]


SECRET_KEY = os.getenv('DJANGO_SECRET_KEY', 'dev-only-insecure-key')
DEBUG = os.getenv('DJANGO_DEBUG', 'true').lower() in ('1', 'true', 'yes')
ALLOWED_HOSTS = env_list('DJANGO_ALLOWED_HOSTS', ['localhost', '127.0.0.1', 'testserver'])

INSTALLED_APPS = [
    'django.contrib.contenttypes',
    'django.contrib.staticfiles',
    'articles',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'rewriter_site.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.request',
            ],
        },
    },
]

WSGI_APPLICATION = 'rewriter_site.wsgi.application'

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': os.getenv('DATABASE_PATH', str(BASE_DIR / 'db.sqlite3')),
    }
}

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

LANGUAGE_CODE = 'en-us'
TIME_ZONE = 'UTC'
USE_I18N = False
USE_TZ = True

STATIC_URL = 'static/'

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'handlers': {
        'rich': {
            'class': 'rich.logging.RichHandler',
            'rich_tracebacks': True,
            'show_path': False,
        },
    },
    'loggers': {
        'articles': {
            'handlers': ['rich'],
            'level': os.getenv('LOG_LEVEL', 'INFO'),
            'propagate': False,
        },
    },
}

# Content pipeline
REWRITER = {
    'LISTING_URL': os.getenv('LISTING_URL', 'https://beyondchats.com/blogs/'),
    'ARTICLE_PATH': os.getenv('ARTICLE_PATH', '/blogs/'),
    'MAX_LISTING_ARTICLES': int(os.getenv('MAX_LISTING_ARTICLES', '5')),
    'LISTING_DELAY': float(os.getenv('LISTING_DELAY', '1.0')),
    'SOURCE_DELAY': float(os.getenv('SOURCE_DELAY', '1.5')),
    'FETCH_STRATEGY': os.getenv('FETCH_STRATEGY', 'static'),
    'FETCH_TIMEOUT': float(os.getenv('FETCH_TIMEOUT', '20')),
    'LISTING_TIMEOUT': float(os.getenv('LISTING_TIMEOUT', '30')),
    'SEARCH_ENGINES': env_list('SEARCH_ENGINES', ['scholar', 'duckduckgo', 'google_news']),
    'SEARCH_TIMEOUT': float(os.getenv('SEARCH_TIMEOUT', '10')),
    'GEMINI_API_KEY': os.getenv('GEMINI_API_KEY'),
    'GEMINI_MODELS': env_list('GEMINI_MODELS', ['gemini-2.5-flash', 'gemini-1.5-pro']),
    'GROQ_API_KEY': os.getenv('GROQ_API_KEY'),
    'GROQ_MODELS': env_list('GROQ_MODELS', [
        'llama-3.3-70b-versatile',
        'llama-3.1-70b-versatile',
        'mixtral-8x7b-32768',
    ]),
    'OLLAMA_MODEL': os.getenv('LLM_MODEL'),
    'OLLAMA_BASE_URL': os.getenv('OLLAMA_BASE_URL'),
    'TEMPERATURE': float(os.getenv('TEMPERATURE', '0.7')),
    'MAX_TOKENS': int(os.getenv('MAX_TOKENS', '2048')),
    'LLM_TIMEOUT': float(os.getenv('LLM_TIMEOUT', '120')),
    'LLM_MAX_RETRIES': int(os.getenv('LLM_MAX_RETRIES', '0')),
    'CLAIM_TIMEOUT': int(os.getenv('CLAIM_TIMEOUT', '900')),
}
