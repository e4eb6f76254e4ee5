# escolar/settings.py
import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.environ.get('DJANGO_SECRET_KEY', 'django-insecure-boletas-dev-key')
DEBUG = os.environ.get('DJANGO_DEBUG', 'True') == 'True'
ALLOWED_HOSTS = os.environ.get('DJANGO_ALLOWED_HOSTS', 'localhost,127.0.0.1,testserver').split(',')

INSTALLED_APPS = [
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',

    # Núcleo legacy (roles y notificaciones)
    'tasks',

    # Apps modulares
    'apps.tenancy',
    'apps.academics',
    'apps.boletas',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'apps.tenancy.middleware.TenantMiddleware',
]

ROOT_URLCONF = 'escolar.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.request',
                'django.contrib.auth.context_processors.auth',
                'django.contrib.messages.context_processors.messages',
            ],
        },
    },
]

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': os.environ.get('DJANGO_DB_NAME', BASE_DIR / 'db.sqlite3'),
    }
}

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

LANGUAGE_CODE = 'es'
TIME_ZONE = 'America/Caracas'
USE_I18N = True
USE_TZ = True

STATIC_URL = 'static/'
LOGIN_URL = '/admin/login/'

# ===================================================================
# CONFIGURACIÓN INSTITUCIONAL
# ===================================================================
SCHOOL_NAME = 'Mons. Luis Eduardo Henríquez'

BOLETAS_MEMBRETE = {
    'republica': 'República Bolivariana de Venezuela',
    'ministerio': 'Ministerio del Poder Popular para la Educación',
    'nombre_complejo': SCHOOL_NAME,
    'municipio': 'San Diego - Edo. Carabobo',
    'codigo_dea': 'OD16020812',
}

# Roles con autoridad para aprobar boletas sin revisión
BOLETAS_ROLES_REVISORES = ['ADMINISTRADOR']
# Grupo que recibe las solicitudes de revisión
BOLETAS_ROL_NOTIFICADO = 'ADMINISTRADOR'
# Consultas de identidad concurrentes al imprimir (1 = secuencial)
BOLETAS_CONSULTAS_PARALELAS = int(os.environ.get('BOLETAS_CONSULTAS_PARALELAS', '4'))

# ===================================================================
# LOGGING
# ===================================================================
LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'verbose': {
            'format': '[{asctime}] {levelname} {name}: {message}',
            'style': '{',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'verbose',
        },
    },
    'loggers': {
        'apps': {
            'handlers': ['console'],
            'level': os.environ.get('DJANGO_LOG_LEVEL', 'INFO'),
        },
        'tasks': {
            'handlers': ['console'],
            'level': os.environ.get('DJANGO_LOG_LEVEL', 'INFO'),
        },
    },
}
