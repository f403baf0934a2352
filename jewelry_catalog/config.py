import os
from dotenv import load_dotenv


load_dotenv()


DATABASE_URL = os.getenv(
    'DATABASE_URL', 'sqlite+aiosqlite:///./jewelry_catalog.db'
)
DATABASE_ECHO = os.getenv('DATABASE_ECHO', 'false').lower() == 'true'

SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key-change-me')
REFRESH_SECRET_KEY = os.getenv(
    'REFRESH_SECRET_KEY', 'dev-refresh-secret-key-change-me'
)
ALGORITHM = os.getenv('ALGORITHM', 'HS256')

TOKEN_URL = 'auth/login'
ACCESS_TOKEN_EXPIRE_MINUTES = int(
    os.getenv('ACCESS_TOKEN_EXPIRE_MINUTES', 30)
)
REFRESH_TOKEN_EXPIRE_DAYS = int(os.getenv('REFRESH_TOKEN_EXPIRE_DAYS', 30))
NAME_TOKEN_HEAD = 'Bearer'

# Первый супер-админ, создаётся при старте если таблица пуста
ADMIN_EMAIL = os.getenv('ADMIN_EMAIL', 'admin@zipzag.com')
ADMIN_PASSWORD = os.getenv('ADMIN_PASSWORD', 'admin123')
ADMIN_NAME = os.getenv('ADMIN_NAME', 'Super Admin')
ADMIN_PHONE = os.getenv('ADMIN_PHONE', '0000000000')

MIDDLEWARE_CORS_ALLOW_ORIGINS = os.getenv(
    'ALLOWED_ORIGINS', 'http://localhost:8080,http://localhost:3000'
).split(',')
MIDDLEWARE_CORS_ALLOW_CREDENTIALS = True
MIDDLEWARE_CORS_ALLOW_METHODS = [
    'GET', 'POST', 'PUT', 'DELETE', 'PATCH', 'OPTIONS'
]
MIDDLEWARE_CORS_ALLOW_HEADERS = [
    'Content-Type', 'Authorization', 'X-Requested-With'
]
MIDDLEWARE_TRUSTED_HOST_ALLOWED_HOSTS = os.getenv(
    'ALLOWED_HOSTS', 'localhost,127.0.0.1,test'
).split(',')
MIDDLEWARE_GZIP_MINIMUM_SIZE = 500

# По логированию
LOGGER_FILE = os.getenv('LOG_FILE', 'logs/app.log')
LOGGER_FORMAT = 'Log: [{extra[log_id]}:{time} - {level} - {message}]'
LOGGER_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()
# новый файл при достижении 10 МБ
LOGGER_ROTATION = '10 MB'
#  хранить логи только 10 дней
LOGGER_RETENTION = '10 days'
LOGGER_COMPRESSION = 'zip'
LOGGER_ENQUEUE = True
LOGGER_WARNING_LIST_STATUS_CODE = [401, 402, 403, 404, 409]
LOGGER_EXCEPTION_STATUS_CODE = 500
