# Rate limiting configuration for CineLog
# Использует slowapi для защиты API от абуза

from slowapi import Limiter
from slowapi.util import get_remote_address

# Инициализация лимитера с использованием IP адреса клиента
limiter = Limiter(key_func=get_remote_address)

# Предустановленные лимиты для различных типов операций
RATE_LIMITS = {
    # Поиск пользователей и запросы к TMDB (внешний API)
    "user_search": "30/minute",
    "metadata_lookup": "30/minute",
    # Операции над связями (запросы в друзья, ответы, удаление)
    "social_write": "30/minute",
    # Аутентификация
    "auth_operations": "20/minute",
}

__all__ = ["limiter", "RATE_LIMITS"]
