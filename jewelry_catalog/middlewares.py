import time

from starlette.middleware.base import BaseHTTPMiddleware


class TimingMiddleware(BaseHTTPMiddleware):
    """Добавляет в ответ заголовок с временем обработки запроса"""

    async def dispatch(self, request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        response.headers['X-Process-Time'] = (
            f'{time.perf_counter() - start:.4f}'
        )
        return response
