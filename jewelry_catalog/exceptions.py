from fastapi import HTTPException, status


class ValidationError(HTTPException):
    """
    Ошибка валидации данных, которую нельзя проверить схемой запроса
    (несуществующая ссылка, цикл в дереве категорий и т.п.).
    Формат detail совпадает с ответом FastAPI на RequestValidationError.
    """

    def __init__(self, field: str, message: str, error_type='value_error'):
        super().__init__(
            status_code=422,
            detail=[{
                'loc': ['body', field],
                'msg': message,
                'type': error_type,
            }]
        )
        self.field = field
        self.message = message


class NotFoundError(HTTPException):

    def __init__(self, description='Object not found'):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND, detail=description
        )


class DependencyError(HTTPException):
    """Удаление запрещено, пока на объект ссылаются другие записи"""

    def __init__(self, description):
        super().__init__(
            status_code=status.HTTP_409_CONFLICT, detail=description
        )


class ConflictError(HTTPException):

    def __init__(self, description):
        super().__init__(
            status_code=status.HTTP_409_CONFLICT, detail=description
        )
