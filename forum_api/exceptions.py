from typing import Type


class ForumAPIError(Exception):
    eng: str
    ru: str

    def __init__(self, eng: str, ru: str) -> None:
        self.eng = eng
        self.ru = ru
        super().__init__(eng)


class ValidationError(ForumAPIError):
    """Bad input shape, length or format"""


class EmptyField(ValidationError):
    def __init__(self, field: str):
        super().__init__(f"Field {field} can not be empty", f"Поле {field} не может быть пустым")


class FieldTooShort(ValidationError):
    def __init__(self, field: str, num_symbols: int):
        super().__init__(
            f"Field {field} is too short. Minimum of {num_symbols} symbols is required",
            f"Поле {field} слишком короткое. Требуется минимум {num_symbols} символов",
        )


class FieldTooLong(ValidationError):
    def __init__(self, field: str, num_symbols: int):
        super().__init__(
            f"Field {field} is too long. Maximum of {num_symbols} symbols is allowed",
            f"Поле {field} слишком длинное. Разрешено максимум {num_symbols} символов",
        )


class InvalidFormat(ValidationError):
    def __init__(self, field: str, allowed: str, allowed_ru: str):
        super().__init__(
            f"Field {field} contains forbidden symbols. Allowed: {allowed}",
            f"Поле {field} содержит запрещенные символы. Разрешены: {allowed_ru}",
        )


class InvalidTarget(ValidationError):
    def __init__(self):
        super().__init__(
            "Exactly one of post_id or comment_id must be specified",
            "Необходимо указать либо post_id, либо comment_id",
        )


class ObjectNotFound(ForumAPIError):
    def __init__(self, obj: type, obj_id_or_name: int | str):
        super().__init__(
            f"Object {obj.__name__} {obj_id_or_name=} not found",
            f"Объект {obj.__name__} с идентификатором {obj_id_or_name} не найден",
        )


class SessionNotFound(ObjectNotFound):
    def __init__(self):
        ForumAPIError.__init__(self, "Session not found", "Сессия не найдена")


class ConflictError(ForumAPIError):
    """Uniqueness violation"""


class AlreadyExists(ConflictError):
    def __init__(self, obj: type, field: str, value: int | str):
        super().__init__(
            f"Object {obj.__name__} with {field}={value!r} already exists",
            f"Объект {obj.__name__} с полем {field}={value!r} уже существует",
        )


class AlreadyReacted(ConflictError):
    def __init__(self, target: str):
        super().__init__(
            f"User has already reacted to {target} this way",
            f"Пользователь уже поставил такую реакцию на {target}",
        )


class ForbiddenAction(ForumAPIError):
    def __init__(self, type: Type):
        super().__init__(f"Forbidden action with {type.__name__}", f"Запрещенное действие с объектом {type.__name__}")


class NotAuthor(ForbiddenAction):
    def __init__(self, type: Type):
        ForumAPIError.__init__(
            self,
            f"Only the author can modify {type.__name__}",
            f"Только автор может изменять объект {type.__name__}",
        )


class NotAdmin(ForbiddenAction):
    def __init__(self, type: Type):
        ForumAPIError.__init__(
            self,
            f"Only administrators can modify {type.__name__}",
            f"Только администраторы могут изменять объект {type.__name__}",
        )


class AlreadyAuthenticated(ForbiddenAction):
    def __init__(self):
        ForumAPIError.__init__(self, "Already authenticated", "Вы уже авторизованы")


class AuthenticationError(ForumAPIError):
    """Missing or invalid credentials"""


class NotAuthenticated(AuthenticationError):
    def __init__(self):
        super().__init__("Authentication required", "Требуется авторизация")


class SessionExpired(AuthenticationError):
    def __init__(self):
        super().__init__("Session expired", "Сессия истекла")


class EmailNotFound(AuthenticationError):
    def __init__(self):
        super().__init__("User with this email not found", "Пользователь с таким email не найден")


class IncorrectPassword(AuthenticationError):
    def __init__(self):
        super().__init__("Incorrect password", "Неверный пароль")


class PersistenceError(ForumAPIError):
    def __init__(self, msg: str = "Storage failure"):
        super().__init__(f"{msg}. Please try again later", f"{msg}. Ошибка хранилища, попробуйте позже")


class SessionCreationError(PersistenceError):
    def __init__(self):
        ForumAPIError.__init__(
            self, "Session creation failed. Please try again later", "Ошибка создания сессии, попробуйте позже"
        )
