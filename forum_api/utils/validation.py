import re

from forum_api.exceptions import EmptyField, FieldTooLong, FieldTooShort, InvalidFormat
from forum_api.settings import get_settings


USERNAME_RE = re.compile(r"^[a-zA-Z0-9_-]+$")
SLUG_RE = re.compile(r"^[a-z0-9-]+$")


def check_text(field: str, value: str, max_length: int, *, min_length: int = 1) -> str:
    """Strip the value and check its length, returns the stripped value"""
    value = (value or "").strip()
    if not value:
        raise EmptyField(field)
    if len(value) < min_length:
        raise FieldTooShort(field, min_length)
    if len(value) > max_length:
        raise FieldTooLong(field, max_length)
    return value


def validate_username(username: str) -> str:
    settings = get_settings()
    username = check_text(
        "username", username, settings.MAX_USERNAME_LENGTH, min_length=settings.MIN_USERNAME_LENGTH
    )
    if USERNAME_RE.match(username) is None:
        raise InvalidFormat(
            "username", "latin letters, digits, underscore and hyphen", "латинские буквы, цифры, подчеркивание и дефис"
        )
    return username


def validate_email(email: str) -> str:
    return check_text("email", email, get_settings().MAX_EMAIL_LENGTH).lower()


def validate_password(password: str) -> str:
    # Passwords are not stripped
    settings = get_settings()
    if len(password) < settings.MIN_PASSWORD_LENGTH:
        raise FieldTooShort("password", settings.MIN_PASSWORD_LENGTH)
    if len(password) > settings.MAX_PASSWORD_LENGTH:
        raise FieldTooLong("password", settings.MAX_PASSWORD_LENGTH)
    return password


def validate_post(title: str, content: str) -> tuple[str, str]:
    settings = get_settings()
    return (
        check_text("title", title, settings.MAX_TITLE_LENGTH),
        check_text("content", content, settings.MAX_POST_LENGTH),
    )


def validate_comment(content: str) -> str:
    return check_text("content", content, get_settings().MAX_COMMENT_LENGTH)


def validate_category(name: str, slug: str, description: str) -> tuple[str, str, str]:
    settings = get_settings()
    name = check_text("name", name, settings.MAX_CATEGORY_NAME_LENGTH)
    slug = check_text("slug", slug, settings.MAX_SLUG_LENGTH)
    if SLUG_RE.match(slug) is None:
        raise InvalidFormat("slug", "lowercase letters, digits and hyphen", "строчные буквы, цифры и дефис")
    description = (description or "").strip()
    if len(description) > settings.MAX_DESCRIPTION_LENGTH:
        raise FieldTooLong("description", settings.MAX_DESCRIPTION_LENGTH)
    return name, slug, description
