"""
Field validation - Pure rule checks for registration payloads.

Every function here builds and returns a fresh error list; nothing is
kept between calls, so the module is safe to share across concurrent
requests.

Rule Order
==========

Fields are checked email -> name -> password. Within a field, rules run
in a fixed order and all violations are collected (no fail-fast), except
that a missing value reports only "required" for that field.

Email:     required | format | max 255
Name:      required | min 2 | max 100 | allowed characters
Password:  required | min 8 | max 128 | lowercase | uppercase | digit | special | UTF-8 encodable

Non-string inputs are coerced to text first, so the functions never raise
on a wrongly-typed field.
"""

import re

from email_validator import EmailNotValidError, validate_email as check_email_syntax

from .models import FieldError, RegistrationPayload, ValidationResult, as_text

EMAIL_MAX_LENGTH = 255
NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 100
PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 128
PASSWORD_SPECIAL_CHARACTERS = "@$!%*?&"

_NAME_PATTERN = re.compile(r"[A-Za-z \-']+")
_LOWERCASE = re.compile(r"[a-z]")
_UPPERCASE = re.compile(r"[A-Z]")
_DIGIT = re.compile(r"[0-9]")
_SPECIAL = re.compile(f"[{re.escape(PASSWORD_SPECIAL_CHARACTERS)}]")


def validate_registration(payload: RegistrationPayload) -> ValidationResult:
    """
    Check a registration payload against all field rules.

    Args:
        payload: Registration data (fields may be empty)

    Returns:
        ValidationResult with every violation, in rule order
    """
    errors = [
        *validate_email(payload.email),
        *validate_name(payload.name),
        *validate_password(payload.password),
    ]
    return ValidationResult(errors=tuple(errors))


def validate_email(email: object) -> list[FieldError]:
    email = as_text(email)
    if _is_blank(email):
        return [FieldError("email", "Email is required")]

    errors = []
    if not _has_email_syntax(email):
        errors.append(FieldError("email", "Invalid email format"))
    if len(email) > EMAIL_MAX_LENGTH:
        errors.append(
            FieldError("email", f"Email must not exceed {EMAIL_MAX_LENGTH} characters")
        )
    return errors


def validate_name(name: object) -> list[FieldError]:
    name = as_text(name)
    if _is_blank(name):
        return [FieldError("name", "Name is required")]

    errors = []
    if len(name) < NAME_MIN_LENGTH:
        errors.append(
            FieldError("name", f"Name must be at least {NAME_MIN_LENGTH} characters long")
        )
    if len(name) > NAME_MAX_LENGTH:
        errors.append(
            FieldError("name", f"Name must not exceed {NAME_MAX_LENGTH} characters")
        )
    if not _NAME_PATTERN.fullmatch(name):
        errors.append(
            FieldError(
                "name",
                "Name can only contain letters, spaces, hyphens, and apostrophes",
            )
        )
    return errors


def validate_password(password: object) -> list[FieldError]:
    password = as_text(password)
    if _is_blank(password):
        return [FieldError("password", "Password is required")]

    errors = []
    if len(password) < PASSWORD_MIN_LENGTH:
        errors.append(
            FieldError(
                "password",
                f"Password must be at least {PASSWORD_MIN_LENGTH} characters long",
            )
        )
    if len(password) > PASSWORD_MAX_LENGTH:
        errors.append(
            FieldError(
                "password",
                f"Password must not exceed {PASSWORD_MAX_LENGTH} characters",
            )
        )
    if not _LOWERCASE.search(password):
        errors.append(
            FieldError("password", "Password must contain at least one lowercase letter")
        )
    if not _UPPERCASE.search(password):
        errors.append(
            FieldError("password", "Password must contain at least one uppercase letter")
        )
    if not _DIGIT.search(password):
        errors.append(FieldError("password", "Password must contain at least one number"))
    if not _SPECIAL.search(password):
        errors.append(
            FieldError(
                "password",
                "Password must contain at least one special character "
                f"({PASSWORD_SPECIAL_CHARACTERS})",
            )
        )
    if not _is_utf8(password):
        errors.append(FieldError("password", "Password contains invalid characters"))
    return errors


def _is_blank(value: str) -> bool:
    return value.strip() == ""


def _is_utf8(value: str) -> bool:
    # Lone surrogates survive JSON decoding but cannot be encoded
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def _has_email_syntax(email: str) -> bool:
    """Syntax-only check (no DNS), same library pydantic's EmailStr uses."""
    if not _is_utf8(email):
        return False
    try:
        check_email_syntax(email, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True
