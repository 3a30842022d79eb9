from typing import Optional, Tuple

from email_validator import validate_email, EmailNotValidError
from pydantic import AnyHttpUrl, TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import func
from sqlmodel import Session, select

from claimdesk.core.errors import ValidationError

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10

_url_adapter = TypeAdapter(AnyHttpUrl)


def paginate(page: Optional[int] = None, limit: Optional[int] = None) -> Tuple[int, int, int]:
    """Returns (page, limit, offset) with 1/10 defaults."""
    page = page if page and page > 0 else DEFAULT_PAGE
    limit = limit if limit and limit > 0 else DEFAULT_LIMIT
    return page, limit, (page - 1) * limit


def page_result(items: list, total: int) -> dict:
    return {"items": items, "total": total}


def count_rows(session: Session, statement) -> int:
    """
    COUNT(*) over an arbitrary select. Runs as its own statement, so under
    concurrent writes it may disagree with the page it accompanies.
    """
    count_stmt = select(func.count()).select_from(statement.order_by(None).subquery())
    return session.exec(count_stmt).one()


def build_update_values(fields: dict, drop_empty_strings: bool = False) -> dict:
    values = {}
    for key, value in fields.items():
        if value is None:
            continue
        if drop_empty_strings and isinstance(value, str) and value == "":
            continue
        values[key] = value
    if not values:
        raise ValidationError("No fields to update")
    return values


def require(fields: dict, *names: str):
    missing = [n for n in names if fields.get(n) in (None, "")]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")


def check_email(value: Optional[str]):
    if not value:
        return
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        raise ValidationError(f"Invalid email: {value}")


def check_url(value: Optional[str], label: str = "URL"):
    if not value:
        return
    try:
        _url_adapter.validate_python(value)
    except PydanticValidationError:
        raise ValidationError(f"Invalid {label}: {value}")


def check_contact_fields(fields: dict):
    """Shared rules for insurer and TPA records."""
    require(fields, "name")
    check_email(fields.get("email"))
    check_url(fields.get("portal_link"), "portal link")
