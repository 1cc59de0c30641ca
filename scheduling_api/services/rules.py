"""
Business-rule checks shared by the resource routers.

They return FieldErrors / output records instead of raising: a duplicate
code or a dangling foreign key is an expected outcome, reported as a 400
with the same shape as a schema validation failure.
"""
from __future__ import annotations

from typing import Any, Callable, Iterable, Optional

from sqlalchemy.orm import Session

from scheduling_api.core.contract import NotFoundBody
from scheduling_api.core.validation import ErrorCode, FieldError, ValidationErrorReport
from scheduling_api.db.base import Base
from scheduling_api.db.repository import Repository


def not_found(description: str) -> dict[int, NotFoundBody]:
    return {404: NotFoundBody(description=description)}


def bad_request(errors: list[FieldError]) -> dict[int, ValidationErrorReport]:
    return {400: ValidationErrorReport(errors=errors)}


def already_exists(path: list[str], message: str) -> FieldError:
    return FieldError(code=ErrorCode.ALREADY_EXISTS, path=path, message=message)


def reference_exists(path: list[str], message: str) -> FieldError:
    return FieldError(code=ErrorCode.REFERENCE_EXISTS, path=path, message=message)


def check_unique(
    db: Session,
    model: type[Base],
    field: str,
    value: Any,
    *,
    exclude_id: Optional[int] = None,
    label: str = "record",
) -> list[FieldError]:
    """ALREADY_EXISTS error when another row already holds `value` in `field`."""
    if value is None:
        return []
    existing = Repository(db, model).find_first(**{field: value})
    if existing is None or existing.id == exclude_id:
        return []
    return [already_exists(["body", field], f"{label.capitalize()} with this {field} already exists")]


def check_reference(
    db: Session, model: type[Base], field: str, value: Optional[int], label: str
) -> list[FieldError]:
    """REFERENCE_NOT_FOUND error when `value` is set but no such row exists."""
    if value is None or Repository(db, model).find_unique(value) is not None:
        return []
    return [FieldError(
        code=ErrorCode.REFERENCE_NOT_FOUND,
        path=["body", field],
        message=f"{label} {value} not found",
    )]


def check_references(
    db: Session, model: type[Base], field: str, values: Optional[Iterable[int]], label: str
) -> list[FieldError]:
    """One REFERENCE_NOT_FOUND error per missing id, pointing at its list index."""
    if values is None:
        return []
    values = list(values)
    missing = set(Repository(db, model).missing_ids(values))
    return [
        FieldError(
            code=ErrorCode.REFERENCE_NOT_FOUND,
            path=["body", field, str(index)],
            message=f"{label} {value} not found",
        )
        for index, value in enumerate(values)
        if value in missing
    ]


def changes(body: Any) -> dict[str, Any]:
    """Fields the client actually sent in a PATCH body. An explicit null means "leave as is"."""
    return {k: v for k, v in body.model_dump(exclude_unset=True).items() if v is not None}


def contains(column: Any, text: str) -> Any:
    """Case-insensitive substring filter. `%` and `_` in `text` match literally."""
    escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return column.ilike(f"%{escaped}%", escape="\\")


def check_listed_ids(
    db: Session,
    model: type[Base],
    ids: list[int],
    path_of: Callable[[int], list[str]],
    label: str,
) -> list[FieldError]:
    """
    Errors for a client-supplied id list: INVALID_VALUE for an id listed twice,
    REFERENCE_NOT_FOUND for one with no row. `path_of(index)` gives the error path.
    """
    errors = []
    seen = set()
    for index, value in enumerate(ids):
        if value in seen:
            errors.append(FieldError(
                code=ErrorCode.INVALID_VALUE,
                path=path_of(index),
                message=f"{label} {value} is listed more than once",
            ))
        seen.add(value)
    missing = set(Repository(db, model).missing_ids(ids))
    errors += [
        FieldError(
            code=ErrorCode.REFERENCE_NOT_FOUND,
            path=path_of(index),
            message=f"{label} {value} not found",
        )
        for index, value in enumerate(ids)
        if value in missing
    ]
    return errors
