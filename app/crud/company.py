"""
CRUD operations for companies.

Records are plain dicts keyed by the external field names
(handle, name, description, numEmployees, logoUrl).
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import text
from sqlalchemy.orm import Session

from app.core.exceptions import DuplicateError, NotFoundError
from app.crud.sql import bind_positional, like_pattern, param_name, sql_for_partial_update
from app.crud.job import row_to_job

logger = logging.getLogger(__name__)

COMPANY_COLUMNS = (
    'handle, name, description, '
    'num_employees AS "numEmployees", logo_url AS "logoUrl"'
)

FIELD_TO_COLUMN = {
    "numEmployees": "num_employees",
    "logoUrl": "logo_url",
}


def _where_clause(filters: Dict[str, Any]) -> Tuple[str, Dict[str, Any]]:
    """
    Build the WHERE expression for a company search.

    Recognized keys: name (case-insensitive substring), minEmployees and
    maxEmployees (inclusive bounds). Returns ("", {}) when no key is present.
    """
    clauses = []
    params: Dict[str, Any] = {}

    if filters.get("name") is not None:
        clauses.append("LOWER(name) LIKE LOWER(:name) ESCAPE '\\'")
        params["name"] = like_pattern(filters["name"])
    if filters.get("minEmployees") is not None:
        clauses.append("num_employees >= :min_employees")
        params["min_employees"] = filters["minEmployees"]
    if filters.get("maxEmployees") is not None:
        clauses.append("num_employees <= :max_employees")
        params["max_employees"] = filters["maxEmployees"]

    return " AND ".join(clauses), params


def create(db: Session, data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Create a company.

    Args:
        db: Database session
        data: {handle, name, description, numEmployees, logoUrl}

    Returns:
        The created company record

    Raises:
        DuplicateError: If the handle is already taken
    """
    handle = data["handle"]
    duplicate_check = db.execute(
        text("SELECT handle FROM companies WHERE handle = :handle"),
        {"handle": handle},
    ).first()

    if duplicate_check:
        raise DuplicateError(f"Duplicate company: {handle}")

    result = db.execute(
        text(f"""INSERT INTO companies
                 (handle, name, description, num_employees, logo_url)
                 VALUES (:handle, :name, :description, :num_employees, :logo_url)
                 RETURNING {COMPANY_COLUMNS}"""),
        {
            "handle": handle,
            "name": data["name"],
            "description": data["description"],
            "num_employees": data.get("numEmployees"),
            "logo_url": data.get("logoUrl"),
        },
    )
    company = dict(result.mappings().one())
    db.commit()

    logger.info(f"Created company {handle}")
    return company


def find_all(db: Session) -> List[Dict[str, Any]]:
    """Return all companies ordered by name."""
    result = db.execute(
        text(f"""SELECT {COMPANY_COLUMNS}
                 FROM companies
                 ORDER BY name""")
    )
    return [dict(row) for row in result.mappings()]


def find_filtered(db: Session, filters: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
    """
    Return companies matching every supplied filter, ordered by name.

    Filters: name, minEmployees, maxEmployees. The caller checks that
    minEmployees <= maxEmployees. An empty filter matches every company.
    """
    where, params = _where_clause(filters or {})
    if not where:
        return find_all(db)

    result = db.execute(
        text(f"""SELECT {COMPANY_COLUMNS}
                 FROM companies
                 WHERE {where}
                 ORDER BY name"""),
        params,
    )
    return [dict(row) for row in result.mappings()]


def get(db: Session, handle: str) -> Dict[str, Any]:
    """
    Return a company with its jobs.

    ``jobs`` is a list of {id, title, salary, equity, companyHandle},
    ordered by id; empty when the company has none.

    Raises:
        NotFoundError: If no such company
    """
    rows = db.execute(
        text("""SELECT companies.handle,
                       companies.name,
                       companies.description,
                       companies.num_employees AS "numEmployees",
                       companies.logo_url AS "logoUrl",
                       jobs.id,
                       jobs.title,
                       jobs.salary,
                       jobs.equity,
                       jobs.company_handle AS "companyHandle"
                FROM companies
                LEFT JOIN jobs ON companies.handle = jobs.company_handle
                WHERE companies.handle = :handle
                ORDER BY jobs.id"""),
        {"handle": handle},
    ).mappings().all()

    if not rows:
        raise NotFoundError(f"No company: {handle}")

    first = rows[0]
    company = {
        "handle": first["handle"],
        "name": first["name"],
        "description": first["description"],
        "numEmployees": first["numEmployees"],
        "logoUrl": first["logoUrl"],
    }
    # LEFT JOIN yields a single all-NULL job row for a company without jobs
    company["jobs"] = [row_to_job(row) for row in rows if row["id"] is not None]
    return company


def update(db: Session, handle: str, data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Partially update a company.

    Data can include: {name, description, numEmployees, logoUrl}

    Raises:
        BadRequestError: If data is empty
        NotFoundError: If no such company
    """
    set_cols, values = sql_for_partial_update(data, FIELD_TO_COLUMN)
    handle_param = param_name(len(values) + 1)

    params = bind_positional(values)
    params[handle_param] = handle

    result = db.execute(
        text(f"""UPDATE companies
                 SET {set_cols}
                 WHERE handle = :{handle_param}
                 RETURNING {COMPANY_COLUMNS}"""),
        params,
    )
    company = result.mappings().first()

    if not company:
        db.rollback()
        raise NotFoundError(f"No company: {handle}")

    company = dict(company)
    db.commit()

    logger.info(f"Updated company {handle}: {', '.join(data)}")
    return company


def remove(db: Session, handle: str) -> None:
    """
    Delete a company.

    Raises:
        NotFoundError: If no such company
    """
    result = db.execute(
        text("""DELETE FROM companies
                WHERE handle = :handle
                RETURNING handle"""),
        {"handle": handle},
    )
    deleted = result.first()

    if not deleted:
        db.rollback()
        raise NotFoundError(f"No company: {handle}")

    db.commit()
    logger.info(f"Removed company {handle}")
