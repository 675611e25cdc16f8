"""
CRUD operations for jobs.

Records are plain dicts: {id, title, salary, equity, companyHandle}.
Equity comes back as a fixed-point decimal string ("0.1", "0") so no
float rounding reaches the caller.
"""

import logging
from decimal import Decimal
from typing import Any, Dict, List, Mapping, Optional, Tuple

from sqlalchemy import Numeric, bindparam, text
from sqlalchemy.orm import Session

from app.core.exceptions import BadRequestError, NotFoundError
from app.crud.sql import bind_positional, like_pattern, param_name, sql_for_partial_update

logger = logging.getLogger(__name__)

JOB_COLUMNS = 'id, title, salary, equity, company_handle AS "companyHandle"'


def _equity_bind(name: str):
    """Typed bind so Decimal equity reaches drivers without a native decimal type"""
    return bindparam(name, type_=Numeric())


def format_equity(value: Any) -> Optional[str]:
    """Render a stored equity value as exact decimal text."""
    if value is None:
        return None
    # str() first so a float from drivers without a native decimal type
    # keeps its shortest repr instead of the binary expansion
    return format(Decimal(str(value)).normalize(), "f")


def row_to_job(row: Mapping[str, Any]) -> Dict[str, Any]:
    return {
        "id": row["id"],
        "title": row["title"],
        "salary": row["salary"],
        "equity": format_equity(row["equity"]),
        "companyHandle": row["companyHandle"],
    }


def _where_clause(filters: Dict[str, Any]) -> Tuple[str, Dict[str, Any]]:
    """
    Build the WHERE expression for a job search.

    Recognized keys: title (case-insensitive substring), minSalary
    (inclusive) and hasEquity. hasEquity=False adds no condition.
    Returns ("", {}) when nothing applies.
    """
    clauses = []
    params: Dict[str, Any] = {}

    if filters.get("title") is not None:
        clauses.append("LOWER(title) LIKE LOWER(:title) ESCAPE '\\'")
        params["title"] = like_pattern(filters["title"])
    if filters.get("minSalary") is not None:
        clauses.append("salary >= :min_salary")
        params["min_salary"] = filters["minSalary"]
    if filters.get("hasEquity") is True:
        clauses.append("equity > 0")

    return " AND ".join(clauses), params


def create(db: Session, data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Create a job.

    Args:
        db: Database session
        data: {title, salary, equity, companyHandle}

    Returns:
        The created job, including its database-assigned id

    Raises:
        BadRequestError: If companyHandle does not name an existing company
    """
    company_handle = data["companyHandle"]
    company_check = db.execute(
        text("SELECT handle FROM companies WHERE handle = :handle"),
        {"handle": company_handle},
    ).first()

    if not company_check:
        raise BadRequestError(f"No company: {company_handle}")

    result = db.execute(
        text(f"""INSERT INTO jobs
                 (title, salary, equity, company_handle)
                 VALUES (:title, :salary, :equity, :company_handle)
                 RETURNING {JOB_COLUMNS}""").bindparams(_equity_bind("equity")),
        {
            "title": data["title"],
            "salary": data.get("salary"),
            "equity": data.get("equity"),
            "company_handle": company_handle,
        },
    )
    job = row_to_job(result.mappings().one())
    db.commit()

    logger.info(f"Created job {job['id']} for company {company_handle}")
    return job


def find_all(db: Session) -> List[Dict[str, Any]]:
    """Return all jobs ordered by id."""
    result = db.execute(
        text(f"""SELECT {JOB_COLUMNS}
                 FROM jobs
                 ORDER BY id""")
    )
    return [row_to_job(row) for row in result.mappings()]


def find_filtered(db: Session, filters: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
    """
    Return jobs matching every supplied filter, ordered by id.

    Filters: title, minSalary, hasEquity. An empty filter (or one holding
    only hasEquity=False) matches every job.
    """
    where, params = _where_clause(filters or {})
    if not where:
        return find_all(db)

    result = db.execute(
        text(f"""SELECT {JOB_COLUMNS}
                 FROM jobs
                 WHERE {where}
                 ORDER BY id"""),
        params,
    )
    return [row_to_job(row) for row in result.mappings()]


def get(db: Session, job_id: int) -> Dict[str, Any]:
    """
    Retrieve a job by its ID.

    Raises:
        NotFoundError: If no such job
    """
    row = db.execute(
        text(f"""SELECT {JOB_COLUMNS}
                 FROM jobs
                 WHERE id = :id"""),
        {"id": job_id},
    ).mappings().first()

    if not row:
        raise NotFoundError(f"No job: {job_id}")

    return row_to_job(row)


def update(db: Session, job_id: int, data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Partially update a job.

    Data can include: {title, salary, equity}. id and companyHandle are
    immutable; the request schema rejects them before this is called.

    Raises:
        BadRequestError: If data is empty
        NotFoundError: If no such job
    """
    set_cols, values = sql_for_partial_update(data)
    id_param = param_name(len(values) + 1)

    params = bind_positional(values)
    params[id_param] = job_id

    statement = text(f"""UPDATE jobs
                         SET {set_cols}
                         WHERE id = :{id_param}
                         RETURNING {JOB_COLUMNS}""")
    if "equity" in data:
        statement = statement.bindparams(_equity_bind(param_name(list(data).index("equity") + 1)))

    result = db.execute(statement, params)
    row = result.mappings().first()

    if not row:
        db.rollback()
        raise NotFoundError(f"No job: {job_id}")

    job = row_to_job(row)
    db.commit()

    logger.info(f"Updated job {job_id}: {', '.join(data)}")
    return job


def remove(db: Session, job_id: int) -> None:
    """
    Delete a job.

    Raises:
        NotFoundError: If no such job
    """
    result = db.execute(
        text("""DELETE FROM jobs
                WHERE id = :id
                RETURNING id"""),
        {"id": job_id},
    )
    deleted = result.first()

    if not deleted:
        db.rollback()
        raise NotFoundError(f"No job: {job_id}")

    db.commit()
    logger.info(f"Removed job {job_id}")
