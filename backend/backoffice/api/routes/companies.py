"""companies.py — Company overview and employee roster for the user-management detail page.

Both are derived from a per-company seed, so repeated calls agree.
"""

from __future__ import annotations

import hashlib
import logging
from typing import Annotated, Literal

from fastapi import APIRouter, Depends, Path, Query

from backoffice.api.deps import ConfigDep, simulate_latency
from backoffice.api.envelope import ok
from backoffice.mock.fixtures import FixtureGenerator, RecordKind
from backoffice.mock.pagination import paginate, parse_page_params, sort_items

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/mock/users/companies", tags=["companies"], dependencies=[Depends(simulate_latency)])


def company_seed(company_id: str, seed: int | None = None) -> int:
    """Stable seed per company id, so one company always looks the same."""
    digest = hashlib.sha256(f"{company_id}:{seed if seed is not None else ''}".encode()).hexdigest()
    return int(digest[:12], 16)


@router.get("/{company_id}/overview")
async def get_company_overview(
    config: ConfigDep,
    company_id: Annotated[str, Path(min_length=1)],
    seed: Annotated[int | None, Query()] = None,
):
    generator = FixtureGenerator(company_seed(company_id, seed if seed is not None else config.mock_seed))
    overview = generator.one("company_overview")
    overview["id"] = company_id
    logger.debug("Mock: GET /mock/users/companies/%s/overview", company_id)
    return ok(overview)


EMPLOYEES_PER_COMPANY = 200
EMPLOYEE_PAGE_SIZE = 10

# Dotted keys read inside the nested ``user`` object.
SORTABLE_EMPLOYEE_FIELDS = (
    "user.name",
    "user.email",
    "employmentType",
    "status",
    "salary",
    "dateOfJoining",
    "dateOfLeaving",
    "createdAt",
    "updatedAt",
)


def _field(employee: dict, path: str):
    value = employee
    for part in path.split("."):
        value = value.get(part) if isinstance(value, dict) else None
    return value.lower() if isinstance(value, str) and path.startswith("user.") else value


@router.get("/{company_id}/employees")
async def list_company_employees(
    config: ConfigDep,
    company_id: Annotated[str, Path(min_length=1)],
    search: Annotated[str | None, Query()] = None,
    status: Annotated[str | None, Query()] = None,
    sort_by: Annotated[str, Query(alias="sortBy")] = "createdAt",
    sort_order: Annotated[Literal["asc", "desc"], Query(alias="sortOrder")] = "desc",
    page: Annotated[str | None, Query()] = None,
    limit: Annotated[str | None, Query()] = None,
    seed: Annotated[int | None, Query()] = None,
):
    """Page through a company's employees.

    ``search`` matches name, email or phone. An unknown ``sortBy`` falls
    back to ``createdAt``.
    """
    page_number, page_size = parse_page_params(page, limit, EMPLOYEE_PAGE_SIZE)
    generator = FixtureGenerator(company_seed(company_id, seed if seed is not None else config.mock_seed))
    employees = generator.generate(RecordKind.EMPLOYEE, EMPLOYEES_PER_COMPANY)
    for employee in employees:
        employee["companyId"] = company_id

    term = (search or "").strip().lower()
    if term:
        employees = [
            e for e in employees
            if any(term in str(e["user"][key]).lower() for key in ("name", "email", "phone"))
        ]
    if status:
        employees = [e for e in employees if e["status"] == status]

    field = sort_by if sort_by in SORTABLE_EMPLOYEE_FIELDS else "createdAt"
    employees = sort_items(employees, field, sort_order, key=lambda e: _field(e, field))
    logger.debug("Mock: GET /mock/users/companies/%s/employees", company_id)
    return ok({"companyId": company_id, **paginate(employees, page_number, page_size).model_dump(by_alias=True)})
