"""
Test suite for the company CRUD module.

Tests cover:
- Creation and duplicate detection
- Listing and filtered search
- Retrieval with jobs
- Partial update and removal
"""

import pytest
from sqlalchemy import text

from app.core.exceptions import BadRequestError, DuplicateError, NotFoundError
from app.crud import company as company_crud
from app.crud import job as job_crud


NEW_COMPANY = {
    "handle": "new",
    "name": "New",
    "description": "New Description",
    "numEmployees": 1,
    "logoUrl": "http://new.img",
}

C1 = {"handle": "c1", "name": "C1", "description": "Desc1", "numEmployees": 1, "logoUrl": "http://c1.img"}
C2 = {"handle": "c2", "name": "C2", "description": "Desc2", "numEmployees": 2, "logoUrl": "http://c2.img"}
C3 = {"handle": "c3", "name": "C3", "description": "Desc3", "numEmployees": 3, "logoUrl": "http://c3.img"}


class TestCreate:

    def test_create(self, db_session, seed):
        company = company_crud.create(db_session, NEW_COMPANY)
        assert company == NEW_COMPANY

        row = db_session.execute(
            text("SELECT handle, name, num_employees, logo_url FROM companies WHERE handle = 'new'")
        ).one()
        assert tuple(row) == ("new", "New", 1, "http://new.img")

    def test_create_without_optional_fields(self, db_session, seed):
        company = company_crud.create(db_session, {
            "handle": "bare",
            "name": "Bare",
            "description": "No size, no logo",
        })
        assert company["numEmployees"] is None
        assert company["logoUrl"] is None

    def test_duplicate_handle(self, db_session, seed):
        company_crud.create(db_session, NEW_COMPANY)
        with pytest.raises(DuplicateError):
            company_crud.create(db_session, NEW_COMPANY)

    def test_duplicate_is_bad_request(self, db_session, seed):
        with pytest.raises(BadRequestError):
            company_crud.create(db_session, dict(C1))

    def test_name_need_not_be_unique(self, db_session, seed):
        """Only the handle is unique; a second company may reuse a name"""
        company = company_crud.create(db_session, {
            "handle": "c1b",
            "name": "C1",
            "description": "Another C1",
        })
        assert company["handle"] == "c1b"
        same_name = company_crud.find_filtered(db_session, {"name": "C1"})
        assert sorted(c["handle"] for c in same_name) == ["c1", "c1b"]


class TestFindAll:

    def test_ordered_by_name(self, db_session, seed):
        assert company_crud.find_all(db_session) == [C1, C2, C3]

    def test_empty_table(self, db_session):
        assert company_crud.find_all(db_session) == []


class TestFindFiltered:

    def test_empty_filter_matches_find_all(self, db_session, seed):
        assert company_crud.find_filtered(db_session, {}) == company_crud.find_all(db_session)
        assert company_crud.find_filtered(db_session) == company_crud.find_all(db_session)

    def test_name_case_insensitive(self, db_session, seed):
        assert company_crud.find_filtered(db_session, {"name": "c"}) == [C1, C2, C3]
        assert company_crud.find_filtered(db_session, {"name": "1"}) == [C1]

    def test_min_employees_inclusive(self, db_session, seed):
        assert company_crud.find_filtered(db_session, {"minEmployees": 2}) == [C2, C3]

    def test_max_employees_inclusive(self, db_session, seed):
        assert company_crud.find_filtered(db_session, {"maxEmployees": 2}) == [C1, C2]

    def test_all_filters(self, db_session, seed):
        result = company_crud.find_filtered(
            db_session, {"name": "C", "minEmployees": 2, "maxEmployees": 2}
        )
        assert result == [C2]

    def test_no_match(self, db_session, seed):
        assert company_crud.find_filtered(db_session, {"name": "nope"}) == []

    def test_combined_filters_intersect(self, db_session, seed):
        """Two filters together return exactly what both return alone"""
        by_min = company_crud.find_filtered(db_session, {"minEmployees": 2})
        by_max = company_crud.find_filtered(db_session, {"maxEmployees": 2})
        both = company_crud.find_filtered(db_session, {"minEmployees": 2, "maxEmployees": 2})
        assert both == [c for c in by_min if c in by_max]

    def test_wildcards_matched_literally(self, db_session, seed):
        assert company_crud.find_filtered(db_session, {"name": "%"}) == []
        assert company_crud.find_filtered(db_session, {"name": "_"}) == []

    def test_filter_value_not_executed(self, db_session, seed):
        result = company_crud.find_filtered(db_session, {"name": "' OR 1=1 --"})
        assert result == []
        assert len(company_crud.find_all(db_session)) == 3


class TestGet:

    def test_get_with_jobs(self, db_session, seed):
        company = company_crud.get(db_session, "c1")
        assert {k: v for k, v in company.items() if k != "jobs"} == C1
        assert [job["title"] for job in company["jobs"]] == ["j1", "j2", "j3"]
        assert company["jobs"][0] == {
            "id": seed["j1"],
            "title": "j1",
            "salary": 5,
            "equity": "0.1",
            "companyHandle": "c1",
        }

    def test_get_without_jobs(self, db_session, seed):
        company = company_crud.get(db_session, "c3")
        assert company["jobs"] == []

    def test_not_found(self, db_session, seed):
        with pytest.raises(NotFoundError):
            company_crud.get(db_session, "nope")


class TestUpdate:
    update_data = {
        "name": "New",
        "description": "New Description",
        "numEmployees": 10,
        "logoUrl": "http://new.img",
    }

    def test_update(self, db_session, seed):
        company = company_crud.update(db_session, "c1", self.update_data)
        assert company == {"handle": "c1", **self.update_data}
        assert company_crud.get(db_session, "c1")["name"] == "New"

    def test_update_single_field(self, db_session, seed):
        company = company_crud.update(db_session, "c1", {"numEmployees": 7})
        assert company == {**C1, "numEmployees": 7}

    def test_update_to_existing_name(self, db_session, seed):
        company = company_crud.update(db_session, "c1", {"name": "C2"})
        assert company["name"] == "C2"

    def test_update_null_fields(self, db_session, seed):
        company = company_crud.update(db_session, "c1", {"numEmployees": None, "logoUrl": None})
        assert company["numEmployees"] is None
        assert company["logoUrl"] is None

    def test_not_found(self, db_session, seed):
        with pytest.raises(NotFoundError):
            company_crud.update(db_session, "nope", self.update_data)
        assert company_crud.find_all(db_session) == [C1, C2, C3]

    def test_empty_data(self, db_session, seed):
        with pytest.raises(BadRequestError):
            company_crud.update(db_session, "c1", {})
        assert company_crud.find_all(db_session) == [C1, C2, C3]


class TestRemove:

    def test_remove(self, db_session, seed):
        company_crud.remove(db_session, "c3")
        with pytest.raises(NotFoundError):
            company_crud.get(db_session, "c3")
        assert company_crud.find_all(db_session) == [C1, C2]

    def test_remove_cascades_to_jobs(self, db_session, seed):
        company_crud.remove(db_session, "c1")
        for title in ("j1", "j2", "j3"):
            with pytest.raises(NotFoundError):
                job_crud.get(db_session, seed[title])
        assert [job["title"] for job in job_crud.find_all(db_session)] == ["Senior Engineer"]

    def test_not_found(self, db_session, seed):
        with pytest.raises(NotFoundError):
            company_crud.remove(db_session, "nope")
        assert len(company_crud.find_all(db_session)) == 3
