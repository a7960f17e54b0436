"""
Tests for company database operations.
"""

import pytest

from app.core.exceptions import BadRequestError, NotFoundError
from app.crud import company as company_crud
from app.crud import job as job_crud

NEW_COMPANY = {
    "handle": "new",
    "name": "New",
    "description": "New Description",
    "numEmployees": 1,
    "logoUrl": "http://new.img",
}


class TestCreate:

    def test_create(self, db_session):
        company = company_crud.create(db_session, NEW_COMPANY)

        assert company == NEW_COMPANY
        assert company_crud.get(db_session, "new")["jobs"] == []

    def test_duplicate(self, db_session):
        company_crud.create(db_session, NEW_COMPANY)

        with pytest.raises(BadRequestError) as exc_info:
            company_crud.create(db_session, NEW_COMPANY)

        assert exc_info.value.message == "Duplicate company: new"

    def test_duplicate_name(self, db_session):
        with pytest.raises(BadRequestError) as exc_info:
            company_crud.create(db_session, {**NEW_COMPANY, "name": "C1"})

        assert exc_info.value.message == "Duplicate company name: C1"
        # Session is still usable after the rollback
        assert len(company_crud.find_all(db_session)) == 3


class TestFindAll:

    def test_all(self, db_session):
        companies = company_crud.find_all(db_session)

        assert [c["handle"] for c in companies] == ["c1", "c2", "c3"]
        assert companies[0] == {
            "handle": "c1",
            "name": "C1",
            "description": "Desc1",
            "numEmployees": 1,
            "logoUrl": "http://c1.img",
        }

    def test_name_like(self, db_session):
        companies = company_crud.find_all(db_session, name_like="2")

        assert [c["handle"] for c in companies] == ["c2"]

    def test_name_like_is_case_insensitive(self, db_session):
        assert len(company_crud.find_all(db_session, name_like="c")) == 3

    def test_employee_range(self, db_session):
        companies = company_crud.find_all(db_session, min_employees=2, max_employees=2)

        assert [c["handle"] for c in companies] == ["c2"]

    def test_min_only(self, db_session):
        companies = company_crud.find_all(db_session, min_employees=2)

        assert [c["handle"] for c in companies] == ["c2", "c3"]

    def test_min_greater_than_max(self, db_session):
        with pytest.raises(BadRequestError) as exc_info:
            company_crud.find_all(db_session, min_employees=3, max_employees=1)

        assert exc_info.value.message == "Cannot set minEmployees to greater than maxEmployees"


class TestGet:

    def test_get_with_jobs(self, db_session, job_ids):
        company = company_crud.get(db_session, "c1")

        assert company["handle"] == "c1"
        assert len(company["jobs"]) == 1
        job = company["jobs"][0]
        assert job["id"] == job_ids[0]
        assert job["title"] == "Comp1 Job"
        assert job["salary"] == 10000
        assert "companyHandle" not in job

    def test_not_found(self, db_session):
        with pytest.raises(NotFoundError) as exc_info:
            company_crud.get(db_session, "nope")

        assert exc_info.value.message == "No company: nope"


class TestUpdate:

    def test_update(self, db_session):
        company = company_crud.update(db_session, "c1", {
            "name": "New Name",
            "numEmployees": 10,
            "logoUrl": None,
        })

        assert company == {
            "handle": "c1",
            "name": "New Name",
            "description": "Desc1",
            "numEmployees": 10,
            "logoUrl": None,
        }

    def test_not_found(self, db_session):
        with pytest.raises(NotFoundError):
            company_crud.update(db_session, "nope", {"name": "x"})

    def test_taken_name(self, db_session):
        with pytest.raises(BadRequestError) as exc_info:
            company_crud.update(db_session, "c1", {"name": "C2"})

        assert exc_info.value.message == "Duplicate company name: C2"
        assert company_crud.get(db_session, "c1")["name"] == "C1"

    def test_no_data(self, db_session):
        with pytest.raises(BadRequestError):
            company_crud.update(db_session, "c1", {})


class TestRemove:

    def test_remove_cascades_to_jobs(self, db_session):
        company_crud.remove(db_session, "c1")

        with pytest.raises(NotFoundError):
            company_crud.get(db_session, "c1")
        assert [j["companyHandle"] for j in job_crud.find_all(db_session)] == ["c2", "c3"]

    def test_not_found(self, db_session):
        with pytest.raises(NotFoundError):
            company_crud.remove(db_session, "nope")
