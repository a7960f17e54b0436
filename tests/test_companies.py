"""
Test suite for company endpoints.
"""

NEW_COMPANY = {
    "handle": "new",
    "name": "New",
    "logoUrl": "http://new.img",
    "description": "DescNew",
    "numEmployees": 10,
}


class TestCompanyCreation:
    """Tests for POST /companies"""

    def test_create_as_admin(self, client, admin_headers):
        response = client.post("/companies", json=NEW_COMPANY, headers=admin_headers)

        assert response.status_code == 201
        assert response.json() == {"company": NEW_COMPANY}

    def test_create_minimal(self, client, admin_headers):
        response = client.post("/companies", json={"handle": "min", "name": "Min"}, headers=admin_headers)

        assert response.status_code == 201
        company = response.json()["company"]
        assert company["description"] == ""
        assert company["numEmployees"] is None

    def test_create_as_user(self, client, u1_headers, unauthorized):
        response = client.post("/companies", json=NEW_COMPANY, headers=u1_headers)

        assert response.status_code == 401
        assert response.json() == unauthorized

    def test_create_duplicate(self, client, admin_headers):
        response = client.post(
            "/companies",
            json={**NEW_COMPANY, "handle": "c1"},
            headers=admin_headers,
        )

        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Duplicate company: c1"

    def test_create_duplicate_name(self, client, admin_headers):
        response = client.post(
            "/companies",
            json={**NEW_COMPANY, "name": "C1"},
            headers=admin_headers,
        )

        assert response.status_code == 400
        assert response.json() == {"error": {"message": "Duplicate company name: C1", "status": 400}}
        assert client.get("/companies/new").status_code == 404

    def test_create_invalid_logo_url(self, client, admin_headers):
        response = client.post(
            "/companies",
            json={**NEW_COMPANY, "logoUrl": "not-a-url"},
            headers=admin_headers,
        )

        assert response.status_code == 400

    def test_create_negative_employees(self, client, admin_headers):
        response = client.post(
            "/companies",
            json={**NEW_COMPANY, "numEmployees": -1},
            headers=admin_headers,
        )

        assert response.status_code == 400


class TestCompanyRetrieval:
    """Tests for GET /companies and GET /companies/{handle}"""

    def test_list(self, client):
        response = client.get("/companies")

        assert response.status_code == 200
        companies = response.json()["companies"]
        assert [c["handle"] for c in companies] == ["c1", "c2", "c3"]
        assert companies[0] == {
            "handle": "c1",
            "name": "C1",
            "description": "Desc1",
            "numEmployees": 1,
            "logoUrl": "http://c1.img",
        }

    def test_filter_name_like(self, client):
        response = client.get("/companies", params={"nameLike": "3"})

        assert [c["handle"] for c in response.json()["companies"]] == ["c3"]

    def test_filter_employee_range(self, client):
        response = client.get("/companies", params={"minEmployees": 2, "maxEmployees": 3})

        assert [c["handle"] for c in response.json()["companies"]] == ["c2", "c3"]

    def test_min_greater_than_max(self, client):
        response = client.get("/companies", params={"minEmployees": 3, "maxEmployees": 1})

        assert response.status_code == 400
        assert response.json() == {
            "error": {
                "message": "Cannot set minEmployees to greater than maxEmployees",
                "status": 400,
            }
        }

    def test_unknown_filter(self, client):
        response = client.get("/companies", params={"handle": "c1"})

        assert response.status_code == 400

    def test_get_with_jobs(self, client, job_ids):
        response = client.get("/companies/c1")

        assert response.status_code == 200
        company = response.json()["company"]
        assert company["handle"] == "c1"
        assert [j["id"] for j in company["jobs"]] == [job_ids[0]]
        assert company["jobs"][0]["title"] == "Comp1 Job"

    def test_get_not_found(self, client):
        response = client.get("/companies/nope")

        assert response.status_code == 404
        assert response.json() == {"error": {"message": "No company: nope", "status": 404}}


class TestCompanyUpdate:
    """Tests for PATCH /companies/{handle}"""

    def test_update_as_admin(self, client, admin_headers):
        response = client.patch("/companies/c1", json={"name": "C1-new"}, headers=admin_headers)

        assert response.status_code == 200
        assert response.json() == {
            "company": {
                "handle": "c1",
                "name": "C1-new",
                "description": "Desc1",
                "numEmployees": 1,
                "logoUrl": "http://c1.img",
            }
        }

    def test_update_as_user(self, client, u1_headers):
        response = client.patch("/companies/c1", json={"name": "C1-new"}, headers=u1_headers)

        assert response.status_code == 401

    def test_update_to_taken_name(self, client, admin_headers):
        response = client.patch("/companies/c1", json={"name": "C2"}, headers=admin_headers)

        assert response.status_code == 400
        assert response.json() == {"error": {"message": "Duplicate company name: C2", "status": 400}}
        assert client.get("/companies/c1").json()["company"]["name"] == "C1"

    def test_update_handle_rejected(self, client, admin_headers):
        response = client.patch("/companies/c1", json={"handle": "c1-new"}, headers=admin_headers)

        assert response.status_code == 400

    def test_update_not_found(self, client, admin_headers):
        response = client.patch("/companies/nope", json={"name": "x"}, headers=admin_headers)

        assert response.status_code == 404


class TestCompanyDeletion:
    """Tests for DELETE /companies/{handle}"""

    def test_delete_as_admin(self, client, admin_headers):
        response = client.delete("/companies/c1", headers=admin_headers)

        assert response.status_code == 200
        assert response.json() == {"deleted": "c1"}
        assert client.get("/companies/c1").status_code == 404

    def test_delete_anonymous(self, client):
        response = client.delete("/companies/c1")

        assert response.status_code == 401

    def test_delete_not_found(self, client, admin_headers):
        response = client.delete("/companies/nope", headers=admin_headers)

        assert response.status_code == 404
