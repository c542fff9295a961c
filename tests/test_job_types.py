"""
Tests for the /jobtypes endpoints.
"""


class TestJobTypes:
    def test_create_job_type(self, auth_client, make_company):
        company = make_company()

        response = auth_client.post("/jobtypes", json={
            "title": "Gravel haul",
            "startLocation": "Pit 3",
            "endLocation": "Highway 401",
            "dispatchType": "Tonnage",
            "rateOfJob": 12.5,
            "companyId": company.id,
        })

        assert response.status_code == 201
        data = response.json()
        assert data["company"]["name"] == company.name
        assert data["rateOfJob"] == 12.5

    def test_unknown_company_rejected(self, auth_client):
        response = auth_client.post("/jobtypes", json={"title": "X", "companyId": 404})

        assert response.status_code == 400
        assert response.json() == {"error": "Company 404 does not exist"}

    def test_filters(self, auth_client, make_company, make_job_type):
        first = make_company(name="First")
        second = make_company(name="Second")
        make_job_type(title="A hourly", dispatch_type="Hourly", company=first)
        make_job_type(title="B load", dispatch_type="Load", company=first)
        make_job_type(title="C load", dispatch_type="Load", company=second)

        by_company = auth_client.get("/jobtypes", params={"companyId": first.id}).json()
        assert [j["title"] for j in by_company["data"]] == ["A hourly", "B load"]

        by_type = auth_client.get("/jobtypes", params={"dispatchType": "load"}).json()
        assert [j["title"] for j in by_type["data"]] == ["B load", "C load"]

    def test_search_by_location(self, auth_client, make_job_type):
        make_job_type(title="North", end_location="Sarnia")
        make_job_type(title="South", end_location="Windsor")

        body = auth_client.get("/jobtypes", params={"search": "sarn"}).json()

        assert [j["title"] for j in body["data"]] == ["North"]

    def test_job_type_in_use_cannot_be_deleted(self, auth_client, fleet, make_job):
        make_job(fleet["job_type"], fleet["driver"], fleet["unit"])

        response = auth_client.delete(f"/jobtypes/{fleet['job_type'].id}")

        assert response.status_code == 400

    def test_delete_job_type(self, auth_client, make_job_type):
        job_type = make_job_type()
        assert auth_client.delete(f"/jobtypes/{job_type.id}").json() == {"message": "Job type deleted"}
