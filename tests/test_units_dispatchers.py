"""
Tests for the /units and /dispatchers endpoints.
"""


class TestUnits:
    def test_crud_round(self, auth_client):
        created = auth_client.post("/units", json={"name": "Truck 7", "plateNumber": "AB 123", "vin": "1FTX"})
        assert created.status_code == 201
        unit_id = created.json()["id"]

        updated = auth_client.put(f"/units/{unit_id}", json={"color": "Red"})
        assert updated.json()["color"] == "Red"
        assert updated.json()["plateNumber"] == "AB 123"

        assert auth_client.delete(f"/units/{unit_id}").json() == {"message": "Unit deleted"}
        assert auth_client.get(f"/units/{unit_id}").status_code == 404

    def test_list_has_jobs_count_and_searches_vin(self, auth_client, fleet, make_unit, make_job):
        make_job(fleet["job_type"], fleet["driver"], fleet["unit"])
        make_job(fleet["job_type"], fleet["driver"], fleet["unit"])
        make_unit(name="Spare", vin="ZZZ999")

        body = auth_client.get("/units").json()
        counts = {u["name"]: u["jobsCount"] for u in body["data"]}
        assert counts == {"Spare": 0, "Truck 12": 2}

        found = auth_client.get("/units", params={"search": "zzz"}).json()
        assert [u["name"] for u in found["data"]] == ["Spare"]


class TestDispatchers:
    def test_create_dispatcher(self, auth_client):
        response = auth_client.post("/dispatchers", json={
            "name": "Ace Dispatch",
            "email": "ace@dispatch.example.org",
            "commissionPercent": 7.5,
        })

        assert response.status_code == 201
        assert response.json()["commissionPercent"] == 7.5

    def test_commission_over_100_rejected(self, auth_client):
        response = auth_client.post("/dispatchers", json={"name": "X", "commissionPercent": 120})
        assert response.status_code == 400

    def test_list_counts_jobs_and_invoices(self, auth_client, fleet, make_job):
        dispatcher = fleet["dispatcher"]
        job = make_job(fleet["job_type"], fleet["driver"], fleet["unit"], dispatcher)
        make_job(fleet["job_type"], fleet["driver"], fleet["unit"], dispatcher)
        auth_client.post("/invoices", json={"invoiceDate": "2025-02-01", "jobIds": [job.id]})

        row = auth_client.get("/dispatchers").json()["data"][0]

        assert row["jobsCount"] == 2
        assert row["invoicesCount"] == 1

    def test_missing_dispatcher(self, auth_client):
        assert auth_client.put("/dispatchers/42", json={"name": "x"}).status_code == 404
        assert auth_client.delete("/dispatchers/42").json() == {"error": "Dispatcher not found"}
