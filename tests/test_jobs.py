"""
Tests for the /jobs endpoints, including gross-amount pricing.
"""

from datetime import date

import pytest


@pytest.fixture
def job_payload(fleet):
    def build(**overrides):
        payload = {
            "jobDate": "2025-01-15",
            "jobTypeId": fleet["job_type"].id,
            "driverId": fleet["driver"].id,
            "unitId": fleet["unit"].id,
            "dispatcherId": fleet["dispatcher"].id,
        }
        payload.update(overrides)
        return payload
    return build


class TestCreateJob:
    def test_hourly_job_is_priced_from_times(self, auth_client, job_payload):
        response = auth_client.post("/jobs", json=job_payload(startTime="07:00", endTime="15:30"))

        assert response.status_code == 201
        data = response.json()
        assert data["jobGrossAmount"] == 850.0
        assert data["invoiceStatus"] == "Pending"
        assert data["driver"]["name"] == "Harjit Dhillon"
        assert data["jobType"]["title"] == "Quarry haul"

    def test_explicit_amount_wins(self, auth_client, job_payload):
        response = auth_client.post("/jobs", json=job_payload(hoursOfJob=8, jobGrossAmount=123.45))
        assert response.json()["jobGrossAmount"] == 123.45

    def test_tonnage_accepts_legacy_weight_string(self, auth_client, job_payload, make_job_type):
        tonnage = make_job_type(title="Stone", dispatch_type="Tonnage", rate_of_job=10)

        response = auth_client.post("/jobs", json=job_payload(
            jobTypeId=tonnage.id, weight="12.5 7.5", ticketIds="T-1, T-2"
        ))

        assert response.status_code == 201
        data = response.json()
        assert data["weight"] == [12.5, 7.5]
        assert data["ticketIds"] == ["T-1", "T-2"]
        assert data["jobGrossAmount"] == 200.0

    @pytest.mark.parametrize("field", ["jobTypeId", "driverId", "unitId", "dispatcherId"])
    def test_unknown_reference_rejected(self, auth_client, job_payload, field):
        response = auth_client.post("/jobs", json=job_payload(**{field: 9999}))

        assert response.status_code == 400
        assert response.json()["error"].endswith("9999 does not exist")

    def test_bad_time_format_rejected(self, auth_client, job_payload):
        response = auth_client.post("/jobs", json=job_payload(startTime="7am"))
        assert response.status_code == 400


class TestUpdateJob:
    def test_changing_hours_reprices(self, auth_client, job_payload):
        job_id = auth_client.post("/jobs", json=job_payload(hoursOfJob=2)).json()["id"]

        response = auth_client.put(f"/jobs/{job_id}", json={"hoursOfJob": 5})

        assert response.status_code == 200
        assert response.json()["jobGrossAmount"] == 500.0

    def test_non_pricing_update_keeps_amount(self, auth_client, job_payload):
        job_id = auth_client.post("/jobs", json=job_payload(jobGrossAmount=42)).json()["id"]

        response = auth_client.put(f"/jobs/{job_id}", json={"driverPaid": True})

        assert response.json()["jobGrossAmount"] == 42
        assert response.json()["driverPaid"] is True

    def test_clearing_required_reference_rejected(self, auth_client, job_payload):
        job_id = auth_client.post("/jobs", json=job_payload(hoursOfJob=1)).json()["id"]

        response = auth_client.put(f"/jobs/{job_id}", json={"driverId": None})

        assert response.status_code == 400

    def test_toggle_payment(self, auth_client, fleet, make_job):
        job = make_job(fleet["job_type"], fleet["driver"], fleet["unit"])

        first = auth_client.patch(f"/jobs/{job.id}/toggle-payment")
        second = auth_client.patch(f"/jobs/{job.id}/toggle-payment")

        assert first.json()["paymentReceived"] is True
        assert second.json()["paymentReceived"] is False

    def test_toggle_missing_job(self, auth_client):
        assert auth_client.patch("/jobs/999/toggle-payment").status_code == 404


class TestListJobs:
    def test_newest_first_with_filters(self, auth_client, fleet, make_job, make_driver):
        other = make_driver(name="Other Driver")
        old = make_job(fleet["job_type"], fleet["driver"], fleet["unit"], job_date=date(2025, 1, 1))
        new = make_job(fleet["job_type"], fleet["driver"], fleet["unit"], job_date=date(2025, 3, 1))
        make_job(fleet["job_type"], other, fleet["unit"])

        body = auth_client.get("/jobs", params={"driverId": fleet["driver"].id}).json()

        assert [j["id"] for j in body["data"]] == [new.id, old.id]

    def test_status_filter_and_search(self, auth_client, fleet, make_job, make_driver):
        other = make_driver(name="Sukhdeep Gill")
        make_job(fleet["job_type"], fleet["driver"], fleet["unit"], invoice_status="Raised")
        mine = make_job(fleet["job_type"], other, fleet["unit"])

        raised = auth_client.get("/jobs", params={"status": "Raised"}).json()
        assert raised["total"] == 1

        found = auth_client.get("/jobs", params={"search": "sukh"}).json()
        assert [j["id"] for j in found["data"]] == [mine.id]

    def test_unknown_status_rejected(self, auth_client):
        assert auth_client.get("/jobs", params={"status": "Lost"}).status_code == 400

    def test_delete_job(self, auth_client, fleet, make_job):
        job = make_job(fleet["job_type"], fleet["driver"], fleet["unit"])
        assert auth_client.delete(f"/jobs/{job.id}").json() == {"message": "Job deleted"}
