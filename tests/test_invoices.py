"""
Tests for invoice creation, editing, deletion and job paging.
"""

from datetime import date

import pytest


@pytest.fixture
def billed_jobs(fleet, make_job):
    """Two January jobs and one February job for the same dispatcher and unit."""
    args = (fleet["job_type"], fleet["driver"], fleet["unit"], fleet["dispatcher"])
    return [
        make_job(*args, job_date=date(2025, 1, 3), job_gross_amount=1000),
        make_job(*args, job_date=date(2025, 1, 20), job_gross_amount=400),
        make_job(*args, job_date=date(2025, 2, 4), job_gross_amount=100),
    ]


def create_invoice(client, jobs, **extra):
    payload = {"invoiceDate": "2025-02-28", "jobIds": [j.id for j in jobs]}
    payload.update(extra)
    return client.post("/invoices", json=payload)


class TestCreateInvoice:
    def test_totals_number_and_defaults(self, auth_client, billed_jobs):
        response = create_invoice(auth_client, billed_jobs)

        assert response.status_code == 201
        data = response.json()
        assert data["invoiceNumber"] == "INV-GS-12-250103-250204"
        assert data["billedTo"] == "Gurpreet Singh"
        assert data["billedEmail"] == "dispatch@example.com"
        assert data["status"] == "Pending"
        assert data["subTotal"] == 1500.0
        assert data["dispatchPercent"] == 5
        assert data["commission"] == 75.0
        assert data["hst"] == 204.75
        assert data["total"] == 1779.75
        assert sorted(line["lineAmount"] for line in data["lines"]) == [100, 400, 1000]
        assert {job["invoiceStatus"] for job in data["jobs"]} == {"Invoiced"}

    def test_explicit_fields_override_defaults(self, auth_client, billed_jobs):
        response = create_invoice(
            auth_client, billed_jobs[:1],
            invoiceNumber="INV-CUSTOM", billedTo="Head Office", dispatchPercent=10,
        )

        data = response.json()
        assert data["invoiceNumber"] == "INV-CUSTOM"
        assert data["billedTo"] == "Head Office"
        assert data["commission"] == 100.0
        assert data["total"] == 1243.0

    def test_jobs_marked_invoiced(self, auth_client, billed_jobs):
        create_invoice(auth_client, billed_jobs[:1])

        job = auth_client.get(f"/jobs/{billed_jobs[0].id}").json()

        assert job["invoiceStatus"] == "Invoiced"
        assert job["invoiceId"] is not None

    def test_already_invoiced_job_rejected(self, auth_client, billed_jobs):
        create_invoice(auth_client, billed_jobs[:1])

        response = create_invoice(auth_client, billed_jobs)

        assert response.status_code == 400
        assert response.json() == {"error": "Some jobs are invalid or already invoiced"}

    def test_unknown_job_rejected(self, auth_client):
        response = auth_client.post("/invoices", json={"invoiceDate": "2025-01-01", "jobIds": [12345]})
        assert response.status_code == 400

    def test_empty_job_list_rejected(self, auth_client):
        response = auth_client.post("/invoices", json={"invoiceDate": "2025-01-01", "jobIds": []})
        assert response.status_code == 400

    def test_mixed_dispatchers_rejected(self, auth_client, fleet, make_job, make_dispatcher):
        other = make_dispatcher(name="Other", email="other@example.com")
        first = make_job(fleet["job_type"], fleet["driver"], fleet["unit"], fleet["dispatcher"])
        second = make_job(fleet["job_type"], fleet["driver"], fleet["unit"], other)

        response = create_invoice(auth_client, [first, second])

        assert response.status_code == 400

    def test_job_without_dispatcher_rejected(self, auth_client, fleet, make_job):
        job = make_job(fleet["job_type"], fleet["driver"], fleet["unit"])
        assert create_invoice(auth_client, [job]).status_code == 400

    def test_duplicate_number_rejected(self, auth_client, billed_jobs):
        create_invoice(auth_client, billed_jobs[:1], invoiceNumber="INV-1")

        response = create_invoice(auth_client, billed_jobs[1:], invoiceNumber="INV-1")

        assert response.status_code == 400


class TestUpdateInvoice:
    def test_remove_job_recomputes_and_releases(self, auth_client, billed_jobs):
        invoice = create_invoice(auth_client, billed_jobs).json()

        response = auth_client.put(
            f"/invoices/{invoice['id']}",
            json={"jobIds": [billed_jobs[0].id, billed_jobs[1].id]},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["subTotal"] == 1400.0
        assert len(data["lines"]) == 2
        released = auth_client.get(f"/jobs/{billed_jobs[2].id}").json()
        assert released["invoiceStatus"] == "Pending"
        assert released["invoiceId"] is None

    def test_add_job(self, auth_client, billed_jobs):
        invoice = create_invoice(auth_client, billed_jobs[:1]).json()

        response = auth_client.put(
            f"/invoices/{invoice['id']}",
            json={"jobIds": [billed_jobs[0].id, billed_jobs[2].id]},
        )

        assert response.json()["subTotal"] == 1100.0
        added = auth_client.get(f"/jobs/{billed_jobs[2].id}").json()
        assert added["invoiceStatus"] == "Invoiced"

    def test_status_propagates_to_jobs(self, auth_client, billed_jobs):
        invoice = create_invoice(auth_client, billed_jobs).json()

        response = auth_client.put(f"/invoices/{invoice['id']}", json={"status": "Raised"})

        assert response.json()["status"] == "Raised"
        assert {job["invoiceStatus"] for job in response.json()["jobs"]} == {"Raised"}

    def test_pending_status_keeps_jobs_attached(self, auth_client, billed_jobs):
        invoice = create_invoice(auth_client, billed_jobs).json()

        response = auth_client.put(f"/invoices/{invoice['id']}", json={"status": "Pending"})

        jobs = response.json()["jobs"]
        assert len(jobs) == 3
        assert {job["invoiceStatus"] for job in jobs} == {"Pending"}
        assert {job["invoiceId"] for job in jobs} == {invoice["id"]}

    def test_percent_change_keeps_jobs(self, auth_client, billed_jobs):
        invoice = create_invoice(auth_client, billed_jobs).json()

        data = auth_client.put(f"/invoices/{invoice['id']}", json={"dispatchPercent": 0}).json()

        assert data["commission"] == 0
        assert data["total"] == 1695.0
        assert len(data["jobs"]) == 3

    def test_empty_job_list_rejected(self, auth_client, billed_jobs):
        invoice = create_invoice(auth_client, billed_jobs).json()

        response = auth_client.put(f"/invoices/{invoice['id']}", json={"jobIds": []})

        assert response.status_code == 400

    def test_job_from_other_invoice_rejected(self, auth_client, billed_jobs):
        first = create_invoice(auth_client, billed_jobs[:1]).json()
        second = create_invoice(auth_client, billed_jobs[1:2]).json()

        response = auth_client.put(
            f"/invoices/{second['id']}",
            json={"jobIds": [billed_jobs[0].id, billed_jobs[1].id]},
        )

        assert response.status_code == 400
        assert auth_client.get(f"/invoices/{first['id']}").json()["subTotal"] == 1000.0

    def test_missing_invoice(self, auth_client):
        assert auth_client.put("/invoices/77", json={"status": "Raised"}).status_code == 404


class TestBilledJobChanges:
    def test_new_amount_retotals_invoice(self, auth_client, billed_jobs):
        invoice = create_invoice(auth_client, billed_jobs).json()

        response = auth_client.put(f"/jobs/{billed_jobs[0].id}", json={"jobGrossAmount": 5000})

        assert response.status_code == 200
        data = auth_client.get(f"/invoices/{invoice['id']}").json()
        assert data["subTotal"] == 5500.0
        assert data["commission"] == 275.0
        assert data["hst"] == 750.75
        assert data["total"] == 6525.75
        assert sorted(line["lineAmount"] for line in data["lines"]) == [100, 400, 5000]

    def test_repriced_job_retotals_invoice(self, auth_client, billed_jobs):
        invoice = create_invoice(auth_client, billed_jobs).json()

        job = auth_client.put(f"/jobs/{billed_jobs[1].id}", json={"hoursOfJob": 3}).json()

        assert job["jobGrossAmount"] == 300.0
        assert job["invoiceStatus"] == "Invoiced"
        assert auth_client.get(f"/invoices/{invoice['id']}").json()["subTotal"] == 1400.0

    def test_deleted_job_leaves_invoice(self, auth_client, billed_jobs):
        invoice = create_invoice(auth_client, billed_jobs).json()

        assert auth_client.delete(f"/jobs/{billed_jobs[0].id}").status_code == 200

        data = auth_client.get(f"/invoices/{invoice['id']}").json()
        assert data["subTotal"] == 500.0
        assert len(data["jobs"]) == 2
        assert sorted(line["lineAmount"] for line in data["lines"]) == [100, 400]
        assert all(line["jobId"] is not None for line in data["lines"])

    def test_unbilled_job_edit_leaves_invoices_alone(self, auth_client, billed_jobs):
        invoice = create_invoice(auth_client, billed_jobs[:2]).json()

        auth_client.put(f"/jobs/{billed_jobs[2].id}", json={"jobGrossAmount": 900})

        assert auth_client.get(f"/invoices/{invoice['id']}").json()["subTotal"] == 1400.0


class TestDeleteInvoice:
    def test_jobs_return_to_pending(self, auth_client, billed_jobs):
        invoice = create_invoice(auth_client, billed_jobs).json()

        response = auth_client.delete(f"/invoices/{invoice['id']}")

        assert response.json() == {"message": "Invoice deleted"}
        assert auth_client.get(f"/invoices/{invoice['id']}").status_code == 404
        for job in billed_jobs:
            data = auth_client.get(f"/jobs/{job.id}").json()
            assert data["invoiceStatus"] == "Pending"
            assert data["invoiceId"] is None

    def test_released_jobs_can_be_invoiced_again(self, auth_client, billed_jobs):
        invoice = create_invoice(auth_client, billed_jobs).json()
        auth_client.delete(f"/invoices/{invoice['id']}")

        assert create_invoice(auth_client, billed_jobs).status_code == 201


class TestInvoiceListing:
    def test_filter_by_status_and_search(self, auth_client, billed_jobs):
        first = create_invoice(auth_client, billed_jobs[:1], invoiceNumber="INV-A").json()
        create_invoice(auth_client, billed_jobs[1:2], invoiceNumber="INV-B")
        auth_client.put(f"/invoices/{first['id']}", json={"status": "Received"})

        received = auth_client.get("/invoices", params={"status": "Received"}).json()
        assert [i["invoiceNumber"] for i in received["data"]] == ["INV-A"]

        found = auth_client.get("/invoices", params={"search": "inv-b"}).json()
        assert [i["invoiceNumber"] for i in found["data"]] == ["INV-B"]

        by_dispatcher = auth_client.get("/invoices", params={"search": "gurpreet"}).json()
        assert by_dispatcher["total"] == 2

    def test_invoice_jobs_by_month(self, auth_client, billed_jobs):
        invoice = create_invoice(auth_client, billed_jobs).json()

        january = auth_client.get(
            f"/invoices/{invoice['id']}/jobs", params={"month": 1, "year": 2025}
        ).json()
        assert january["total"] == 2

        everything = auth_client.get(f"/invoices/{invoice['id']}/jobs", params={"pageSize": 2}).json()
        assert everything["total"] == 3
        assert everything["totalPages"] == 2
        assert len(everything["data"]) == 2

    def test_invalid_month(self, auth_client, billed_jobs):
        invoice = create_invoice(auth_client, billed_jobs).json()
        response = auth_client.get(f"/invoices/{invoice['id']}/jobs", params={"month": 13, "year": 2025})
        assert response.status_code == 400
