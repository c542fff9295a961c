"""
Tests for invoice PDF rendering.
"""

from datetime import date

from fiverivers.services.invoice_pdf import build_rows, COLUMNS


def _invoice(auth_client, fleet, make_job, make_job_type):
    load = make_job_type(title="Asphalt", dispatch_type="Load", rate_of_job=80,
                         start_location="Plant", end_location="Site 9")
    dispatcher = fleet["dispatcher"]
    jobs = [
        make_job(fleet["job_type"], fleet["driver"], fleet["unit"], dispatcher,
                 job_date=date(2025, 2, 2), hours_of_job=8, job_gross_amount=800, ticket_ids=["A1", "A2"]),
        make_job(load, fleet["driver"], fleet["unit"], dispatcher,
                 job_date=date(2025, 1, 9), loads=3, job_gross_amount=240),
    ]
    return auth_client.post(
        "/invoices", json={"invoiceDate": "2025-02-28", "jobIds": [j.id for j in jobs]}
    ).json()


class TestInvoicePdf:
    def test_download(self, auth_client, fleet, make_job, make_job_type):
        invoice = _invoice(auth_client, fleet, make_job, make_job_type)

        response = auth_client.get(f"/invoices/{invoice['id']}/pdf")

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert response.headers["content-disposition"] == (
            f'attachment; filename="{invoice["invoiceNumber"]}.pdf"'
        )
        assert response.content.startswith(b"%PDF")

    def test_missing_invoice(self, auth_client):
        assert auth_client.get("/invoices/5/pdf").status_code == 404

    def test_rows_grouped_by_month(self, auth_client, db_session, fleet, make_job, make_job_type):
        from fiverivers.crud import invoice as invoice_crud

        created = _invoice(auth_client, fleet, make_job, make_job_type)
        db_session.expire_all()
        invoice = invoice_crud.get(db_session, created["id"])

        rows, month_rows, summary_start = build_rows(invoice)

        assert rows[0] == COLUMNS
        assert [rows[i][0] for i in month_rows] == ["January 2025", "February 2025"]
        january_job = rows[month_rows[0] + 1]
        assert january_job[4] == "Plant to Site 9"
        assert january_job[6] == "3"
        assert january_job[8] == "$240.00"
        february_job = rows[month_rows[1] + 1]
        assert february_job[5] == "A1, A2"
        assert february_job[6] == "8.00"
        assert [row[-2] for row in rows[summary_start:]] == [
            "SUBTOTAL", "COMM. (5%)", "HST (13%)", "TOTAL"
        ]
        assert rows[-1][-1] == "$1,233.96"
