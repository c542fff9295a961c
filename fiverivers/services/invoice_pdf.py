"""
Render an invoice as a landscape letter PDF.

The layout mirrors the paper invoices the office has always sent: the
issuing company on the left, the invoice reference on the right, one row per
billed job grouped under month headings, and the money summary at the
bottom of the table.
"""
from io import BytesIO
from itertools import groupby
from typing import List
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import letter, landscape
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer

from fiverivers.core.config import settings
from fiverivers.models.invoice import Invoice
from fiverivers.models.job import Job
from fiverivers.services.calculation import format_quantity, round_money

COLUMNS = [
    "Date", "Unit", "Driver", "Customer", "Job Description",
    "Tickets", "HRS/TON/LOADS", "Rate", "Amount",
]
COLUMN_WIDTHS = [60, 45, 85, 105, 160, 90, 75, 55, 65]
HEADER_BLUE = colors.HexColor("#2F5597")
MONTH_GREY = colors.HexColor("#D9E1F2")


def money(value) -> str:
    return f"${round_money(value):,.2f}"


def job_row(job: Job) -> List[str]:
    job_type = job.job_type
    quantity = format_quantity(
        job_type.dispatch_type if job_type else None,
        start_time=job.start_time,
        end_time=job.end_time,
        hours_of_job=job.hours_of_job,
        loads=job.loads,
        weight=job.weight,
    )
    return [
        job.job_date.strftime("%Y-%m-%d"),
        job.unit.name if job.unit else "",
        job.driver.name if job.driver else "",
        job_type.company.name if job_type and job_type.company else "",
        job_type.description if job_type else "",
        ", ".join(str(t) for t in job.ticket_ids or []),
        quantity,
        money(job_type.rate_of_job) if job_type else "",
        money(job.job_gross_amount),
    ]


def _header(invoice: Invoice, styles) -> Table:
    small = ParagraphStyle("small", parent=styles["Normal"], fontSize=9, leading=12)
    company_lines = [f"<b>{escape(settings.INVOICE_COMPANY_NAME)}</b>"]
    company_lines += [escape(line) for line in settings.INVOICE_COMPANY_ADDRESS.splitlines()]
    company_lines += [
        settings.INVOICE_COMPANY_PHONE,
        settings.INVOICE_COMPANY_EMAIL,
        f"HST #{settings.INVOICE_COMPANY_HST_NUMBER}",
    ]
    invoice_lines = [
        '<font size="18"><b>INVOICE</b></font>',
        f"<b>Invoice #:</b> {escape(invoice.invoice_number)}",
        f"<b>Date:</b> {invoice.invoice_date.strftime('%Y-%m-%d')}",
        f"<b>Billed To:</b> {escape(invoice.billed_to or '')}",
        f"<b>Email:</b> {escape(invoice.billed_email or '')}",
    ]
    right = ParagraphStyle("right", parent=small, alignment=2, leading=16)
    table = Table(
        [[Paragraph("<br/>".join(company_lines), small),
          Paragraph("<br/>".join(invoice_lines), right)]],
        colWidths=[370, 370],
    )
    table.setStyle(TableStyle([("VALIGN", (0, 0), (-1, -1), "TOP")]))
    return table


def build_rows(invoice: Invoice):
    """
    Table rows plus the indexes of month heading and summary rows.

    Jobs are sorted by date and grouped under a ``January 2025`` style
    heading per month.
    """
    rows = [COLUMNS]
    month_rows = []
    jobs = sorted(invoice.jobs, key=lambda j: (j.job_date, j.id))
    for (year, month), month_jobs in groupby(jobs, key=lambda j: (j.job_date.year, j.job_date.month)):
        month_jobs = list(month_jobs)
        month_rows.append(len(rows))
        rows.append([month_jobs[0].job_date.strftime("%B %Y")] + [""] * (len(COLUMNS) - 1))
        rows.extend(job_row(job) for job in month_jobs)

    summary_start = len(rows)
    percent = f"{invoice.dispatch_percent:g}"
    for label, value in (
        ("SUBTOTAL", invoice.sub_total),
        (f"COMM. ({percent}%)", invoice.commission),
        (f"HST ({settings.hst_percent:g}%)", invoice.hst),
        ("TOTAL", invoice.total),
    ):
        rows.append([""] * (len(COLUMNS) - 2) + [label, money(value)])
    return rows, month_rows, summary_start


def render_invoice_pdf(invoice: Invoice) -> BytesIO:
    """Render ``invoice`` with its jobs to an in-memory PDF."""
    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer, pagesize=landscape(letter), rightMargin=25,
        leftMargin=25, topMargin=25, bottomMargin=25,
        title=invoice.invoice_number,
    )
    styles = getSampleStyleSheet()
    elements = [_header(invoice, styles), Spacer(1, 18)]

    rows, month_rows, summary_start = build_rows(invoice)
    table = Table(rows, colWidths=COLUMN_WIDTHS, repeatRows=1)
    style = [
        ('BACKGROUND', (0, 0), (-1, 0), HEADER_BLUE),
        ('TEXTCOLOR', (0, 0), (-1, 0), colors.white),
        ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
        ('FONTSIZE', (0, 0), (-1, -1), 8),
        ('ALIGN', (-3, 1), (-1, -1), 'RIGHT'),
        ('GRID', (0, 0), (-1, summary_start - 1), 0.25, colors.grey),
        ('FONTNAME', (0, summary_start), (-1, -1), 'Helvetica-Bold'),
        ('LINEABOVE', (-2, summary_start), (-1, summary_start), 0.75, colors.black),
        ('LINEABOVE', (-2, -1), (-1, -1), 0.75, colors.black),
    ]
    for index in month_rows:
        style += [
            ('SPAN', (0, index), (-1, index)),
            ('BACKGROUND', (0, index), (-1, index), MONTH_GREY),
            ('FONTNAME', (0, index), (-1, index), 'Helvetica-Bold'),
            ('ALIGN', (0, index), (-1, index), 'LEFT'),
        ]
    table.setStyle(TableStyle(style))
    elements.append(table)
    doc.build(elements)
    buffer.seek(0)
    return buffer
