import io
from typing import Iterable
from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill, Alignment
from app.schemas.payment import PaymentRead
from app.services.payments_view import calculate_totals

HEADERS = ["Student", "Email", "Amount", "Month", "Year", "Status", "Payment Type"]


def payments_workbook(payments: Iterable[PaymentRead]) -> io.BytesIO:
    """Build an .xlsx of the given payments with a bold totals row."""
    payments = list(payments)

    wb = Workbook()
    ws = wb.active
    ws.title = "Payments"

    header_font = Font(bold=True, color="FFFFFF")
    header_fill = PatternFill(start_color="2563EB", end_color="2563EB", fill_type="solid")
    for col_num, header in enumerate(HEADERS, 1):
        cell = ws.cell(row=1, column=col_num, value=header)
        cell.font = header_font
        cell.fill = header_fill
        cell.alignment = Alignment(horizontal="center")

    for row_num, payment in enumerate(payments, 2):
        ws.cell(row=row_num, column=1, value=payment.student_name or "Unknown Student")
        ws.cell(row=row_num, column=2, value=payment.student_email or payment.student_ref or "")
        ws.cell(row=row_num, column=3, value=payment.amount)
        ws.cell(row=row_num, column=4, value=payment.month)
        ws.cell(row=row_num, column=5, value=payment.year)
        ws.cell(row=row_num, column=6, value=payment.status.value)
        ws.cell(row=row_num, column=7, value=payment.payment_type.value if payment.payment_type else "-")

    ws.column_dimensions['A'].width = 24
    ws.column_dimensions['B'].width = 30
    ws.column_dimensions['C'].width = 14
    ws.column_dimensions['D'].width = 14
    ws.column_dimensions['E'].width = 8
    ws.column_dimensions['F'].width = 12
    ws.column_dimensions['G'].width = 14

    totals = calculate_totals(payments)
    summary_row = len(payments) + 3
    ws.cell(row=summary_row, column=1, value="TOTAL").font = Font(bold=True)
    ws.cell(row=summary_row, column=3, value=totals.total).font = Font(bold=True)
    ws.cell(row=summary_row + 1, column=1, value="PAID").font = Font(bold=True)
    ws.cell(row=summary_row + 1, column=3, value=totals.paid).font = Font(bold=True)
    ws.cell(row=summary_row + 2, column=1, value="PENDING").font = Font(bold=True)
    ws.cell(row=summary_row + 2, column=3, value=totals.pending).font = Font(bold=True)

    excel_file = io.BytesIO()
    wb.save(excel_file)
    excel_file.seek(0)
    return excel_file
