import csv
from io import BytesIO, StringIO

import xlsxwriter
from django.http import HttpResponse
from django.utils import timezone


def _cell(value):
    if value is None:
        return ''
    if isinstance(value, (list, tuple)):
        return ', '.join(str(item) for item in value)
    if hasattr(value, 'strftime'):
        return value.strftime("%Y-%m-%d %H:%M")
    return value


def export_csv_response(columns, rows, filename):
    """
    Build a CSV download. `columns` is a sequence of (key, header) pairs,
    `rows` a sequence of dicts.
    """
    buffer = StringIO()
    writer = csv.writer(buffer)
    writer.writerow([header for _, header in columns])
    for row in rows:
        writer.writerow([_cell(row.get(key)) for key, _ in columns])

    writer.writerow([])
    writer.writerow(['Total Records:', len(rows)])
    writer.writerow(['Export Date:', timezone.now().strftime("%Y-%m-%d %H:%M")])

    response = HttpResponse(buffer.getvalue(), content_type='text/csv')
    response['Content-Disposition'] = f'attachment; filename="{filename}.csv"'
    return response


def export_excel_response(columns, rows, filename, sheet_name='Export'):
    """Same layout as the CSV export, written as an xlsx workbook."""
    buffer = BytesIO()

    with xlsxwriter.Workbook(buffer) as workbook:
        worksheet = workbook.add_worksheet(sheet_name)

        header_format = workbook.add_format({
            'bold': True,
            'bg_color': '#3b5998',
            'font_color': 'white',
            'border': 1,
            'align': 'center',
            'valign': 'vcenter'
        })
        bold_format = workbook.add_format({'bold': True})

        for col, (_, header) in enumerate(columns):
            worksheet.write(0, col, header, header_format)
            worksheet.set_column(col, col, max(12, len(header) + 4))

        for row_idx, row in enumerate(rows, start=1):
            for col, (key, _) in enumerate(columns):
                worksheet.write(row_idx, col, _cell(row.get(key)))

        summary_row = len(rows) + 2
        worksheet.write(summary_row, 0, 'Total Records:', bold_format)
        worksheet.write(summary_row, 1, len(rows))
        worksheet.write(summary_row + 1, 0, 'Export Date:', bold_format)
        worksheet.write(summary_row + 1, 1, timezone.now().strftime("%Y-%m-%d %H:%M"))

    response = HttpResponse(
        buffer.getvalue(),
        content_type='application/vnd.openxmlformats-officedocument.spreadsheetml.sheet',
    )
    response['Content-Disposition'] = f'attachment; filename="{filename}.xlsx"'
    return response
