"""
Excel Writer Module

Generates the monthly production report workbook with styling:
a statistics summary sheet and a weekly production detail sheet.
"""

from pathlib import Path
from typing import List, Optional

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from domain.entities import MonthlyStatistics, ProgressTier, WeeklyProduction

SUMMARY_SHEET_TITLE = "Thống kê"
PRODUCTION_SHEET_TITLE = "Sản lượng"

DETAIL_HEADERS = ["Ngày", "Thứ", "Mã công đoạn", "Sản lượng", "Công", "Tổng công ngày"]


def format_filename(pattern: str, year: int, month: int) -> str:
    """
    Fill {year} and zero-padded {month} into a filename pattern.

    Args:
        pattern: Filename pattern, e.g. "Estron_T{month}_{year}.xlsx"
        year: Calendar year
        month: Fiscal month (1-12)
    """
    return pattern.format(year=year, month=f"{month:02d}")


class ProductionReportWriter:
    """
    Generates formatted Excel production reports.

    Output format:
    - "Thống kê": one label/value row per monthly figure, attainment colored
      by progress tier
    - "Sản lượng": per visible week a header row carrying the week total,
      then one row per entry
      (or an empty row for days without entries)
    """

    COLORS = {
        'green': PatternFill(start_color='90EE90', end_color='90EE90', fill_type='solid'),
        'red': PatternFill(start_color='FF6B6B', end_color='FF6B6B', fill_type='solid'),
        'yellow': PatternFill(start_color='FFD700', end_color='FFD700', fill_type='solid'),
        'gray': PatternFill(start_color='D3D3D3', end_color='D3D3D3', fill_type='solid'),
        'header': PatternFill(start_color='4472C4', end_color='4472C4', fill_type='solid'),
        'week': PatternFill(start_color='DDEBF7', end_color='DDEBF7', fill_type='solid'),
    }

    TIER_COLORS = {
        ProgressTier.GREEN: 'green',
        ProgressTier.YELLOW: 'yellow',
        ProgressTier.RED: 'red',
    }

    BORDER = Border(
        left=Side(style='thin'),
        right=Side(style='thin'),
        top=Side(style='thin'),
        bottom=Side(style='thin')
    )

    def __init__(self, short_date_format: str = "%d/%m"):
        self.short_date_format = short_date_format
        self.wb: Optional[Workbook] = None

    def create_report(
        self,
        statistics: MonthlyStatistics,
        weekly_production: List[WeeklyProduction],
        output_path: Path
    ) -> Path:
        """
        Create the complete report workbook.

        Args:
            statistics: Monthly statistics for the fiscal month
            weekly_production: Visible weeks with their daily cards
            output_path: Path to save the Excel file

        Returns:
            Path to the created file
        """
        self.wb = Workbook()
        default_sheet = self.wb.active
        self.wb.remove(default_sheet)

        self._write_summary_sheet(self.wb.create_sheet(SUMMARY_SHEET_TITLE), statistics)
        self._write_production_sheet(self.wb.create_sheet(PRODUCTION_SHEET_TITLE), weekly_production)

        self.wb.save(output_path)
        return output_path

    def _header_cell(self, ws, row: int, col: int, value) -> None:
        cell = ws.cell(row, col, value)
        cell.font = Font(bold=True, color='FFFFFF')
        cell.fill = self.COLORS['header']
        cell.alignment = Alignment(horizontal='center', vertical='center')
        cell.border = self.BORDER

    def _write_summary_sheet(self, ws, statistics: MonthlyStatistics) -> None:
        self._header_cell(ws, 1, 1, statistics.fiscal_month.name)
        ws.merge_cells(start_row=1, start_column=1, end_row=1, end_column=2)

        rows = [
            ("Ngày công chuẩn cả tháng", float(statistics.standard_workdays_for_month)),
            ("Ngày công chuẩn đến hiện tại", float(statistics.standard_workdays_to_date)),
            ("Công sản phẩm đã làm", statistics.total_product_work_done),
            ("Công sản phẩm mục tiêu", statistics.target_product_work),
            ("Giờ tăng ca", statistics.total_overtime_hours),
            ("Ngày nghỉ", statistics.total_leave_days),
            ("Giờ họp/đào tạo", statistics.total_meeting_hours),
            ("Tỷ lệ hoàn thành", f"{statistics.attainment_percentage:.1f}%"),
        ]

        for offset, (label, value) in enumerate(rows):
            row = offset + 2
            label_cell = ws.cell(row, 1, label)
            label_cell.font = Font(bold=True)
            label_cell.border = self.BORDER
            value_cell = ws.cell(row, 2, value)
            value_cell.alignment = Alignment(horizontal='center')
            value_cell.border = self.BORDER

        rate_cell = ws.cell(len(rows) + 1, 2)
        rate_cell.fill = self.COLORS[self.TIER_COLORS[statistics.progress_tier]]

        ws.column_dimensions['A'].width = 32
        ws.column_dimensions['B'].width = 16

    def _write_production_sheet(self, ws, weekly_production: List[WeeklyProduction]) -> None:
        for col, header in enumerate(DETAIL_HEADERS, start=1):
            self._header_cell(ws, 1, col, header)

        current_row = 2
        for weekly in weekly_production:
            week = weekly.week
            title = (
                f"{week.name} ({week.start_date.strftime(self.short_date_format)}"
                f" - {week.end_date.strftime(self.short_date_format)})"
            )
            title_cell = ws.cell(current_row, 1, title)
            title_cell.font = Font(bold=True)
            title_cell.fill = self.COLORS['week']
            ws.merge_cells(
                start_row=current_row, start_column=1,
                end_row=current_row, end_column=len(DETAIL_HEADERS) - 1
            )
            # Week total sits under "Tổng công ngày"
            total_cell = ws.cell(current_row, len(DETAIL_HEADERS), weekly.total_weekly_work)
            total_cell.font = Font(bold=True)
            total_cell.fill = self.COLORS['week']
            total_cell.alignment = Alignment(horizontal='center')
            total_cell.border = self.BORDER
            current_row += 1

            for day in weekly.days:
                if not day.entries:
                    self._write_detail_row(
                        ws, current_row,
                        [day.formatted_date, day.day_of_week, None, None, None, day.total_work_for_day]
                    )
                    for col in range(1, len(DETAIL_HEADERS) + 1):
                        ws.cell(current_row, col).fill = self.COLORS['gray']
                    current_row += 1
                    continue

                for line in day.entries:
                    self._write_detail_row(
                        ws, current_row,
                        [
                            day.formatted_date, day.day_of_week, line.stage_code,
                            line.quantity, line.work_amount, day.total_work_for_day
                        ]
                    )
                    current_row += 1

        widths = [10, 10, 16, 12, 10, 16]
        for col, width in enumerate(widths, start=1):
            ws.column_dimensions[get_column_letter(col)].width = width

    def _write_detail_row(self, ws, row: int, values: list) -> None:
        for col, value in enumerate(values, start=1):
            cell = ws.cell(row, col, value)
            cell.alignment = Alignment(horizontal='center')
            cell.border = self.BORDER
