
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import tempfile
import unittest
from datetime import date
from openpyxl import load_workbook

from infrastructure.excel_writer import (
    ProductionReportWriter, format_filename, SUMMARY_SHEET_TITLE, PRODUCTION_SHEET_TITLE
)
from domain.entities import Quota, ProductionEntry, DailySupplementaryData
from domain.statistics_calculator import StatisticsCalculator


class TestFormatFilename(unittest.TestCase):
    def test_month_padding(self):
        self.assertEqual(format_filename("Estron_T{month}_{year}.xlsx", 2024, 5), "Estron_T05_2024.xlsx")

    def test_two_digit_month(self):
        self.assertEqual(format_filename("Report_{year}_{month}.xlsx", 2025, 12), "Report_2025_12.xlsx")


class TestProductionReportWriter(unittest.TestCase):
    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.output_path = Path(self.tmpdir.name) / "report.xlsx"

        quotas = [Quota(id="q1", stage_code="A", daily_quota=100, order=0)]
        entries = [
            ProductionEntry(id="e1", date="2024-04-22", stage_code="A", quantity=50),
            ProductionEntry(id="e2", date="2024-04-23", stage_code="A", quantity=150),
        ]
        supplementary = [DailySupplementaryData(date="2024-04-22", overtime_hours=4)]

        calc = StatisticsCalculator()
        today = date(2024, 4, 25)
        self.statistics = calc.calculate_monthly_statistics(today, quotas, entries, supplementary)
        self.weekly = calc.build_weekly_production(today, entries, quotas)

    def tearDown(self):
        self.tmpdir.cleanup()

    def test_sheets(self):
        ProductionReportWriter().create_report(self.statistics, self.weekly, self.output_path)

        wb = load_workbook(self.output_path)
        self.assertEqual(wb.sheetnames, [SUMMARY_SHEET_TITLE, PRODUCTION_SHEET_TITLE])

    def test_summary_values(self):
        ProductionReportWriter().create_report(self.statistics, self.weekly, self.output_path)

        ws = load_workbook(self.output_path)[SUMMARY_SHEET_TITLE]
        self.assertEqual(ws.cell(1, 1).value, "Tháng 5 Estron (21/04 - 20/05/2024)")

        values = {ws.cell(row, 1).value: ws.cell(row, 2).value for row in range(2, 10)}
        self.assertEqual(values["Ngày công chuẩn cả tháng"], 23)
        self.assertEqual(values["Ngày công chuẩn đến hiện tại"], 4)
        self.assertEqual(values["Công sản phẩm đã làm"], 2)
        self.assertEqual(values["Giờ tăng ca"], 4)
        # 2 / 4.5
        self.assertEqual(values["Tỷ lệ hoàn thành"], "44.4%")

    def test_production_rows(self):
        ProductionReportWriter().create_report(self.statistics, self.weekly, self.output_path)

        ws = load_workbook(self.output_path)[PRODUCTION_SHEET_TITLE]
        self.assertEqual(ws.cell(1, 3).value, "Mã công đoạn")
        self.assertEqual(ws.cell(2, 1).value, "Tuần 1 (21/04 - 21/04)")
        # Sunday 21/04 has no entries
        self.assertEqual(ws.cell(3, 1).value, "21/04")
        self.assertIsNone(ws.cell(3, 3).value)
        self.assertEqual(ws.cell(4, 1).value, "Tuần 2 (22/04 - 28/04)")
        self.assertEqual(ws.cell(5, 1).value, "22/04")
        self.assertEqual(ws.cell(5, 2).value, "Thứ 2")
        self.assertEqual(ws.cell(5, 3).value, "A")
        self.assertEqual(ws.cell(5, 5).value, 0.5)
        self.assertEqual(ws.cell(6, 5).value, 1.5)
        # 22/04 through 25/04 follow week 2's header; later days are not listed
        self.assertEqual(ws.cell(8, 1).value, "25/04")
        self.assertEqual(ws.max_row, 8)

    def test_week_totals_on_header_rows(self):
        ProductionReportWriter().create_report(self.statistics, self.weekly, self.output_path)

        ws = load_workbook(self.output_path)[PRODUCTION_SHEET_TITLE]
        self.assertEqual(ws.cell(2, 6).value, 0)
        self.assertEqual(ws.cell(4, 6).value, 2.0)
        self.assertIn("A4:E4", [str(r) for r in ws.merged_cells.ranges])


if __name__ == '__main__':
    unittest.main()
