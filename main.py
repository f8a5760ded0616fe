"""
Estron Production Tracker

Prints the Estron fiscal month, visible weeks and monthly production
statistics for a date, and optionally exports the Excel report.
"""

import argparse
import sys
from pathlib import Path

# Add src directory to path for imports
sys.path.insert(0, str(Path(__file__).parent / "src"))

from application.statistics_service import ProductionStatisticsService
from config.config_manager import ConfigManager
from domain.date_utils import get_today, parse_iso_date
from domain.fiscal_calendar import get_visible_weeks
from domain.workday_calculator import format_workdays
from infrastructure.excel_writer import format_filename


def _parse_date_arg(value: str):
    try:
        return parse_iso_date(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Ngày không hợp lệ (YYYY-MM-DD): {value}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Thống kê sản lượng theo tháng Estron")
    parser.add_argument("--date", type=_parse_date_arg, default=None,
                        help="Ngày tham chiếu YYYY-MM-DD (mặc định: hôm nay)")
    parser.add_argument("--config", type=Path, default=None,
                        help="Đường dẫn file cấu hình JSON")
    parser.add_argument("--export", nargs="?", const="", default=None, metavar="PATH",
                        help="Xuất báo cáo Excel (mặc định theo cấu hình)")
    return parser


def main(argv=None):
    """Application entry point."""
    args = build_parser().parse_args(argv)

    manager = ConfigManager(args.config)
    config = manager.load()
    # The clock is read once here and passed down
    today = args.date or get_today()

    info = get_visible_weeks(today)
    service = ProductionStatisticsService.build_from_config(config, manager)
    stats = service.get_monthly_statistics(today)

    print(info.fiscal_month.name)
    for week in info.visible_weeks:
        marker = "*" if week.week_index == info.current_week.week_index else " "
        print(
            f" {marker} {week.name}: {week.start_date.strftime(config.ui_prefs.date_format)}"
            f" - {week.end_date.strftime(config.ui_prefs.date_format)}"
        )
    print(
        f"Ngày công chuẩn: {format_workdays(stats.standard_workdays_to_date)}"
        f" / {format_workdays(stats.standard_workdays_for_month)}"
    )
    print(f"Công sản phẩm: {stats.total_product_work_done:.2f} / {stats.target_product_work:.2f}"
          f" ({stats.attainment_percentage:.1f}%)")
    print(f"Tăng ca: {stats.total_overtime_hours:.2f} giờ | Nghỉ: {stats.total_leave_days:.2f} ngày"
          f" | Họp: {stats.total_meeting_hours:.2f} giờ")

    if args.export is not None:
        if args.export:
            output_path = Path(args.export)
        else:
            filename = format_filename(
                config.output_settings.filename_pattern,
                info.fiscal_month.end_date.year,
                info.fiscal_month.fiscal_month,
            )
            output_path = manager.resolve_path(config.output_settings.output_dir or ".") / filename
        result = service.export_report(today, output_path)
        print(f"Đã xuất báo cáo: {result.output_path}")


if __name__ == "__main__":
    main()
