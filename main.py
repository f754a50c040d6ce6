"""
Traveler Check-in - Command Line Entry Point

Validates single values or whole traveler files with the same rules the
add-traveler wizard applies.

Usage:
    python main.py document 12345678Z --type dni --country ES
    python main.py phone "600 123 456" --country ES
    python main.py postal "28 001" --country ES
    python main.py dob 15/03/1990
    python main.py city malaga
    python main.py travelers path/to/travelers.xlsx [--output checked.xlsx]
"""

import argparse
import logging
import sys
import os
from pathlib import Path

from config import DEFAULT_COUNTRY, MUNICIPALITY_MAX_RESULTS
from data_loader import load_travelers
from models import DocumentType
from processor import TravelerBatchValidator, STATUS_INVALID, ERROR_SEPARATOR
from utils.municipality_search import search_municipalities
from validators import validate_document, validate_phone, validate_postal_code, validate_date_of_birth

DEFAULT_OUTPUT_FILE = 'travelers_checked.xlsx'
LOG_FILE = 'checkin.log'

logger = logging.getLogger(__name__)


def setup_logging(verbose=False):
    """Log to checkin.log and the console."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.FileHandler(LOG_FILE),
            logging.StreamHandler()
        ]
    )


def get_next_available_filename(base_filename):
    """
    Get the next available filename by appending a number if file exists.

    Args:
        base_filename: Base filename (e.g., 'travelers_checked.xlsx')

    Returns:
        str: Available filename (e.g., 'travelers_checked_1.xlsx')
    """
    if not os.path.exists(base_filename):
        return base_filename

    base_path = Path(base_filename)
    directory = base_path.parent if base_path.parent.name else Path('.')

    counter = 1
    while True:
        new_filename = directory / f"{base_path.stem}_{counter}{base_path.suffix}"
        if not new_filename.exists():
            return str(new_filename)
        counter += 1


def save_results_to_excel(results_df, output_file):
    """
    Save results to Excel with formatting.

    Features:
    - Blue header row
    - Yellow highlighting for invalid travelers
    - Auto-adjusted column widths
    - Frozen header row

    Args:
        results_df: Results DataFrame
        output_file: Output file path
    """
    from openpyxl import load_workbook
    from openpyxl.styles import PatternFill, Alignment, Font

    results_df.to_excel(output_file, index=False)

    wb = load_workbook(output_file)
    ws = wb.active

    header_fill = PatternFill(start_color="4472C4", end_color="4472C4", fill_type="solid")
    header_font = Font(bold=True, color="FFFFFF", size=11)
    for cell in ws[1]:
        cell.fill = header_fill
        cell.font = header_font
        cell.alignment = Alignment(horizontal='center', vertical='center')

    status_col = list(results_df.columns).index('Status') + 1
    error_fill = PatternFill(start_color="FFFF00", end_color="FFFF00", fill_type="solid")
    for row_idx in range(2, ws.max_row + 1):
        if ws.cell(row=row_idx, column=status_col).value == STATUS_INVALID:
            for cell in ws[row_idx]:
                cell.fill = error_fill

    for col_idx, col in enumerate(results_df.columns, 1):
        max_length = max(results_df[col].astype(str).apply(len).max() if len(results_df) else 0, len(str(col))) + 2
        col_letter = ws.cell(row=1, column=col_idx).column_letter
        ws.column_dimensions[col_letter].width = min(max_length, 50)

    ws.freeze_panes = 'A2'
    wb.save(output_file)
    logger.info(f"Applied Excel formatting to {output_file}")


def save_results(results_df, output_file):
    if Path(output_file).suffix.lower() == '.csv':
        results_df.to_csv(output_file, index=False)
    else:
        save_results_to_excel(results_df, output_file)


def print_result(label, result):
    """Print a ValidationResult and return the matching exit code."""
    if result:
        details = []
        if result.formatted:
            details.append(result.formatted)
        if result.age is not None:
            details.append(f"age {result.age}")
        suffix = f" ({', '.join(details)})" if details else ""
        print(f"{label}: valid{suffix}")
        return 0

    line = f"{label}: {result.message}"
    if result.suggestion:
        line += f". {result.suggestion}"
    print(line)
    return 1


def cmd_document(args):
    result = validate_document(args.number, DocumentType(args.type), args.country)
    return print_result("Document", result)


def cmd_phone(args):
    return print_result("Phone", validate_phone(args.number, args.country))


def cmd_postal(args):
    return print_result("Postal code", validate_postal_code(args.code, args.country))


def cmd_dob(args):
    return print_result("Date of birth", validate_date_of_birth(args.date))


def cmd_city(args):
    matches = search_municipalities(args.query, max_results=args.max)
    if not matches:
        print(f"No municipality matches '{args.query}'")
        return 1
    for municipality in matches:
        print(f"{municipality.ine_code}  {municipality.name} ({municipality.province})")
    return 0


def cmd_travelers(args):
    travelers_df = load_travelers(args.file)
    results_df = TravelerBatchValidator(travelers_df).process()

    errors_count = int((results_df['Status'] == STATUS_INVALID).sum())
    logger.info(f"Travelers with errors: {errors_count}")
    logger.info(f"Travelers without errors: {len(results_df) - errors_count}")

    if errors_count > 0:
        error_types = {}
        for error in results_df.loc[results_df['Status'] == STATUS_INVALID, 'Error']:
            for err in str(error).split(ERROR_SEPARATOR):
                err = err.strip()
                if err:
                    error_types[err] = error_types.get(err, 0) + 1

        logger.info("Error breakdown:")
        for error_type, count in sorted(error_types.items(), key=lambda x: -x[1]):
            logger.info(f"  {error_type}: {count}")

    output_file = get_next_available_filename(args.output)
    if output_file != args.output:
        logger.info(f"{args.output} already exists, using: {output_file}")

    save_results(results_df, output_file)
    logger.info(f"Results saved to: {os.path.abspath(output_file)}")
    return 1 if errors_count else 0


def build_parser():
    parser = argparse.ArgumentParser(description="Validate traveler check-in data")
    parser.add_argument('-v', '--verbose', action='store_true', help="Enable debug logging")
    subparsers = parser.add_subparsers(dest='command', required=True)

    document = subparsers.add_parser('document', help="Validate an identity document number")
    document.add_argument('number')
    document.add_argument('--type', choices=[t.value for t in DocumentType], default=DocumentType.PASSPORT.value)
    document.add_argument('--country', default=DEFAULT_COUNTRY)
    document.set_defaults(func=cmd_document)

    phone = subparsers.add_parser('phone', help="Validate a phone number")
    phone.add_argument('number')
    phone.add_argument('--country', default=DEFAULT_COUNTRY)
    phone.set_defaults(func=cmd_phone)

    postal = subparsers.add_parser('postal', help="Validate a postal code")
    postal.add_argument('code')
    postal.add_argument('--country', default=DEFAULT_COUNTRY)
    postal.set_defaults(func=cmd_postal)

    dob = subparsers.add_parser('dob', help="Validate a date of birth")
    dob.add_argument('date')
    dob.set_defaults(func=cmd_dob)

    city = subparsers.add_parser('city', help="Search Spanish municipalities")
    city.add_argument('query')
    city.add_argument('--max', type=int, default=MUNICIPALITY_MAX_RESULTS)
    city.set_defaults(func=cmd_city)

    travelers = subparsers.add_parser('travelers', help="Validate a CSV/Excel file of travelers")
    travelers.add_argument('file')
    travelers.add_argument('--output', default=DEFAULT_OUTPUT_FILE)
    travelers.set_defaults(func=cmd_travelers)

    return parser


def main(argv=None):
    """Main entry point. Returns the process exit code."""
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    try:
        return args.func(args)
    except FileNotFoundError as e:
        logger.error(f"File not found: {e}")
        return 2
    except ValueError as e:
        logger.error(f"Invalid input file: {e}")
        return 2


if __name__ == "__main__":
    sys.exit(main())
