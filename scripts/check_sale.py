#!/usr/bin/env python3
"""
Sale Conflict Check Script

Validates a proposed sale (or an edit to an existing sale) against the sales
already scheduled in Supabase and prints the verdict.

Exit codes:
    0  sale can be placed
    1  sale conflicts with existing sales or cooldowns
    2  validation rejected (bad dates, unknown platform or sale)

Usage:
    python check_sale.py --product <uuid> --platform <uuid> --start 2026-03-10 --end 2026-03-17
    python check_sale.py --edit <sale-uuid> --start 2026-03-12 --end 2026-03-19
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional
from uuid import UUID

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from domain.dates import format_display_date, to_local_date
from domain.errors import SaleSchedulingError
from domain.sale import Sale, SalePatch
from services.sale_validation_service import (
    ValidationRequest,
    revalidate_sale_edit,
    validate_proposed_sale,
)
from services.verdict_formatter import ValidationSummary


def _describe_sale(sale: Sale) -> str:
    name = sale.sale_name or "(unnamed sale)"
    if sale.product is not None:
        name = f"{sale.product.display_name} / {name}"
    return (
        f"{name}: {format_display_date(sale.start_date)} - "
        f"{format_display_date(sale.end_date)} [{sale.status.value}]"
    )


def print_summary(summary: ValidationSummary) -> None:
    """Print a validation summary in human-readable form."""
    print("=" * 60)
    print(f"PLATFORM: {summary.platform} (cooldown {summary.cooldown_days} days)")
    print("=" * 60)

    if summary.valid:
        print("✓ Sale can be scheduled")
    else:
        print(f"✗ {summary.message}")

    if summary.warning:
        print(f"! {summary.warning} (sale runs {summary.sale_days} days)")

    if summary.direct_conflicts:
        print()
        print(f"Overlapping sales ({summary.direct_count}):")
        for sale in summary.direct_conflicts:
            print(f"  - {_describe_sale(sale)}")

    if summary.cooldown_conflicts:
        print()
        print(f"Cooldown conflicts ({summary.cooldown_count}):")
        for sale in summary.cooldown_conflicts:
            print(f"  - {_describe_sale(sale)}")

    print()
    if summary.cooldown_window is not None:
        print(
            f"Cooldown window: {format_display_date(summary.cooldown_window.start)} - "
            f"{format_display_date(summary.cooldown_window.end)}"
        )
    print(f"Cooldown after this sale ends on: {format_display_date(summary.cooldown_end)}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Check a proposed sale for overlaps and cooldown violations",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Check a new sale
  python check_sale.py --product 123e4567-... --platform 223e4567-... \\
      --start 2026-03-10 --end 2026-03-17

  # Check a seasonal sale (may skip cooldown on some platforms)
  python check_sale.py --product ... --platform ... --start 2026-06-25 \\
      --end 2026-07-09 --type seasonal

  # Check moving an existing sale
  python check_sale.py --edit 323e4567-... --start 2026-03-12 --end 2026-03-19
        """
    )

    parser.add_argument("--product", type=UUID, help="Product ID")
    parser.add_argument("--platform", type=UUID, help="Platform ID")
    parser.add_argument("--start", help="Start date (YYYY-MM-DD)")
    parser.add_argument("--end", help="End date (YYYY-MM-DD, inclusive)")
    parser.add_argument(
        "--type",
        dest="sale_type",
        help="Sale type (regular, custom, seasonal, festival, special, ...)"
    )
    parser.add_argument(
        "--edit",
        type=UUID,
        metavar="SALE_ID",
        help="Validate changes to this existing sale instead of a new one"
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.edit is not None:
        conflicting = [
            flag for flag, value in (
                ("--product", args.product),
                ("--platform", args.platform),
            )
            if value is not None
        ]
        if conflicting:
            parser.error(f"{', '.join(conflicting)} cannot be combined with --edit")
    else:
        missing = [
            flag for flag, value in (
                ("--product", args.product),
                ("--platform", args.platform),
                ("--start", args.start),
                ("--end", args.end),
            )
            if value is None
        ]
        if missing:
            parser.error(f"missing required arguments for a new sale: {', '.join(missing)}")

    try:
        if args.edit is not None:
            patch = SalePatch(
                start_date=to_local_date(args.start) if args.start else None,
                end_date=to_local_date(args.end) if args.end else None,
                sale_type=args.sale_type,
            )
            summary = revalidate_sale_edit(args.edit, patch)
        else:
            summary = validate_proposed_sale(ValidationRequest(
                product_id=args.product,
                platform_id=args.platform,
                start_date=args.start,
                end_date=args.end,
                sale_type=args.sale_type,
            ))
    except SaleSchedulingError as e:
        print(f"✗ Validation rejected: {e}", file=sys.stderr)
        return 2

    print_summary(summary)
    return 0 if summary.valid else 1


if __name__ == "__main__":
    sys.exit(main())
