"""Tabular and console views of the seller performance report."""

import pandas as pd
from rich.console import Console
from rich.table import Table

from sales_pipeline.performance.models import REPORT_SCHEMA, SellerReport, TopProduct
from sales_pipeline.utils.validators import check_frame

REPORT_COLUMNS = ["rank", "seller_id", "name", "revenue", "profit", "sales_count", "bonus", "top_products"]


def format_top_products(top_products: tuple[TopProduct, ...]) -> str:
    """Compact "sku×qty" list, e.g. "SKU_001×12, SKU_007×3"."""
    return ", ".join(
        f"{p['sku']}×{p['count'] if 'count' in p else p['quantity']}" for p in top_products
    )


def build_report_frame(reports: list[SellerReport]) -> pd.DataFrame:
    """One row per seller in rank order, checked against REPORT_SCHEMA."""
    frame = pd.DataFrame(
        [
            {
                "rank": rank,
                "seller_id": r.seller_id,
                "name": r.name,
                "revenue": r.revenue,
                "profit": r.profit,
                "sales_count": r.sales_count,
                "bonus": r.bonus,
                "top_products": format_top_products(r.top_products),
            }
            for rank, r in enumerate(reports, start=1)
        ],
        columns=REPORT_COLUMNS,
    )
    return check_frame(frame, REPORT_SCHEMA)


def render_report(reports: list[SellerReport], console: Console | None = None) -> None:
    console = console or Console()

    if not reports:
        console.print("[yellow]No sellers with attributed purchases[/yellow]")
        return

    table = Table(title="Seller Performance")
    table.add_column("#", justify="right")
    table.add_column("Seller")
    table.add_column("Revenue", justify="right")
    table.add_column("Profit", justify="right")
    table.add_column("Sales", justify="right")
    table.add_column("Bonus", justify="right")
    table.add_column("Top products")

    for rank, r in enumerate(reports, start=1):
        profit_style = "red" if r.profit < 0 else "green"
        table.add_row(
            str(rank),
            f"{r.name} ({r.seller_id})",
            f"{r.revenue:,.2f}",
            f"[{profit_style}]{r.profit:,.2f}[/{profit_style}]",
            str(r.sales_count),
            f"{r.bonus:,.2f}",
            format_top_products(r.top_products),
        )

    console.print(table)
    total_bonus = sum(r.bonus for r in reports)
    console.print(f"  {len(reports)} sellers ranked, total bonus pool {total_bonus:,.2f}")
