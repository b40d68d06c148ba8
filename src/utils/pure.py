from typing import List, Literal, Optional, Sequence

from store.checkout import Receipt
from store.models import CartItem, Product

PRODUCT_COLUMNS = ["ID", "Name", "Category", "Price", "Stock", "Rating"]


def generate_markdown_table(
    headers: Optional[List[str]],
    rows: List[List[str]],
    aligns: Optional[List[Literal["l", "c", "r"]]] = None,
) -> str:
    """
    Generate a Markdown table.

    Args:
        headers: List of column headers, or None to use first row as headers.
        rows: List of rows, each a list of values (converted with str()).
        aligns: List of alignments ('l', 'c', 'r') for each column.
                Defaults to all center ('c').

    Returns:
        str: Markdown formatted table, or "" when there are no rows.
    """
    if not rows:
        return ""

    if not headers:
        headers, rows = rows[0], rows[1:]

    headers = [str(h) for h in headers]
    rows = [[str(cell) for cell in row] for row in rows]

    if aligns is None:
        aligns = ["c"] * len(headers)
    elif len(aligns) != len(headers):
        raise ValueError("Length of aligns must match number of headers.")

    align_map = {"l": ":---", "c": ":---:", "r": "---:"}

    lines = [
        "| " + " | ".join(headers) + " |",
        "| " + " | ".join(align_map[a] for a in aligns) + " |",
    ]
    lines.extend("| " + " | ".join(row) + " |" for row in rows)
    return "\n".join(lines)


def money(amount: float) -> str:
    return f"${amount:.2f}"


def product_row(p: Product) -> List[str]:
    """One table row per product, columns as in PRODUCT_COLUMNS."""
    return [
        str(p.pid),
        p.name,
        p.category,
        money(p.price),
        str(p.quantity),
        f"{p.average_rating():.2f}",
    ]


def cart_markdown(items: Sequence[CartItem]) -> str:
    """
    Cart listing, top of the stack first, priced with the snapshot taken at add time.
    """
    if not items:
        return "### Your Cart\n\nYour cart is empty."

    rows = [
        [
            str(pos),
            item.snapshot.name,
            money(item.snapshot.price_at_add),
            str(item.quantity),
            money(item.line_total),
        ]
        for pos, item in enumerate(items, start=1)
    ]
    table = generate_markdown_table(
        ["#", "Product", "Unit Price", "Qty", "Line Total"],
        rows,
        ["r", "l", "r", "r", "r"],
    )
    estimate = sum(item.line_total for item in items)
    return (
        "### Your Cart (newest first)\n\n"
        + table
        + f"\n\n**Total Estimate:** {money(estimate)}"
    )


def receipt_markdown(receipt: Receipt) -> str:
    md = "### Official Receipt\n\n"
    md += f"Date: {receipt.issued_at:%Y-%m-%d %H:%M:%S}\n\n"

    if receipt.lines:
        md += generate_markdown_table(
            ["Product", "Qty", "Unit Price", "Line Total", "Your Rating"],
            [
                [
                    line.name,
                    line.quantity,
                    money(line.unit_price),
                    money(line.line_total),
                    f"{line.rating}/5",
                ]
                for line in receipt.lines
            ],
            ["l", "r", "r", "r", "c"],
        )
        md += "\n\n"

    for short in receipt.shortfalls:
        md += (
            f"- **Could not process {short.name}:** stock insufficient "
            f"(wanted {short.requested}, {short.available} left)\n"
        )
    if receipt.shortfalls:
        md += "\n"

    md += f"**TOTAL PAID:** {money(receipt.total)}\n\nThank you for your purchase!"
    return md
