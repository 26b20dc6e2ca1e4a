"""Printable grocery checklist using ReportLab."""

from __future__ import annotations

from collections.abc import Collection, Sequence
from pathlib import Path
from xml.sax.saxutils import escape

from ..types import Recipe
from .export import format_ingredient
from .models import OrganizedGroceryList, item_key


def generate_pdf(
    organized: OrganizedGroceryList,
    output_path: str | Path,
    recipes: Sequence[Recipe] = (),
    checked: Collection[str] = (),
) -> Path:
    """Generate a PDF checklist from an organised grocery list.

    Checked items are printed struck through and ticked, so the sheet
    matches what's on screen.

    Args:
        organized: The list to render.
        output_path: Where to save the PDF file.
        recipes: Selected recipes, listed under the title.
        checked: Item keys already ticked off.

    Returns:
        Path to the generated PDF file.

    Raises:
        ImportError: If reportlab is not installed.
    """
    try:
        from reportlab.lib import colors
        from reportlab.lib.pagesizes import A4
        from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
        from reportlab.lib.units import mm
        from reportlab.platypus import (
            Paragraph,
            SimpleDocTemplate,
            Spacer,
            Table,
            TableStyle,
        )
    except ImportError:
        raise ImportError("reportlab is required: pip install reportlab")

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    doc = SimpleDocTemplate(
        str(output_path),
        pagesize=A4,
        leftMargin=15 * mm,
        rightMargin=15 * mm,
        topMargin=15 * mm,
        bottomMargin=15 * mm,
    )

    styles = getSampleStyleSheet()
    title_style = ParagraphStyle(
        "GroceryTitle",
        parent=styles["Title"],
        fontSize=18,
        leading=24,
    )
    subtitle_style = ParagraphStyle(
        "GrocerySubtitle",
        parent=styles["Normal"],
        fontSize=10,
        leading=14,
        textColor=colors.grey,
    )
    heading_style = ParagraphStyle(
        "GrocerySection",
        parent=styles["Heading2"],
        fontSize=13,
        leading=18,
        spaceBefore=4 * mm,
        spaceAfter=2 * mm,
    )
    cell_style = ParagraphStyle(
        "GroceryCell",
        parent=styles["Normal"],
        fontSize=9,
        leading=12,
    )
    source_style = ParagraphStyle(
        "GrocerySource",
        parent=cell_style,
        fontSize=8,
        textColor=colors.grey,
    )

    elements: list = []

    noun = "recipe" if len(recipes) == 1 else "recipes"
    elements.append(Paragraph("Shopping List", title_style))
    if recipes:
        elements.append(
            Paragraph(
                escape(
                    f"For {len(recipes)} {noun}: "
                    + " • ".join(r.title for r in recipes)
                ),
                subtitle_style,
            )
        )
    elements.append(Spacer(1, 4 * mm))

    table_style = TableStyle([
        ("VALIGN", (0, 0), (-1, -1), "TOP"),
        ("LINEBELOW", (0, 0), (-1, -1), 0.25, colors.HexColor("#DDDDDD")),
        ("TOPPADDING", (0, 0), (-1, -1), 3),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 3),
        ("LEFTPADDING", (0, 0), (-1, -1), 4),
        ("RIGHTPADDING", (0, 0), (-1, -1), 4),
    ])
    col_widths = [8 * mm, 100 * mm, 72 * mm]

    for section, items in organized.items():
        elements.append(Paragraph(escape(str(section)), heading_style))

        rows = []
        for item in items:
            text = escape(format_ingredient(item))
            is_checked = item.checked or item_key(item) in checked
            if is_checked:
                text = f"<strike>{text}</strike>"
            rows.append([
                "[x]" if is_checked else "[ ]",
                Paragraph(text, cell_style),
                Paragraph(escape(", ".join(item.from_recipes)), source_style),
            ])

        t = Table(rows, colWidths=col_widths)
        t.setStyle(table_style)
        elements.append(t)

    doc.build(elements)
    return output_path
