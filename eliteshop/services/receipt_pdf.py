from __future__ import annotations

import os
from datetime import datetime

from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

from eliteshop.config import settings
from eliteshop.store.cart import CheckoutSummary
from eliteshop.utils.formatters import money


def receipt_filename(summary: CheckoutSummary) -> str:
    stamp = datetime.fromisoformat(summary.created_at.replace("Z", "+00:00"))
    return f"receipt_{stamp.strftime('%Y%m%d_%H%M%S_%f')}.pdf"


def generate_receipt_pdf(summary: CheckoutSummary, out_dir: str) -> str:
    os.makedirs(out_dir, exist_ok=True)
    path = os.path.join(out_dir, receipt_filename(summary))

    c = canvas.Canvas(path, pagesize=A4)
    w, h = A4

    y = h - 50
    c.setFont("Helvetica-Bold", 14)
    c.drawString(40, y, f"{settings.shop_name.upper()} - CHECKOUT SUMMARY")
    y -= 20

    c.setFont("Helvetica", 11)
    c.drawString(40, y, f"Date: {summary.created_at}")
    y -= 16
    c.drawString(40, y, f"Items: {summary.items} ({summary.total_items} pcs)")
    y -= 16
    c.drawString(40, y, f"Currency: {settings.currency}")
    y -= 24

    # header
    c.setFont("Helvetica-Bold", 10)
    c.drawString(40, y, "Item")
    c.drawString(310, y, "Qty")
    c.drawString(360, y, "Price")
    c.drawString(440, y, "Total")
    y -= 10
    c.line(40, y, 550, y)
    y -= 16

    c.setFont("Helvetica", 10)
    for it in summary.lines:
        c.drawString(40, y, it.name[:45])
        c.drawRightString(340, y, str(it.quantity))
        c.drawRightString(420, y, money(it.unit_price))
        c.drawRightString(550, y, money(it.line_total))
        y -= 14
        if y < 80:
            c.showPage()
            y = h - 50
            c.setFont("Helvetica", 10)

    y -= 10
    c.line(40, y, 550, y)
    y -= 18
    c.setFont("Helvetica-Bold", 12)
    c.drawRightString(550, y, f"TOTAL: {money(summary.total)}")
    y -= 24
    c.setFont("Helvetica-Oblique", 9)
    c.drawString(40, y, "This is a demo - no actual payment processed.")

    c.save()
    return path
