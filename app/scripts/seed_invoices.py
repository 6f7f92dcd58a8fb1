import asyncio
import logging
import sys
from datetime import datetime, timezone
from decimal import Decimal
from app.core.database import AsyncSessionLocal
from app.core.logging import configure_logging
from app.domain.invoices import crud
from app.domain.invoices.models import Invoice
from app.domain.owners.crud import get_owner
from app.domain.reporting.schemas import AggregateDTO
from app.renderers.formatting import format_inr
from app.services import invoices_service


logger = logging.getLogger("scripts.seed_invoices")


SAMPLE_INVOICES = (
    ("ABC Transport Ltd", "+91-9876543210", "123 Transport Street, Mumbai, Maharashtra 400001",
     "27ABCDE1234F1Z5", "850", 5, "Regular delivery route", "2024-01-15"),
    ("XYZ Logistics Pvt Ltd", "+91-9876543211", "456 Logistics Hub, Delhi, Delhi 110001",
     "07XYZAB5678G1H9", "920", 8, "Express delivery service", "2024-02-20"),
    ("Prime Movers Co", "+91-9876543212", "789 Industrial Area, Pune, Maharashtra 411001",
     "27PRIME1234K1L8", "750", 12, "Bulk cargo transport", "2024-03-10"),
    ("Swift Cargo Services", "+91-9876543213", "321 Port Road, Chennai, Tamil Nadu 600001",
     "33SWIFT1234M1N7", "1000", 6, "Port to warehouse delivery", "2024-06-15"),
    ("Reliable Transport", "+91-9876543214", "654 Highway Junction, Bangalore, Karnataka 560001",
     "29RELBL1234P1Q6", "880", 10, "Interstate transportation", "2024-08-05"),
    ("Mega Freight Solutions", "+91-9876543215", "987 Freight Terminal, Kolkata, West Bengal 700001",
     "19MEGA123456R1S5", "950", 15, "Heavy cargo specialist", "2025-01-10"),
    ("Express Movers Ltd", "+91-9876543216", "147 Express Way, Hyderabad, Telangana 500001",
     "36EXPR123456T1U4", "820", 7, "Time-critical deliveries", "2025-08-18"),
)


def sample_records(owner_id) -> list[dict]:
    records = []
    for name, phone, address, gst, rate, trucks, notes, created in SAMPLE_INVOICES:
        rate_per_ton = Decimal(rate)
        created_at = datetime.fromisoformat(created).replace(tzinfo=timezone.utc)
        records.append({
            "company_name": name,
            "company_phone": phone,
            "company_address": address,
            "company_gst": gst,
            "rate_per_ton": rate_per_ton,
            "trucks": trucks,
            "total": invoices_service.compute_total(rate_per_ton, trucks),
            "notes": notes,
            "owner_id": owner_id,
            "created_at": created_at,
            "updated_at": created_at,
        })
    return records


async def seed_invoices(db) -> AggregateDTO | None:
    owner = await get_owner(db)
    if not owner:
        logger.error("Owner not found. Please run the seed_owner script first.")
        return None

    existing = await crud.count_invoices(db, owner.id)
    logger.info("Found %d existing invoices", existing)
    if existing:
        await crud.delete_invoices(db, owner.id)
        logger.info("Cleared existing invoices for fresh sample data")

    for record in sample_records(owner.id):
        record["invoice_number"] = await invoices_service.next_invoice_number(db)
        db.add(Invoice(**record))
    await db.flush()
    logger.info("Created %d sample invoices", len(SAMPLE_INVOICES))

    stats = await invoices_service.aggregate(db, owner.id)
    logger.info(
        "Dashboard summary: invoices=%d revenue=%s trucks=%d avg_rate=%s",
        stats.invoices, format_inr(stats.total_revenue), stats.total_trucks, format_inr(stats.avg_rate_per_ton)
    )
    return stats


async def main() -> int:
    async with AsyncSessionLocal() as db:
        try:
            stats = await seed_invoices(db)
            await db.commit()
        except Exception:
            await db.rollback()
            logger.exception("Error creating sample invoices")
            return 1
    return 0 if stats else 1


if __name__ == "__main__":
    configure_logging()
    sys.exit(asyncio.run(main()))
