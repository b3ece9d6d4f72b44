import logging

from sqlalchemy.orm import Session

from timeledger.db.session import SessionLocal
from timeledger.models.block_validation import OmissionReason

logger = logging.getLogger(__name__)

DEFAULT_OMISSION_REASONS = [
    ("Felt tired", "health"),
    ("Felt unwell", "health"),
    ("Lost track of time", "personal"),
    ("Lacked motivation", "personal"),
    ("Unexpected commitment", "external"),
    ("Plans changed", "external"),
    ("Other", "other"),
]


def seed_omission_reasons(db: Session) -> int:
    existing = {
        label
        for (label,) in db.query(OmissionReason.label).filter(
            OmissionReason.is_system_default.is_(True)
        )
    }
    created = 0
    for label, category in DEFAULT_OMISSION_REASONS:
        if label in existing:
            continue
        db.add(OmissionReason(label=label, category=category, is_system_default=True))
        created += 1
    db.commit()
    if created:
        logger.info(f"Seeded {created} omission reasons")
    return created


def main() -> None:
    db = SessionLocal()
    try:
        seed_omission_reasons(db)
    finally:
        db.close()


if __name__ == "__main__":
    main()
