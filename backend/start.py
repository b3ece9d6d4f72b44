"""Startup script for deployment.

Creates any tables missing from the database, then seeds the default omission
reasons. Both steps leave existing tables and rows alone.
"""

from sqlalchemy import inspect

from timeledger.db.base import Base
from timeledger.db.seed import seed_omission_reasons
from timeledger.db.session import SessionLocal, engine
from timeledger import models  # noqa: F401


def main():
    inspector = inspect(engine)
    existing = set(inspector.get_table_names())
    missing = sorted(set(Base.metadata.tables) - existing)

    if missing:
        print(f"Creating tables: {', '.join(missing)}")
        Base.metadata.create_all(bind=engine)
    else:
        print("All tables present.")

    db = SessionLocal()
    try:
        created = seed_omission_reasons(db)
        print(f"Seeded {created} omission reasons.")
    finally:
        db.close()


if __name__ == "__main__":
    main()
