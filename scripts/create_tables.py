# create_tables.py
import argparse

from sqlalchemy import create_engine

from app.core.settings import get_settings
from infrastructure.persistence.tables import Base


def main() -> None:
    p = argparse.ArgumentParser(description="Create the training team tables.")
    p.add_argument("--database-url", default=None, help="Defaults to DATABASE_URL from the environment / .env")
    p.add_argument("--drop", action="store_true", help="Drop existing tables first")
    args = p.parse_args()

    engine = create_engine(args.database_url or get_settings().database_url)
    try:
        if args.drop:
            Base.metadata.drop_all(engine)
        Base.metadata.create_all(engine)
        print(f"✅ Tables ready: {', '.join(sorted(Base.metadata.tables))}")
    finally:
        engine.dispose()


if __name__ == "__main__":
    main()
