"""
Database initialization script.
Creates all tables and seeds the default monitored assets.
"""
from sqlalchemy import inspect
from src.models.base import Base, SessionLocal, engine
# CRITICAL: Import all models to register them
from src.models.signals import TradingSignal
from src.models.signal_history import SignalHistory
from src.models.asset_configs import AssetConfig
from src.core.exceptions import StorageError
from src.storage.sql_store import SqlSignalStore
from config.settings import get_assets_config

def init_database():
    """
    Initialize database with all tables.
    Steps:
    1. Create all tables from SQLAlchemy models
    2. Seed asset configs from config/assets.yaml
    3. Verify
    """
    print("📡 Signal Monitor - Database Initialization")
    print("=" * 50)

    # Step 1: Create all tables
    print("\n1. Creating all tables...")
    try:
        Base.metadata.create_all(bind=engine)
        print("  ✓ All tables created")
    except Exception as e:
        print(f"  ✗ Error creating tables: {e}")
        return

    # Step 2: Seed assets
    print("\n2. Seeding monitored assets...")
    db = SessionLocal()
    try:
        store = SqlSignalStore(db)
        for entry in get_assets_config().get('assets', []):
            fields = {key: value for key, value in entry.items() if key != 'asset'}
            store.upsert_asset_config(entry['asset'], fields)
            print(f"  ✓ {entry['asset']}")
    except StorageError as e:
        print(f"  ✗ Error seeding assets: {e}")
    finally:
        db.close()

    # Step 3: Verify
    print("\n3. Verifying tables...")
    tables = inspect(engine).get_table_names()
    print(f"  ✓ Found {len(tables)} tables:")
    for table in tables:
        print(f"    - {table}")

    print("\n" + "=" * 50)
    print("✅ Database initialization complete!")
    print("\nNext steps:")
    print("1. Start API: uvicorn src.api.main:app")
    print("2. Access docs: http://localhost:8000/docs")

if __name__ == "__main__":
    init_database()
