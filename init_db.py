#!/usr/bin/env python3
"""
Database Initialization Script
Run once after cloning to create the schema and the default data.
"""
import sys
from pathlib import Path


def main():
    """Initialize database with default data"""
    print("=" * 60)
    print("Grant Portal - Database Initialization")
    print("=" * 60)

    from grant_portal.config import settings
    from grant_portal.database import init_db, SessionLocal
    from grant_portal.models.init_data import init_default_data
    from grant_portal.models.generate_dummy_data import generate_dummy_data

    # Initialize database schema
    print("\n🔨 Creating database tables...")
    init_db()
    print("✅ Database schema created successfully")

    # Initialize default data
    print("\n📊 Initializing default data...")
    db = SessionLocal()
    try:
        init_default_data(db)
        print("✅ Default data initialized")

        response = input("\n❓ Generate demo data? (y/n) [default: n]: ").strip().lower()
        if response == 'y':
            print("\n🎲 Generating demo data...")
            generate_dummy_data(db)
        else:
            print("⏭️  Skipping demo data generation")

    except Exception as e:
        print(f"❌ Error during initialization: {e}")
        db.rollback()
        sys.exit(1)
    finally:
        db.close()

    if settings.database_url.startswith("sqlite:///"):
        db_file = Path(settings.database_url.replace("sqlite:///", "", 1))
        if db_file.exists():
            size_kb = db_file.stat().st_size / 1024
            print(f"\n✅ Database file created: {db_file} ({size_kb:.2f} KB)")

    print("\n" + "=" * 60)
    print("🎉 Database initialization completed!")
    print("=" * 60)
    print("\n📝 Next steps:")
    print("   1. Configure .env file (SECRET_KEY is required)")
    print("   2. Run: uvicorn grant_portal.main:app --reload --host 0.0.0.0 --port 8000")
    print("   3. Open: http://localhost:8000/docs")
    print("\n👤 Default admin account:")
    print(f"   Username: {settings.default_admin_username}")
    print("=" * 60)


if __name__ == "__main__":
    main()
