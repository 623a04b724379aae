"""
Database initialization script.
"""
import logging
from intouch.db.session import SessionLocal, init_db
from intouch.db.seed import seed_database

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    print("Initializing database...")
    init_db()
    db = SessionLocal()
    try:
        seed_database(db)
    finally:
        db.close()
    print("Database initialized successfully!")
