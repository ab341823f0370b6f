import os
import sys

# Add the repository root to the path so we can import modules
sys.path.append(os.path.dirname(os.path.dirname(os.path.dirname(
    os.path.dirname(os.path.abspath(__file__))))))

from sqlmodel import SQLModel  # noqa: E402
from src.api.common.utils.database import engine  # noqa: E402
# Import all models to register them with SQLModel
from src.api.iuran.models.iuran_sync_execution import IuranSyncExecution  # noqa: E402,F401


def init_db():
    """Initialize the database by creating all tables"""
    print("Creating database tables...")
    SQLModel.metadata.create_all(engine)
    print("Database tables created successfully.")


if __name__ == "__main__":
    init_db()
