# scripts/init_db.py
"""
Script to initialize the roster session tables. Run from project root:
    python scripts/init_db.py
"""
from fairgroup.infrastructure import models  # noqa: F401
from fairgroup.infrastructure.db.session import Base, engine

def init():
    Base.metadata.create_all(bind=engine)
    print("DB initialized")

if __name__ == "__main__":
    init()
