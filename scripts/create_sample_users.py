import os
import sys

# Add parent dir to path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from resale_catalog.infrastructure.database import Base, SessionLocal, engine
from resale_catalog.domain.models.user import User
from resale_catalog.infrastructure.repositories.user_repository import SQLAlchemyUserRepository

SAMPLE_USERNAMES = ["田中太郎", "佐藤花子", "鈴木一郎", "高橋美咲", "山田健太"]


def create_sample_users():
    print("Creating sample users...")
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        repo = SQLAlchemyUserRepository(db, User)
        for username in SAMPLE_USERNAMES:
            if repo.get_by_username(username):
                print(f"User {username} already exists, skipping...")
                continue
            user = repo.create({"username": username})
            print(f"Created user: {user.username} (ID: {user.id})")

        print("\nAll users in database:")
        for user in repo.list_newest_first():
            print(f"- {user.username} (ID: {user.id})")
    finally:
        db.close()


if __name__ == "__main__":
    create_sample_users()
