"""
Seed script to create a user and print a bearer token for it.

Usage:
    python scripts/seed_user.py --email me@example.com --name "Me" --password secret

Running it again for an existing email only issues a new token when the
password matches.
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add parent directory to path so we can import task_manager modules
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from task_manager.core.jwt import create_access_token
from task_manager.core.security import verify_password
from task_manager.db.session import get_async_session_context
from task_manager.repositories.user_repository import UserRepository


async def seed_user(name: str, email: str, password: str) -> bool:
    """Create the user if needed, then print a token for it."""
    async with get_async_session_context() as db:
        user_repo = UserRepository(db)
        user = await user_repo.get_by_email(email)
        
        if user:
            if not verify_password(password, user.hashed_password):
                print(f"✗ User {user.email} exists with a different password; no token issued")
                return False
            print(f"✓ User already exists: {user.email} (ID: {user.id})")
        else:
            user = await user_repo.create(name=name, email=email, password=password)
            print(f"✓ Created user: {user.email} (ID: {user.id})")
        
        token = create_access_token({"user_id": str(user.id), "email": user.email})
    
    print("\n✓ Bearer token:")
    print(f"  {token}")
    print("\n✓ Store it for the console with:")
    print(f"  task-console login {token}")
    return True


def main() -> None:
    parser = argparse.ArgumentParser(description="Create a user and print a bearer token")
    parser.add_argument("--name", default="Demo User")
    parser.add_argument("--email", default="demo@example.com")
    parser.add_argument("--password", default="demo1234")
    args = parser.parse_args()
    if not asyncio.run(seed_user(args.name, args.email, args.password)):
        sys.exit(1)


if __name__ == "__main__":
    main()
