"""
Script to create the first super admin user.
Run this after migrations to create the initial admin account.
"""
import sys
from pathlib import Path

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from invitely.core.database import SessionLocal
from invitely.core.exceptions import ConflictError
from invitely.models.user import UserRole
from invitely.services.users import create_user


def create_admin_user(username: str, email: str, password: str, name: str = "Admin User"):
    """Create a super admin account (active immediately)."""
    db = SessionLocal()
    try:
        admin = create_user(
            db,
            name=name,
            username=username,
            email=email,
            password=password,
            role=UserRole.SUPER_ADMIN,
        )
        print(f"✅ Super admin created successfully!")
        print(f"   ID: {admin.id}")
        print(f"   Username: {admin.username}")
        print(f"   Email: {admin.email}")
        print(f"   Status: {admin.status.value}")
    except ConflictError as e:
        print(f"User already exists: {e}")
    finally:
        db.close()


if __name__ == "__main__":
    import argparse
    parser = argparse.ArgumentParser(description='Create super admin user')
    parser.add_argument('--username', default='admin', help='Admin username')
    parser.add_argument('--email', default='admin@invitely.local', help='Admin email')
    parser.add_argument('--password', required=True, help='Admin password (min 8 characters)')
    parser.add_argument('--name', default='Admin User', help='Admin full name')
    args = parser.parse_args()

    if len(args.password) < 8:
        parser.error("password must be at least 8 characters")

    create_admin_user(args.username, args.email, args.password, args.name)
