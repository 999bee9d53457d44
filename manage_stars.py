"""
Star management utility
List or purge the stars of a user
"""
from server import app
from models import User
from core.stars import GetUserStarsQuery, StarService
import sys


def _find_user(email):
    user = User.query.filter_by(email=email.lower().strip()).first()
    if not user:
        print(f"❌ User not found: {email}")
    return user


def list_stars(email):
    """List the dashboard uids a user has starred"""
    with app.app_context():
        user = _find_user(email)
        if not user:
            return None

        uids = sorted(StarService().get_by_user(GetUserStarsQuery(user_id=user.id)).user_stars)
        if not uids:
            print(f"{email} has no starred dashboards")
            return []

        print(f"Dashboards starred by {email}:")
        for uid in uids:
            print(f"  - {uid}")
        return uids


def purge_stars(email):
    """Remove every star owned by a user"""
    with app.app_context():
        user = _find_user(email)
        if not user:
            return None

        removed = StarService().delete_by_user(user.id)
        print(f"✅ Removed {removed} stars for {email}")
        return removed


def show_usage():
    """Show usage information"""
    print("""
Dashboard Stars Management Utility

Usage:
    python manage_stars.py list <email>      - List a user's starred dashboards
    python manage_stars.py purge <email>     - Remove all of a user's stars

Examples:
    python manage_stars.py list user@example.com
    python manage_stars.py purge user@example.com
    """)


if __name__ == '__main__':
    if len(sys.argv) < 3:
        show_usage()
        sys.exit(1)

    command = sys.argv[1].lower()
    email = sys.argv[2]

    if command == 'list':
        result = list_stars(email)
    elif command == 'purge':
        result = purge_stars(email)
    else:
        print(f"❌ Unknown command: {command}")
        show_usage()
        sys.exit(1)

    sys.exit(0 if result is not None else 1)
