"""
Initialize the database tables for the dashboard stars service
"""
from server import app
from models import db, User, Dashboard, Star


def init_database():
    """Create all database tables"""
    with app.app_context():
        db.create_all()
        print("✅ Database tables created successfully!")

        counts = {
            'users': User.query.count(),
            'dashboards': Dashboard.query.count(),
            'stars': Star.query.count(),
        }
        for table, count in counts.items():
            print(f"   - {table}: {count} rows")
        return counts


if __name__ == '__main__':
    init_database()
