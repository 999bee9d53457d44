"""
Database models for the dashboard stars service
"""
from datetime import datetime
from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()


class User(db.Model):
    """User or service account that can star dashboards"""
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    login = db.Column(db.String(190), unique=True, index=True)
    org_id = db.Column(db.Integer, nullable=False, default=1, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    # Service accounts are users without an interactive login
    is_service_account = db.Column(db.Boolean, default=False, nullable=False)

    stars = db.relationship('Star', backref='user', lazy='dynamic')

    def __repr__(self):
        return f'<User {self.email}>'

    def to_dict(self):
        return {
            'id': self.id,
            'email': self.email,
            'login': self.login,
            'org_id': self.org_id,
            'is_service_account': self.is_service_account,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }


class Dashboard(db.Model):
    """A dashboard, addressable by legacy numeric id or by uid within its org"""
    __tablename__ = 'dashboards'
    __table_args__ = (
        db.UniqueConstraint('org_id', 'uid', name='uq_dashboard_org_uid'),
    )

    id = db.Column(db.Integer, primary_key=True)
    uid = db.Column(db.String(40), nullable=False, index=True)
    org_id = db.Column(db.Integer, nullable=False, index=True)
    title = db.Column(db.String(255), nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f'<Dashboard {self.uid} org={self.org_id}>'

    def to_dict(self):
        return {
            'id': self.id,
            'uid': self.uid,
            'org_id': self.org_id,
            'title': self.title,
        }


class Star(db.Model):
    """A user's star on a dashboard.

    dashboard_id is deliberately not a foreign key: the legacy numeric routes
    store whatever id the client sent. dashboard_uid and org_id are filled in
    when the dashboard is known.
    """
    __tablename__ = 'stars'
    __table_args__ = (
        db.UniqueConstraint('user_id', 'dashboard_id', name='uq_star_user_dashboard_id'),
        db.UniqueConstraint('user_id', 'dashboard_uid', 'org_id', name='uq_star_user_dashboard_uid_org'),
    )

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    dashboard_id = db.Column(db.Integer, nullable=True)
    dashboard_uid = db.Column(db.String(40), nullable=True)
    org_id = db.Column(db.Integer, nullable=True)
    updated = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f'<Star user={self.user_id} dashboard={self.dashboard_uid or self.dashboard_id}>'

    def to_dict(self):
        return {
            'id': self.id,
            'user_id': self.user_id,
            'dashboard_id': self.dashboard_id,
            'dashboard_uid': self.dashboard_uid,
            'org_id': self.org_id,
            'updated': self.updated.isoformat() if self.updated else None,
        }
