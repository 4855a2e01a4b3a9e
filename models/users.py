from datetime import date
from models import db
from werkzeug.security import generate_password_hash, check_password_hash


class User(db.Model):
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    email = db.Column(db.String(255), nullable=False, unique=True)
    password_hash = db.Column(db.String(255), nullable=True)  # null for GitHub-only accounts
    institution = db.Column(db.String(255), nullable=True)
    avatar = db.Column(db.String(512), nullable=True)
    xp = db.Column(db.Integer, default=0, nullable=False)
    streak = db.Column(db.Integer, default=0, nullable=False)
    last_active_date = db.Column(db.Date, nullable=True)
    auth_provider = db.Column(db.String(20), default='email', nullable=False)  # 'email', 'github'
    github_id = db.Column(db.String(50), nullable=True, unique=True)
    github_username = db.Column(db.String(100), nullable=True)
    created_at = db.Column(db.DateTime, default=db.func.now(), nullable=False)

    progress = db.relationship("UserProgress", back_populates="user", uselist=False, cascade="all, delete-orphan")
    badges = db.relationship("UserBadge", back_populates="user", cascade="all, delete-orphan")

    def set_password(self, password):
        """Hashes the password before storing."""
        self.password_hash = generate_password_hash(password, method="pbkdf2:sha256")

    def check_password(self, password):
        """Checks if a given password matches the stored hash."""
        if not self.password_hash:
            return False
        return check_password_hash(self.password_hash, password)

    def __repr__(self):
        return f"<User {self.email} ({self.auth_provider})>"

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "institution": self.institution,
            "avatar": self.avatar,
            "xp": self.xp or 0,
            "streak": self.streak or 0,
            "last_active_date": self.last_active_date.isoformat() if isinstance(self.last_active_date, date) else None,
        }
