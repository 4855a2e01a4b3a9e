from models import db
from datetime import datetime


class UserBadge(db.Model):
    __tablename__ = "user_badges"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)
    badge_id = db.Column(db.String(50), nullable=False)
    badge_name = db.Column(db.String(100), nullable=False)
    earned_at = db.Column(db.DateTime, default=datetime.utcnow)

    user = db.relationship("User", back_populates="badges")

    __table_args__ = (
        db.UniqueConstraint("user_id", "badge_id", name="unique_user_badge"),
    )

    def to_dict(self):
        return {
            "badge_id": self.badge_id,
            "badge_name": self.badge_name,
            "earned_at": self.earned_at.isoformat() if self.earned_at else None,
        }
