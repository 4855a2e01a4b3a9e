from models import db
from datetime import datetime


class ModuleDiscussion(db.Model):
    __tablename__ = "module_discussions"

    id = db.Column(db.Integer, primary_key=True)
    module_id = db.Column(db.String(255), nullable=False, index=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)
    content = db.Column(db.Text, nullable=True)
    images = db.Column(db.JSON, default=list, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    user = db.relationship("User", backref=db.backref("discussions", cascade="all, delete-orphan"))

    def __repr__(self):
        return f"<ModuleDiscussion {self.id} module={self.module_id}>"

    def to_dict(self):
        sender = self.user
        return {
            "id": self.id,
            "module_id": self.module_id,
            "sender": {
                "id": sender.id if sender else self.user_id,
                "name": sender.name if sender else None,
                "avatar": sender.avatar if sender else None,
            },
            "content": self.content,
            "images": list(self.images or []),
            "timestamp": self.created_at.isoformat() if self.created_at else None,
        }
