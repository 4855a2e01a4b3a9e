from models import db


class UserProgress(db.Model):
    __tablename__ = "user_progress"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, unique=True)
    # Progress keys: "moduleId:lessonId" and "pathId:moduleId"
    completed_lessons = db.Column(db.JSON, default=list, nullable=False)
    completed_modules = db.Column(db.JSON, default=list, nullable=False)
    current_path = db.Column(db.String(255), nullable=True)
    current_module = db.Column(db.String(255), nullable=True)
    current_lesson = db.Column(db.String(255), nullable=True)
    created_at = db.Column(db.DateTime, default=db.func.now(), nullable=False)
    updated_at = db.Column(db.DateTime, default=db.func.now(), onupdate=db.func.now(), nullable=False)

    user = db.relationship("User", back_populates="progress")

    def __repr__(self):
        return f"<UserProgress user={self.user_id} lessons={len(self.completed_lessons or [])}>"

    def to_dict(self):
        return {
            "id": self.id,
            "user_id": self.user_id,
            "completed_lessons": list(self.completed_lessons or []),
            "completed_modules": list(self.completed_modules or []),
            "current_path": self.current_path,
            "current_module": self.current_module,
            "current_lesson": self.current_lesson,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
