from flask_sqlalchemy import SQLAlchemy

# Initialize SQLAlchemy
db = SQLAlchemy()

# Import models
from models.users import User
from models.user_progress import UserProgress
from models.badges import UserBadge
from models.discussions import ModuleDiscussion
