from models import db, UserBadge, UserProgress, User
from datetime import datetime

# badge_id -> display name
BADGE_CATALOG = {
    "first-lesson": "First Step",
    "quick-learner": "Quick Learner",
    "module-master": "Module Master",
    "streak-warrior": "Streak Warrior",
    "xp-hunter": "XP Hunter",
}


def award_badge(user_id, badge_id):
    badge_name = BADGE_CATALOG.get(badge_id)
    if not badge_name:
        return None

    already_awarded = UserBadge.query.filter_by(user_id=user_id, badge_id=badge_id).first()
    if not already_awarded:
        new_badge = UserBadge(user_id=user_id, badge_id=badge_id, badge_name=badge_name, earned_at=datetime.utcnow())
        db.session.add(new_badge)
        db.session.flush()
        return new_badge.to_dict()
    return None


def _award_if(user_id, badge_id, condition):
    if condition:
        return award_badge(user_id, badge_id)
    return None


def evaluate_lesson_badges(user_id, completed_lessons):
    badges = [
        _award_if(user_id, "first-lesson", completed_lessons >= 1),
        _award_if(user_id, "quick-learner", completed_lessons >= 5),
    ]
    return [b for b in badges if b]


def evaluate_module_badges(user_id, completed_modules):
    b = _award_if(user_id, "module-master", completed_modules >= 1)
    return [b] if b else []


def evaluate_streak_badges(user_id, streak):
    b = _award_if(user_id, "streak-warrior", streak >= 3)
    return [b] if b else []


def evaluate_xp_badges(user_id, xp):
    b = _award_if(user_id, "xp-hunter", xp >= 100)
    return [b] if b else []


def evaluate_all_badges(user_id):
    user = db.session.get(User, user_id)
    if not user:
        return []
    progress = UserProgress.query.filter_by(user_id=user_id).first()
    lessons = len(progress.completed_lessons or []) if progress else 0
    modules = len(progress.completed_modules or []) if progress else 0

    new_badges = []
    new_badges += evaluate_lesson_badges(user_id, lessons)
    new_badges += evaluate_module_badges(user_id, modules)
    new_badges += evaluate_streak_badges(user_id, user.streak or 0)
    new_badges += evaluate_xp_badges(user_id, user.xp or 0)

    return new_badges


def list_badges(user_id):
    badges = UserBadge.query.filter_by(user_id=user_id).order_by(UserBadge.earned_at.asc(), UserBadge.id.asc()).all()
    return [badge.to_dict() for badge in badges]
