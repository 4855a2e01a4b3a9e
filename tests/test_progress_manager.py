import datetime

from classes.progress_manager import ProgressManager
from models import db
from models.users import User
from utils.badge_service import award_badge, evaluate_all_badges


def _user(**fields):
    user = User(name="Ada", email="ada@example.com", **fields)
    user.set_password("secret123")
    db.session.add(user)
    db.session.commit()
    return user


def test_streak_continues_from_yesterday(app):
    today = datetime.date(2024, 5, 10)
    user = _user(streak=3, last_active_date=today - datetime.timedelta(days=1))

    assert ProgressManager.record_activity(user, today) == 4
    assert user.last_active_date == today


def test_streak_unchanged_on_same_day(app):
    today = datetime.date(2024, 5, 10)
    user = _user(streak=3, last_active_date=today)

    assert ProgressManager.record_activity(user, today) == 3


def test_streak_resets_after_gap(app):
    today = datetime.date(2024, 5, 10)
    user = _user(streak=9, last_active_date=today - datetime.timedelta(days=3))

    assert ProgressManager.record_activity(user, today) == 1


def test_streak_starts_for_first_activity(app):
    user = _user(streak=0)

    assert ProgressManager.record_activity(user, datetime.date(2024, 5, 10)) == 1


def test_add_xp_ignores_non_positive_amounts(app):
    user = _user(xp=10)

    ProgressManager.add_xp(user.id, 0)
    ProgressManager.add_xp(user.id, 15)
    db.session.commit()
    db.session.refresh(user)

    assert user.xp == 25


def test_upsert_progress_creates_then_updates(app):
    user = _user()

    progress, created = ProgressManager.upsert_progress(user.id, current_path="frontend")
    db.session.commit()
    assert created is True
    assert progress.completed_lessons == []

    progress, created = ProgressManager.upsert_progress(user.id, current_module="html")
    db.session.commit()
    assert created is False
    assert (progress.current_path, progress.current_module) == ("frontend", "html")


def test_award_badge_only_once(app):
    user = _user()

    assert award_badge(user.id, "xp-hunter")["badge_name"] == "XP Hunter"
    assert award_badge(user.id, "xp-hunter") is None
    assert award_badge(user.id, "no-such-badge") is None


def test_evaluate_all_badges_uses_thresholds(app):
    user = _user(xp=150, streak=3)
    ProgressManager.upsert_progress(user.id, completed_lessons=[f"m:{i}" for i in range(5)], completed_modules=["p:m"])
    db.session.commit()

    earned = {badge["badge_id"] for badge in evaluate_all_badges(user.id)}

    assert earned == {"first-lesson", "quick-learner", "module-master", "streak-warrior", "xp-hunter"}
    assert evaluate_all_badges(user.id) == []
