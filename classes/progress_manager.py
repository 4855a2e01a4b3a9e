from datetime import timedelta
from sqlalchemy import case
from models import db
from models.users import User
from models.user_progress import UserProgress
from utils.badge_service import evaluate_all_badges
from utils.helpers import today
from classes.validators import MAX_INT


class ProgressManager:
    @staticmethod
    def get_progress(user_id):
        return UserProgress.query.filter_by(user_id=user_id).first()

    @staticmethod
    def upsert_progress(user_id, **fields):
        """Update the user's progress row, creating it first when none exists.

        Returns ``(progress, created)``. The caller commits.
        """
        progress = ProgressManager.get_progress(user_id)
        created = progress is None
        if created:
            progress = UserProgress(user_id=user_id, completed_lessons=[], completed_modules=[])
            db.session.add(progress)

        for name, value in fields.items():
            setattr(progress, name, value)

        return progress, created

    @staticmethod
    def add_xp(user_id, amount):
        """Credit XP with a single UPDATE so concurrent completions don't lose increments."""
        if not amount or amount <= 0:
            return
        User.query.filter_by(id=user_id).update(
            {User.xp: case((User.xp > MAX_INT - amount, MAX_INT), else_=User.xp + amount)},
            synchronize_session=False,
        )

    @staticmethod
    def record_activity(user, on_date=None):
        """Apply the daily streak rule and stamp last_active_date."""
        on_date = on_date or today()
        last = user.last_active_date

        if last == on_date:
            return user.streak
        if last is not None and last == on_date - timedelta(days=1):
            user.streak = (user.streak or 0) + 1
        else:
            user.streak = 1

        user.last_active_date = on_date
        return user.streak

    @staticmethod
    def complete(user_id, field, key, xp_reward):
        """Add ``key`` to the ``field`` set (completed_lessons or completed_modules).

        Completing a key twice is a no-op: nothing is written and no XP is credited.
        Returns ``(completed, xp_added, new_badges, already_completed)``.
        """
        progress = ProgressManager.get_progress(user_id)
        completed = list(getattr(progress, field) or []) if progress else []

        if key in completed:
            return completed, 0, [], True

        completed.append(key)
        ProgressManager.upsert_progress(user_id, **{field: completed})
        ProgressManager.add_xp(user_id, xp_reward)

        user = db.session.get(User, user_id)
        db.session.flush()
        db.session.refresh(user)
        ProgressManager.record_activity(user)

        new_badges = evaluate_all_badges(user_id)
        db.session.commit()

        return completed, xp_reward, new_badges, False

    @staticmethod
    def set_current(user_id, current_path, current_module, current_lesson):
        progress, created = ProgressManager.upsert_progress(
            user_id,
            current_path=current_path,
            current_module=current_module,
            current_lesson=current_lesson,
        )
        db.session.commit()
        return progress, created

    @staticmethod
    def sync(user_id, completed_lessons, completed_modules, current_path,
             current_module, current_lesson, xp=None, streak=None):
        """Overwrite stored progress with the client's copy (last write wins)."""
        if xp is not None or streak is not None:
            user = db.session.get(User, user_id)
            if xp is not None:
                user.xp = xp
            if streak is not None:
                user.streak = streak
            user.last_active_date = today()

        progress, created = ProgressManager.upsert_progress(
            user_id,
            completed_lessons=list(completed_lessons),
            completed_modules=list(completed_modules),
            current_path=current_path,
            current_module=current_module,
            current_lesson=current_lesson,
        )
        db.session.commit()
        return progress, created
