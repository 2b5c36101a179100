from datetime import datetime
from ..extensions import db
from ..services.schedule import FixedSchedule, RecurringSchedule, FIXED, RECURRING, format_schedule


class Activity(db.Model):
    __tablename__ = "activities"
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)
    title = db.Column(db.String(200), nullable=False)
    kind = db.Column(db.String(16), nullable=False)  # fixed/recurring
    starts_at = db.Column(db.DateTime)  # fixed only
    weekday = db.Column(db.Integer)  # recurring only, 0 = Monday
    time_of_day = db.Column(db.Time)  # recurring only
    duration_minutes = db.Column(db.Integer, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    __table_args__ = (
        db.CheckConstraint("duration_minutes > 0", name="ck_activity_duration_positive"),
    )

    @property
    def schedule(self):
        """Tagged schedule variant, or None when the stored columns don't form one."""
        if self.kind == FIXED and self.starts_at is not None:
            return FixedSchedule(self.starts_at)
        if self.kind == RECURRING and self.weekday is not None and self.time_of_day is not None:
            return RecurringSchedule(self.weekday, self.time_of_day)
        return None

    @schedule.setter
    def schedule(self, value):
        if isinstance(value, FixedSchedule):
            self.kind = FIXED
            self.starts_at = value.starts_at
            self.weekday = None
            self.time_of_day = None
        elif isinstance(value, RecurringSchedule):
            self.kind = RECURRING
            self.starts_at = None
            self.weekday = value.weekday
            self.time_of_day = value.at
        else:
            raise TypeError(f"unsupported schedule: {value!r}")

    def to_dict(self):
        schedule = self.schedule
        return {
            "id": self.id,
            "title": self.title,
            "kind": self.kind,
            "schedule": format_schedule(schedule) if schedule else None,
            "duration_minutes": self.duration_minutes,
        }
