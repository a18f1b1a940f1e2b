from datetime import datetime
from fitto.extensions import db

class Exercise(db.Model):
    __tablename__ = "exercises"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    exercise_name = db.Column(db.String(150), nullable=False)
    duration = db.Column(db.Float, nullable=False)  # minutes
    calories_burned = db.Column(db.Float, nullable=False)
    met = db.Column(db.Float)
    date = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, index=True)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "userId": self.user_id,
            "exerciseName": self.exercise_name,
            "duration": self.duration,
            "caloriesBurned": self.calories_burned,
            "MET": self.met,
            "date": self.date.isoformat() if self.date else None,
        }
