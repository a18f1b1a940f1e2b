from datetime import datetime
from fitto.extensions import db

class FoodLogEntry(db.Model):
    __tablename__ = "food_log_entries"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    meal = db.Column(db.String(20), nullable=False)
    name = db.Column(db.String(255), nullable=False)
    calories = db.Column(db.Float, nullable=False, default=0)
    carbs = db.Column(db.Float, nullable=False, default=0)
    protein = db.Column(db.Float, nullable=False, default=0)
    fat = db.Column(db.Float, nullable=False, default=0)
    date = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, index=True)

    def to_dict(self):
        return {
            "id": self.id,
            "meal": self.meal,
            "name": self.name,
            "calories": self.calories,
            "carbs": self.carbs,
            "protein": self.protein,
            "fat": self.fat,
            "date": self.date.isoformat() if self.date else None,
        }
