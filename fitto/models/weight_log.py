from datetime import datetime
from fitto.extensions import db

class WeightLog(db.Model):
    __tablename__ = "weight_logs"

    # id doubles as log order: "last entry" means highest id, not latest date
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    weight = db.Column(db.Float, nullable=False)
    date = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "weight": self.weight,
            "date": self.date.isoformat() if self.date else None,
        }
