from datetime import datetime
from fitto.extensions import db

class User(db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(80), unique=True, nullable=False, index=True)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password = db.Column(db.String(255), nullable=False)
    is_setup_complete = db.Column(db.Boolean, nullable=False, default=False)

    # Setup wizard profile
    age = db.Column(db.Integer)
    height = db.Column(db.Float)
    weight = db.Column(db.Float)
    gender = db.Column(db.String(10))
    activity_level = db.Column(db.String(20), nullable=False, default="sedentary")
    goal = db.Column(db.String(10), nullable=False, default="maintain")
    rate = db.Column(db.Float)
    target_weight = db.Column(db.Float)

    # Derived by the energy budget calculator, never set piecemeal
    bmr = db.Column(db.Float)
    tdee = db.Column(db.Float)

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    weight_logs = db.relationship(
        "WeightLog", backref="user", order_by="WeightLog.id",
        cascade="all, delete-orphan", lazy="select"
    )

    def __repr__(self):
        return f"<User {self.id}: {self.username}>"
