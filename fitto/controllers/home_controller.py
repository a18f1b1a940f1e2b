from flask import current_app, jsonify
from sqlalchemy.exc import SQLAlchemyError
from fitto.extensions import db

def home_index():
    return jsonify({
        "message": "Fitness API is running",
    })

def health_check():
    db_status = "healthy"
    try:
        db.session.execute(db.text('SELECT 1'))
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f"Health check database error: {str(e)}")
        db_status = "unhealthy"

    return jsonify({
        "status": "online",
        "database": db_status,
    }), 200 if db_status == "healthy" else 503
