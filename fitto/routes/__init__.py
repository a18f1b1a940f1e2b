from .home_routes import home_bp
from .auth_routes import auth_bp
from .user_routes import user_bp
from .exercise_routes import exercise_bp
from .ai_routes import ai_bp

def register_routes(app):
    app.register_blueprint(home_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(user_bp)
    app.register_blueprint(exercise_bp)
    app.register_blueprint(ai_bp)
