from .home_routes import home_bp
from .user_routes import user_bp
from .feedback_routes import feedback_bp
from .category_routes import category_bp
from .statistics_routes import statistics_bp
from .external_routes import external_bp

def register_routes(app):
    app.register_blueprint(home_bp)
    app.register_blueprint(user_bp)
    app.register_blueprint(feedback_bp)
    app.register_blueprint(category_bp)
    app.register_blueprint(statistics_bp)
    app.register_blueprint(external_bp)
