import logging

from flask import Flask, flash, redirect, render_template, url_for

from .extensions import bcrypt, db, login_manager


def create_app(config='haven.config.Config'):
    app = Flask(
        __name__,
    )
    app.config.from_object(config)

    if not app.config.get('TESTING'):
        logging.basicConfig(level=logging.INFO)

    db.init_app(app)
    login_manager.init_app(app)
    bcrypt.init_app(app)
    login_manager.login_view = 'auth.login'
    login_manager.login_message = None

    # Import blueprints
    from .main.routes import main_bp
    from .auth.routes import auth_bp
    from .enrollment.routes import enrollment_bp
    from .attendance.routes import attendance_bp
    from .quiz.routes import quiz_bp
    from .admin.routes import admin_bp

    # Register blueprints
    app.register_blueprint(main_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(enrollment_bp)
    app.register_blueprint(attendance_bp)
    app.register_blueprint(quiz_bp)
    app.register_blueprint(admin_bp)

    @app.context_processor
    def inject_contact():
        return {'whatsapp_number': app.config['WHATSAPP_NUMBER']}

    @app.errorhandler(404)
    def page_not_found(e):
        return render_template('404.html'), 404

    @app.errorhandler(413)
    def proof_too_large(e):
        flash('Proof file is too large (max 5MB).', 'warning')
        return redirect(url_for('enrollment.enroll'))

    with app.app_context():
        from .auth.service import ensure_admin_seed
        db.create_all()
        ensure_admin_seed()

    return app
