"""Application Entry Point"""
import os

from rugby_web import attach_scheduler, create_app

# Detect environment from ENV variable
env = os.environ.get('FLASK_ENV', 'development')
app = create_app(env)

if __name__ == '__main__':
    scheduler_enabled = app.config['SCHEDULER_ENABLED']
    if scheduler_enabled:
        attach_scheduler(app).start()

    app.run(
        host='0.0.0.0',
        port=app.config['PORT'],
        debug=app.config['DEBUG'],
        # The reloader would start a second set of triggers
        use_reloader=not scheduler_enabled,
    )
