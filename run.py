import os
from dotenv import load_dotenv

# Load environment variables before config is imported
load_dotenv()

from jobboard import create_app, db, socketio  # noqa: E402

# Create application
app = create_app(os.getenv('FLASK_ENV', 'development'))


@app.shell_context_processor
def make_shell_context():
    """Make database and models available in Flask shell"""
    from jobboard.models import User, Job, Application, Notification, Message

    return {
        'db': db,
        'User': User,
        'Job': Job,
        'Application': Application,
        'Notification': Notification,
        'Message': Message
    }


if __name__ == '__main__':
    port = int(os.getenv('PORT', 5000))
    # Only enable debug mode in development
    debug_mode = os.getenv('FLASK_ENV') == 'development'
    # Use socketio.run() instead of app.run() for WebSocket support
    # Note: use_reloader=False to avoid port conflicts with eventlet
    socketio.run(app, host='0.0.0.0', port=port, debug=debug_mode, use_reloader=False)
