from flask import Blueprint

applications_bp = Blueprint('applications', __name__, url_prefix='/api/applications')

from jobboard.blueprints.applications import routes
