from flask import Blueprint

jobs_bp = Blueprint('jobs', __name__, url_prefix='/api/jobs')

from jobboard.blueprints.jobs import routes
