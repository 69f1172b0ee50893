from flask import Blueprint

recommendations_bp = Blueprint('recommendations', __name__, url_prefix='/api/recommendations')

from jobboard.blueprints.recommendations import routes
