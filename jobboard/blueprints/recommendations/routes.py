from flask import jsonify
from flask_login import current_user
from jobboard.blueprints.recommendations import recommendations_bp
from jobboard.services.recommendation_service import get_recommendations, recommendation_to_dict
from jobboard.utils.security_decorators import role_required


@recommendations_bp.route('', methods=['GET'])
@role_required('jobseeker')
def recommendations():
    jobs = get_recommendations(current_user)
    return jsonify([recommendation_to_dict(job) for job in jobs])
