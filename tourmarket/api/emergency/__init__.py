from flask import Blueprint

emergency_bp = Blueprint('emergency', __name__, url_prefix='/api/emergency')

from . import alerts
