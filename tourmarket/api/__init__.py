# Routes package
from flask import Blueprint

api_bp = Blueprint('api', __name__)

from tourmarket.api.tours import tours_bp
from tourmarket.api.auth import auth_bp
from tourmarket.api.client import client_bp
from tourmarket.api.agency import agency_bp
from tourmarket.api.admin import admin_bp
from tourmarket.api.emergency import emergency_bp

for blueprint in (tours_bp, auth_bp, client_bp, agency_bp, admin_bp, emergency_bp):
    api_bp.register_blueprint(blueprint)
