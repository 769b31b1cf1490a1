"""
Agency API Blueprint
Handles tour submission and management for travel agencies
"""
from flask import Blueprint

agency_bp = Blueprint('agency', __name__, url_prefix='/api/agency')

from . import tours
