"""
Traveler dashboard API
"""
from flask import Blueprint

client_bp = Blueprint('client', __name__, url_prefix='/api/dashboard')

from . import dashboard
