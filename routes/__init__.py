"""
Flask blueprints for the forensic correlation API.
"""

from flask import Blueprint

# Create blueprints
records_bp = Blueprint('records', __name__)
correlations_bp = Blueprint('correlations', __name__)
rollups_bp = Blueprint('rollups', __name__)

# Import routes to register them
from . import records  # noqa: E402, F401
from . import correlations  # noqa: E402, F401
from . import rollups  # noqa: E402, F401
