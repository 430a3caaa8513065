from flask import Blueprint

# Create the versioned blueprint
v1_bp = Blueprint("v1", __name__)

# Import route modules so they register with v1_bp
from . import health
from . import auth
from . import users
from . import reports
from . import invoices
from . import templates
from . import blocks
from . import knowledge_base
from . import super_admin
from . import audit
