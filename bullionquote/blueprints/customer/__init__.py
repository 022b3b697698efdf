from flask import Blueprint

customer_bp = Blueprint('customer', __name__)

from bullionquote.blueprints.customer import routes  # noqa: E402, F401
