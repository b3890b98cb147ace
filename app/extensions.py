from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_mail import Mail


# Initialize extensions
db      = SQLAlchemy()
migrate = Migrate()
mail    = Mail()


# Rate limiter. No default limits: only routes decorated with
# limiter.limit (registration submission) are throttled.
limiter = Limiter(
    key_func=get_remote_address,
    storage_uri="memory://"
)
