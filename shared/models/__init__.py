# Import all models to ensure they are registered with SQLAlchemy
from .companies import Companies
from .users import Users
