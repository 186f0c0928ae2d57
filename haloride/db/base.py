from haloride.db.base_class import Base

# Import models to register metadata for Base.metadata.create_all
from haloride.models.lead import Lead  # noqa: F401
