# Parking pricing — Database Models
# Import all models here for SQLAlchemy discovery

from app.models.parking_lot import ParkingLot           # noqa
from app.models.surge_rule import SurgePricingRule      # noqa
from app.models.transaction import Transaction          # noqa
from app.models.alert import Alert                      # noqa
