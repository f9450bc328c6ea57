from resources_api.data_access.base_repository import BaseRepository
from resources_api.models import Driver
from resources_api.schemas.driver_schemas import DriverCreate, DriverUpdate


class DriverRepository(BaseRepository[Driver, DriverCreate, DriverUpdate]):
    pass


driver_repo = DriverRepository(Driver)
