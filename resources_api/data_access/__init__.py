# This file makes the 'data_access' directory a Python package.
# It also makes it easier to import repositories from other modules.

from .driver_repository import driver_repo
