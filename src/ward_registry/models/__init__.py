"""ORM model registry: import all models so Alembic autogenerate discovers them."""

from ward_registry.models.barangay import Barangay
from ward_registry.models.base import Base
from ward_registry.models.candidate import Congressman, Governor, Mayor, ViceGovernor
from ward_registry.models.household import Household, HouseholdMember
from ward_registry.models.leader import Leader, LeaderType
from ward_registry.models.politics import PoliticsPreference
from ward_registry.models.user import User
from ward_registry.models.voter import RECORD_TYPE_REGISTERED, Voter

__all__ = [
    "RECORD_TYPE_REGISTERED",
    "Barangay",
    "Base",
    "Congressman",
    "Governor",
    "Household",
    "HouseholdMember",
    "Leader",
    "LeaderType",
    "Mayor",
    "PoliticsPreference",
    "User",
    "ViceGovernor",
    "Voter",
]
