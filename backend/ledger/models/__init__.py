from ledger.models.profile import Profile
from ledger.models.ticket import Leg, Ticket

__all__ = ["Ticket", "Leg", "Profile"]
