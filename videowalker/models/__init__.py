from videowalker.models.admin_user import AdminUser
from videowalker.models.campaign import Campaign
from videowalker.models.winner import Winner

__all__ = [
    "AdminUser",
    "Campaign",
    "Winner",
]
