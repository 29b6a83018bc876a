from .campaign_meta import CampaignMeta

__all__ = [
    "CampaignMeta",
]
