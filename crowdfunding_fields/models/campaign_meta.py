from sqlalchemy import Column, Integer, String, Text, UniqueConstraint, Index
from crowdfunding_fields.database import Base


class CampaignMeta(Base):
    __tablename__ = "campaign_meta"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    campaign_id = Column(Integer, nullable=False, index=True)
    meta_key = Column(String(255), nullable=False)
    meta_value = Column(Text, nullable=True)

    # One value per (campaign, key)
    __table_args__ = (
        UniqueConstraint("campaign_id", "meta_key", name="unique_campaign_meta_key"),
        Index("idx_campaign_meta_key", "meta_key"),
    )

    def __repr__(self) -> str:
        return f"<CampaignMeta campaign_id={self.campaign_id} meta_key={self.meta_key!r}>"
