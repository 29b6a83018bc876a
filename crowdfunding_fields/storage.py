"""
Campaign Metadata Store

Generic key/value persistence keyed by campaign id, plus the CampaignRecord
accessor the field handlers read through.

Every call opens its own session and commits before returning. Writes are
single-key upserts, so concurrent writers to the same key resolve as
last-write-wins at the database.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from crowdfunding_fields.models.campaign_meta import CampaignMeta

logger = logging.getLogger(__name__)


@runtime_checkable
class MetadataStore(Protocol):
    """Key/value metadata keyed by owning campaign id."""

    def get(self, campaign_id: int, key: str) -> str | None: ...

    def update(self, campaign_id: int, key: str, value: str) -> None: ...

    def delete(self, campaign_id: int, key: str) -> bool: ...

    def delete_all(self, campaign_id: int) -> int: ...


class SQLMetadataStore:
    """MetadataStore backed by the ``campaign_meta`` table."""

    def __init__(self, session_factory: sessionmaker) -> None:
        self._session_factory = session_factory

    def get(self, campaign_id: int, key: str) -> str | None:
        with self._session_factory() as db:
            result = db.execute(
                select(CampaignMeta.meta_value).where(
                    CampaignMeta.campaign_id == campaign_id,
                    CampaignMeta.meta_key == key,
                )
            )
            return result.scalar_one_or_none()

    def update(self, campaign_id: int, key: str, value: str) -> None:
        """Insert or overwrite the value stored under (campaign_id, key)."""
        with self._session_factory() as db:
            try:
                row = db.execute(
                    select(CampaignMeta).where(
                        CampaignMeta.campaign_id == campaign_id,
                        CampaignMeta.meta_key == key,
                    )
                ).scalar_one_or_none()
                if row is None:
                    db.add(CampaignMeta(campaign_id=campaign_id, meta_key=key, meta_value=value))
                else:
                    row.meta_value = value
                db.commit()
            except SQLAlchemyError as e:
                db.rollback()
                logger.error(f"Failed to write meta {key!r} for campaign {campaign_id}: {e}")
                raise
        logger.debug("Meta %s updated for campaign %s", key, campaign_id)

    def delete(self, campaign_id: int, key: str) -> bool:
        """Remove one key. Returns True if a row was deleted."""
        with self._session_factory() as db:
            try:
                result = db.execute(
                    delete(CampaignMeta).where(
                        CampaignMeta.campaign_id == campaign_id,
                        CampaignMeta.meta_key == key,
                    )
                )
                db.commit()
            except SQLAlchemyError as e:
                db.rollback()
                logger.error(f"Failed to delete meta {key!r} for campaign {campaign_id}: {e}")
                raise
        return result.rowcount > 0

    def delete_all(self, campaign_id: int) -> int:
        """Remove every key owned by a campaign, as when the campaign is deleted."""
        with self._session_factory() as db:
            try:
                result = db.execute(delete(CampaignMeta).where(CampaignMeta.campaign_id == campaign_id))
                db.commit()
            except SQLAlchemyError as e:
                db.rollback()
                logger.error(f"Failed to delete meta for campaign {campaign_id}: {e}")
                raise
        logger.debug("Deleted %d meta rows for campaign %s", result.rowcount, campaign_id)
        return result.rowcount


@dataclass(frozen=True)
class CampaignRecord:
    """A campaign as seen by field handlers: an id plus typed metadata lookup."""

    id: int
    store: MetadataStore

    def get_metadata(self, key: str) -> str | None:
        return self.store.get(self.id, key)
