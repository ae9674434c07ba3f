"""CDS repository."""

from brokerage_admin.models.brokerage import CDS
from brokerage_admin.query import CDS_TABLE, CDSFilter
from brokerage_admin.query.tables import CDS_COLLECTION
from brokerage_admin.repositories.base import EntityRepository
from brokerage_admin.results import ListResult


class CDSRepository(EntityRepository[CDS]):
    collection = CDS_COLLECTION
    label = "CDS"
    entity = "cds"
    model = CDS
    table = CDS_TABLE

    def search_by_name(self, term: str, limit: int | None = None) -> ListResult[CDS]:
        """Prefix search on ``name``."""
        return self.filter(CDSFilter(name=term, limit=self._limit(limit)))
