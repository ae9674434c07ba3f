"""User profile repository."""

import logging

from brokerage_admin.exceptions import AlreadyExistsError, BrokerageError
from brokerage_admin.models.brokerage import UserProfile
from brokerage_admin.query import USER_PROFILE_TABLE, UserProfileFilter
from brokerage_admin.query.tables import USER_PROFILE_COLLECTION
from brokerage_admin.repositories.base import EntityRepository
from brokerage_admin.results import EntityResult, ListResult
from brokerage_admin.store.base import FieldFilter

logger = logging.getLogger(__name__)


class UserProfileRepository(EntityRepository[UserProfile]):
    collection = USER_PROFILE_COLLECTION
    label = "UserProfile"
    entity = "user_profile"
    model = UserProfile
    table = USER_PROFILE_TABLE

    def _before_create(self, entity: UserProfile) -> None:
        # Check-then-insert without a transaction: two concurrent creates for
        # the same user_id can both pass this check.
        existing = self.store.query(self.collection, [FieldFilter("user_id", "==", entity.user_id)])
        if existing:
            raise AlreadyExistsError("User profile with this user_id already exists")

    def get_by_user_id(self, user_id: str) -> EntityResult[UserProfile]:
        try:
            documents = self.store.query(self.collection, [FieldFilter("user_id", "==", user_id)])
            if not documents:
                raise self._not_found()
            document = documents[0]
            return EntityResult(entity=self._to_model(document.id, document.data))
        except BrokerageError as exc:
            logger.error("Error getting UserProfile by user_id %s: %s", user_id, exc)
            return EntityResult.failure(exc)

    def search_by_name(self, term: str, limit: int | None = None) -> ListResult[UserProfile]:
        return self.filter(UserProfileFilter(name=term, limit=self._limit(limit)))

    def search_by_email(self, term: str, limit: int | None = None) -> ListResult[UserProfile]:
        return self.filter(UserProfileFilter(email=term, limit=self._limit(limit)))
