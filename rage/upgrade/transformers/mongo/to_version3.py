"""Version 2 -> 3 of the analytics document store.

Classes stop pointing at a single game version; that link moves to the
activities, which replace the old sessions collection.
"""

from rage.observability.logging import get_logger
from rage.upgrade.errors import CheckFailedError
from rage.upgrade.models import ControllerVersion, UpgradeContext, Version
from rage.upgrade.transformer import Transformer

logger = get_logger(__name__)

STORE = "mongodb"
CLASS_GAME_FIELDS = ["gameId", "versionId"]


class TransformToVersion3(Transformer):
    """Drop game links from classes and rename sessions to activities."""

    version = ControllerVersion(origin=Version(number=2), destination=Version(number=3))

    async def upgrade(self, context: UpgradeContext) -> UpgradeContext:
        store = context.store(STORE)

        modified = await store.unset_fields("classes", CLASS_GAME_FIELDS)
        logger.info("classes_game_links_removed", modified=modified)

        await store.rename_collection("sessions", "activities")
        logger.info("sessions_renamed", new_name="activities")
        return context

    async def check(self, context: UpgradeContext) -> UpgradeContext:
        store = context.store(STORE)

        collections = await store.list_collection_names()
        if "sessions" in collections:
            raise CheckFailedError("Sessions collection found!")
        if "activities" not in collections:
            raise CheckFailedError("Activities collection not found!")

        for class_doc in await store.find("classes"):
            for field in CLASS_GAME_FIELDS:
                if class_doc.get(field):
                    raise CheckFailedError(
                        f"Class {class_doc.get('_id')} still contains a {field}"
                    )

        for activity in await store.find("activities"):
            for field in CLASS_GAME_FIELDS:
                if not activity.get(field):
                    raise CheckFailedError(
                        f"Activity {activity.get('_id')} does not contain a {field}"
                    )

        return context
