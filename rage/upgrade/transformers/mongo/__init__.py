"""Document store transformers, in chain order."""

from rage.upgrade.transformers.mongo.to_version3 import TransformToVersion3

MONGO_TRANSFORMERS = (TransformToVersion3,)

__all__ = ["MONGO_TRANSFORMERS", "TransformToVersion3"]
