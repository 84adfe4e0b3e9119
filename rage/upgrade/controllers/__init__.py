"""Concrete upgrade controllers."""

from rage.upgrade.controllers.mongo import MongoController

__all__ = ["MongoController"]
