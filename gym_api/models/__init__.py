"""Data models."""

from gym_api.models.class_ import GymClass
from gym_api.models.client import Client
from gym_api.models.enrollment import class_clients
from gym_api.models.trainer import Trainer

__all__ = ["Client", "GymClass", "Trainer", "class_clients"]
