"""FastAPI dependencies reading the objects ``create_app`` keeps on app state."""
from fastapi import Request

from .config import Settings
from .relations import RelationGraph


def get_relations(request: Request) -> RelationGraph:
    return request.app.state.relations


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings
