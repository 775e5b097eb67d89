"""Arcade host views for the viewer."""

from orbitview.views.viewer_view import BoundingSphereRayCaster, ModelViewerView

__all__ = ["BoundingSphereRayCaster", "ModelViewerView"]
