"""Cloud settings, rebuild coordination and render parameter sync."""

from .controls import register_cloud_controls, unregister_cloud_controls
from .material import CloudMaterialUniforms, RenderParameterSync
from .rebuild import BackgroundRebuildCoordinator, RebuildCoordinator, VolumeSlot
from .settings import CloudSettings, CloudSnapshot, DisplayParameters

__all__ = [
    "BackgroundRebuildCoordinator",
    "CloudMaterialUniforms",
    "CloudSettings",
    "CloudSnapshot",
    "DisplayParameters",
    "RebuildCoordinator",
    "RenderParameterSync",
    "VolumeSlot",
    "register_cloud_controls",
    "unregister_cloud_controls",
]
