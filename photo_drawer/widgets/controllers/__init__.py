"""Controllers coordinating widgets and services"""

from .drawer_controller import DrawerController

__all__ = ['DrawerController']
