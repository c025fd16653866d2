# -*- coding: utf-8 -*-

"""
Taskboard client.

Task list view-model, status updates and task form validation on top of
the remote task service API.
"""

from taskboard.config import APP_VERSION

__version__ = APP_VERSION
