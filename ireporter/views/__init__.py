"""
Views - one per screen. Each view owns its Report Store and Sync Controller;
nothing is shared between views except the Lifecycle Policy.
"""

from ireporter.views.admin_view import AdminView
from ireporter.views.submitter_view import SubmitterView

__all__ = ["AdminView", "SubmitterView"]
