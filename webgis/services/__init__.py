"""Domain services over a Record Store."""

from webgis.services.users import UserDirectory
from webgis.services.feedback import FeedbackLedger
from webgis.services.responses import ResponseWorkflow

__all__ = ["UserDirectory", "FeedbackLedger", "ResponseWorkflow"]
