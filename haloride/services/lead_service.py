"""Lead submission client and the form submission boundary."""

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Optional

from haloride.core.errors import LeadStoreError, LeadSubmissionError, LeadValidationError
from haloride.schemas.lead import GRADE_OPTIONS, LeadRead, validate_lead_input
from haloride.services.lead_store import LeadStore

logger = logging.getLogger(__name__)


class LeadService:
    def __init__(self, store: LeadStore, grade_choices: Optional[Sequence[str]] = None):
        self.store = store
        self.grade_choices = grade_choices

    def submit_lead(self, lead_input: Mapping[str, Any]) -> LeadRead:
        """Validate, normalize and insert one lead.

        Raises ``LeadValidationError`` before any store call when a field is
        invalid, and ``LeadSubmissionError`` (carrying the backend hint) when
        the store rejects the insert. Nothing is retried.
        """
        lead = validate_lead_input(lead_input, grade_choices=self.grade_choices)
        try:
            return self.store.create(lead)
        except LeadStoreError as exc:
            logger.error(
                "Error submitting lead: message=%s details=%s hint=%s code=%s",
                exc.message, exc.details, exc.hint, exc.code,
            )
            message = f"Failed to submit lead: {exc.message}."
            if exc.hint:
                message = f"{message} {exc.hint}"
            raise LeadSubmissionError(message, hint=exc.hint) from exc

    def list_leads(self) -> list[LeadRead]:
        return self.store.list()


@dataclass
class Notification:
    title: str
    description: str
    variant: str = "default"


@dataclass
class SubmissionResult:
    success: bool
    notification: Notification
    lead: Optional[LeadRead] = None
    field_errors: dict[str, str] = field(default_factory=dict)


SUCCESS_NOTIFICATION = Notification(
    title="Form submitted successfully!",
    description="Thank you for your interest in HaloRide. We'll get back to you soon.",
)


def _failure(description: str) -> Notification:
    return Notification(title="Error submitting form", description=description, variant="destructive")


def form_lead_service(store: LeadStore) -> LeadService:
    """Service used by the landing page form, restricted to the grade bands it offers."""
    return LeadService(store, grade_choices=GRADE_OPTIONS)


def submit_lead_form(service: LeadService, form: Mapping[str, Any]) -> SubmissionResult:
    """Submit the lead form and convert every outcome into a notification.

    Field errors are returned for inline rendering. Backend hints stay in the
    log; the user only sees a prompt to try again.
    """
    try:
        lead = service.submit_lead(form)
    except LeadValidationError as exc:
        logger.info("Lead form rejected: %s", exc.errors)
        return SubmissionResult(
            success=False,
            notification=_failure("Please correct the highlighted fields."),
            field_errors=exc.errors,
        )
    except LeadSubmissionError:
        return SubmissionResult(success=False, notification=_failure("Please try again later."))
    except Exception:
        logger.exception("Unexpected error submitting lead form")
        return SubmissionResult(success=False, notification=_failure("Please try again later."))
    return SubmissionResult(success=True, notification=SUCCESS_NOTIFICATION, lead=lead)
