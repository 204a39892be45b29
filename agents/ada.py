"""Ada: form analyzer that summarises intake submissions and emails the coordinator."""

import html
import json
import logging
from datetime import datetime, timezone
from typing import List, Optional

from config.settings import Settings
from llm.base_client import BaseLLMClient
from memory.execution_logger import ExecutionLogger
from notifications.resend_client import ResendEmailSender, EmailMessage
from schemas.contract import AgentRequest
from schemas.payloads import AdaInput, AdaOutput, FormField, FormType
from .base import BaseAgent

logger = logging.getLogger(__name__)

NOT_SPECIFIED = "Not specified"
NOT_PROVIDED = "Not provided"


def determine_form_type(form: AdaInput) -> FormType:
    """Classify a submission by form name, falling back to field labels."""
    form_name = (form.form_name or "").lower()
    if "helper" in form_name:
        return FormType.HELPER
    if "request" in form_name:
        return FormType.REQUEST

    labels = [(f.label or "").lower() for f in form.fields]
    if any("skills offered" in label for label in labels):
        return FormType.HELPER

    return FormType.REQUEST


def find_field(fields: List[FormField], label_match: str) -> Optional[FormField]:
    """First field whose label contains ``label_match`` (case-insensitive)."""
    needle = label_match.lower()
    for field in fields:
        if needle in (field.label or "").lower():
            return field
    return None


def field_value(fields: List[FormField], label_match: str) -> Optional[str]:
    """Value of the first matching field, or None when missing or empty."""
    field = find_field(fields, label_match)
    if field is None or field.value in (None, "", []):
        return None
    return str(field.value)


def choice_text(field: Optional[FormField]) -> str:
    """Human-readable value of a checkbox / multiple-choice field."""
    if field is None or field.value in (None, "", []):
        return NOT_SPECIFIED

    value = field.value
    if isinstance(value, list) and field.options:
        by_id = {opt.id: opt.text for opt in field.options}
        return ", ".join(by_id.get(str(item), str(item)) for item in value)
    if isinstance(value, list):
        return ", ".join(str(item) for item in value)
    if value is True:
        return "Yes"
    if value is False:
        return "No"
    return str(value)


def parse_submitted_at(created_at: Optional[str]) -> datetime:
    if created_at:
        try:
            return datetime.fromisoformat(created_at.replace("Z", "+00:00"))
        except ValueError:
            logger.warning(f"Unparseable submission date: {created_at}")
    return datetime.now(timezone.utc)


def format_date(value: datetime) -> str:
    """e.g. 'October 18, 2026 at 3:05 PM'."""
    hour = value.hour % 12 or 12
    suffix = "AM" if value.hour < 12 else "PM"
    return f"{value:%B} {value.day}, {value.year} at {hour}:{value:%M} {suffix}"


class AdaAgent(BaseAgent):
    """
    Handles "Request for Help" and "Apply to be a Helper" submissions.

    The LLM writes a short coordinator summary; the submission details and
    summary are emailed to the coordinator. A failed email is a failed
    invocation.
    """

    agent_id = "ada"
    name = "Ada"
    description = "Form analyzer: summarises intake submissions and notifies the coordinator"

    MAX_TOKENS = 1000

    FOCUS = {
        FormType.REQUEST: [
            "The type of help needed",
            "Key details about the request",
            "Any urgency or special considerations",
            "Financial situation (can they pay for supplies?)",
        ],
        FormType.HELPER: [
            "What skills they're offering",
            "Their availability or experience",
            "Any relevant details about how they can help",
        ],
    }

    FORM_TITLES = {
        FormType.REQUEST: "Request for Help",
        FormType.HELPER: "Apply to be a Helper",
    }

    def __init__(
        self,
        settings: Settings,
        execution_logger: ExecutionLogger,
        llm_client: BaseLLMClient,
        email_sender: ResendEmailSender
    ):
        super().__init__(settings, execution_logger)
        self.llm_client = llm_client
        self.email_sender = email_sender

    def required_env_vars(self) -> List[str]:
        return [self.settings.llm_key_env_var(), "RESEND_API_KEY", "EMAIL_TO"] + self._store_env_vars()

    def run(self, payload: AdaInput, request: AgentRequest) -> AdaOutput:
        form_type = determine_form_type(payload)
        logger.info(f"Form type: {form_type.value}")

        analysis = self.llm_client.complete(
            system="",
            user=self.build_analysis_prompt(payload, form_type),
            max_tokens=self.MAX_TOKENS
        )

        subject, body = self.build_email(payload, form_type, analysis)
        result = self.email_sender.send(EmailMessage(
            sender=self.settings.email_from,
            to=[self.settings.email_to] if self.settings.email_to else [],
            cc=self.settings.email_cc,
            subject=subject,
            html=body
        ))

        return AdaOutput(
            form_type=form_type,
            subject=subject,
            analysis=analysis,
            email_sent=True,
            email_id=result.get("id")
        )

    def build_analysis_prompt(self, form: AdaInput, form_type: FormType) -> str:
        """Prompt asking for a concise coordinator-facing summary."""
        form_json = json.dumps(form.model_dump(by_alias=True, mode="json"), indent=2)
        focus = "\n".join(f"- {item}" for item in self.FOCUS[form_type])
        return (
            f'You are analyzing an "{self.FORM_TITLES[form_type]}" submission for '
            f"{self.settings.organization_name}.\n\n"
            f"Form Data:\n{form_json}\n\n"
            f"Please provide a brief, clear summary focusing on:\n{focus}\n\n"
            "Keep it concise and professional - this will be sent to the coordinator."
        )

    def build_email(self, form: AdaInput, form_type: FormType, analysis: str):
        """
        Render the notification email.

        Returns:
            (subject, html body)
        """
        fields = form.fields
        first = field_value(fields, "first name") or "Unknown"
        last = field_value(fields, "last name") or ""
        name = f"{first} {last}".strip()
        submitted = format_date(parse_submitted_at(form.created_at))

        rows = [
            ("Name", name),
            ("Email", field_value(fields, "email") or NOT_PROVIDED),
            ("Phone", field_value(fields, "phone") or NOT_PROVIDED),
            ("Regular Attender", choice_text(find_field(fields, "regular attender"))),
        ]

        if form_type == FormType.REQUEST:
            help_type = choice_text(
                find_field(fields, "help") or self._first_of_type(fields, "CHECKBOXES")
            )
            rows += [
                ("Type of Help Needed", help_type),
                ("Details", self._details(fields)),
                ("Financial Situation",
                 field_value(fields, "financial") or field_value(fields, "pay for parts") or NOT_SPECIFIED),
            ]
            subject = f"New Help Request Submission - {name} ({help_type})"
            sheet_url = self.settings.request_sheet_url
        else:
            rows += [
                ("Skills Offered", choice_text(find_field(fields, "skills offered"))),
                ("Details", self._details(fields)),
                ("Financial Position", field_value(fields, "financial position") or NOT_SPECIFIED),
            ]
            subject = f'New "{self.FORM_TITLES[form_type]}" Submission - {name}'
            sheet_url = self.settings.helper_sheet_url

        items = "\n".join(
            f"<li><strong>{label}:</strong> {html.escape(value)}</li>" for label, value in rows
        )
        summary = html.escape(analysis).replace("\n", "<br>")

        body = (
            f"<p>Hi {html.escape(self.settings.coordinator_name)},</p>\n"
            f'<p>There is a new "{self.FORM_TITLES[form_type]}" submission from {submitted}.</p>\n'
            f"<p><strong>Summary:</strong></p>\n<p>{summary}</p>\n"
            f"<p><strong>Submission details:</strong></p>\n<ul>\n{items}\n</ul>\n"
        )
        if sheet_url:
            body += f'<p>All submissions are in the <a href="{html.escape(sheet_url)}">submissions sheet</a>.</p>\n'
        body += "<p>Best regards,<br>\nAda</p>"

        return subject, body

    @staticmethod
    def _first_of_type(fields: List[FormField], field_type: str) -> Optional[FormField]:
        for field in fields:
            if (field.type or "").upper() == field_type:
                return field
        return None

    def _details(self, fields: List[FormField]) -> str:
        field = find_field(fields, "details") or self._first_of_type(fields, "TEXTAREA")
        if field is None or field.value in (None, ""):
            return "No details provided"
        return str(field.value)
