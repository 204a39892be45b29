"""Tests for the Ada form analyzer."""

import pytest
from datetime import datetime
from unittest.mock import Mock

from config.settings import Settings
from errors import CollaboratorError
from memory.execution_logger import ExecutionLogger
from memory.sqlite_store import SQLiteStore
from agents.ada import (
    AdaAgent, determine_form_type, choice_text, field_value, format_date, parse_submitted_at
)
from schemas.contract import AgentRequest
from schemas.payloads import AdaInput, FormField, FormType


REQUEST_FORM = {
    "formId": "f1",
    "formName": "Request for Help",
    "createdAt": "2026-10-18T15:05:00Z",
    "fields": [
        {"key": "q1", "label": "First name", "type": "INPUT_TEXT", "value": "Jo"},
        {"key": "q2", "label": "Last name", "type": "INPUT_TEXT", "value": "Park"},
        {"key": "q3", "label": "Email", "type": "INPUT_EMAIL", "value": "jo@example.com"},
        {
            "key": "q4", "label": "What do you need help with?", "type": "CHECKBOXES",
            "value": ["o1", "o2"],
            "options": [{"id": "o1", "text": "Car repair"}, {"id": "o2", "text": "Plumbing"}]
        },
        {"key": "q5", "label": "Please share details", "type": "TEXTAREA", "value": "Leaky <sink>"},
        {"key": "q6", "label": "Regular attender?", "type": "MULTIPLE_CHOICE", "value": True},
    ],
}

HELPER_FORM = {
    "formName": "Apply to be a Helper",
    "fields": [
        {"key": "q1", "label": "First name", "value": "Lee"},
        {"key": "q2", "label": "Skills offered", "type": "CHECKBOXES", "value": ["Carpentry"]},
    ],
}


def make_request(input):
    return AgentRequest.model_validate({"userId": "form", "input": input})


class TestFormHelpers:
    """Test submission parsing helpers."""

    def test_form_type_from_name(self):
        """Test classification by form name."""
        assert determine_form_type(AdaInput.model_validate(REQUEST_FORM)) == FormType.REQUEST
        assert determine_form_type(AdaInput.model_validate(HELPER_FORM)) == FormType.HELPER

    def test_form_type_from_labels(self):
        """Test classification by field labels when the name is uninformative."""
        form = AdaInput.model_validate({
            "formName": "Intake",
            "fields": [{"key": "q", "label": "Skills Offered", "value": "x"}],
        })
        assert determine_form_type(form) == FormType.HELPER

        form = AdaInput.model_validate({"fields": [{"key": "q", "label": "Name", "value": "x"}]})
        assert determine_form_type(form) == FormType.REQUEST

    def test_choice_text(self):
        """Test option ids, booleans and empties."""
        fields = AdaInput.model_validate(REQUEST_FORM).fields

        assert choice_text(fields[3]) == "Car repair, Plumbing"
        assert choice_text(fields[5]) == "Yes"
        assert choice_text(FormField(key="x", value=False)) == "No"
        assert choice_text(FormField(key="x", value=[])) == "Not specified"
        assert choice_text(None) == "Not specified"

    def test_field_value(self):
        """Test label matching is case-insensitive."""
        fields = AdaInput.model_validate(REQUEST_FORM).fields

        assert field_value(fields, "EMAIL") == "jo@example.com"
        assert field_value(fields, "phone") is None

    def test_format_date(self):
        """Test human-readable submission dates."""
        assert format_date(datetime(2026, 10, 18, 15, 5)) == "October 18, 2026 at 3:05 PM"
        assert format_date(datetime(2026, 1, 2, 0, 30)) == "January 2, 2026 at 12:30 AM"
        assert parse_submitted_at("2026-10-18T15:05:00Z").hour == 15


class TestAdaAgent:
    """Test analysis and coordinator notification."""

    @pytest.fixture(autouse=True)
    def setup(self, tmp_path):
        self.settings = Settings(
            store_backend="sqlite",
            db_path=str(tmp_path / "hub.db"),
            anthropic_api_key="sk-ant",
            resend_api_key="re_test",
            email_to="coordinator@example.com",
            email_cc=["owner@example.com"],
            coordinator_name="Pat",
            request_sheet_url="https://sheets.example.com/requests"
        )
        self.llm = Mock()
        self.llm.complete.return_value = "Jo needs car and plumbing help."
        self.sender = Mock()
        self.sender.send.return_value = {"id": "email-1"}
        self.agent = AdaAgent(
            self.settings,
            ExecutionLogger(SQLiteStore(db_path=self.settings.db_path)),
            llm_client=self.llm,
            email_sender=self.sender
        )

    def test_request_submission(self):
        """Test the full flow for a help request."""
        response = self.agent.handle(make_request(REQUEST_FORM))

        assert response.success is True
        assert response.output == {
            "formType": "request",
            "subject": "New Help Request Submission - Jo Park (Car repair, Plumbing)",
            "analysis": "Jo needs car and plumbing help.",
            "emailSent": True,
            "emailId": "email-1",
        }

        message = self.sender.send.call_args[0][0]
        assert message.to == ["coordinator@example.com"]
        assert message.cc == ["owner@example.com"]
        assert "Hi Pat," in message.html
        assert "October 18, 2026 at 3:05 PM" in message.html
        assert "Leaky &lt;sink&gt;" in message.html
        assert "https://sheets.example.com/requests" in message.html
        assert self.llm.complete.call_args[1]["max_tokens"] == 1000

    def test_helper_submission(self):
        """Test subject and details for a helper application."""
        response = self.agent.handle(make_request(HELPER_FORM))

        assert response.success is True
        assert response.output["formType"] == "helper"
        assert response.output["subject"] == 'New "Apply to be a Helper" Submission - Lee'
        message = self.sender.send.call_args[0][0]
        assert "<strong>Skills Offered:</strong> Carpentry" in message.html
        assert "submissions sheet" not in message.html

    def test_analysis_prompt_contains_form(self):
        """Test the form data and focus points reach the LLM."""
        self.agent.handle(make_request(REQUEST_FORM))

        prompt = self.llm.complete.call_args[1]["user"]
        assert '"Request for Help" submission' in prompt
        assert '"formName": "Request for Help"' in prompt
        assert "- The type of help needed" in prompt

    def test_email_failure(self):
        """Test a failed notification fails the invocation."""
        self.sender.send.side_effect = CollaboratorError("Resend", "invalid from", status_code=422)

        response = self.agent.handle(make_request(REQUEST_FORM))

        assert response.success is False
        assert response.error == "Resend API error (422): invalid from"

    def test_empty_fields_rejected(self):
        """Test a submission without fields is invalid input."""
        response = self.agent.handle(make_request({"formName": "Request for Help", "fields": []}))

        assert response.success is False
        assert "fields" in response.error
        self.llm.complete.assert_not_called()
        self.sender.send.assert_not_called()

    def test_required_env_vars(self):
        """Test the probe needs a recipient as well as credentials."""
        assert self.agent.required_env_vars() == ["ANTHROPIC_API_KEY", "RESEND_API_KEY", "EMAIL_TO"]
        assert self.agent.probe()["requiredEnvVarsPresent"] is True

        self.agent.settings = self.settings.model_copy(update={"email_to": None})
        assert self.agent.probe()["requiredEnvVarsPresent"] is False
