"""Tests for the submission handshake."""

from __future__ import annotations

import asyncio
from datetime import datetime

import pytest

from rental_wizard.constants import (
    LEASE_DATES_WARNING,
    SUBMIT_FAILURE_MESSAGE,
    SUBMIT_SUCCESS_MESSAGE,
    Step,
)
from rental_wizard.context import SimpleModalHost, WizardContext
from rental_wizard.lib.errors import ListingSubmissionError, ValidationError
from rental_wizard.submission import SubmissionOutcome
from rental_wizard.wizard import RentWizard
from tests.helpers import (
    FakeListingClient,
    RecordingNotifier,
    advance_to,
    fill_listing,
    run,
)


@pytest.fixture
def ready_wizard(wizard: RentWizard) -> RentWizard:
    """A wizard on the PRICE step holding a complete record."""
    fill_listing(wizard)
    advance_to(wizard, Step.PRICE)
    return wizard


class TestPreconditions:
    def test_skipped_before_last_step(
        self, wizard: RentWizard, client: FakeListingClient
    ) -> None:
        """Submitting before PRICE sends nothing."""
        fill_listing(wizard)

        outcome = run(wizard.submission.submit())

        assert outcome == SubmissionOutcome.SKIPPED
        assert client.payloads == []

    def test_skipped_when_lease_dates_invalid(
        self, ready_wizard: RentWizard, client: FakeListingClient
    ) -> None:
        """Invalid lease dates skip the submission."""
        ready_wizard.set_field("lease_end_date", datetime(2024, 1, 1))

        outcome = run(ready_wizard.submission.submit())

        assert outcome == SubmissionOutcome.SKIPPED
        assert client.payloads == []
        assert ready_wizard.step == Step.PRICE

    def test_invalid_record_sends_nothing(
        self,
        ready_wizard: RentWizard,
        client: FakeListingClient,
        notifier: RecordingNotifier,
    ) -> None:
        """An incomplete record is reported and not sent."""
        ready_wizard.set_field("title", "")

        outcome = run(ready_wizard.forward())

        assert outcome is True
        assert ready_wizard.last_outcome == SubmissionOutcome.INVALID
        assert client.payloads == []
        assert "Title is required" in notifier.errors
        assert isinstance(ready_wizard.submission.last_error, ValidationError)
        assert ready_wizard.loading is False


class TestSuccess:
    def test_success_resets_record_and_step(
        self,
        ready_wizard: RentWizard,
        client: FakeListingClient,
        modal: SimpleModalHost,
        notifier: RecordingNotifier,
    ) -> None:
        """A created listing resets the wizard and closes the modal."""
        run(ready_wizard.forward())

        assert ready_wizard.last_outcome == SubmissionOutcome.SUCCEEDED
        assert len(client.payloads) == 1
        assert client.payloads[0]["title"] == "Sunny room"
        assert client.payloads[0]["price"] == 900
        assert ready_wizard.state.is_default() is True
        assert ready_wizard.step == Step.CATEGORY
        assert modal.close_count == 1
        assert modal.is_open is False
        assert notifier.successes == [SUBMIT_SUCCESS_MESSAGE]
        assert ready_wizard.loading is False

    def test_gates_recomputed_after_reset(self, ready_wizard: RentWizard) -> None:
        """Gates are non-blocking again after the reset."""
        run(ready_wizard.forward())

        assert ready_wizard.can_advance is True
        assert ready_wizard.disabled is False

    def test_created_hook_receives_response(
        self, client: FakeListingClient, notifier: RecordingNotifier
    ) -> None:
        """on_created gets the service response."""
        created: list[dict] = []
        context = WizardContext(client=client, notifier=notifier, on_created=created.append)
        wizard = RentWizard(context)
        fill_listing(wizard)
        advance_to(wizard, Step.PRICE)

        run(wizard.forward())

        assert created == [{"id": "listing-1"}]

    def test_failing_hook_does_not_undo_reset(
        self, client: FakeListingClient, notifier: RecordingNotifier
    ) -> None:
        """A raising on_created hook is logged and the reset still happens."""
        def broken_hook(response: dict) -> None:
            raise RuntimeError("refresh failed")

        modal = SimpleModalHost()
        context = WizardContext(
            client=client, modal=modal, notifier=notifier, on_created=broken_hook
        )
        wizard = RentWizard(context)
        fill_listing(wizard)
        advance_to(wizard, Step.PRICE)

        run(wizard.forward())

        assert wizard.last_outcome == SubmissionOutcome.SUCCEEDED
        assert wizard.state.is_default() is True
        assert modal.close_count == 1


class TestFailure:
    def test_failure_keeps_record_and_step(
        self,
        modal: SimpleModalHost,
        notifier: RecordingNotifier,
    ) -> None:
        """A failed create keeps the record and the step."""
        client = FakeListingClient(fail=True)
        wizard = RentWizard(WizardContext(client=client, modal=modal, notifier=notifier))
        fill_listing(wizard)
        advance_to(wizard, Step.PRICE)
        before = wizard.state.snapshot()

        run(wizard.forward())

        assert wizard.last_outcome == SubmissionOutcome.FAILED
        assert wizard.state.snapshot() == before
        assert wizard.step == Step.PRICE
        assert wizard.loading is False
        assert modal.close_count == 0
        assert notifier.errors == [SUBMIT_FAILURE_MESSAGE]
        assert isinstance(wizard.submission.last_error, ListingSubmissionError)

    def test_retry_after_failure(
        self, modal: SimpleModalHost, notifier: RecordingNotifier
    ) -> None:
        """Pressing Create again after a failure sends again."""
        client = FakeListingClient(fail=True)
        wizard = RentWizard(WizardContext(client=client, modal=modal, notifier=notifier))
        fill_listing(wizard)
        advance_to(wizard, Step.PRICE)

        run(wizard.forward())
        client.fail = False
        run(wizard.forward())

        assert len(client.payloads) == 2
        assert wizard.last_outcome == SubmissionOutcome.SUCCEEDED
        assert modal.close_count == 1

    def test_unexpected_client_error_is_reported(
        self, modal: SimpleModalHost, notifier: RecordingNotifier
    ) -> None:
        """Unexpected client exceptions count as failures."""
        class ExplodingClient:
            async def create(self, payload: dict) -> dict:
                raise OSError("connection reset")

        wizard = RentWizard(
            WizardContext(client=ExplodingClient(), modal=modal, notifier=notifier)
        )
        fill_listing(wizard)
        advance_to(wizard, Step.PRICE)

        run(wizard.forward())

        assert wizard.last_outcome == SubmissionOutcome.FAILED
        assert notifier.errors == [SUBMIT_FAILURE_MESSAGE]
        assert wizard.loading is False


class TestSingleFlight:
    def test_second_submit_while_pending_is_skipped(
        self, modal: SimpleModalHost, notifier: RecordingNotifier
    ) -> None:
        """Input during a pending create is ignored."""
        client = FakeListingClient(hold=True)
        wizard = RentWizard(WizardContext(client=client, modal=modal, notifier=notifier))
        fill_listing(wizard)
        advance_to(wizard, Step.PRICE)

        async def scenario() -> SubmissionOutcome:
            first = asyncio.create_task(wizard.forward())
            await asyncio.sleep(0)
            assert wizard.loading is True

            second = await wizard.submission.submit()
            assert await wizard.forward() is False
            assert wizard.back() is False

            client.release()
            await first
            return second

        second = run(scenario())

        assert second == SubmissionOutcome.SKIPPED
        assert len(client.payloads) == 1
        assert modal.close_count == 1
        assert wizard.loading is False

    def test_concurrent_submits_reach_endpoint_once(
        self, ready_wizard: RentWizard, client: FakeListingClient
    ) -> None:
        """Two overlapping submits on the last step send a single request."""
        client.hold = True

        async def scenario() -> list:
            first = asyncio.create_task(ready_wizard.submission.submit())
            await asyncio.sleep(0)
            second = asyncio.create_task(ready_wizard.submission.submit())
            await asyncio.sleep(0)

            # Both calls were made on PRICE; only the loading flag stops the second
            assert second.done() is True
            assert ready_wizard.step == Step.PRICE
            assert ready_wizard.loading is True

            client.release()
            return [await first, await second]

        outcomes = run(scenario())

        assert outcomes == [SubmissionOutcome.SUCCEEDED, SubmissionOutcome.SKIPPED]
        assert len(client.payloads) == 1
        assert ready_wizard.submission.requests_sent == 1


def test_lease_warning_is_not_a_submission_error(
    ready_wizard: RentWizard, notifier: RecordingNotifier
) -> None:
    """Invalid dates warn about the lease, not the submission."""
    ready_wizard.set_field("lease_end_date", datetime(2024, 1, 1))

    assert run(ready_wizard.forward()) is False
    assert notifier.errors == [LEASE_DATES_WARNING]
