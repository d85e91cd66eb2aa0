import pytest

from botapp.commands.parser import ParsedCommand, parse_command
from botapp.commands.service import CommandService
from botapp.ui.slots import NO_NEW_RESULTS, NO_RESULTS, format_unseen_batch
from monitoring.notification_ticker import NotificationTicker
from monitoring.reconciler import AvailabilityReconciler
from monitoring.tracker import PitchSlotTracker
from pitches.rules import min_duration
from tests.helpers import (
    DummyLogger,
    RecordingNotifier,
    StubFetcher,
    fixed_clock,
    make_item,
    make_pitch,
    make_slot,
)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("@roborooney list", ParsedCommand("list")),
        ("@RoboRooney   UNSEEN", ParsedCommand("unseen")),
        ("/rules", ParsedCommand("rules")),
        ("/pitches@roborooney", ParsedCommand("pitches")),
        ("@roborooney checkout 12345-678901", ParsedCommand("checkout", "12345-678901")),
        ("/checkout@roborooney 1-2", ParsedCommand("checkout", "1-2")),
        ("/start", ParsedCommand("help")),
        ("@roborooney", ParsedCommand("help")),
        ("@roborooney what's up", ParsedCommand("help")),
        ("", ParsedCommand("help")),
        (None, ParsedCommand("help")),
    ],
)
def test_parse_command(text, expected):
    assert parse_command(text) == expected


def test_parse_command_uses_given_bot_username():
    assert parse_command("@pitchbot refresh", "pitchbot") == ParsedCommand("refresh")


def _service(tracker=None, fetcher=None):
    tracker = tracker or PitchSlotTracker()
    pitches = [make_pitch("1", "Mile End")]
    rules = [min_duration(60)]
    reconciler = AvailabilityReconciler(
        fetcher or StubFetcher(),
        tracker,
        pitches,
        rules,
        clock=fixed_clock(),
        logger=DummyLogger(),
    )
    ticker = NotificationTicker(
        reconciler,
        tracker,
        RecordingNotifier(),
        format_unseen_batch,
        interval_minutes=1,
        logger=DummyLogger(),
    )
    service = CommandService(
        tracker,
        ticker,
        pitches,
        rules,
        lambda pitch, slot: f"https://example.com/{pitch.id}/{slot.id}",
        logger=DummyLogger(),
    )
    return service, tracker


@pytest.mark.asyncio
async def test_list_shows_every_tracked_slot():
    service, tracker = _service()
    tracker.upsert(make_item("1", "10"))
    tracker.upsert(make_item("1", "11", hours_from_base=31))
    tracker.sweep_unseen()

    reply = await service.dispatch(ParsedCommand("list"))

    assert "1-10" in reply and "1-11" in reply


@pytest.mark.asyncio
async def test_list_when_empty():
    service, _ = _service()

    assert await service.dispatch(ParsedCommand("list")) == NO_RESULTS
    assert await service.dispatch(ParsedCommand("unseen")) == NO_NEW_RESULTS


@pytest.mark.asyncio
async def test_unseen_is_read_only():
    service, tracker = _service()
    tracker.upsert(make_item("1", "10"))
    tracker.upsert(make_item("1", "11", hours_from_base=31))
    tracker.sweep_unseen()
    tracker.upsert(make_item("1", "12", hours_from_base=32))

    first = await service.dispatch(ParsedCommand("unseen"))
    second = await service.dispatch(ParsedCommand("unseen"))

    assert first == second
    assert "1-12" in first and "1-10" not in first
    assert tracker.get("1-12").seen is False


@pytest.mark.asyncio
async def test_checkout_found_and_not_found():
    service, tracker = _service()
    tracker.upsert(make_item("1", "10"))

    lookup = service.checkout("1-10")
    assert lookup.found
    assert lookup.link == "https://example.com/1/10"

    assert not service.checkout("9-99").found
    missing = await service.dispatch(ParsedCommand("checkout", "9-99"))
    assert "not found" in missing
    found = await service.dispatch(ParsedCommand("checkout", "1-10"))
    assert "https://example.com/1/10" in found


@pytest.mark.asyncio
async def test_checkout_without_argument_shows_usage():
    service, _ = _service()

    assert "Usage" in await service.dispatch(ParsedCommand("checkout"))


@pytest.mark.asyncio
async def test_checkout_rejects_malformed_ids():
    service, _ = _service()

    reply = await service.dispatch(ParsedCommand("checkout", "12345"))

    assert reply.startswith("12345 is not a pitch-slot ID")


@pytest.mark.asyncio
async def test_rules_pitches_and_help_echo_configuration():
    service, _ = _service()

    assert "At least 60 minutes long" in await service.dispatch(ParsedCommand("rules"))
    assert "Mile End [1]" in await service.dispatch(ParsedCommand("pitches"))
    help_text = await service.dispatch(ParsedCommand("help"), bot_username="pitchfinder_bot")
    assert "@pitchfinder_bot checkout {pitch-slot ID}" in help_text
    assert "@roborooney" not in help_text


@pytest.mark.asyncio
async def test_refresh_reconciles_without_marking_seen():
    fetcher = StubFetcher({"1": [make_slot("10")]})
    service, tracker = _service(fetcher=fetcher)

    reply = await service.dispatch(ParsedCommand("refresh"))

    assert reply.startswith("Refreshed: 1 new")
    assert tracker.get("1-10").seen is False
