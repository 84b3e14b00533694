"""Tests for iCalendar generation, calendar links and the clipboard summary."""
from datetime import date, datetime, time, timezone
from urllib.parse import parse_qs, unquote, urlparse

import pytest
from icalendar import Calendar

from flourish.exceptions import ExportTargetUnavailableError, InvalidEventDataError
from flourish.models.event import Event
from flourish.services.calendar_export import (
    CalendarEntry,
    apple_calendar_url,
    build_calendar_entry,
    calendar_sync_options,
    clipboard_summary,
    copy_event_to_clipboard,
    escape_text,
    fold_line,
    generate_ical_event,
    google_calendar_url,
    ics_filename,
    serialize_calendar,
    unescape_text,
    unfold,
    write_ics_file,
)

NOW = datetime(2025, 5, 20, 8, 30, 15, tzinfo=timezone.utc)
LATER = datetime(2025, 5, 21, 17, 5, 0, tzinfo=timezone.utc)

REQUIRED_PROPERTIES = ("UID", "DTSTAMP", "DTSTART", "DTEND", "SUMMARY", "STATUS", "SEQUENCE")


def _event(**overrides):
    fields = dict(
        id="3f1c2b9a-0000-4000-8000-000000000001",
        organizer_id="org-1",
        organizer_name="Jane Doe",
        title="Summer Gala",
        description="An evening of music",
        location="Town Hall",
        event_date=date(2025, 6, 1),
        event_time=time(10, 0),
    )
    fields.update(overrides)
    return Event(**fields)


def _lines(ical: str) -> list[str]:
    return unfold(ical).split("\r\n")


def _property(ical: str, name: str) -> str:
    """Value part of the first content line whose name is ``name``."""
    for line in _lines(ical):
        head, _, value = line.partition(":")
        if head.split(";")[0] == name:
            return value
    raise AssertionError(f"{name} not found")


def _line_starting(ical: str, prefix: str) -> str:
    return next(line for line in _lines(ical) if line.startswith(prefix))


class TestEscaping:

    def test_escape_rules(self):
        assert escape_text("a,b;c\\d\ne") == "a\\,b\\;c\\\\d\\ne"

    def test_backslash_escaped_first(self):
        # A literal backslash-n must not turn into a newline escape
        assert escape_text("\\n") == "\\\\n"
        assert unescape_text(escape_text("\\n")) == "\\n"

    def test_round_trip(self):
        original = "Gala, Dinner; \\ Dance\nSecond line"
        assert unescape_text(escape_text(original)) == original

    def test_carriage_returns_become_newlines(self):
        assert escape_text("a\r\nb\rc") == "a\\nb\\nc"

    def test_round_trip_normalizes_carriage_returns(self):
        """TEXT has no escape for a bare CR, so CRLF and CR come back as LF."""
        assert unescape_text(escape_text("Line one\r\nLine two\rLine three")) == "Line one\nLine two\nLine three"

    def test_empty_and_none(self):
        assert escape_text("") == ""
        assert escape_text(None) == ""

    def test_unescape_uppercase_n(self):
        assert unescape_text("a\\Nb") == "a\nb"


class TestFolding:

    def test_short_line_untouched(self):
        assert fold_line("SUMMARY:Hi") == "SUMMARY:Hi"

    def test_long_line_folded_to_75_octets(self):
        line = "DESCRIPTION:" + "x" * 200
        folded = fold_line(line)
        for part in folded.split("\r\n"):
            assert len(part.encode("utf-8")) <= 75
        assert unfold(folded) == line

    def test_multibyte_characters_not_split(self):
        line = "SUMMARY:" + "é" * 100
        folded = fold_line(line)
        for part in folded.split("\r\n"):
            assert len(part.encode("utf-8")) <= 75
            part.encode("utf-8").decode("utf-8")
        assert unfold(folded) == line


class TestICalStructure:

    def test_layout_header(self):
        ical = generate_ical_event(_event(), now=NOW)
        assert _lines(ical)[:8] == [
            "BEGIN:VCALENDAR",
            "VERSION:2.0",
            "PRODID:-//Event App//EventApp//EN",
            "CALSCALE:GREGORIAN",
            "METHOD:PUBLISH",
            "X-WR-CALNAME:Event Calendar",
            "X-WR-TIMEZONE:UTC",
            "BEGIN:VEVENT",
        ]
        assert ical.endswith("END:VEVENT\r\nEND:VCALENDAR\r\n")

    def test_exactly_one_vevent_and_required_properties(self):
        ical = generate_ical_event(_event(), organizer_email="jane@example.com", now=NOW)
        lines = _lines(ical)
        assert lines.count("BEGIN:VEVENT") == 1
        assert lines.count("END:VEVENT") == 1
        for name in REQUIRED_PROPERTIES:
            _property(ical, name)

    @pytest.mark.parametrize("event_time", [time(10, 0), None])
    def test_parses_with_icalendar(self, event_time):
        ical = generate_ical_event(_event(event_time=event_time), organizer_email="jane@example.com", now=NOW)
        calendar = Calendar.from_ical(ical)
        vevents = calendar.walk("VEVENT")
        assert len(vevents) == 1
        for name in REQUIRED_PROPERTIES:
            assert name in vevents[0]

    def test_fixed_properties(self):
        ical = generate_ical_event(_event(), now=NOW)
        assert _property(ical, "STATUS") == "CONFIRMED"
        assert _property(ical, "SEQUENCE") == "0"
        assert _property(ical, "DTSTAMP") == "20250520T083015Z"

    def test_text_fields_mapped(self):
        ical = generate_ical_event(_event(), now=NOW)
        assert _property(ical, "SUMMARY") == "Summer Gala"
        assert _property(ical, "DESCRIPTION") == "An evening of music"
        assert _property(ical, "LOCATION") == "Town Hall"

    def test_missing_description_and_location_are_empty(self):
        ical = generate_ical_event(_event(description=None, location=None), now=NOW)
        assert _property(ical, "DESCRIPTION") == ""
        assert _property(ical, "LOCATION") == ""


class TestICalTimes:

    def test_timed_event_lasts_two_hours(self):
        ical = generate_ical_event(_event(event_time=time(10, 0)), now=NOW)
        assert _line_starting(ical, "DTSTART") == "DTSTART:20250601T100000Z"
        assert _line_starting(ical, "DTEND") == "DTEND:20250601T120000Z"

    def test_timed_event_crossing_midnight(self):
        ical = generate_ical_event(_event(event_time=time(23, 30)), now=NOW)
        assert _line_starting(ical, "DTEND") == "DTEND:20250602T013000Z"

    def test_all_day_event_end_is_next_day(self):
        ical = generate_ical_event(_event(event_date=date(2025, 6, 1), event_time=None), now=NOW)
        assert _line_starting(ical, "DTSTART") == "DTSTART;VALUE=DATE:20250601"
        assert _line_starting(ical, "DTEND") == "DTEND;VALUE=DATE:20250602"

    def test_all_day_end_across_month_and_year(self):
        ical = generate_ical_event(_event(event_date=date(2025, 12, 31), event_time=None), now=NOW)
        assert _line_starting(ical, "DTEND") == "DTEND;VALUE=DATE:20260101"

    def test_midnight_placeholder_is_all_day(self):
        ical = generate_ical_event(_event(event_time=time(0, 0)), now=NOW)
        assert _line_starting(ical, "DTSTART") == "DTSTART;VALUE=DATE:20250601"

    def test_malformed_date_raises(self):
        with pytest.raises(InvalidEventDataError):
            generate_ical_event(_event(event_date="someday"), now=NOW)


class TestICalIdentity:

    def test_uid_is_stable_and_dtstamp_changes(self):
        event = _event()
        first = generate_ical_event(event, now=NOW)
        second = generate_ical_event(event, now=LATER)
        assert _property(first, "UID") == _property(second, "UID")
        assert _property(first, "UID") == f"{event.id}@eventapp.example.com"
        assert _property(first, "DTSTAMP") != _property(second, "DTSTAMP")


class TestICalEscapingInOutput:

    def test_summary_round_trips(self):
        title = "Gala, Dinner; \\ Dance\nAfterparty"
        ical = generate_ical_event(_event(title=title), now=NOW)
        assert unescape_text(_property(ical, "SUMMARY")) == title

    def test_icalendar_reads_back_text_fields(self):
        event = _event(
            title="Gala, Dinner; Dance",
            description="Line one\nLine two, with comma",
            location="Hall; Room 2",
        )
        vevent = Calendar.from_ical(generate_ical_event(event, "jane@example.com", now=NOW)).walk("VEVENT")[0]
        assert str(vevent["SUMMARY"]) == event.title
        assert str(vevent["DESCRIPTION"]) == event.description
        assert str(vevent["LOCATION"]) == event.location

    def test_long_description_is_folded(self):
        ical = generate_ical_event(_event(description="word " * 60), now=NOW)
        for line in ical.split("\r\n"):
            assert len(line.encode("utf-8")) <= 75
        assert unescape_text(_property(ical, "DESCRIPTION")) == "word " * 60


class TestOrganizer:

    def test_organizer_with_email(self):
        ical = generate_ical_event(_event(), organizer_email="jane@example.com", now=NOW)
        assert _line_starting(ical, "ORGANIZER") == "ORGANIZER;CN=Jane Doe:mailto:jane@example.com"

    def test_organizer_without_email(self):
        ical = generate_ical_event(_event(), now=NOW)
        assert _line_starting(ical, "ORGANIZER") == "ORGANIZER;CN=Jane Doe"

    def test_organizer_falls_back_to_role_field(self):
        ical = generate_ical_event(_event(organizer_name=None, organizer_specification="DJ Collective"), now=NOW)
        assert _line_starting(ical, "ORGANIZER") == "ORGANIZER;CN=DJ Collective"

    def test_organizer_default(self):
        ical = generate_ical_event(_event(organizer_name=None), now=NOW)
        assert _line_starting(ical, "ORGANIZER") == "ORGANIZER;CN=Organizer"


class TestBuilder:

    def test_build_entry_keeps_raw_text(self):
        entry = build_calendar_entry(_event(title="A, B"), now=NOW)
        assert entry.summary == "A, B"
        assert entry.all_day is False
        assert entry.dtstamp == NOW

    def test_serialize_escapes_entry(self):
        entry = CalendarEntry(
            uid="x@example.com",
            dtstamp=NOW,
            start=date(2025, 1, 1),
            end=date(2025, 1, 2),
            all_day=True,
            summary="New; Year",
        )
        assert "SUMMARY:New\\; Year" in serialize_calendar(entry)


class TestFiles:

    def test_filename_replaces_non_word_characters(self):
        assert ics_filename(_event(title="Gala: Night/Out!")) == "Gala_ Night_Out_.ics"

    def test_filename_keeps_spaces_and_dashes(self):
        assert ics_filename(_event(title="Summer Gala - 2025")) == "Summer Gala - 2025.ics"

    def test_write_ics_file(self, tmp_path):
        path = write_ics_file(_event(), tmp_path, now=NOW)
        assert path == tmp_path / "Summer Gala.ics"
        assert path.read_bytes().decode("utf-8") == generate_ical_event(_event(), now=NOW)

    def test_write_to_missing_directory_raises_export_error(self, tmp_path):
        with pytest.raises(ExportTargetUnavailableError) as exc_info:
            write_ics_file(_event(), tmp_path / "missing", now=NOW)
        assert exc_info.value.target == "file"


class TestGoogleCalendar:

    def _params(self, url):
        parsed = urlparse(url)
        assert f"{parsed.scheme}://{parsed.netloc}{parsed.path}" == "https://calendar.google.com/calendar/render"
        return {key: values[0] for key, values in parse_qs(parsed.query).items()}

    def test_timed_event(self):
        params = self._params(google_calendar_url(_event()))
        assert params["action"] == "TEMPLATE"
        assert params["text"] == "Summer Gala"
        assert params["dates"] == "20250601T100000Z/20250601T120000Z"
        assert params["details"] == "An evening of music\n\nOrganizer: Jane Doe"
        assert params["location"] == "Town Hall"

    def test_all_day_event(self):
        params = self._params(google_calendar_url(_event(event_time=None)))
        assert params["dates"] == "20250601T000000Z/20250602T000000Z"

    def test_values_are_url_encoded(self):
        url = google_calendar_url(_event(title="Rock & Roll #1"))
        assert "Rock & Roll #1" not in url
        assert self._params(url)["text"] == "Rock & Roll #1"


class TestAppleCalendar:

    def test_data_uri_embeds_ical(self):
        url = apple_calendar_url(_event(), now=NOW)
        prefix = "data:text/calendar;charset=utf8,"
        assert url.startswith(prefix)
        assert unquote(url[len(prefix):]) == generate_ical_event(_event(), now=NOW)

    def test_data_uri_has_no_raw_line_breaks(self):
        assert "\r" not in apple_calendar_url(_event(), now=NOW)


class TestClipboard:

    def test_summary_with_time(self):
        assert clipboard_summary(_event()) == (
            "Summer Gala\n"
            "\n"
            "Date: June 1, 2025\n"
            "Time: 10:00\n"
            "Location: Town Hall\n"
            "Organizer: Jane Doe\n"
            "\n"
            "Description:\n"
            "An evening of music"
        )

    def test_summary_defaults(self):
        summary = clipboard_summary(_event(event_time=None, location="", description=""))
        assert "Time:" not in summary
        assert "Location: TBD" in summary
        assert summary.endswith("Description:\nNo description")

    def test_copy_uses_writer(self):
        copied = []
        assert copy_event_to_clipboard(_event(), copied.append) is True
        assert copied == [clipboard_summary(_event())]

    def test_copy_failure_is_swallowed(self):
        def broken(text):
            raise PermissionError("clipboard denied")

        assert copy_event_to_clipboard(_event(), broken) is False

    def test_copy_without_clipboard_is_soft_failure(self):
        assert copy_event_to_clipboard(_event()) is False


class TestSyncOptions:

    def test_options_in_menu_order(self):
        event = _event()
        options = calendar_sync_options(event)
        assert [o["id"] for o in options] == ["google", "apple", "ics", "copy"]
        assert options[2]["url"] == f"/api/events/{event.id}/calendar.ics"
