"""
Module: export.layout.composer

Purpose:
    Compose a tour aggregate and an export configuration into a
    DocumentPlan (a tree of content blocks). Selects the document
    template from the preset and gathers the entities it needs.

Key Functions:
    - compose_document(): Main entry point
    - missing_input_reason(): Empty-state message when nothing can be composed
    - collect_days(): Chronological day buckets for daily sheets

Templates:
    - Show: Show day sheet (header, venue card, timings, notes, crew)
    - Guest List: Header plus Name / + / Note table
    - Travel: Flights, hotels and ground transport grouped by day
    - Full Tour: Optional cover, then one sheet per calendar day
    - Date: Daily sheets restricted to a date range
    - Tour Overview: One summary sheet with an export timestamp

Dependencies:
    - core.models: Tour aggregate
    - common: Airport directory, timezone resolution
    - export.layout.blocks: Block tree

Used By:
    - export.controller: Preview and export
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timezone, tzinfo
from typing import Callable, Dict, List, Optional, Tuple, Union, cast

from PIL import Image

from encore_export.common.airports import AirportDirectory
from encore_export.common.timezones import local_day, resolve_timezone
from encore_export.core.models import (
    Flight,
    Hotel,
    ItineraryItem,
    Show,
    TourAggregate,
)

from ..config import CoverTheme, ExportConfiguration, Preset
from .blocks import (
    ALIGN_CENTER,
    ALIGN_RIGHT,
    Block,
    Divider,
    DocumentPlan,
    Picture,
    Row,
    Section,
    Spacer,
    Stack,
    Table,
    Text,
)
from .config import LayoutConfig
from .theme import Colors, FontSizes

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

NOTES_KEY = "notes"
GUEST_TABLE_KEY = "guest_table"
NO_NOTES_TEXT = "No notes provided."
TBC = "TBC"
NOTES_MIN_HEIGHT = 100
POSTER_WIDTH = 130
POSTER_HEIGHT = 195

_WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
_MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


# ─────────────────────────────────────────────────────────────────────────────
# Formatting
# ─────────────────────────────────────────────────────────────────────────────

def format_time(moment: Optional[datetime], tz: tzinfo) -> str:
    """Format as "h:mma" lowercase ("4:30pm"), or "TBC" when unset."""
    if moment is None:
        return TBC
    local = moment.astimezone(tz)
    hour = local.hour % 12 or 12
    suffix = "am" if local.hour < 12 else "pm"
    return f"{hour}:{local.minute:02d}{suffix}"


def format_short_date(day: date) -> str:
    """Format as "dd/MM"."""
    return f"{day.day:02d}/{day.month:02d}"


def format_long_date(day: date) -> str:
    """Format as "Wednesday, June 18, 2025"."""
    return f"{_WEEKDAYS[day.weekday()]}, {_MONTHS[day.month - 1]} {day.day}, {day.year}"


def format_month_day(day: date) -> str:
    """Format as "Jun 18"."""
    return f"{_MONTHS[day.month - 1][:3]} {day.day}"


# ─────────────────────────────────────────────────────────────────────────────
# Events and days
# ─────────────────────────────────────────────────────────────────────────────

EventItem = Union[ItineraryItem, Flight, Hotel, Show]


@dataclass(frozen=True)
class DayEvent:
    """
    One dated entry on a daily sheet.

    Attributes:
        time: Timestamp used for sorting
        order: Position in the input concatenation (itinerary, flights,
            hotels, shows); breaks ties between equal timestamps
        item: The underlying entity
    """

    time: datetime
    order: int
    item: EventItem

    @property
    def is_show(self) -> bool:
        return isinstance(self.item, Show)


def collect_days(
    aggregate: TourAggregate,
    config: ExportConfiguration,
    tz: tzinfo,
) -> List[Tuple[date, List[DayEvent]]]:
    """
    Bucket the aggregate's events into calendar days.

    Days are the union of show days, flight departure days, hotel
    check-in days and itinerary days (each gated by its toggle), sorted
    ascending. Events inside a day are sorted by timestamp, with equal
    timestamps kept in input order.

    Args:
        aggregate: Tour aggregate
        config: Export configuration (toggles)
        tz: Timezone defining day boundaries

    Returns:
        [(day, events)] in ascending day order
    """
    timed: List[Tuple[datetime, EventItem]] = []
    if config.include_itinerary:
        timed.extend((item.time, item) for item in aggregate.itinerary)
    if config.include_flights:
        timed.extend((flight.departure_time, flight) for flight in aggregate.flights)
    if config.include_hotels:
        timed.extend((hotel.check_in, hotel) for hotel in aggregate.hotels)
    timed.extend((show.date, show) for show in aggregate.shows)

    buckets: Dict[date, List[DayEvent]] = {}
    for order, (moment, item) in enumerate(timed):
        buckets.setdefault(local_day(moment, tz), []).append(DayEvent(moment, order, item))

    return [
        (day, sorted(events, key=lambda e: (e.time, e.order)))
        for day, events in sorted(buckets.items())
    ]


# ─────────────────────────────────────────────────────────────────────────────
# Entry points
# ─────────────────────────────────────────────────────────────────────────────

def missing_input_reason(
    aggregate: Optional[TourAggregate],
    config: ExportConfiguration,
) -> Optional[str]:
    """
    Explain why no document can be composed.

    Returns:
        Empty-state message, or None when composition will succeed.
        A show without guests is not a missing input.
    """
    if aggregate is None:
        return "Select a tour to export."
    if config.preset.needs_show:
        if not config.selected_show_id:
            return "Select a show to export."
        if aggregate.show_by_id(config.selected_show_id) is None:
            return "The selected show is not part of this tour."
    return None


def compose_document(
    aggregate: Optional[TourAggregate],
    config: ExportConfiguration,
    *,
    poster: Optional[Image.Image] = None,
    airports: Optional[AirportDirectory] = None,
    layout: Optional[LayoutConfig] = None,
    clock: Optional[Clock] = None,
) -> Optional[DocumentPlan]:
    """
    Compose the document for a preset.

    Composition is deterministic: identical inputs (and the same clock
    for Tour Overview) give an identical plan.

    Args:
        aggregate: Tour aggregate, or None when no tour is selected
        config: Export configuration
        poster: Already-fetched poster image (None renders a placeholder)
        airports: Airport directory for flight local times
        layout: Layout configuration (page width for full-bleed blocks)
        clock: Returns "now" for the Tour Overview export date

    Returns:
        DocumentPlan, or None when required input is missing

    Example:
        >>> plan = compose_document(aggregate, ExportConfiguration(preset=Preset.TRAVEL))
        >>> plan.section_kinds
        ('travel',)
    """
    reason = missing_input_reason(aggregate, config)
    if reason is not None:
        logger.info(f"Nothing to compose: {reason}")
        return None

    ctx = _Context(
        aggregate=aggregate,
        config=config,
        poster=poster,
        airports=airports or AirportDirectory(),
        layout=layout or LayoutConfig(),
        tz=resolve_timezone(config.timezone),
    )

    preset = config.preset
    if preset == Preset.SHOW:
        sections = [_show_section(ctx)]
    elif preset == Preset.GUEST_LIST:
        sections = [_guest_list_section(ctx)]
    elif preset == Preset.TRAVEL:
        sections = [_travel_section(ctx)]
    elif preset == Preset.FULL_TOUR:
        sections = _daily_sections(ctx, with_cover=config.include_cover_page, in_range=False)
    elif preset == Preset.DATE:
        sections = _daily_sections(ctx, with_cover=False, in_range=True)
    elif preset == Preset.TOUR_OVERVIEW:
        sections = [_overview_section(ctx, (clock or _utc_now)())]
    else:
        raise ValueError(f"Unsupported preset: {preset}")

    tour = aggregate.tour
    plan = DocumentPlan(
        title=f"{tour.artist} - {tour.tour_name} ({preset.value})",
        preset=preset.value,
        sections=tuple(sections),
    )
    logger.debug(f"Composed {preset.value} document with {len(plan.sections)} sections")
    return plan


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class _Context:
    aggregate: TourAggregate
    config: ExportConfiguration
    poster: Optional[Image.Image]
    airports: AirportDirectory
    layout: LayoutConfig
    tz: tzinfo

    def show_tz(self, show: Show) -> tzinfo:
        return resolve_timezone(show.timezone) if show.timezone else self.tz

    def zone_name_for_airport(self, iata: str) -> str:
        return self.airports.timezone_for(iata) or self.config.timezone

    def airport_tz(self, iata: str) -> tzinfo:
        return resolve_timezone(self.zone_name_for_airport(iata))


# ─────────────────────────────────────────────────────────────────────────────
# Show day sheet
# ─────────────────────────────────────────────────────────────────────────────

def _show_section(ctx: _Context) -> Section:
    # missing_input_reason has already confirmed the show exists
    show = cast(Show, ctx.aggregate.show_by_id(ctx.config.selected_show_id))
    return Section(
        kind="show_day",
        blocks=tuple(_show_day_blocks(ctx, show, include_notes=ctx.config.include_notes)),
        day=local_day(show.date, ctx.show_tz(show)),
        background=Colors.SHOW_DAY_BACKGROUND,
    )


def _show_day_blocks(ctx: _Context, show: Show, *, include_notes: bool) -> List[Block]:
    tour = ctx.aggregate.tour
    config = ctx.config
    tz = ctx.show_tz(show)

    blocks: List[Block] = [
        Text(tour.artist.upper(), size=FontSizes.BODY, bold=True, color=Colors.TEXT_SECONDARY),
        Text(tour.tour_name.upper(), size=FontSizes.HEADING, bold=True),
        _venue_card(ctx, show, tz),
    ]

    left: List[Block] = []
    if config.include_show_details:
        left.append(_timings_block(show, tz))

    right: List[Block] = []
    if include_notes:
        right.append(_notes_block(config.notes))
    if config.include_crew:
        right.append(_crew_block(ctx))

    if left and right:
        blocks.append(Row((Stack(tuple(left)), Stack(tuple(right))), weights=(1, 2), spacing=16))
    elif left or right:
        blocks.append(Stack(tuple(left or right), spacing=16))

    blocks.append(Spacer(8))
    blocks.append(Text("ENCORE", size=FontSizes.SMALL, bold=True, color=Colors.TEXT_SECONDARY, align=ALIGN_CENTER))
    return blocks


def _venue_card(ctx: _Context, show: Show, tz: tzinfo) -> Block:
    details: List[Block] = [
        Text(format_short_date(local_day(show.date, tz)), size=FontSizes.SUBHEADING, bold=True),
        Text(show.city.upper(), size=FontSizes.TITLE, bold=True),
        Text(show.venue_name, size=FontSizes.SUBHEADING, bold=True),
    ]
    if show.load_in is not None:
        details.append(Stack(
            (Text(f"Load In Time: {format_time(show.load_in, tz)}", size=FontSizes.BODY, bold=True),),
            padding=5,
            background=Colors.TABLE_HEADER,
        ))

    contact_lines = [show.venue_address, show.contact_phone, show.contact_name, show.contact_email]
    details.extend(Text(line, size=FontSizes.BODY) for line in contact_lines if line)

    poster = Picture(ctx.poster, POSTER_WIDTH, POSTER_HEIGHT, placeholder_text="No poster")
    return Stack(
        (Row((Stack(tuple(details)), poster), weights=(3.2, 1), spacing=20),),
        padding=20,
        background=Colors.CARD,
        border=Colors.CARD_BORDER,
    )


def _timings_block(show: Show, tz: tzinfo) -> Block:
    timings = (
        ("Load In", show.load_in),
        ("Soundcheck", show.sound_check),
        ("Doors", show.doors_open),
        ("Set Time", show.headliner_set_time),
        ("Pack Out", show.pack_out),
    )
    rows: List[Block] = [Text("Timings", size=FontSizes.SUBHEADING, bold=True)]
    for label, moment in timings:
        rows.append(Row((
            Text(label, size=FontSizes.BODY),
            Text(format_time(moment, tz), size=FontSizes.BODY, bold=True, align=ALIGN_RIGHT),
        )))
    return Stack(tuple(rows))


def _notes_block(notes: str) -> Block:
    return Stack(
        (
            Text("Notes", size=FontSizes.SUBHEADING, bold=True),
            Stack(
                (Text(notes.strip() or NO_NOTES_TEXT, size=FontSizes.SMALL + 1),),
                padding=10,
                border=Colors.CARD_BORDER,
                background=Colors.CARD,
                min_height=NOTES_MIN_HEIGHT,
            ),
        ),
        key=NOTES_KEY,
    )


def _crew_block(ctx: _Context) -> Block:
    rows = tuple(
        (member.name, member.role_label, member.email or "")
        for member in ctx.aggregate.crew
    )
    return Stack((
        Text("Crew", size=FontSizes.SUBHEADING, bold=True),
        Table(("Name", "Role", "Contact"), rows, weights=(2, 2, 3), size=FontSizes.SMALL),
    ))


# ─────────────────────────────────────────────────────────────────────────────
# Guest list
# ─────────────────────────────────────────────────────────────────────────────

def _guest_list_section(ctx: _Context) -> Section:
    # missing_input_reason has already confirmed the show exists
    show = cast(Show, ctx.aggregate.show_by_id(ctx.config.selected_show_id))
    day = local_day(show.date, ctx.show_tz(show))
    guests = ctx.aggregate.guests_for(show.id) or ()

    rows = tuple((g.name, g.plus_label, g.note or "") for g in guests)
    total = sum(1 + g.additional_guests for g in guests)

    blocks: List[Block] = [
        Text(f"Guest List: {show.city}", size=FontSizes.TITLE, bold=True),
        Text(f"{show.venue_name} - {format_long_date(day)}", size=FontSizes.SUBHEADING, color=Colors.TEXT_SECONDARY),
        Divider(),
        Table(("Name", "+", "Note"), rows, weights=(3, 0.6, 3), key=GUEST_TABLE_KEY),
    ]
    if guests:
        blocks.append(Text(f"Total guests: {total}", size=FontSizes.BODY, bold=True, align=ALIGN_RIGHT))
    return Section(kind="guest_list", blocks=tuple(blocks), day=day)


# ─────────────────────────────────────────────────────────────────────────────
# Travel
# ─────────────────────────────────────────────────────────────────────────────

def _travel_section(ctx: _Context) -> Section:
    config = ctx.config
    tour = ctx.aggregate.tour

    timed: List[Tuple[datetime, EventItem]] = []
    if config.include_itinerary:
        timed.extend((i.time, i) for i in ctx.aggregate.itinerary if i.type.is_travel)
    if config.include_flights:
        timed.extend((f.departure_time, f) for f in ctx.aggregate.flights)
    if config.include_hotels:
        timed.extend((h.check_in, h) for h in ctx.aggregate.hotels)

    buckets: Dict[date, List[DayEvent]] = {}
    for order, (moment, item) in enumerate(timed):
        buckets.setdefault(local_day(moment, ctx.tz), []).append(DayEvent(moment, order, item))

    blocks: List[Block] = [
        Text(tour.artist.upper(), size=FontSizes.BODY, bold=True, color=Colors.TEXT_SECONDARY),
        Text("Travel Itinerary", size=FontSizes.TITLE, bold=True),
        Text(tour.tour_name, size=FontSizes.SUBHEADING, color=Colors.TEXT_SECONDARY),
        Divider(),
    ]
    if not buckets:
        blocks.append(Text("No travel booked.", color=Colors.TEXT_SECONDARY))

    for day, events in sorted(buckets.items()):
        blocks.append(Text(format_long_date(day), size=FontSizes.SUBHEADING, bold=True))
        for event in sorted(events, key=lambda e: (e.time, e.order)):
            blocks.append(_event_block(ctx, event))

    return Section(kind="travel", blocks=tuple(blocks))


def _flight_card(ctx: _Context, flight: Flight) -> Block:
    dep_zone = ctx.zone_name_for_airport(flight.origin)
    arr_zone = ctx.zone_name_for_airport(flight.destination)
    dep_tz = resolve_timezone(dep_zone)
    arr_tz = resolve_timezone(arr_zone)
    dep_day = local_day(flight.departure_time, dep_tz)
    arr_day = local_day(flight.arrival_time, arr_tz)

    title = " ".join(part for part in (flight.airline, flight.flight_number) if part) or "Flight"
    lines: List[Block] = [
        Row((
            Text(title, size=FontSizes.SUBHEADING, bold=True),
            Text(f"{flight.origin} → {flight.destination}", size=FontSizes.SUBHEADING, bold=True, align=ALIGN_RIGHT),
        )),
        Row((
            Text(f"Departs {format_month_day(dep_day)} {format_time(flight.departure_time, dep_tz)}"),
            Text(f"Arrives {format_month_day(arr_day)} {format_time(flight.arrival_time, arr_tz)}", align=ALIGN_RIGHT),
        )),
    ]

    if flight.passengers:
        names = []
        for passenger in flight.passengers:
            name = ctx.aggregate.crew_name(passenger.crew_id)
            names.append(f"{name} ({passenger.baggage})" if passenger.baggage else name)
        lines.append(Text("Passengers: " + ", ".join(names), size=FontSizes.SMALL + 1))
    if flight.notes:
        lines.append(Text(flight.notes, size=FontSizes.SMALL + 1, color=Colors.TEXT_SECONDARY))
    if dep_zone != arr_zone:
        lines.append(Text(
            "Note: Times displayed in local timezone for each airport.",
            size=FontSizes.SMALL,
            color=Colors.TEXT_SECONDARY,
        ))
    return Stack(tuple(lines), spacing=4, padding=10, background=Colors.CARD, border=Colors.CARD_BORDER)


def _hotel_card(ctx: _Context, hotel: Hotel) -> Block:
    tz = resolve_timezone(hotel.timezone) if hotel.timezone else ctx.tz
    check_in = hotel.check_in
    check_out = hotel.check_out
    address = ", ".join(part for part in (hotel.address, hotel.city, hotel.country) if part)

    lines: List[Block] = [Text(f"Hotel: {hotel.name}", size=FontSizes.SUBHEADING, bold=True)]
    if address:
        lines.append(Text(address, size=FontSizes.SMALL + 1, color=Colors.TEXT_SECONDARY))
    lines.append(Text(
        f"Check in {format_month_day(local_day(check_in, tz))} {format_time(check_in, tz)}"
        f"  ·  Check out {format_month_day(local_day(check_out, tz))} {format_time(check_out, tz)}"
    ))
    if hotel.booking_reference:
        lines.append(Text(f"Booking ref: {hotel.booking_reference}", size=FontSizes.SMALL + 1))
    for room in hotel.rooms:
        guests = ", ".join(g.name or ctx.aggregate.crew_name(g.crew_id) for g in room.guests)
        label = f"Room {room.room_number}" if room.room_number else "Room"
        lines.append(Text(f"{label}: {guests or 'Unassigned'}", size=FontSizes.SMALL + 1))
    return Stack(tuple(lines), spacing=4, padding=10, background=Colors.CARD, border=Colors.CARD_BORDER)


def _itinerary_row(ctx: _Context, item: ItineraryItem) -> Block:
    tz = resolve_timezone(item.timezone) if item.timezone else ctx.tz
    detail: List[Block] = [Text(item.title or item.type.display_name, bold=True)]
    if item.subtitle:
        detail.append(Text(item.subtitle, size=FontSizes.SMALL + 1, color=Colors.TEXT_SECONDARY))
    if item.notes:
        detail.append(Text(item.notes, size=FontSizes.SMALL + 1))
    return Row(
        (Text(format_time(item.time, tz), bold=True), Stack(tuple(detail), spacing=2)),
        weights=(1, 5),
    )


def _show_row(ctx: _Context, show: Show) -> Block:
    tz = ctx.show_tz(show)
    return Row(
        (
            Text(format_time(show.doors_open or show.date, tz), bold=True),
            Text(f"Show: {show.venue_name}, {show.city}", bold=True),
        ),
        weights=(1, 5),
    )


def _event_block(ctx: _Context, event: DayEvent) -> Block:
    item = event.item
    if isinstance(item, Flight):
        return _flight_card(ctx, item)
    if isinstance(item, Hotel):
        return _hotel_card(ctx, item)
    if isinstance(item, Show):
        return _show_row(ctx, item)
    return _itinerary_row(ctx, item)


# ─────────────────────────────────────────────────────────────────────────────
# Full Tour / Date
# ─────────────────────────────────────────────────────────────────────────────

def _daily_sections(ctx: _Context, *, with_cover: bool, in_range: bool) -> List[Section]:
    sections: List[Section] = []
    if with_cover:
        sections.append(_cover_section(ctx))

    days = collect_days(ctx.aggregate, ctx.config, ctx.tz)
    if in_range:
        days = [(day, events) for day, events in days if ctx.config.includes_day(day)]

    for day, events in days:
        shows = [e for e in events if e.is_show]
        if shows:
            sections.append(_show_day_with_extras(ctx, day, shows[0], events))
        else:
            sections.append(_daily_itinerary_section(ctx, day, events))

    if in_range and not days:
        sections.append(Section(
            kind="daily_itinerary",
            blocks=(
                *_daily_header(ctx, None),
                Text("No events scheduled", size=FontSizes.SUBHEADING, color=Colors.TEXT_SECONDARY),
            ),
        ))
    return sections


def _show_day_with_extras(ctx: _Context, day: date, show_event: DayEvent, events: List[DayEvent]) -> Section:
    show = cast(Show, show_event.item)
    blocks = _show_day_blocks(ctx, show, include_notes=False)

    others = [e for e in events if e is not show_event]
    if others:
        footer = blocks.pop()
        blocks.append(Divider())
        blocks.append(Text("Also Today", size=FontSizes.SUBHEADING, bold=True))
        blocks.extend(_event_block(ctx, e) for e in others)
        blocks.append(footer)

    return Section(kind="show_day", blocks=tuple(blocks), day=day, background=Colors.SHOW_DAY_BACKGROUND)


def _daily_header(ctx: _Context, day: Optional[date]) -> List[Block]:
    tour = ctx.aggregate.tour
    return [
        Row((
            Text(tour.tour_name.upper(), size=FontSizes.BODY, bold=True, color=Colors.TEXT_SECONDARY),
            Text(tour.artist.upper(), size=FontSizes.BODY, bold=True, color=Colors.TEXT_SECONDARY, align=ALIGN_RIGHT),
        )),
        Text(format_long_date(day) if day else tour.tour_name, size=FontSizes.HEADING, bold=True),
        Divider(),
    ]


def _daily_itinerary_section(ctx: _Context, day: date, events: List[DayEvent]) -> Section:
    blocks = _daily_header(ctx, day)
    blocks.extend(_event_block(ctx, e) for e in events)
    return Section(kind="daily_itinerary", blocks=tuple(blocks), day=day)


def _cover_section(ctx: _Context) -> Section:
    tour = ctx.aggregate.tour
    dark = ctx.config.cover_theme == CoverTheme.THEME_1
    text_color = Colors.TEXT_ON_DARK if dark else Colors.TEXT_PRIMARY
    sub_color = Colors.TEXT_MUTED_ON_DARK if dark else Colors.TEXT_SECONDARY
    dates = (
        f"{format_long_date(local_day(tour.start_date, ctx.tz))} - "
        f"{format_long_date(local_day(tour.end_date, ctx.tz))}"
    )
    titles: Tuple[Block, ...] = (
        Text(tour.artist.upper(), size=FontSizes.COVER_ARTIST, bold=True, color=sub_color, align=ALIGN_CENTER),
        Text(tour.tour_name, size=FontSizes.COVER_TITLE, bold=True, color=text_color, align=ALIGN_CENTER),
        Text(dates, size=FontSizes.BODY, color=sub_color, align=ALIGN_CENTER),
    )

    page = ctx.layout
    blocks: List[Block] = []
    if dark:
        if ctx.poster is not None:
            blocks.append(Picture(ctx.poster, page.page_width, page.page_height * 0.6))
        else:
            blocks.append(Spacer(page.page_height * 0.3))
        blocks.append(Stack(titles, padding=page.margin))
    else:
        blocks.append(Spacer(page.margin * 2))
        blocks.append(Stack(titles, padding=page.margin))
        blocks.append(Row(
            (
                Spacer(0),
                Picture(ctx.poster, page.page_width / 2, page.page_width * 0.75, placeholder_text="No poster"),
                Spacer(0),
            ),
            weights=(1, 2, 1),
            spacing=0,
        ))

    return Section(
        kind="cover",
        blocks=tuple(blocks),
        background=Colors.COVER_DARK if dark else Colors.COVER_LIGHT,
        full_bleed=True,
    )


# ─────────────────────────────────────────────────────────────────────────────
# Tour overview
# ─────────────────────────────────────────────────────────────────────────────

def _overview_section(ctx: _Context, now: datetime) -> Section:
    agg = ctx.aggregate
    config = ctx.config
    tz = ctx.tz

    blocks: List[Block] = [
        Text(agg.tour.artist.upper(), size=FontSizes.BODY, bold=True, color=Colors.TEXT_SECONDARY),
        Text(agg.tour.tour_name, size=FontSizes.TITLE, bold=True),
        Text(
            f"Export Date: {format_long_date(local_day(now, tz))} {format_time(now, tz)}",
            size=FontSizes.SMALL,
            color=Colors.TEXT_SECONDARY,
        ),
        Divider(),
    ]

    def section(title: str, table: Table) -> None:
        blocks.append(Text(title, size=FontSizes.SUBHEADING, bold=True))
        blocks.append(table)

    shows = sorted(agg.shows, key=lambda s: s.date)
    section("Shows", Table(
        ("Date", "City", "Venue"),
        tuple(
            (format_short_date(local_day(s.date, ctx.show_tz(s))), s.city, s.venue_name)
            for s in shows
        ),
        weights=(1, 2, 3),
    ))
    if config.include_itinerary:
        items = sorted(agg.itinerary, key=lambda i: i.time)
        section("Itinerary", Table(
            ("Date", "Time", "Item"),
            tuple(
                (format_short_date(local_day(i.time, tz)), format_time(i.time, tz), i.title)
                for i in items
            ),
            weights=(1, 1, 4),
        ))
    if config.include_flights:
        flights = sorted(agg.flights, key=lambda f: f.departure_time)
        section("Flights", Table(
            ("Date", "Flight", "Route"),
            tuple(
                (
                    format_short_date(local_day(f.departure_time, ctx.airport_tz(f.origin))),
                    " ".join(p for p in (f.airline, f.flight_number) if p),
                    f"{f.origin} → {f.destination}",
                )
                for f in flights
            ),
            weights=(1, 2, 2),
        ))
    if config.include_hotels:
        hotels = sorted(agg.hotels, key=lambda h: h.check_in)
        section("Hotels", Table(
            ("Hotel", "City", "Check In", "Check Out"),
            tuple(
                (
                    h.name,
                    h.city,
                    format_short_date(local_day(h.check_in, tz)),
                    format_short_date(local_day(h.check_out, tz)),
                )
                for h in hotels
            ),
            weights=(3, 2, 1, 1),
        ))
    if config.include_crew:
        section("Touring Party", Table(
            ("Name", "Role", "Email"),
            tuple((m.name, m.role_label, m.email or "") for m in agg.crew),
            weights=(2, 2, 3),
        ))

    return Section(kind="overview", blocks=tuple(blocks))
