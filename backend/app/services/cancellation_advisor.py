"""Cancellation advisor — one-line advice on when to cancel.

Rules are checked in order and the first match wins. A ticket booked within
the last 24 hours always gets the "cancel now" advice, however far away
departure is.
"""

from datetime import datetime

from app.services.cancellation_calculator import hours_between

ALREADY_DEPARTED = "The train has already departed. Cancellation is not possible."
RECENTLY_BOOKED = "Cancel as soon as possible to get the maximum refund."
FAR_FROM_DEPARTURE = "Cancel soon to minimize cancellation charges."
WITHIN_WINDOW = "Cancel within the next {hours} hours to avoid higher cancellation charges."
CLOSE_TO_DEPARTURE = "Cancel immediately to avoid very high cancellation charges."
MINIMAL_REFUND = "Cancellation will result in minimal or no refund at this point."


def advise(booking_time: datetime, departure_time: datetime, now: datetime) -> str:
    if departure_time < now:
        return ALREADY_DEPARTED

    hours_since_booking = hours_between(now, booking_time)
    hours_until_departure = hours_between(departure_time, now)

    if hours_since_booking <= 24:
        return RECENTLY_BOOKED
    if hours_until_departure > 48:
        return FAR_FROM_DEPARTURE
    if hours_until_departure > 12:
        return WITHIN_WINDOW.format(hours=hours_until_departure - 12)
    if hours_until_departure > 4:
        return CLOSE_TO_DEPARTURE
    return MINIMAL_REFUND
