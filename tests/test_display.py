import pytest


@pytest.mark.parametrize("value, title, color", [
    ("submitted", "Submitted", "blue"),
    ("routed", "Routed", "orange1"),
    ("partially_filled", "Partially Completed", "yellow"),
    ("filled", "Completed", "green"),
    ("cancelled", "Cancelled", "red"),
    ("rejected", "Rejected", "grey50"),
])
def test_status_display(value, title, color):
    from models.display import status_color, status_title
    from models.events import EventStatus
    from models.orders import OrderStatus

    for status in (EventStatus(value), OrderStatus(value)):
        assert status_title(status) == title
        assert status_color(status) == color


def test_status_markup():
    from models.display import status_markup
    from models.orders import OrderStatus

    assert status_markup(OrderStatus.FILLED) == "[green]Completed[/green]"
