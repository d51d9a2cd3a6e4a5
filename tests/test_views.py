from awsome.common import Common
from awsome.services import Service
from awsome.state import (
    DEFAULT_MESSAGE,
    AppState,
    ClosePopup,
    NavigateDown,
    OpenPopup,
    ProviderResult,
    Refresh,
    ToggleFavorite,
    apply,
)
from awsome.views import placeholder_lines

ROWS = (
    ("i-0123456789abcdef0", "web", "running", "t3.micro", "203.0.113.10"),
    ("i-0fedcba9876543210", "db", "stopped", "m5.large", "-"),
)


def screen(session):
    session.ui.before_paint()
    session.ui.render()
    return session.ui.buf.text().split("\n")


def advance(session, *events):
    state = session.state
    for event in events:
        state, _ = apply(state, event)
    session.state = state
    return state


def loading(session):
    state = advance(session, Refresh())
    return state.generation


def test_idle_screen(make_session):
    lines = screen(make_session())
    assert len(lines) == 24
    assert lines[1].startswith("│AWSOME |  EC2 •  S3  [Space: More]")
    assert " EC2 Instances " in lines[3]
    assert "[" not in lines[3]
    assert "Press 'r' to load EC2 Instances resources" in lines[4]
    assert " Status " in lines[21]
    assert DEFAULT_MESSAGE in lines[22]


def test_header_without_favorites(make_session):
    session = make_session()
    advance(session, ToggleFavorite(Service.EC2), ToggleFavorite(Service.S3))
    lines = screen(session)
    assert "No favorites - Press Space to select service" in lines[1]


def test_loading_screen(make_session):
    session = make_session()
    loading(session)
    lines = screen(session)
    assert " EC2 Instances [LOADING...] ⠋ " in lines[3]
    assert "Loading..." in lines[4]
    assert "Loading EC2 Instances resources..." in lines[22]


def test_spinner_advances(make_session):
    session = make_session()
    loading(session)
    session.spinner = 1
    assert " EC2 Instances [LOADING...] ⠙ " in screen(session)[3]


def test_loaded_screen(make_session):
    session = make_session()
    generation = loading(session)
    advance(session, ProviderResult(Service.EC2, generation, rows=ROWS), NavigateDown())
    lines = screen(session)
    assert " EC2 Instances [READY] " in lines[3]
    assert "INSTANCE ID" in lines[4]
    assert "PUBLIC IP" in lines[4]
    assert "i-0123456789abcdef0" in lines[5]
    assert "203.0.113.10" in lines[5]
    assert "db" in lines[6]
    assert "Loaded 2 resources (EC2 Instances)" in lines[22]
    panel = session.resource_main
    assert panel.selected == 1
    assert panel.selection_color == Common.color("selection")
    assert panel.border.color == Common.color("status_loaded")


def test_empty_screen(make_session):
    session = make_session()
    generation = loading(session)
    advance(session, ProviderResult(Service.EC2, generation, rows=()))
    lines = screen(session)
    assert "No EC2 Instances found" in lines[4]
    assert "INSTANCE ID" not in "\n".join(lines)


def test_error_screen(make_session):
    session = make_session()
    generation = loading(session)
    advance(
        session,
        ProviderResult(Service.EC2, generation, error="AWS: AccessDenied: nope"),
    )
    text = "\n".join(screen(session))
    assert " EC2 Instances [ERROR] " in text
    assert "Details: AWS: AccessDenied: nope" in text
    assert "Possible causes:" in text
    assert "ec2:DescribeInstances" in text
    assert session.resource_main.border.color == Common.color("status_error")


def test_error_keeps_rows_in_error_color(make_session):
    session = make_session()
    generation = loading(session)
    state = advance(session, ProviderResult(Service.EC2, generation, rows=ROWS))
    advance(
        session,
        Refresh(),
        ProviderResult(Service.EC2, state.generation + 1, error="timeout"),
    )
    lines = screen(session)
    assert "i-0123456789abcdef0" in lines[5]
    assert session.resource_main.color == Common.color("error_row")
    assert session.resource_main.selection_color == Common.color("error_selection")


def test_popup(make_session):
    session = make_session()
    session.dispatch(OpenPopup())
    session.dispatch(NavigateDown())
    text = "\n".join(screen(session))
    assert " Select Service " in text
    assert "★ EC2 Instances" in text
    assert "★ S3 Buckets" in text
    assert "  IAM Users" in text
    assert "  CloudWatch Alarms" in text
    assert "↑/↓: Navigate  Enter: Select  f: Toggle ★  Esc: Close" in text
    session.dispatch(ClosePopup())
    assert " Select Service " not in "\n".join(screen(session))


def test_placeholder_lines():
    state = AppState(service=Service.S3)
    assert placeholder_lines(state) == ["Press 'r' to load S3 Buckets resources"]
    state, _ = apply(state, Refresh())
    assert placeholder_lines(state) == ["Loading..."]
