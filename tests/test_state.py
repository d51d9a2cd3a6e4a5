import random

import pytest

from awsome.services import Service
from awsome.state import (
    DEFAULT_MESSAGE,
    AppState,
    ClosePopup,
    Exit,
    Fetch,
    NavigateDown,
    NavigateUp,
    OpenPopup,
    ProviderResult,
    Quit,
    Refresh,
    SelectService,
    ShowSelection,
    Status,
    StatusKind,
    ToggleFavorite,
    apply,
)

ROWS = (("i-1", "web", "running"), ("i-2", "db", "stopped"), ("i-3", "-", "pending"))


def run(state, *events):
    effect = None
    for event in events:
        state, effect = apply(state, event)
    return state, effect


def loaded(rows=ROWS, service=Service.EC2):
    state, effect = run(AppState(service=service), Refresh())
    state, _ = apply(state, ProviderResult(service, effect.generation, rows=rows))
    return state


def test_initial_state():
    state = AppState()
    assert state.service is Service.EC2
    assert state.status == Status.idle()
    assert state.rows == ()
    assert state.selected is None
    assert state.favorites == frozenset()
    assert not state.popup_open
    assert state.message == DEFAULT_MESSAGE


def test_status_indicators():
    assert StatusKind.IDLE.indicator == ""
    assert StatusKind.LOADING.indicator == "[LOADING...]"
    assert StatusKind.LOADED.indicator == "[READY]"
    assert StatusKind.ERROR.indicator == "[ERROR]"
    assert Status.error("boom").message == "boom"


def test_navigation_is_clamped():
    state = loaded()
    assert state.selected == 0
    state, effect = apply(state, NavigateUp())
    assert state.selected == 0
    assert effect is None
    state, _ = run(state, NavigateDown(), NavigateDown(), NavigateDown(), NavigateDown())
    assert state.selected == 2
    state, _ = apply(state, NavigateUp())
    assert state.selected == 1


def test_navigation_without_rows_keeps_no_selection():
    state, _ = run(AppState(), NavigateDown(), NavigateUp())
    assert state.selected is None


def test_popup_navigation_is_clamped():
    state, _ = apply(AppState(), OpenPopup())
    assert state.popup_open
    assert state.popup_index == 0
    state, _ = run(state, *[NavigateDown()] * 10)
    assert state.popup_index == len(Service.ordered()) - 1
    assert state.highlighted_service is Service.CLOUDWATCH
    state, _ = run(state, *[NavigateUp()] * 10)
    assert state.popup_index == 0


def test_popup_navigation_leaves_row_selection_alone():
    state = loaded()
    state, _ = run(state, OpenPopup(), NavigateDown())
    assert state.selected == 0
    assert state.highlighted_service is Service.S3


def test_open_popup_highlights_current_service():
    state, _ = apply(AppState(service=Service.IAM), OpenPopup())
    assert state.highlighted_service is Service.IAM


def test_close_popup_keeps_service():
    state, _ = run(AppState(), OpenPopup(), NavigateDown(), ClosePopup())
    assert not state.popup_open
    assert state.service is Service.EC2


def test_toggle_favorite_twice_restores_state():
    state, _ = apply(AppState(), OpenPopup())
    once, effect = apply(state, ToggleFavorite(Service.S3))
    assert once.favorites == frozenset({Service.S3})
    assert effect is None
    twice, _ = apply(once, ToggleFavorite(Service.S3))
    assert twice.favorites == frozenset()
    assert twice == state


def test_favorite_services_are_ordered():
    state = AppState(favorites=frozenset({Service.CLOUDWATCH, Service.EC2}))
    assert state.favorite_services() == [Service.EC2, Service.CLOUDWATCH]


def test_select_service_resets_listing():
    state = loaded()
    state, _ = apply(state, OpenPopup())
    state, effect = apply(state, SelectService(Service.S3))
    assert effect is None
    assert state.service is Service.S3
    assert state.status == Status.idle()
    assert state.rows == ()
    assert state.selected is None
    assert not state.popup_open
    assert state.message == "Switched to S3 Buckets. Press r to refresh."


def test_refresh_requests_fetch():
    state, effect = apply(AppState(service=Service.IAM), Refresh())
    assert state.status.is_loading
    assert effect == Fetch(Service.IAM, state.generation)
    assert state.message == "Loading IAM Users resources..."


def test_successful_result_loads_rows():
    state = loaded()
    assert state.status == Status.loaded()
    assert state.rows == ROWS
    assert state.selected_row == ROWS[0]
    assert state.message == "Loaded 3 resources (EC2 Instances)"


def test_empty_result_is_loaded():
    state = loaded(rows=())
    assert state.status == Status.loaded()
    assert state.rows == ()
    assert state.selected is None
    assert state.message == "No resources found for EC2 Instances"


def test_error_result_keeps_rows():
    state = loaded()
    state, effect = apply(state, Refresh())
    state, _ = apply(
        state, ProviderResult(Service.EC2, effect.generation, error="AWS: Throttling: slow down")
    )
    assert state.status == Status.error("AWS: Throttling: slow down")
    assert state.rows == ROWS
    assert state.message == "Error loading EC2 Instances: AWS: Throttling: slow down"


def test_result_for_other_service_is_discarded():
    state, effect = apply(AppState(), Refresh())
    state, _ = apply(state, SelectService(Service.S3))
    after, effect = apply(
        state, ProviderResult(Service.EC2, effect.generation, rows=ROWS)
    )
    assert after == state
    assert effect is None
    assert after.status == Status.idle()


def test_result_of_older_refresh_is_discarded():
    state, first = apply(AppState(), Refresh())
    state, second = apply(state, Refresh())
    assert second.generation != first.generation
    after, _ = apply(state, ProviderResult(Service.EC2, first.generation, rows=ROWS))
    assert after == state
    after, _ = apply(state, ProviderResult(Service.EC2, second.generation, rows=ROWS))
    assert after.rows == ROWS


def test_result_after_switching_back_is_discarded():
    state, effect = apply(AppState(), Refresh())
    state, _ = run(state, SelectService(Service.S3), SelectService(Service.EC2))
    after, _ = apply(state, ProviderResult(Service.EC2, effect.generation, rows=ROWS))
    assert after == state
    assert after.status == Status.idle()


def test_result_without_pending_fetch_is_discarded():
    state = AppState()
    after, _ = apply(state, ProviderResult(Service.EC2, state.generation, rows=ROWS))
    assert after == state


def test_error_while_popup_open_applies_to_service_in_flight():
    state, effect = apply(AppState(), Refresh())
    state, _ = run(state, OpenPopup(), NavigateDown())
    state, _ = apply(state, ProviderResult(Service.EC2, effect.generation, error="denied"))
    assert state.status.is_error
    assert state.popup_open
    assert state.service is Service.EC2


def test_show_selection():
    state, effect = apply(loaded(), ShowSelection())
    assert effect is None
    assert state.message == "Selected: i-1 web running"


def test_show_selection_without_rows_changes_nothing():
    state = AppState()
    assert apply(state, ShowSelection()) == (state, None)


def test_quit_requests_exit():
    state = loaded()
    after, effect = apply(state, Quit())
    assert after == state
    assert effect == Exit()


def test_unknown_event():
    with pytest.raises(TypeError):
        apply(AppState(), object())


def test_selection_stays_valid():
    events = [
        NavigateUp(),
        NavigateDown(),
        OpenPopup(),
        ClosePopup(),
        Refresh(),
        ShowSelection(),
        SelectService(Service.IAM),
        ToggleFavorite(Service.EC2),
    ]
    rng = random.Random(1)
    state = AppState()
    for _ in range(500):
        event = rng.choice(events)
        state, effect = apply(state, event)
        if isinstance(effect, Fetch) and rng.random() < 0.8:
            rows = tuple((f"r{i}",) for i in range(rng.randint(0, 5)))
            state, _ = apply(
                state, ProviderResult(effect.service, effect.generation, rows=rows)
            )
        if state.rows:
            assert 0 <= state.selected < len(state.rows)
        else:
            assert state.selected is None
        assert 0 <= state.popup_index < len(Service.ordered())
