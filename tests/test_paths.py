import pytest

from actions.paths import CanonicalPath, identity_segment, parse_action_type, resolve_path
from actions.records import (
    EmittingAction,
    InvalidActionShape,
    PlainAction,
    ResponseDescriptor,
    ReturningAction,
    classify,
)
from conftest import fake_action, fake_api_action


def test_parse_action_type_keeps_underscored_base() -> None:
    assert parse_action_type("SOME_ACTION_SUCCESS") == ("SOME_ACTION", "SUCCESS")


def test_identity_segment() -> None:
    assert identity_segment(None) == "GLOBAL"
    assert identity_segment(42) == "ID_42"
    assert identity_segment("abc") == "ID_ABC"
    assert identity_segment(0) == "ID_0"


def test_outgoing_api_action_path() -> None:
    assert resolve_path(fake_api_action(46, "APPLES")) == ("APPLES", "ID_46", "REQUEST")


def test_outgoing_api_action_without_id() -> None:
    assert resolve_path(fake_api_action(None, "BANANAS")).dotted() == "BANANAS.GLOBAL.REQUEST"


def test_outgoing_api_action_with_string_types() -> None:
    action = {"@@redux-api-middleware/RSAA": {"types": ["PEARS_REQUEST", "PEARS_SUCCESS", "PEARS_FAILURE"]}}
    assert resolve_path(action).dotted() == "PEARS.GLOBAL.REQUEST"


def test_incoming_api_action_path() -> None:
    path = resolve_path({"type": "APPLES_SUCCESS", "meta": {"id": 46}, "payload": {"data": {}}})
    assert path.dotted() == "APPLES.ID_46.SUCCESS"
    assert path.is_async


def test_incoming_api_action_without_id() -> None:
    path = resolve_path({"type": "BANANAS_SUCCESS", "payload": {"data": {}}})
    assert list(path) == ["BANANAS", "GLOBAL", "SUCCESS"]


def test_incoming_failure_with_underscored_base() -> None:
    path = resolve_path({"type": "BASE_THING_FAILURE", "meta": {"id": 42}})
    assert path == ("BASE_THING", "ID_42", "FAILURE")


def test_plain_action_with_id() -> None:
    assert resolve_path(fake_action(36, "MULTI_ARG")).dotted() == "MULTI_ARG.ID_36.WHATEVER_WHATEVER2"


def test_plain_action_without_id() -> None:
    assert resolve_path(fake_action(None, "MULTI_ARG")).dotted() == "MULTI_ARG.GLOBAL.WHATEVER_WHATEVER2"


def test_plain_action_keeps_field_order_and_skips_non_scalars() -> None:
    action = {
        "type": "THIRD_ACTION",
        "id": 155,
        "key": "value",
        "nested": {"ignored": True},
        "otherKey": 4,
        "flag": True,
        "finalKey": "finalValue",
        "now": "time5",
    }
    assert resolve_path(action).dotted() == "THIRD_ACTION.ID_155.VALUE_4_FINALVALUE"


def test_plain_action_prefers_site_id() -> None:
    action = {"type": "SELECT_SITE", "siteID": 7, "id": 9}
    assert resolve_path(action).dotted() == "SELECT_SITE.ID_7"


def test_plain_action_without_extras_has_two_segments() -> None:
    path = resolve_path({"type": "LOGOUT"})
    assert path == ("LOGOUT", "GLOBAL")
    assert path.terminal is None
    assert not path.is_async


def test_with_terminal() -> None:
    path = CanonicalPath(["APPLES", "ID_1", "REQUEST"])
    assert path.with_terminal("SUCCESS").dotted() == "APPLES.ID_1.SUCCESS"
    assert CanonicalPath(["LOGOUT", "GLOBAL"]).with_terminal("SUCCESS").dotted() == "LOGOUT.GLOBAL.SUCCESS"


def test_classify_variants() -> None:
    assert isinstance(classify(fake_api_action(1, "APPLES")), EmittingAction)
    assert isinstance(classify({"type": "APPLES_REQUEST"}), ReturningAction)
    assert isinstance(classify(fake_action(1, "KIWIS")), PlainAction)


def test_classified_records_pass_through() -> None:
    record = ReturningAction(type="APPLES_SUCCESS", meta={"id": 2})
    assert classify(record) is record
    assert resolve_path(record).dotted() == "APPLES.ID_2.SUCCESS"
    emitting = EmittingAction(types=[ResponseDescriptor("PEARS_REQUEST", {"id": "x1"})])
    assert resolve_path(emitting).dotted() == "PEARS.ID_X1.REQUEST"


@pytest.mark.parametrize(
    "record",
    [
        {},
        {"payload": {}},
        {"@@redux-api-middleware/RSAA": {"types": []}},
        {"@@redux-api-middleware/RSAA": {"types": [{"meta": {}}]}},
        "APPLES_SUCCESS",
    ],
)
def test_malformed_records_raise(record) -> None:
    with pytest.raises(InvalidActionShape):
        resolve_path(record)


def test_integral_floats_print_without_fraction() -> None:
    action = {"type": "SET_PAGE", "page": 4.0, "zoom": 1.5, "count": 3}
    assert resolve_path(action).dotted() == "SET_PAGE.GLOBAL.4_1.5_3"


def test_plain_extras_spelling_a_lifecycle_word_stay_plain() -> None:
    path = resolve_path({"type": "SET_STATUS", "status": "success"})
    assert path.dotted() == "SET_STATUS.GLOBAL.SUCCESS"
    assert not path.is_async
    assert resolve_path({"type": "STATUS_SUCCESS"}).is_async
