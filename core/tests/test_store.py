"""
AppContext tests.
"""
import pytest

from core.dto import ScopeContext
from core.store import Action, AppContext, ListSnapshot


@pytest.fixture
def context():
    return AppContext(ScopeContext(organization_id=1, pg_location_id=2))


def test_location_selection_updates_scope(context):
    context.select_location(7)

    assert context.scope.pg_location_id == 7
    assert context.scope.organization_id == 1


def test_scope_update(context):
    context.dispatch(Action.SCOPE_UPDATED, user_id=9, access_token='t')

    assert context.scope.user_id == 9
    assert context.scope.access_token == 't'


def test_list_slices_replace_append_and_clear(context):
    context.dispatch(Action.LIST_REPLACED, slice='payments/rent', items=[{'s_no': 1}], page=1, has_more=True, total=2)
    context.dispatch(Action.LIST_APPENDED, slice='payments/rent', items=[{'s_no': 2}], page=2, has_more=False)

    snapshot = context.get_slice('payments/rent')
    assert snapshot.items == ({'s_no': 1}, {'s_no': 2})
    assert snapshot.page == 2
    assert snapshot.has_more is False
    assert snapshot.total == 2

    context.dispatch(Action.LIST_CLEARED, slice='payments/rent')
    assert context.get_slice('payments/rent') == ListSnapshot()


def test_snapshot_is_read_only(context):
    snapshot = context.snapshot()

    with pytest.raises(TypeError):
        snapshot['scope'] = None
    with pytest.raises(TypeError):
        snapshot['slices']['x'] = ListSnapshot()


def test_listeners_and_unsubscribe(context):
    seen = []
    unsubscribe = context.subscribe(lambda action, payload: seen.append((action, payload)))

    context.select_location(3)
    unsubscribe()
    context.select_location(4)
    unsubscribe()

    assert seen == [(Action.LOCATION_SELECTED, {'pg_location_id': 3})]


def test_listener_sees_new_scope(context):
    seen = []
    context.subscribe(lambda action, payload: seen.append(context.scope.pg_location_id))

    context.select_location(5)

    assert seen == [5]


def test_unknown_action_rejected(context):
    with pytest.raises(ValueError):
        context.dispatch('list/sorted', slice='x')


def test_from_settings(settings):
    settings.PG_API = {**settings.PG_API, 'ORGANIZATION_ID': 11, 'PG_LOCATION_ID': 12, 'USER_ID': 13, 'AUTH_TOKEN': ''}

    scope = AppContext.from_settings().scope

    assert scope == ScopeContext(organization_id=11, pg_location_id=12, user_id=13, access_token=None)
