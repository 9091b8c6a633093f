from common.logging_config import current_fetch_id, fetch_id_context
from common.network_log import NetworkLog, mask_headers


def test_authorization_is_masked():
    assert mask_headers({'Authorization': 'Bearer abc', 'X-User-Id': '7'}) == {
        'Authorization': '***',
        'X-User-Id': '7',
    }


def test_newest_first_and_bounded():
    log = NetworkLog(max_logs=3)
    for index in range(5):
        log.add(f'id-{index}', 'get', f'/items?page={index}')

    entries = log.entries()

    assert [entry.id for entry in entries] == ['id-4', 'id-3', 'id-2']
    assert entries[0].method == 'GET'


def test_update_records_status_and_duration():
    log = NetworkLog()
    log.add('abc', 'GET', '/visitors')

    entry = log.update('abc', status=200)

    assert entry.status == 200
    assert entry.duration_ms is not None
    assert log.update('missing', status=500) is None


def test_fetch_id_context_restores_previous():
    with fetch_id_context('outer'):
        with fetch_id_context() as inner:
            assert current_fetch_id() == inner
        assert current_fetch_id() == 'outer'
    assert current_fetch_id() is None
