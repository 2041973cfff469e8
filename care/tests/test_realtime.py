import pytest
from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer
from channels.testing import WebsocketCommunicator

from care import constants as c
from care.realtime.consumers import UpdatesConsumer
from care.services.realtime import UPDATES_GROUP


def changed(record_type):
    return {'type': 'records.changed', 'recordType': record_type, 'action': 'created',
            'id': 'x', 'recordDate': '2025-03-10', 'ts': '2025-03-10T09:00:00+09:00'}


@pytest.mark.django_db(transaction=True)
def test_subscription_filters_record_types():
    async def scenario():
        comm = WebsocketCommunicator(UpdatesConsumer.as_asgi(), '/ws/updates/')
        connected, _ = await comm.connect()
        assert connected
        assert (await comm.receive_json_from())['type'] == 'welcome'

        await comm.send_json_to({'type': 'subscribe', 'recordTypes': [c.MEDICATION]})
        assert (await comm.receive_json_from())['recordTypes'] == [c.MEDICATION]

        layer = get_channel_layer()
        await layer.group_send(UPDATES_GROUP, changed(c.MEAL))
        await layer.group_send(UPDATES_GROUP, changed(c.MEDICATION))
        msg = await comm.receive_json_from()
        assert msg['recordType'] == c.MEDICATION
        assert await comm.receive_nothing()

        await comm.send_json_to({'type': 'ping'})
        assert (await comm.receive_json_from()) == {'type': 'pong'}
        await comm.disconnect()

    async_to_sync(scenario)()
