import json
import logging

from channels.generic.websocket import AsyncWebsocketConsumer

from care.services.realtime import UPDATES_GROUP

logger = logging.getLogger(__name__)


class UpdatesConsumer(AsyncWebsocketConsumer):
    """Pushes record-change notifications to every connected screen.

    A client may narrow the feed by sending
    ``{"type": "subscribe", "recordTypes": ["服薬", "バイタル"]}``; an empty
    list restores the full feed.  ``{"type": "ping"}`` is answered with
    ``{"type": "pong"}``.
    """
    GROUP = UPDATES_GROUP

    async def connect(self):
        self.record_types = set()
        await self.channel_layer.group_add(self.GROUP, self.channel_name)
        await self.accept()
        await self.send(json.dumps({"type": "welcome", "message": "connected"}))

    async def disconnect(self, close_code):
        await self.channel_layer.group_discard(self.GROUP, self.channel_name)

    async def receive(self, text_data=None, bytes_data=None):
        try:
            msg = json.loads(text_data or '{}')
        except ValueError:
            logger.debug("ignoring non-JSON frame on %s", self.channel_name)
            return
        if not isinstance(msg, dict):
            return
        if msg.get("type") == "ping":
            await self.send(json.dumps({"type": "pong"}))
        elif msg.get("type") == "subscribe":
            self.record_types = {str(t) for t in msg.get("recordTypes") or []}
            await self.send(json.dumps({"type": "subscribed", "recordTypes": sorted(self.record_types)},
                                       ensure_ascii=False))

    async def records_changed(self, event):
        # event: {"type": "records.changed", "recordType": ..., "action": ..., "id": ..., "recordDate": ..., "ts": ...}
        if self.record_types and event.get("recordType") not in self.record_types:
            return
        await self.send(json.dumps(event, ensure_ascii=False))
