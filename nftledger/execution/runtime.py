from nftledger.logger import get_logger

log = get_logger('Events')


class Context:
    def __init__(self, base_state):
        self._base_state = base_state

    def _get_state(self):
        return self._base_state

    @property
    def caller(self):
        return self._get_state()['caller']

    @property
    def signer(self):
        return self._get_state()['signer']


def empty_state():
    return {
        'caller': None,
        'signer': None
    }


class EventLog:
    def __init__(self):
        self.pending = []
        self.subscribers = []

    def emit(self, event, **data):
        self.pending.append({
            'event': event,
            'data': data
        })

    def subscribe(self, callback):
        self.subscribers.append(callback)

    def unsubscribe(self, callback):
        if callback in self.subscribers:
            self.subscribers.remove(callback)

    def publish(self):
        events = self.pending
        self.pending = []

        for event in events:
            for callback in list(self.subscribers):
                try:
                    callback(event)
                except Exception as e:
                    log.error('Subscriber {} failed on {}: {}'.format(callback, event['event'], e))

        return events

    def discard(self):
        self.pending = []


class Runtime:
    """
    Per-executor runtime. Holds the caller context of the operation in flight
    and the events it has emitted so far.
    """
    def __init__(self):
        self.context = Context(empty_state())
        self.events = EventLog()

    def set_up(self, sender):
        self.context._base_state = {
            'signer': sender,
            'caller': sender
        }

    def clean_up(self):
        self.context._base_state = empty_state()
        self.events.discard()

