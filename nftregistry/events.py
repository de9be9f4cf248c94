from collections import namedtuple

from nftregistry.logger import get_logger

Transfer = namedtuple('Transfer', ['sender', 'to', 'token_id'])
Approval = namedtuple('Approval', ['owner', 'approved', 'token_id'])
ApprovalForAll = namedtuple('ApprovalForAll', ['owner', 'operator', 'approved'])


def event_to_dict(event):
    return {
        'event': type(event).__name__,
        'args': dict(event._asdict())
    }


class EventLog:
    """
    Holds the events emitted by the operation in flight until the executor
    decides its fate. Committed events go to the history and then to the
    subscribers; discarded ones are never observed.
    """
    def __init__(self):
        self.pending = []
        self.history = []
        self.subscribers = []
        self.log = get_logger('Events')

    def emit(self, event):
        self.pending.append(event)

    def subscribe(self, callback):
        self.subscribers.append(callback)

    def unsubscribe(self, callback):
        self.subscribers.remove(callback)

    def commit(self):
        committed = self.pending
        self.pending = []
        self.history.extend(committed)

        for event in committed:
            self.log.debug('Emitted {}'.format(event))
            for callback in list(self.subscribers):
                callback(event)

        return committed

    def discard(self):
        self.pending = []

    def clear(self):
        self.pending = []
        self.history = []
